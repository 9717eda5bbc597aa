import logging
from pathlib import Path

import yaml

from .prompt import Prompt

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptsLibrary:
    """Versioned prompt templates loaded from a directory of YAML files.

    Templates are checked on load: every placeholder must be a declared
    input, and each (name, version) pair may appear only once.
    """

    def __init__(self, directory: str | Path) -> None:
        self._prompts: dict[tuple[str, str], Prompt] = {}
        logger.info("Loading prompt templates from %s", directory)
        self._load_all(Path(directory))
        logger.info("Loaded %d prompts", len(self._prompts))

    @classmethod
    def default(cls) -> "PromptsLibrary":
        """Templates bundled with docdigest."""
        return cls(TEMPLATES_DIR)

    def get(self, name: str, version: str = "1.0") -> Prompt:
        try:
            return self._prompts[(name, version)]
        except KeyError:
            logger.error("Prompt not found: name=%s, version=%s", name, version)
            raise KeyError(f"Prompt '{name}' version '{version}' not found")

    def render(self, name: str, version: str = "1.0", **values: object) -> str:
        return self.get(name, version).render(**values)

    def list(self) -> list[tuple[str, str]]:
        return sorted(self._prompts)

    def _load_all(self, directory: Path) -> None:
        for file_path in sorted(directory.glob("*.yaml")):
            prompt = self._load_prompt(file_path)
            key = (prompt.name, prompt.version)
            if key in self._prompts:
                raise ValueError(
                    f"Duplicate prompt '{prompt.name}' version '{prompt.version}'"
                    f" in {file_path}"
                )
            self._prompts[key] = prompt
            logger.debug("Loaded prompt %s v%s", prompt.name, prompt.version)

    def _load_prompt(self, file_path: Path) -> Prompt:
        with open(file_path, encoding="utf-8") as f:
            prompt = Prompt(**yaml.safe_load(f))

        undeclared = prompt.placeholders() - set(prompt.inputs)
        if undeclared:
            raise ValueError(
                f"Prompt '{prompt.name}' in {file_path.name} uses undeclared "
                f"inputs: {', '.join(sorted(undeclared))}"
            )
        return prompt
