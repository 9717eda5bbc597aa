import re

from pydantic import BaseModel

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    name: str
    version: str
    description: str
    inputs: dict[str, str]
    template: str

    class Config:
        extra = "forbid"

    def placeholders(self) -> set[str]:
        return set(_PLACEHOLDER.findall(self.template))

    def render(self, **values: object) -> str:
        """Substitute ``{{ name }}`` placeholders with ``values``.

        Every declared input must be supplied; extra values are ignored.
        """
        missing = [key for key in self.inputs if key not in values]
        if missing:
            raise KeyError(
                f"Prompt '{self.name}' missing inputs: {', '.join(sorted(missing))}"
            )

        def _substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in values:
                return match.group(0)
            return str(values[key])

        return _PLACEHOLDER.sub(_substitute, self.template)
