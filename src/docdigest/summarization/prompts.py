from functools import lru_cache

from docdigest.prompts import PromptsLibrary

from .models import SummaryOptions, SummaryStyle
from .styles import (
    DETAIL_INSTRUCTIONS,
    LANGUAGE_INSTRUCTIONS,
    OMISSION_CHECK,
    STYLE_INSTRUCTIONS,
    STYLE_REMINDERS,
)

SECTION_SUMMARY_PROMPT = "section_summary"
PROMPT_VERSION = "1.0"


@lru_cache(maxsize=1)
def default_library() -> PromptsLibrary:
    return PromptsLibrary.default()


def page_label(page_range: tuple[int, int] | None) -> str:
    if page_range is None:
        return ""
    return f"Pages {page_range[0]}-{page_range[1]}"


def build_summarization_prompt(
    options: SummaryOptions,
    section_title: str,
    text: str,
    page_range: tuple[int, int] | None = None,
    library: PromptsLibrary | None = None,
) -> str:
    """Render the section summary prompt for one chunk.

    The reply is requested as "Summary", "Key Points" and "Important Details"
    sections; full-context also asks for an omission self-check.
    """
    library = library or default_library()
    omission_check = ""
    if options.style == SummaryStyle.FULL_CONTEXT:
        omission_check = OMISSION_CHECK

    return library.render(
        SECTION_SUMMARY_PROMPT,
        PROMPT_VERSION,
        style=options.style.value,
        style_instructions=STYLE_INSTRUCTIONS[options.style],
        detail_instructions=DETAIL_INSTRUCTIONS[options.detail_level],
        language_instructions=LANGUAGE_INSTRUCTIONS[options.language],
        section_title=section_title,
        page_info=page_label(page_range),
        text=text,
        omission_check=omission_check,
        style_reminder=STYLE_REMINDERS[options.style],
    )
