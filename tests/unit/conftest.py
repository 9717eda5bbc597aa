import asyncio
import re
from collections.abc import Callable

import pytest

from docdigest.documents.models import Heading, Page, ParsedDocument
from docdigest.llms.base import LLMResponse, Message

_SECTION_LINE = re.compile(r"^Section: (.*)$", re.MULTILINE)


def section_of(prompt: str) -> str:
    """Section title embedded in a summarization prompt."""
    match = _SECTION_LINE.search(prompt)
    return match.group(1) if match else ""


class FakeLLMClient:
    """Scripted LLMClient.

    ``responder`` maps the prompt to reply text, or to an exception to raise.
    ``delay`` maps the prompt to seconds to wait before replying.
    """

    def __init__(
        self,
        responder: Callable[[str], str | Exception],
        delay: Callable[[str], float] | None = None,
    ) -> None:
        self._responder = responder
        self._delay = delay
        self.prompts: list[str] = []
        self.events: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        prompt = messages[-1].content
        self.prompts.append(prompt)
        self.events.append(("start", prompt))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self._delay is not None:
                await asyncio.sleep(self._delay(prompt))
            else:
                await asyncio.sleep(0)
            reply = self._responder(prompt)
            if isinstance(reply, Exception):
                raise reply
            return LLMResponse(
                text=reply, finish_reason="stop", usage=None, latency_ms=1.0
            )
        finally:
            self.in_flight -= 1
            self.events.append(("end", prompt))


def structured_reply(title: str) -> str:
    return (
        f"## Summary\n\nSummary of {title}\n\n"
        f"## Key Points\n\n- shared point\n- point for {title}\n\n"
        f"## Important Details\n\nDetail of {title}"
    )


def build_document(
    sections: list[tuple[str, int, str]],
    chars_per_page: int = 1000,
    title: str | None = "Sample Document",
) -> ParsedDocument:
    """Lay out ``(heading, level, body)`` sections into a ParsedDocument."""
    parts: list[str] = []
    headings: list[Heading] = []
    position = 0
    for heading, level, body in sections:
        headings.append(Heading(text=heading, level=level, position=position))
        block = f"{heading}\n\n{body}\n\n"
        parts.append(block)
        position += len(block)

    text = "".join(parts)
    pages = []
    for number, start in enumerate(range(0, max(len(text), 1), chars_per_page), 1):
        end = min(start + chars_per_page, len(text))
        pages.append(
            Page(
                number=number,
                text=text[start:end],
                start_position=start,
                end_position=end,
            )
        )

    return ParsedDocument(
        text=text,
        headings=headings,
        pages=pages,
        title=title,
        author="A. Writer",
        page_count=len(pages),
    )


@pytest.fixture
def fake_client() -> Callable[..., FakeLLMClient]:
    return FakeLLMClient


@pytest.fixture
def structured_responder() -> Callable[[str], str]:
    """Replies with a well-formed three-part summary of the prompt's section."""

    def respond(prompt: str) -> str:
        return structured_reply(section_of(prompt))

    return respond


@pytest.fixture
def document_builder() -> Callable[..., ParsedDocument]:
    return build_document


@pytest.fixture
def section_title_of() -> Callable[[str], str]:
    return section_of
