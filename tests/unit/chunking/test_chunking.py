import re

import pytest

from docdigest.chunking.chunking import (
    TextChunk,
    chunk_document,
    extract_section_text,
    split_text,
)
from docdigest.chunking.config import ChunkingConfig
from docdigest.chunking.outline import OutlineNode, build_outline
from docdigest.documents.models import Heading, Page, ParsedDocument


def _squash(text: str) -> str:
    return re.sub(r"\s+", "", text)


class TestSplitText:
    def test_packs_paragraphs_up_to_limit(self) -> None:
        text = "aaaa\n\nbbbb\n\ncccc"

        assert split_text(text, max_chars=10) == ["aaaa\n\nbbbb", "cccc"]

    def test_falls_back_to_sentences_for_large_paragraph(self) -> None:
        text = "One two. Three four! Five six? Seven."

        pieces = split_text(text, max_chars=20)

        assert pieces == ["One two. Three four!", "Five six? Seven."]

    def test_hard_splits_oversized_sentence(self) -> None:
        pieces = split_text("x" * 25, max_chars=10)

        assert pieces == ["x" * 10, "x" * 10, "x" * 5]

    def test_every_piece_within_limit(self) -> None:
        text = "\n\n".join(
            [
                "Short paragraph.",
                "A much longer paragraph. " * 8,
                "y" * 90,
                "Tail.",
            ]
        )

        pieces = split_text(text, max_chars=40)

        assert len(pieces) >= 2
        assert all(len(p) <= 40 for p in pieces)

    def test_pieces_recover_original_text(self) -> None:
        text = "\n\n".join(
            ["Alpha beta. Gamma delta!", "z" * 55, "Epsilon zeta? Eta theta."]
        )

        pieces = split_text(text, max_chars=20)

        assert _squash("".join(pieces)) == _squash(text)

    def test_blank_paragraphs_skipped(self) -> None:
        assert split_text("a\n\n\n\n   \n\nb", max_chars=10) == ["a\n\nb"]

    def test_raises_on_non_positive_limit(self) -> None:
        with pytest.raises(ValueError, match="max_chars must be > 0"):
            split_text("text", max_chars=0)


class TestExtractSectionText:
    def test_span_runs_to_next_heading_of_same_level(self, document_builder) -> None:
        document = document_builder(
            [
                ("Chapter One", 1, "Opening words."),
                ("Subsection", 2, "Nested words."),
                ("Chapter Two", 1, "Closing words."),
            ]
        )
        outline = build_outline(document)

        first = extract_section_text(document, outline[0])
        nested = extract_section_text(document, outline[1])

        assert first.startswith("Chapter One")
        assert "Nested words." in first
        assert "Closing words." not in first
        assert nested == "Subsection\n\nNested words."

    def test_last_section_runs_to_end(self, document_builder) -> None:
        document = document_builder([("Only", 1, "Everything here.")])

        text = extract_section_text(document, build_outline(document)[0])

        assert text == "Only\n\nEverything here."

    def test_falls_back_to_page_range(self) -> None:
        document = ParsedDocument(
            text="page one textpage two textpage three",
            pages=[
                Page(number=1, text="page one text", start_position=0, end_position=13),
                Page(
                    number=2, text="page two text", start_position=13, end_position=26
                ),
                Page(number=3, text="page three", start_position=26, end_position=36),
            ],
            page_count=3,
        )
        node = OutlineNode(
            id="section-0", title="Unknown", level=1, start_page=2, end_page=3
        )

        assert extract_section_text(document, node) == "page two text\npage three"

    def test_duplicate_titles_use_own_heading(self) -> None:
        text = "Notes\n\nfirst body\n\nNotes\n\nsecond body"
        document = ParsedDocument(
            text=text,
            headings=[
                Heading(text="Notes", level=1, position=0),
                Heading(text="Notes", level=1, position=text.index("Notes", 1)),
            ],
            pages=[Page(number=1, text=text, start_position=0, end_position=len(text))],
            page_count=1,
        )
        outline = build_outline(document)

        assert extract_section_text(document, outline[1]) == "Notes\n\nsecond body"


class TestChunkDocument:
    def test_one_chunk_per_small_node(self, document_builder) -> None:
        document = document_builder(
            [("Intro", 1, "Hello there."), ("Outro", 1, "Goodbye.")]
        )
        outline = build_outline(document)

        chunks = chunk_document(document, outline)

        assert [c.id for c in chunks] == ["section-0-chunk-0", "section-1-chunk-0"]
        assert [c.section_title for c in chunks] == ["Intro", "Outro"]
        assert [c.position for c in chunks] == [0, 1]
        assert chunks[0].page_range == (1, 1)

    def test_oversized_node_split_into_parts(self, document_builder) -> None:
        body = "\n\n".join(["p" * 70, "q" * 70, "r" * 70])
        document = document_builder(
            [("Small", 1, "tiny"), ("Big", 1, body), ("Last", 1, "end")]
        )
        outline = build_outline(document)
        config = ChunkingConfig(max_chunk_tokens=25, chars_per_token=4)

        chunks = chunk_document(document, outline, config=config)

        big = [c for c in chunks if c.node_id == "section-1"]
        assert len(big) == 3
        assert [c.section_title for c in big] == [
            "Big (Part 1/3)",
            "Big (Part 2/3)",
            "Big (Part 3/3)",
        ]
        assert all(len(c.text) <= config.max_chunk_chars for c in big)
        assert _squash("".join(c.text for c in big)) == _squash(
            extract_section_text(document, outline[1])
        )

    def test_positions_strictly_increase(self, document_builder) -> None:
        sections = [(f"S{i}", 1, "w" * (30 + 40 * i)) for i in range(4)]
        document = document_builder(sections)
        config = ChunkingConfig(max_chunk_tokens=10, chars_per_token=4)

        chunks = chunk_document(document, build_outline(document), config=config)

        assert [c.position for c in chunks] == list(range(len(chunks)))
        node_order = [c.node_id for c in chunks]
        assert node_order == sorted(node_order, key=lambda n: int(n.split("-")[1]))

    def test_empty_section_yields_empty_chunk(self) -> None:
        document = ParsedDocument(text="", page_count=1)

        chunks = chunk_document(document, build_outline(document))

        assert len(chunks) == 1
        assert chunks[0].text == ""

    def test_metrics_hook_called(self, document_builder) -> None:
        from unittest.mock import MagicMock

        document = document_builder([("A", 1, "b")])
        metrics_hook = MagicMock()

        chunk_document(document, build_outline(document), metrics_hook=metrics_hook)

        metrics_hook.record_latency.assert_called_once()
        assert metrics_hook.record_latency.call_args[0][0] == "chunking_duration"
        metrics_hook.increment.assert_called_once_with("chunking_chunks_created", 1)


class TestChunkingConfig:
    def test_max_chunk_chars(self) -> None:
        assert ChunkingConfig().max_chunk_chars == 48_000

    def test_raises_on_invalid_budget(self) -> None:
        with pytest.raises(ValueError, match="max_chunk_tokens must be > 0"):
            ChunkingConfig(max_chunk_tokens=0)


class TestTextChunk:
    def test_node_id_derived_from_id(self) -> None:
        chunk = TextChunk(
            id="section-12-chunk-3", text="t", section_title="T", level=1, position=0
        )

        assert chunk.node_id == "section-12"

    def test_chunk_is_frozen(self) -> None:
        chunk = TextChunk(
            id="section-0-chunk-0", text="t", section_title="T", level=1, position=0
        )

        with pytest.raises(AttributeError):
            chunk.text = "modified"  # type: ignore
