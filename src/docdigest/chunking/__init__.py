from .chunking import TextChunk, chunk_document, extract_section_text, split_text
from .config import ChunkingConfig
from .outline import OutlineNode, build_outline, find_page_for_position

__all__ = [
    "ChunkingConfig",
    "OutlineNode",
    "TextChunk",
    "build_outline",
    "chunk_document",
    "extract_section_text",
    "find_page_for_position",
    "split_text",
]
