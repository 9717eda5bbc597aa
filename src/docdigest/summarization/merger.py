import logging
import re

from .models import SummaryBlock

logger = logging.getLogger(__name__)

_PART_SUFFIX = re.compile(r" \(Part \d+/\d+\)")
_NODE_INDEX = re.compile(r"section-(\d+)")


def merge_summaries(blocks: list[SummaryBlock]) -> list[SummaryBlock]:
    """Collapse chunk-level blocks into one block per outline node.

    Output is in document order whatever order ``blocks`` arrived in.
    """
    by_node: dict[str, list[SummaryBlock]] = {}
    for block in blocks:
        by_node.setdefault(block.node_id, []).append(block)

    merged: list[SummaryBlock] = []
    for node_id, parts in by_node.items():
        if len(parts) == 1:
            merged.append(parts[0])
            continue

        parts = sorted(parts, key=lambda b: _chunk_index(b.id))
        logger.debug("Merging %d chunk summaries for %s", len(parts), node_id)
        merged.append(
            SummaryBlock(
                id=node_id,
                node_id=node_id,
                title=_PART_SUFFIX.sub("", parts[0].title),
                level=parts[0].level,
                content="\n\n".join(p.content for p in parts),
                key_points=list(
                    dict.fromkeys(point for p in parts for point in p.key_points)
                ),
                important_details=[
                    detail for p in parts for detail in p.important_details
                ],
                citations=parts[0].citations,
            )
        )

    return sorted(merged, key=lambda b: node_index(b.id))


def node_index(block_id: str) -> int:
    match = _NODE_INDEX.search(block_id)
    if match is None:
        raise ValueError(f"Cannot determine node index from id '{block_id}'")
    return int(match.group(1))


def _chunk_index(block_id: str) -> int:
    _, _, index = block_id.rpartition("-chunk-")
    return int(index) if index.isdigit() else 0
