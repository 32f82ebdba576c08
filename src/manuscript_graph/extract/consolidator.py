"""Entity consolidation - collapsing raw candidates into canonical nodes."""

from typing import Iterable

from loguru import logger

from ..models.entities import EntityNode
from .patterns import canonical_key
from .scanner import RawEntity


def consolidate_entities(raw_entities: Iterable[RawEntity], chapter_id: str) -> list[EntityNode]:
    """Group candidates by normalized, case-folded name.

    The first candidate for a key fixes the node's name and type. Later
    candidates add mentions; a second rule hitting an offset that is already
    recorded for the key is the same occurrence and is not counted twice.

    Args:
        raw_entities: Scanner output, in discovery order
        chapter_id: Chapter the mentions belong to

    Returns:
        Nodes sorted by mention count, most mentioned first (stable for ties)
    """
    nodes: dict[str, EntityNode] = {}
    seen_offsets: dict[str, set[int]] = {}

    for raw in raw_entities:
        key = canonical_key(raw.name)
        if not key:
            continue

        node = nodes.get(key)
        if node is None:
            node = EntityNode(name=raw.name, type=raw.type, first_mention=raw.offset)
            nodes[key] = node
            seen_offsets[key] = set()

        if raw.offset in seen_offsets[key]:
            continue
        seen_offsets[key].add(raw.offset)
        node.add_mention(raw.offset, chapter_id)
        node.first_mention = min(node.first_mention, raw.offset)

    consolidated = sorted(nodes.values(), key=lambda n: n.mention_count, reverse=True)
    logger.debug(f"Consolidated into {len(consolidated)} nodes for chapter {chapter_id!r}")
    return consolidated
