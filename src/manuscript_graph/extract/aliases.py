"""Alias resolution - linking alternate surface names to canonical nodes."""

from loguru import logger

from ..models.entities import EntityNode, EntityType
from .patterns import ALIAS_RULES, canonical_key, normalize_entity_name

# How far back a descriptor ("the old man") may look for the character it names
DESCRIPTOR_WINDOW = 200


def resolve_aliases(text: str, nodes: list[EntityNode]) -> None:
    """Attach aliases found by the alias rules to the matching nodes (in place)."""
    by_key = {canonical_key(node.name): node for node in nodes}
    added = 0

    for rule in ALIAS_RULES:
        for match in rule.matcher(text):
            first, second = match.capture(0), match.capture(1)
            if first is None:
                continue

            if second is None:
                # Single-capture descriptor: pair it with the last character named before it
                descriptor = normalize_entity_name(first[0])
                node = _nearest_character(nodes, first[1])
                if node is not None and node.add_alias(descriptor):
                    added += 1
                continue

            name1 = normalize_entity_name(first[0])
            name2 = normalize_entity_name(second[0])
            for name, other in ((name1, name2), (name2, name1)):
                node = by_key.get(name.lower())
                if node is not None and node.add_alias(other):
                    added += 1

    logger.debug(f"Registered {added} aliases")


def _nearest_character(nodes: list[EntityNode], offset: int) -> EntityNode | None:
    best: EntityNode | None = None
    best_distance = DESCRIPTOR_WINDOW + 1

    for node in nodes:
        if node.type is not EntityType.CHARACTER:
            continue
        for mention in node.mentions:
            distance = offset - mention.offset
            if 0 < distance < best_distance:
                best, best_distance = node, distance

    return best
