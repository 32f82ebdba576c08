"""Read-only queries over an entity graph."""

from rapidfuzz import fuzz, process

from ..extract.patterns import canonical_key
from ..models.entities import EntityNode
from ..models.relationships import EntityEdge, EntityGraph

FUZZY_THRESHOLD = 85


def entities_in_range(graph: EntityGraph, start: int, end: int) -> list[EntityNode]:
    """Nodes with at least one mention in [start, end)."""
    return [
        node for node in graph.nodes if any(start <= m.offset < end for m in node.mentions)
    ]


def related_entities(graph: EntityGraph, entity_id: str) -> list[tuple[EntityNode, EntityEdge]]:
    """Neighbours of an entity with the connecting edge, strongest first."""
    related: list[tuple[EntityNode, EntityEdge]] = []
    for edge in graph.edges:
        other_id = edge.other_end(entity_id)
        if other_id is None:
            continue
        other = graph.get_node(other_id)
        if other is not None:
            related.append((other, edge))

    return sorted(related, key=lambda pair: pair[1].co_occurrences, reverse=True)


def find_entity(
    graph: EntityGraph, name: str, threshold: float = FUZZY_THRESHOLD
) -> tuple[EntityNode | None, float]:
    """Look up an entity by name or alias.

    Returns:
        Tuple of (node, confidence); (None, 0.0) when nothing is close enough
    """
    key = canonical_key(name)
    if not key:
        return None, 0.0

    # Exact canonical name
    for node in graph.nodes:
        if canonical_key(node.name) == key:
            return node, 1.0

    # Exact alias
    for node in graph.nodes:
        if any(canonical_key(alias) == key for alias in node.aliases):
            return node, 0.95

    # Fuzzy match over names and aliases
    choices: dict[str, EntityNode] = {}
    for node in graph.nodes:
        for candidate in node.all_names:
            choices.setdefault(canonical_key(candidate), node)

    if choices:
        result = process.extractOne(key, choices.keys(), scorer=fuzz.ratio)
        if result and result[1] >= threshold:
            return choices[result[0]], result[1] / 100

    return None, 0.0
