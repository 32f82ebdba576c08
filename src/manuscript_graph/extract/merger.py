"""Merge per-chapter entity graphs into one manuscript-wide graph.

Merge order matters for list-valued fields: mentions and evidence are
concatenated in input order, and evidence of edges that collide is then
cut to the first ``evidence_limit`` entries. Counts (mention_count,
co_occurrences) are sums and so do not depend on order. Run the merge once,
after every chapter has been extracted.
"""

from typing import Sequence

from loguru import logger

from ..config import get_settings
from ..models.entities import EntityNode
from ..models.relationships import EntityEdge, EntityGraph, RelationshipType, pair_key
from .patterns import canonical_key


def merge_entity_graphs(
    graphs: Sequence[EntityGraph],
    evidence_limit: int | None = None,
) -> EntityGraph:
    """Combine graphs, deduplicating nodes by name and edges by endpoint pair.

    Input graphs are left untouched.

    Args:
        graphs: Graphs in merge order (normally chapter order)
        evidence_limit: Evidence snippets kept when edges collide; defaults to settings

    Returns:
        A new graph with nodes sorted by mention count and edges by co-occurrences
    """
    limit = evidence_limit if evidence_limit is not None else get_settings().evidence_limit

    nodes: dict[str, EntityNode] = {}
    edges: dict[tuple[str, str], EntityEdge] = {}

    for graph in graphs:
        # Node ids in this graph -> surviving merged ids
        id_map: dict[str, str] = {}

        for node in graph.nodes:
            key = canonical_key(node.name)
            existing = nodes.get(key)
            if existing is None:
                copy = node.model_copy(deep=True)
                nodes[key] = copy
                id_map[node.id] = copy.id
                continue

            id_map[node.id] = existing.id
            existing.mention_count += node.mention_count
            existing.mentions.extend(m.model_copy() for m in node.mentions)
            for alias in node.aliases:
                existing.add_alias(alias)
            existing.first_mention = min(existing.first_mention, node.first_mention)

        for edge in graph.edges:
            source = id_map.get(edge.source)
            target = id_map.get(edge.target)
            if source is None or target is None or source == target:
                logger.warning(f"Skipping edge {edge.id} with endpoints outside its graph")
                continue

            key = pair_key(source, target)
            existing_edge = edges.get(key)
            if existing_edge is None:
                copy = edge.model_copy(deep=True)
                copy.source, copy.target = source, target
                edges[key] = copy
                continue

            existing_edge.co_occurrences += edge.co_occurrences
            for chapter in edge.chapters:
                existing_edge.add_chapter(chapter)
            existing_edge.evidence = (existing_edge.evidence + edge.evidence)[:limit]
            existing_edge.type = RelationshipType.upgrade(existing_edge.type, edge.type)

    merged = EntityGraph(
        nodes=sorted(nodes.values(), key=lambda n: n.mention_count, reverse=True),
        edges=sorted(edges.values(), key=lambda e: e.co_occurrences, reverse=True),
    )
    logger.debug(
        f"Merged {len(graphs)} graphs into {len(merged.nodes)} nodes and {len(merged.edges)} edges"
    )
    return merged
