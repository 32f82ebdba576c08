"""Relationship inference between entity nodes.

Builds undirected edges using:
1. Co-occurrence of canonical names within a classified paragraph
2. Explicit verb patterns ("X attacked Y", "X and Y walked together")

Edges are keyed by the sorted pair of node ids, so at most one edge exists
per pair. Pattern evidence upgrades a generic edge to a specific type but
never the reverse.
"""

from itertools import combinations
from typing import Iterable

from loguru import logger

from ..config import get_settings
from ..models.entities import EntityNode
from ..models.passage import ClassifiedParagraph
from ..models.relationships import EntityEdge, RelationshipType, pair_key
from .patterns import RELATIONSHIP_RULES, canonical_key


class RelationshipInferencer:
    """Infers edges for one chapter's nodes."""

    def __init__(self, snippet_length: int | None = None):
        """Initialize the inferencer.

        Args:
            snippet_length: Paragraph characters kept as co-occurrence evidence
        """
        self.snippet_length = snippet_length or get_settings().snippet_length

    def infer(
        self,
        text: str,
        nodes: list[EntityNode],
        paragraphs: Iterable[ClassifiedParagraph],
        chapter_id: str,
    ) -> list[EntityEdge]:
        """Infer relationships for a chapter.

        Args:
            text: Chapter text
            nodes: Consolidated (and coreference-enriched) nodes
            paragraphs: Paragraph spans from the structural parser
            chapter_id: Chapter identifier recorded on every edge

        Returns:
            Edges in creation order
        """
        edges: dict[tuple[str, str], EntityEdge] = {}

        # Method 1: Co-occurrence within paragraphs
        self._extract_cooccurrence(text, nodes, paragraphs, chapter_id, edges)

        # Method 2: Explicit relationship patterns
        self._extract_patterns(text, nodes, chapter_id, edges)

        logger.debug(f"Inferred {len(edges)} edges for chapter {chapter_id!r}")
        return list(edges.values())

    def _extract_cooccurrence(
        self,
        text: str,
        nodes: list[EntityNode],
        paragraphs: Iterable[ClassifiedParagraph],
        chapter_id: str,
        edges: dict[tuple[str, str], EntityEdge],
    ) -> None:
        names = [(node, node.name.lower()) for node in nodes]

        for paragraph in paragraphs:
            span = paragraph.span(text)
            span_lower = span.lower()
            present = [node for node, name in names if name and name in span_lower]
            snippet = span[: self.snippet_length]

            for source, target in combinations(present, 2):
                key = pair_key(source.id, target.id)
                edge = edges.get(key)
                if edge is None:
                    edges[key] = EntityEdge(
                        source=source.id,
                        target=target.id,
                        type=RelationshipType.INTERACTS,
                        co_occurrences=1,
                        sentiment=0.0,
                        chapters=[chapter_id],
                        evidence=[snippet],
                    )
                else:
                    edge.co_occurrences += 1
                    edge.add_chapter(chapter_id)
                    edge.evidence.append(snippet)

    def _extract_patterns(
        self,
        text: str,
        nodes: list[EntityNode],
        chapter_id: str,
        edges: dict[tuple[str, str], EntityEdge],
    ) -> None:
        by_key: dict[str, EntityNode] = {}
        for node in nodes:
            by_key.setdefault(node.name.lower(), node)

        for rel_rule in RELATIONSHIP_RULES:
            for match in rel_rule.rule.matcher(text):
                first, second = match.capture(0), match.capture(1)
                if first is None or second is None:
                    continue

                entity1 = by_key.get(canonical_key(first[0]))
                entity2 = by_key.get(canonical_key(second[0]))
                if entity1 is None or entity2 is None or entity1.id == entity2.id:
                    continue

                key = pair_key(entity1.id, entity2.id)
                edge = edges.get(key)
                if edge is None:
                    edges[key] = EntityEdge(
                        source=entity1.id,
                        target=entity2.id,
                        type=rel_rule.type,
                        co_occurrences=1,
                        sentiment=rel_rule.type.default_sentiment,
                        chapters=[chapter_id],
                        evidence=[match.text],
                    )
                else:
                    edge.type = RelationshipType.upgrade(edge.type, rel_rule.type)
                    edge.evidence.append(match.text)


def infer_relationships(
    text: str,
    nodes: list[EntityNode],
    paragraphs: Iterable[ClassifiedParagraph],
    chapter_id: str,
) -> list[EntityEdge]:
    """Infer co-occurrence and explicit-pattern edges for one chapter."""
    return RelationshipInferencer().infer(text, nodes, paragraphs, chapter_id)
