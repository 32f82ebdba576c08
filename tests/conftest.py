"""Shared fixtures for Manuscript Graph tests."""

import re

import pytest

from manuscript_graph.config import Settings
from manuscript_graph.extract import EntityExtractor
from manuscript_graph.ingest import paragraph_spans
from manuscript_graph.models import EntityEdge, EntityGraph, EntityNode, EntityType, RelationshipType


@pytest.fixture
def settings():
    """Default settings, independent of the environment cache."""
    return Settings()


@pytest.fixture
def extract(settings):
    """Extract a chapter, building paragraph spans from the text itself."""

    def _extract(text: str, chapter_id: str = "c1", dialogues=()) -> EntityGraph:
        extractor = EntityExtractor(settings)
        return extractor.extract(text, paragraph_spans(text), dialogues, chapter_id)

    return _extract


@pytest.fixture
def make_node():
    """Build a node with mentions at the given offsets."""

    def _make_node(
        name: str,
        offsets=(0,),
        entity_type: EntityType = EntityType.CHARACTER,
        chapter_id: str = "c1",
        aliases=(),
    ) -> EntityNode:
        node = EntityNode(
            name=name,
            type=entity_type,
            first_mention=min(offsets) if offsets else 0,
            aliases=list(aliases),
        )
        for offset in offsets:
            node.add_mention(offset, chapter_id)
        return node

    return _make_node


@pytest.fixture
def make_edge():
    """Build an edge between two nodes."""

    def _make_edge(
        source: EntityNode,
        target: EntityNode,
        co_occurrences: int = 1,
        rel_type: RelationshipType = RelationshipType.INTERACTS,
        chapter_id: str = "c1",
        evidence=None,
    ) -> EntityEdge:
        return EntityEdge(
            source=source.id,
            target=target.id,
            type=rel_type,
            co_occurrences=co_occurrences,
            sentiment=rel_type.default_sentiment,
            chapters=[chapter_id],
            evidence=list(evidence) if evidence is not None else [f"{source.name} and {target.name}"],
        )

    return _make_edge


@pytest.fixture
def mentions_of():
    """Offsets of every occurrence of a word in text."""

    def _mentions_of(word: str, text: str) -> list[int]:
        return [m.start() for m in re.finditer(rf"\b{re.escape(word)}\b", text)]

    return _mentions_of
