"""Relationship models for the knowledge graph."""

import time
from enum import Enum

from pydantic import Field

from .base import GraphModel, generate_id
from .entities import EntityNode


class RelationshipType(str, Enum):
    """Types of relationships between entities."""

    INTERACTS = "interacts"
    OPPOSES = "opposes"
    ALLIED_WITH = "allied_with"
    RELATED_TO = "related_to"

    @property
    def is_specific(self) -> bool:
        """Everything except the generic co-occurrence type is specific."""
        return self is not RelationshipType.INTERACTS

    @property
    def default_sentiment(self) -> float:
        """Sentiment given to a newly created edge of this type."""
        if self is RelationshipType.INTERACTS:
            return 0.0
        if self is RelationshipType.OPPOSES:
            return -0.5
        if self in (RelationshipType.ALLIED_WITH, RelationshipType.RELATED_TO):
            return 0.5
        raise ValueError(f"Unhandled relationship type: {self}")

    @staticmethod
    def upgrade(current: "RelationshipType", candidate: "RelationshipType") -> "RelationshipType":
        """Replace a generic type with a specific one; never downgrade."""
        if current is RelationshipType.INTERACTS and candidate.is_specific:
            return candidate
        return current


class EntityEdge(GraphModel):
    """An undirected relationship between two entity nodes."""

    id: str = Field(default_factory=generate_id)
    source: str
    target: str
    type: RelationshipType = RelationshipType.INTERACTS
    co_occurrences: int = 1
    sentiment: float = Field(default=0.0, ge=-1.0, le=1.0)
    chapters: list[str] = Field(default_factory=list)
    evidence: list[str] = Field(default_factory=list)

    @property
    def pair_key(self) -> tuple[str, str]:
        """Deduplication key: the endpoint ids in sorted order."""
        return pair_key(self.source, self.target)

    def add_chapter(self, chapter_id: str) -> None:
        if chapter_id not in self.chapters:
            self.chapters.append(chapter_id)

    def other_end(self, entity_id: str) -> str | None:
        """Return the opposite endpoint, or None if the edge doesn't touch entity_id."""
        if self.source == entity_id:
            return self.target
        if self.target == entity_id:
            return self.source
        return None


class EntityGraph(GraphModel):
    """Nodes and edges extracted from one chapter or merged across many."""

    nodes: list[EntityNode] = Field(default_factory=list)
    edges: list[EntityEdge] = Field(default_factory=list)
    processed_at: int = Field(default_factory=lambda: int(time.time() * 1000))

    def get_node(self, entity_id: str) -> EntityNode | None:
        for node in self.nodes:
            if node.id == entity_id:
                return node
        return None

    def find_by_name(self, name: str) -> EntityNode | None:
        """Case-insensitive canonical name lookup."""
        name_lower = name.lower()
        for node in self.nodes:
            if node.name.lower() == name_lower:
                return node
        return None


def pair_key(a: str, b: str) -> tuple[str, str]:
    """Order-independent key for an unordered id pair."""
    return (a, b) if a <= b else (b, a)
