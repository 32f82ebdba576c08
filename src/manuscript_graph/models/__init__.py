"""Data models for entities, relationships and contradictions."""

from manuscript_graph.models.contradictions import Claim, Contradiction, ContradictionType
from manuscript_graph.models.entities import EntityNode, EntityType, Mention
from manuscript_graph.models.passage import ClassifiedParagraph, DialogueLine
from manuscript_graph.models.relationships import EntityEdge, EntityGraph, RelationshipType
from manuscript_graph.models.timeline import Timeline, TimelineEvent

__all__ = [
    "Claim",
    "ClassifiedParagraph",
    "Contradiction",
    "ContradictionType",
    "DialogueLine",
    "EntityEdge",
    "EntityGraph",
    "EntityNode",
    "EntityType",
    "Mention",
    "RelationshipType",
    "Timeline",
    "TimelineEvent",
]
