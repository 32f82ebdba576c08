"""Manuscript Graph - entity graphs and contradiction checks for fiction manuscripts."""

__version__ = "0.1.0"

from manuscript_graph.extract import EntityExtractor, extract_entities, merge_entity_graphs
from manuscript_graph.lore import ContradictionDetector, detect_contradictions
from manuscript_graph.models import (
    Claim,
    ClassifiedParagraph,
    Contradiction,
    ContradictionType,
    DialogueLine,
    EntityEdge,
    EntityGraph,
    EntityNode,
    EntityType,
    Mention,
    RelationshipType,
    Timeline,
    TimelineEvent,
)

__all__ = [
    "Claim",
    "ClassifiedParagraph",
    "Contradiction",
    "ContradictionDetector",
    "ContradictionType",
    "DialogueLine",
    "EntityEdge",
    "EntityExtractor",
    "EntityGraph",
    "EntityNode",
    "EntityType",
    "Mention",
    "RelationshipType",
    "Timeline",
    "TimelineEvent",
    "detect_contradictions",
    "extract_entities",
    "merge_entity_graphs",
]
