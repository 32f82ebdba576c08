"""Entity extraction pipeline for Manuscript Graph."""

from .aliases import resolve_aliases
from .consolidator import consolidate_entities
from .coreference import CoReference, Gender, infer_gender, resolve_pronouns
from .extractor import ChapterExtraction, EntityExtractor, extract_entities
from .merger import merge_entity_graphs
from .relationships import RelationshipInferencer, infer_relationships
from .scanner import EntityScanner, RawEntity

__all__ = [
    "ChapterExtraction",
    "CoReference",
    "EntityExtractor",
    "EntityScanner",
    "Gender",
    "RawEntity",
    "RelationshipInferencer",
    "consolidate_entities",
    "extract_entities",
    "infer_gender",
    "infer_relationships",
    "merge_entity_graphs",
    "resolve_aliases",
    "resolve_pronouns",
]
