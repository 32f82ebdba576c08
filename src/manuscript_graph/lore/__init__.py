"""Contradiction checks for Manuscript Graph."""

from .attributes import (
    ExtractedAttribute,
    are_values_compatible,
    detect_attribute_contradictions,
    extract_attributes,
)
from .checker import (
    ContradictionDetector,
    contradictions_for_entity,
    detect_contradictions,
    group_contradictions_by_type,
    high_severity_contradictions,
)
from .timeline import DeathRecord, detect_timeline_contradictions, find_deaths

__all__ = [
    "ContradictionDetector",
    "DeathRecord",
    "ExtractedAttribute",
    "are_values_compatible",
    "contradictions_for_entity",
    "detect_attribute_contradictions",
    "detect_contradictions",
    "detect_timeline_contradictions",
    "extract_attributes",
    "find_deaths",
    "group_contradictions_by_type",
    "high_severity_contradictions",
]
