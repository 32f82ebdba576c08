"""Contradiction checker.

Runs the attribute and timeline checks against a chapter and its entity
graph, and offers helpers for filtering the results.
"""

from typing import Iterable

from loguru import logger

from ..config import Settings, get_settings
from ..errors import InputTooLargeError
from ..models.contradictions import Contradiction, ContradictionType
from ..models.relationships import EntityGraph
from ..models.timeline import Timeline
from .attributes import detect_attribute_contradictions
from .timeline import detect_timeline_contradictions

HIGH_SEVERITY = 0.7


class ContradictionDetector:
    """Checks chapter text for inconsistencies with itself."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def check(
        self,
        text: str,
        graph: EntityGraph,
        timeline: Timeline | None = None,
        chapter_id: str | None = None,
    ) -> list[Contradiction]:
        """Detect contradictions in one chapter.

        Args:
            text: Chapter text the graph was extracted from
            graph: Entity graph for the chapter (or a merged graph whose
                mention offsets index into this text)
            timeline: Optional narrated events
            chapter_id: Stamped on both claims of every result when given

        Returns:
            Contradictions sorted by severity, highest first

        Raises:
            InputTooLargeError: If text exceeds settings.max_text_length
        """
        if len(text) > self.settings.max_text_length:
            logger.warning(
                f"Rejecting text for contradiction check: {len(text):,} chars exceeds "
                f"{self.settings.max_text_length:,}"
            )
            raise InputTooLargeError(len(text), self.settings.max_text_length)

        if not text:
            return []

        contradictions = detect_attribute_contradictions(text, graph)
        contradictions.extend(detect_timeline_contradictions(text, graph, timeline))

        if chapter_id is not None:
            for contradiction in contradictions:
                contradiction.claim1.chapter_id = chapter_id
                contradiction.claim2.chapter_id = chapter_id

        # sorted() is stable, so equal severities keep detection order
        return sorted(contradictions, key=lambda c: c.severity, reverse=True)


def detect_contradictions(
    text: str,
    graph: EntityGraph,
    timeline: Timeline | None = None,
    chapter_id: str | None = None,
) -> list[Contradiction]:
    """Run every contradiction check on a chapter."""
    return ContradictionDetector().check(text, graph, timeline, chapter_id)


def contradictions_for_entity(
    contradictions: Iterable[Contradiction], entity_id: str
) -> list[Contradiction]:
    return [c for c in contradictions if c.entity_id == entity_id]


def high_severity_contradictions(
    contradictions: Iterable[Contradiction], threshold: float = HIGH_SEVERITY
) -> list[Contradiction]:
    """Keep contradictions at or above threshold."""
    return [c for c in contradictions if c.severity >= threshold]


def group_contradictions_by_type(
    contradictions: Iterable[Contradiction],
) -> dict[ContradictionType, list[Contradiction]]:
    """Group contradictions by type, in first-seen order."""
    grouped: dict[ContradictionType, list[Contradiction]] = {}
    for contradiction in contradictions:
        grouped.setdefault(contradiction.type, []).append(contradiction)
    return grouped
