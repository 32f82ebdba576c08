"""Main entity extraction coordinator.

Runs the per-chapter pipeline in its required order:
scan -> consolidate -> aliases -> pronouns -> relationships.
Pronoun resolution adds mentions that the co-occurrence scan depends on, so
the order is not a free refactor.
"""

from dataclasses import dataclass, field
from typing import Sequence

from loguru import logger

from ..config import Settings, get_settings
from ..errors import InputTooLargeError
from ..models.entities import EntityNode
from ..models.passage import ClassifiedParagraph, DialogueLine
from ..models.relationships import EntityEdge, EntityGraph
from .aliases import resolve_aliases
from .consolidator import consolidate_entities
from .coreference import CoReference, resolve_pronouns
from .relationships import RelationshipInferencer
from .scanner import EntityScanner, RawEntity


@dataclass
class ChapterExtraction:
    """Full result of extracting one chapter, including intermediate stages."""

    chapter_id: str
    graph: EntityGraph
    raw_entities: list[RawEntity] = field(default_factory=list)
    coreferences: list[CoReference] = field(default_factory=list)


class EntityExtractor:
    """Coordinates entity graph extraction for chapters."""

    def __init__(self, settings: Settings | None = None):
        """Initialize the extractor.

        Args:
            settings: Override settings (defaults to environment configuration)
        """
        self.settings = settings or get_settings()
        self.scanner = EntityScanner()
        self.inferencer = RelationshipInferencer(snippet_length=self.settings.snippet_length)

    def extract_chapter(
        self,
        text: str,
        paragraphs: Sequence[ClassifiedParagraph] = (),
        dialogues: Sequence[DialogueLine] = (),
        chapter_id: str = "chapter1",
    ) -> ChapterExtraction:
        """Extract an entity graph from one chapter.

        Args:
            text: Chapter text; all offsets index into it
            paragraphs: Classified paragraphs for co-occurrence scanning
            dialogues: Dialogue lines whose speakers seed characters
            chapter_id: Identifier stored on mentions and edges

        Returns:
            ChapterExtraction with the graph and intermediate results

        Raises:
            InputTooLargeError: If text exceeds settings.max_text_length
        """
        if len(text) > self.settings.max_text_length:
            logger.warning(
                f"Rejecting chapter {chapter_id!r}: {len(text):,} chars exceeds "
                f"{self.settings.max_text_length:,}"
            )
            raise InputTooLargeError(len(text), self.settings.max_text_length)

        if not text:
            return ChapterExtraction(chapter_id=chapter_id, graph=EntityGraph())

        raw_entities = self.scanner.scan(text, dialogues)
        nodes: list[EntityNode] = consolidate_entities(raw_entities, chapter_id)

        resolve_aliases(text, nodes)
        coreferences = resolve_pronouns(text, nodes, chapter_id)
        edges: list[EntityEdge] = self.inferencer.infer(text, nodes, paragraphs, chapter_id)

        logger.debug(
            f"Chapter {chapter_id!r}: {len(nodes)} nodes, {len(edges)} edges, "
            f"{len(coreferences)} pronouns resolved"
        )

        return ChapterExtraction(
            chapter_id=chapter_id,
            graph=EntityGraph(nodes=nodes, edges=edges),
            raw_entities=raw_entities,
            coreferences=coreferences,
        )

    def extract(
        self,
        text: str,
        paragraphs: Sequence[ClassifiedParagraph] = (),
        dialogues: Sequence[DialogueLine] = (),
        chapter_id: str = "chapter1",
    ) -> EntityGraph:
        """Extract just the entity graph for one chapter."""
        return self.extract_chapter(text, paragraphs, dialogues, chapter_id).graph


def extract_entities(
    text: str,
    paragraphs: Sequence[ClassifiedParagraph],
    dialogues: Sequence[DialogueLine],
    chapter_id: str,
) -> EntityGraph:
    """Build the entity graph for a single chapter."""
    return EntityExtractor().extract(text, paragraphs, dialogues, chapter_id)
