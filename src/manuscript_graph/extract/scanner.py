"""Raw entity scanner.

Applies the pattern library to chapter text and yields candidate mentions.
Every rule runs over the whole text; results are the union of all rules,
not first-match-wins.
"""

from dataclasses import dataclass
from typing import Iterable

from loguru import logger

from ..models.entities import EntityType
from ..models.passage import DialogueLine
from .patterns import (
    COORDINATION_RULE,
    DIALOGUE_ATTRIBUTION_RULES,
    LOCATION_RULES,
    NAME_RULES,
    OBJECT_RULES,
    PLACE_NOUN_RULES,
    RELATIONSHIP_RULES,
    TITLE_RULES,
    PatternRule,
    capitalize,
    is_proper_noun,
    is_valid_entity_name,
    normalize_entity_name,
)

CONTEXT_BEFORE = 30
CONTEXT_AFTER = 50


@dataclass
class RawEntity:
    """A candidate mention before consolidation."""

    name: str
    type: EntityType
    offset: int
    context: str
    source: str = "pattern"  # pattern, dialogue


class EntityScanner:
    """Finds character, location and object candidates in text."""

    def scan(self, text: str, dialogues: Iterable[DialogueLine] = ()) -> list[RawEntity]:
        """Scan text with every rule set.

        Args:
            text: Chapter text
            dialogues: Externally detected dialogue lines; speakers become characters

        Returns:
            Candidates in rule order: characters, dialogue speakers, locations, objects
        """
        entities: list[RawEntity] = []
        if not text:
            return entities

        entities.extend(self._extract_characters(text))
        entities.extend(self._extract_speakers(dialogues))
        entities.extend(self._extract_locations(text))
        entities.extend(self._extract_objects(text))

        logger.debug(f"Scanner found {len(entities)} raw candidates in {len(text):,} chars")
        return entities

    def _extract_characters(self, text: str) -> list[RawEntity]:
        entities: list[RawEntity] = []

        for rule in NAME_RULES:
            entities.extend(self._capture_names(text, rule, EntityType.CHARACTER))

        # Names after titles ("Dr. Smith" -> "Dr Smith")
        for rule in TITLE_RULES:
            for match in rule.matcher(text):
                captured = match.capture(0)
                if captured is None:
                    continue
                name = normalize_entity_name(captured[0])
                full_name = f"{capitalize(rule.category)} {name}"
                if is_valid_entity_name(name) and is_valid_entity_name(full_name):
                    entities.append(self._raw(text, full_name, EntityType.CHARACTER, match.start))

        # '"...," said X' and 'X said, "..."'
        for rule in DIALOGUE_ATTRIBUTION_RULES:
            entities.extend(self._capture_names(text, rule, EntityType.CHARACTER))

        # Capitalized operands of relationship verbs and "X and Y" pairs
        for rel_rule in RELATIONSHIP_RULES:
            entities.extend(
                self._capture_names(text, rel_rule.rule, EntityType.CHARACTER, proper_only=True)
            )
        entities.extend(self._capture_names(text, COORDINATION_RULE, EntityType.CHARACTER))

        return entities

    def _extract_speakers(self, dialogues: Iterable[DialogueLine]) -> list[RawEntity]:
        entities: list[RawEntity] = []
        for dialogue in dialogues:
            if not dialogue.speaker:
                continue
            name = normalize_entity_name(dialogue.speaker)
            if is_valid_entity_name(name):
                entities.append(
                    RawEntity(
                        name=name,
                        type=EntityType.CHARACTER,
                        offset=dialogue.offset,
                        context=dialogue.quote,
                        source="dialogue",
                    )
                )
        return entities

    def _extract_locations(self, text: str) -> list[RawEntity]:
        entities: list[RawEntity] = []

        # "in the Valley", "at Ravenholm"
        for rule in LOCATION_RULES:
            for match in rule.matcher(text):
                captured = match.capture(0)
                if captured is None:
                    continue
                name = normalize_entity_name(captured[0])
                if is_valid_entity_name(name) and len(name) > 2:
                    entities.append(self._raw(text, name, EntityType.LOCATION, captured[1]))

        # "the Iron Castle"
        for rule in PLACE_NOUN_RULES:
            for match in rule.matcher(text):
                captured = match.capture(0)
                if captured is None:
                    continue
                name = f"{normalize_entity_name(captured[0])} {capitalize(rule.category)}"
                if is_valid_entity_name(name):
                    entities.append(self._raw(text, name, EntityType.LOCATION, captured[1]))

        return entities

    def _extract_objects(self, text: str) -> list[RawEntity]:
        entities: list[RawEntity] = []

        # "the Obsidian Crown" or "the crown of Marcus"
        for rule in OBJECT_RULES:
            for match in rule.matcher(text):
                captured = match.capture(0)
                if captured is None:
                    continue
                name = normalize_entity_name(captured[0])
                full_name = f"The {name} {capitalize(rule.category)}"
                if is_valid_entity_name(name) and is_valid_entity_name(full_name):
                    entities.append(self._raw(text, full_name, EntityType.OBJECT, match.start))

        return entities

    def _capture_names(
        self,
        text: str,
        rule: PatternRule,
        entity_type: EntityType,
        proper_only: bool = False,
    ) -> list[RawEntity]:
        """Turn every capture of a rule into a candidate at the capture's offset."""
        entities: list[RawEntity] = []
        for match in rule.matcher(text):
            for captured in match.captures:
                if captured is None:
                    continue
                value, offset = captured
                if proper_only and not is_proper_noun(value):
                    continue
                name = normalize_entity_name(value)
                if is_valid_entity_name(name):
                    entities.append(self._raw(text, name, entity_type, offset))
        return entities

    @staticmethod
    def _raw(text: str, name: str, entity_type: EntityType, offset: int) -> RawEntity:
        return RawEntity(
            name=name,
            type=entity_type,
            offset=offset,
            context=text[max(0, offset - CONTEXT_BEFORE) : offset + CONTEXT_AFTER],
        )
