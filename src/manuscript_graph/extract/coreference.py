"""Heuristic pronoun resolution.

Resolves he/she/they-style pronouns to the nearest preceding character
whose inferred gender is compatible. Accepted resolutions are recorded as
mentions on the resolved node, which changes what later co-occurrence
scans see - so this must run after consolidation and before relationship
inference.
"""

import re
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from ..models.entities import EntityNode, EntityType
from .patterns import (
    FEMALE_PRONOUNS,
    FEMININE_ENDINGS,
    MALE_PRONOUNS,
    MASCULINE_ENDINGS,
    PRONOUN_PATTERN,
)

# Characters either side of a mention searched for gendered pronouns
GENDER_WINDOW = 100
GENDER_SAMPLE_MENTIONS = 5
MIN_CONFIDENCE = 0.5

_WORD = re.compile(r"[a-z]+")


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


@dataclass
class CoReference:
    """A pronoun resolved to an entity node."""

    pronoun: str
    offset: int
    resolved_to: str  # Entity ID
    confidence: float


def infer_gender(node: EntityNode, text: str) -> Gender:
    """Guess a character's gender from name endings, then nearby pronouns."""
    name_lower = node.name.lower()

    for ending in FEMININE_ENDINGS:
        if name_lower.endswith(ending):
            return Gender.FEMALE
    for ending in MASCULINE_ENDINGS:
        if name_lower.endswith(ending):
            return Gender.MALE

    for mention in node.mentions[:GENDER_SAMPLE_MENTIONS]:
        start = max(0, mention.offset - GENDER_WINDOW)
        end = min(len(text), mention.offset + len(node.name) + GENDER_WINDOW)
        words = set(_WORD.findall(text[start:end].lower()))

        male_count = len(words & MALE_PRONOUNS)
        female_count = len(words & FEMALE_PRONOUNS)

        if male_count > female_count + 1:
            return Gender.MALE
        if female_count > male_count + 1:
            return Gender.FEMALE

    return Gender.UNKNOWN


def distance_confidence(distance: int) -> float:
    if distance < 100:
        return 0.9
    if distance < 300:
        return 0.7
    return 0.5


def resolve_pronouns(text: str, nodes: list[EntityNode], chapter_id: str) -> list[CoReference]:
    """Resolve every pronoun in text to a character node.

    Args:
        text: Chapter text
        nodes: Consolidated nodes; resolved nodes gain a mention per pronoun
        chapter_id: Chapter the new mentions belong to

    Returns:
        Accepted co-references in text order
    """
    characters = [n for n in nodes if n.type is EntityType.CHARACTER]
    if not characters:
        return []

    # Infer once, before any pronoun mentions are added
    genders = {c.id: infer_gender(c, text) for c in characters}
    by_gender = {
        Gender.MALE: [c for c in characters if genders[c.id] is not Gender.FEMALE],
        Gender.FEMALE: [c for c in characters if genders[c.id] is not Gender.MALE],
    }

    coreferences: list[CoReference] = []

    for match in PRONOUN_PATTERN.finditer(text):
        pronoun = match.group(1)
        offset = match.start()
        pronoun_lower = pronoun.lower()

        candidates = characters
        if pronoun_lower in MALE_PRONOUNS and by_gender[Gender.MALE]:
            candidates = by_gender[Gender.MALE]
        elif pronoun_lower in FEMALE_PRONOUNS and by_gender[Gender.FEMALE]:
            candidates = by_gender[Gender.FEMALE]

        best: EntityNode | None = None
        best_distance = 0
        for candidate in candidates:
            for mention in candidate.mentions:
                if mention.offset >= offset:
                    continue
                distance = offset - mention.offset
                if best is None or distance < best_distance:
                    best, best_distance = candidate, distance

        if best is None:
            continue

        confidence = distance_confidence(best_distance)
        if confidence < MIN_CONFIDENCE:
            continue

        coreferences.append(
            CoReference(pronoun=pronoun, offset=offset, resolved_to=best.id, confidence=confidence)
        )
        best.add_mention(offset, chapter_id)

    logger.debug(f"Resolved {len(coreferences)} pronouns across {len(characters)} characters")
    return coreferences
