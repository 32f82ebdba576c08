"""Pattern library for deterministic entity extraction.

Every rule is a typed record: a category, a compiled regex, and the groups
that carry its captured values. Rules are kept in ordered tuples, one per
concern, so the library stays declarative and each rule set can be tested
on its own.

Quantifiers are kept linear: no nested unbounded repetition, and quoted
spans exclude their own delimiters so a lazy scan never runs past them.
"""

import re
from dataclasses import dataclass
from typing import Iterator

from ..models.relationships import RelationshipType

# ─────────────────────────────────────────────────────────────────────────────
# Lexicons
# ─────────────────────────────────────────────────────────────────────────────

# Common words that look like names but aren't
FALSE_POSITIVES = frozenset({
    "the", "a", "an", "this", "that", "these", "those", "it", "they", "we", "i",
    "he", "she", "him", "her", "his", "hers", "their", "our", "my", "your",
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    "january", "february", "march", "april", "may", "june", "july", "august",
    "september", "october", "november", "december",
    "morning", "afternoon", "evening", "night", "day", "week", "month", "year",
    "north", "south", "east", "west",
    "chapter", "part", "book", "section", "act", "scene",
    "said", "asked", "replied", "answered", "thought", "knew", "felt", "saw",
    "but", "and", "or", "if", "when", "then", "now", "here", "there",
    "yes", "no", "maybe", "perhaps", "certainly", "definitely",
    "one", "two", "three", "four", "five", "first", "second", "third", "last",
})

# Honorifics that introduce a character name
TITLES = (
    "mr", "mrs", "ms", "miss", "dr", "doctor", "professor", "prof",
    "sir", "lady", "lord", "king", "queen", "prince", "princess", "captain",
    "general", "colonel", "major", "sergeant", "officer", "detective", "agent",
    "father", "mother", "brother", "sister", "uncle", "aunt", "grandpa", "grandma",
)

LOCATION_PREPOSITIONS = (
    "in", "at", "inside", "outside", "within", "near",
    "by", "behind", "before", "above", "below", "beneath", "beside", "between",
    "through", "across", "around", "toward", "towards", "into", "onto", "upon",
)

PLACE_NOUNS = (
    "castle", "palace", "tower", "house", "hall", "chamber",
    "room", "forest", "mountain", "river", "lake", "sea", "ocean", "city",
    "town", "village", "kingdom", "realm", "land", "world", "tavern", "inn",
    "temple", "church", "cathedral", "dungeon", "cave", "prison", "throne",
)

OBJECT_NOUNS = (
    "sword", "crown", "ring", "staff", "wand", "book",
    "scroll", "key", "gem", "stone", "amulet", "pendant", "necklace", "bracelet",
    "shield", "armor", "cloak", "robe", "dagger", "bow", "arrow", "spear", "axe",
    "hammer", "chalice", "goblet", "mirror", "orb", "crystal", "map", "letter",
)

SPEECH_VERBS = ("said", "asked", "replied", "whispered", "shouted", "muttered", "exclaimed")

# Gender heuristics: known-approximate, feminine endings are checked first
FEMININE_ENDINGS = ("a", "ia", "ina", "ella", "anna", "ette", "elle")
MASCULINE_ENDINGS = ("ius", "us", "son", "ton")

MALE_PRONOUNS = frozenset({"he", "him", "his", "himself"})
FEMALE_PRONOUNS = frozenset({"she", "her", "hers", "herself"})
NEUTRAL_PRONOUNS = frozenset({"they", "them", "their", "theirs", "themselves"})

# ─────────────────────────────────────────────────────────────────────────────
# Rule records
# ─────────────────────────────────────────────────────────────────────────────

Capture = tuple[str, int]  # (value, offset)


@dataclass(frozen=True)
class RuleMatch:
    """A single rule hit: the matched span plus its captured values."""

    start: int
    end: int
    text: str
    captures: tuple[Capture | None, ...]

    def capture(self, index: int) -> Capture | None:
        return self.captures[index] if index < len(self.captures) else None


@dataclass(frozen=True)
class PatternRule:
    """A named regex rule.

    ``groups`` lists one entry per logical capture; each entry is a tuple of
    alternative group numbers and the first group that participated wins.
    """

    category: str
    pattern: re.Pattern
    groups: tuple[tuple[int, ...], ...] = ((1,),)

    def matcher(self, text: str) -> Iterator[RuleMatch]:
        for match in self.pattern.finditer(text):
            captures: list[Capture | None] = []
            for alternatives in self.groups:
                capture = None
                for group in alternatives:
                    value = match.group(group)
                    if value:
                        capture = (value, match.start(group))
                        break
                captures.append(capture)
            yield RuleMatch(match.start(), match.end(), match.group(0), tuple(captures))


@dataclass(frozen=True)
class RelationshipRule:
    """A verb-pattern rule that maps two captured names to a relationship type."""

    rule: PatternRule
    type: RelationshipType


def rule(category: str, regex: str, *groups: int | tuple[int, ...], flags: int = 0) -> PatternRule:
    """Compile a rule; bare ints in ``groups`` become single-alternative captures."""
    normalized = tuple(g if isinstance(g, tuple) else (g,) for g in groups) or ((1,),)
    return PatternRule(category, re.compile(regex, flags), normalized)


# ─────────────────────────────────────────────────────────────────────────────
# Rule sets
# ─────────────────────────────────────────────────────────────────────────────

_NAME = r"[A-Z][a-z]+"
_PHRASE = rf"{_NAME}(?:\s+{_NAME})*"
_SPEECH = "|".join(SPEECH_VERBS)
_QUOTED = r"(?:\"[^\"\n]*\"|“[^”\n]*”)"

NAME_RULES: tuple[PatternRule, ...] = (
    # Proper nouns at sentence starts or right after a quotation mark
    rule("proper_noun", rf"(?:^|[.!?]\s+|[\"'“”‘’]\s*)({_NAME}(?:\s+{_NAME})?)\b"),
)

TITLE_RULES: tuple[PatternRule, ...] = tuple(
    rule(title, rf"\b(?i:{title})\.?\s+({_NAME}(?:\s+{_NAME})?)\b") for title in TITLES
)

DIALOGUE_ATTRIBUTION_RULES: tuple[PatternRule, ...] = (
    # "...," said X
    rule("said_after", rf"{_QUOTED}\s*,?\s*(?:{_SPEECH})\s+({_NAME})"),
    # X said, "..."
    rule("said_before", rf"({_NAME})\s+(?:{_SPEECH})\s*,?\s*[\"'“]"),
)

COORDINATION_RULE = rule("coordination", rf"\b({_NAME})\s+and\s+({_NAME})\b", 1, 2)

LOCATION_RULES: tuple[PatternRule, ...] = tuple(
    rule(prep, rf"\b{prep}\s+(?:the\s+)?({_PHRASE})\b") for prep in LOCATION_PREPOSITIONS
)

PLACE_NOUN_RULES: tuple[PatternRule, ...] = tuple(
    rule(noun, rf"\b(?i:the)\s+({_PHRASE})\s+(?i:{noun})\b") for noun in PLACE_NOUNS
)

OBJECT_RULES: tuple[PatternRule, ...] = tuple(
    rule(
        obj,
        rf"\b(?i:the)\s+({_PHRASE})\s+(?i:{obj})\b|\b(?i:the)\s+(?i:{obj})\s+of\s+({_NAME})\b",
        (1, 2),
    )
    for obj in OBJECT_NOUNS
)

ALIAS_RULES: tuple[PatternRule, ...] = (
    # "X, known as Y" / "X, called Y"
    rule(
        "known_as",
        rf"({_NAME}),?\s+(?:known|called|nicknamed)\s+(?:as\s+)?[\"'“]?({_NAME})[\"'”]?",
        1, 2,
    ),
    # "Y, whose real name was X"
    rule("real_name", rf"({_NAME}),?\s+whose\s+(?:real|true)\s+name\s+(?:was|is)\s+({_NAME})", 1, 2),
    # "The old man said" style descriptors standing in for a character
    rule(
        "descriptor",
        r"(?:^|[.!?]\s+)([Tt]he\s+[a-z]+\s+[a-z]+)\s+(?:was|had|did|could|would|said|asked)\b",
    ),
)

RELATIONSHIP_RULES: tuple[RelationshipRule, ...] = (
    RelationshipRule(
        rule("romance", r"\b(\w+)\s+(?:loved|kissed|embraced|married)\s+(\w+)", 1, 2, flags=re.I),
        RelationshipType.RELATED_TO,
    ),
    RelationshipRule(
        rule("conflict", r"\b(\w+)\s+(?:attacked|fought|killed|struck|hit)\s+(\w+)", 1, 2, flags=re.I),
        RelationshipType.OPPOSES,
    ),
    RelationshipRule(
        rule("aid", r"\b(\w+)\s+(?:helped|saved|protected|defended)\s+(\w+)", 1, 2, flags=re.I),
        RelationshipType.ALLIED_WITH,
    ),
    RelationshipRule(
        rule(
            "together",
            r"\b(\w+)\s+and\s+(\w+)\s+(?:worked|traveled|walked|ran)\s+together",
            1, 2,
            flags=re.I,
        ),
        RelationshipType.ALLIED_WITH,
    ),
    RelationshipRule(
        rule("aversion", r"\b(\w+)\s+(?:hated|despised|feared)\s+(\w+)", 1, 2, flags=re.I),
        RelationshipType.OPPOSES,
    ),
    RelationshipRule(
        rule("loyalty", r"\b(\w+)\s+(?:trusted|believed|followed)\s+(\w+)", 1, 2, flags=re.I),
        RelationshipType.ALLIED_WITH,
    ),
)

_PRONOUNS = sorted(MALE_PRONOUNS | FEMALE_PRONOUNS | NEUTRAL_PRONOUNS, key=lambda p: (-len(p), p))
PRONOUN_PATTERN = re.compile(rf"\b({'|'.join(_PRONOUNS)})\b", re.IGNORECASE)

# ─────────────────────────────────────────────────────────────────────────────
# Name helpers
# ─────────────────────────────────────────────────────────────────────────────

_TRAILING_PUNCTUATION = ".,!?;:'\"“”‘’"
_POSSESSIVE = re.compile(r"['’]s$")
_PROPER_NOUN = re.compile(r"^[A-Z][a-z]+$")


def normalize_entity_name(name: str) -> str:
    """Collapse whitespace, drop a possessive suffix and trailing punctuation."""
    name = " ".join(name.split())
    name = _POSSESSIVE.sub("", name)
    return name.rstrip(_TRAILING_PUNCTUATION).strip()


def canonical_key(name: str) -> str:
    """Case-folded normalized name used for identity comparisons."""
    return normalize_entity_name(name).lower()


def is_valid_entity_name(name: str) -> bool:
    """Reject lexicon words, numbers, and names outside the 2-30 char range."""
    normalized = canonical_key(name)
    if normalized in FALSE_POSITIVES:
        return False
    if len(normalized) < 2 or len(normalized) > 30:
        return False
    if normalized.isdigit():
        return False
    return True


def is_proper_noun(word: str) -> bool:
    return bool(_PROPER_NOUN.match(word))


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]
