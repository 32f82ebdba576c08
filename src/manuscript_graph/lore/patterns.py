"""Pattern tables for the contradiction checks.

Each attribute rule carries two logical captures: the entity name and the
attribute value. Alternatives that describe a value without naming anyone
("eyes were blue") still match, so they consume their span, but yield no
entity and are skipped by the extractor.
"""

import re

from ..extract.patterns import PatternRule, rule

ATTRIBUTE_RULES: tuple[PatternRule, ...] = (
    rule(
        "eye_color",
        r"\b(\w+)['’]s?\s+(\w+)\s+eyes|\beyes\s+(?:were|are)\s+(\w+)",
        1, (2, 3),
        flags=re.I,
    ),
    rule(
        "hair_color",
        r"\b(\w+)['’]s?\s+(\w+)\s+hair|\bhair\s+(?:was|is)\s+(\w+)",
        1, (2, 3),
        flags=re.I,
    ),
    rule(
        "age",
        r"\b(\w+)\s+(?:was|is)\s+(\d+)\s+years?\s+old|\b(\d+)-year-old\s+(\w+)",
        (1, 4), (2, 3),
        flags=re.I,
    ),
    rule("height", r"\b(\w+)\s+(?:was|is)\s+(tall|short|average\s+height)", 1, 2, flags=re.I),
    rule(
        "build",
        r"\b(\w+)['’]s?\s+(slender|muscular|heavyset|thin|stocky|athletic)\s+(?:build|frame|body)",
        1, 2,
        flags=re.I,
    ),
)

DEATH_RULES: tuple[PatternRule, ...] = (
    rule("died", r"\b(\w+)\s+(?:died|was\s+killed|passed\s+away|perished)", flags=re.I),
    rule("killed", r"\b(?:killed|murdered|slew)\s+(\w+)", flags=re.I),
    rule("death_of", r"\b(\w+)['’]s\s+(?:death|demise|passing)", flags=re.I),
)

ACTION_PATTERN = re.compile(r"\b(?:said|asked|walked|ran|looked|smiled|nodded|shook)\b", re.I)

# Base color -> descriptions treated as the same color
COLOR_VARIATIONS: dict[str, tuple[str, ...]] = {
    "blue": ("light blue", "dark blue", "sky blue", "azure"),
    "green": ("light green", "dark green", "emerald", "jade"),
    "brown": ("dark brown", "light brown", "chestnut", "chocolate"),
    "black": ("jet black", "raven"),
    "red": ("auburn", "copper", "crimson"),
    "blonde": ("golden", "fair", "light"),
}

# Characters of surrounding text kept with an extracted claim
CLAIM_CONTEXT = 20
