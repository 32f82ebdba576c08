"""Attribute contradiction detection.

Finds physical descriptions (eye and hair color, age, height, build) and
flags pairs of descriptions of the same character that cannot both hold.
"""

from dataclasses import dataclass

from loguru import logger

from ..models.contradictions import Claim, Contradiction, ContradictionType
from ..models.relationships import EntityGraph
from .patterns import ATTRIBUTE_RULES, CLAIM_CONTEXT, COLOR_VARIATIONS

ATTRIBUTE_SEVERITY = 0.8
AGE_TOLERANCE = 2  # Years; allows for passage of time


@dataclass
class ExtractedAttribute:
    """A single attribute description found in text."""

    entity_name: str
    category: str
    value: str
    offset: int
    context: str


def extract_attributes(text: str) -> list[ExtractedAttribute]:
    """Extract attribute descriptions, rule by rule, in match order."""
    attributes: list[ExtractedAttribute] = []

    for attr_rule in ATTRIBUTE_RULES:
        for match in attr_rule.matcher(text):
            name, value = match.capture(0), match.capture(1)
            if name is None or value is None:
                continue

            attributes.append(
                ExtractedAttribute(
                    entity_name=name[0].strip(),
                    category=attr_rule.category,
                    value=" ".join(value[0].lower().split()),
                    offset=match.start,
                    context=text[max(0, match.start - CLAIM_CONTEXT) : match.end + CLAIM_CONTEXT],
                )
            )

    return attributes


def are_values_compatible(category: str, value1: str, value2: str) -> bool:
    """Check whether two values for one category can both be true."""
    if value1 == value2:
        return True

    if category == "age" and value1.isdigit() and value2.isdigit():
        return abs(int(value1) - int(value2)) <= AGE_TOLERANCE

    for base, variations in COLOR_VARIATIONS.items():
        if (value1 == base or value1 in variations) and (value2 == base or value2 in variations):
            return True

    return False


def detect_attribute_contradictions(text: str, graph: EntityGraph) -> list[Contradiction]:
    """Flag incompatible descriptions of the same entity.

    Args:
        text: Chapter text
        graph: Entity graph used to attach entity ids

    Returns:
        One contradiction per incompatible pair, grouped by entity then category
    """
    grouped: dict[str, dict[str, list[ExtractedAttribute]]] = {}
    for attr in extract_attributes(text):
        by_category = grouped.setdefault(attr.entity_name.lower(), {})
        by_category.setdefault(attr.category, []).append(attr)

    contradictions: list[Contradiction] = []

    for entity_key, categories in grouped.items():
        entity = graph.find_by_name(entity_key)

        for category, attrs in categories.items():
            for i, first in enumerate(attrs):
                for second in attrs[i + 1 :]:
                    if are_values_compatible(category, first.value, second.value):
                        continue

                    label = category.replace("_", " ")
                    contradictions.append(
                        Contradiction(
                            type=ContradictionType.ATTRIBUTE,
                            entity_id=entity.id if entity else "",
                            entity_name=first.entity_name,
                            claim1=Claim(text=first.context, offset=first.offset, value=first.value),
                            claim2=Claim(text=second.context, offset=second.offset, value=second.value),
                            severity=ATTRIBUTE_SEVERITY,
                            suggestion=(
                                f"{first.entity_name}'s {label} is described as both "
                                f'"{first.value}" and "{second.value}". '
                                "Consider making these consistent."
                            ),
                        )
                    )

    logger.debug(f"Found {len(contradictions)} attribute contradictions")
    return contradictions
