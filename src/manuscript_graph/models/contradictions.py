"""Contradiction models produced by the lore checks."""

from enum import Enum

from pydantic import Field

from .base import GraphModel, generate_id


class ContradictionType(str, Enum):
    """What kind of inconsistency a contradiction describes."""

    ATTRIBUTE = "attribute"        # Physical traits, ages
    TIMELINE = "timeline"          # Dead characters acting
    LOCATION = "location"          # Character in two places at once
    RELATIONSHIP = "relationship"  # Relationship status inconsistency
    EXISTENCE = "existence"        # Character exists/doesn't exist


class Claim(GraphModel):
    """One side of a contradiction."""

    text: str
    offset: int
    value: str
    chapter_id: str | None = None


class Contradiction(GraphModel):
    """Two claims about the same entity that cannot both hold."""

    id: str = Field(default_factory=generate_id)
    type: ContradictionType
    entity_id: str = ""
    entity_name: str
    claim1: Claim
    claim2: Claim
    severity: float = Field(ge=0.0, le=1.0)
    suggestion: str

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            f"[{self.type.value}] {self.entity_name} (severity: {self.severity:.0%})",
            f"    @{self.claim1.offset}: {self.claim1.value!r} - {self.claim1.text.strip()[:80]}",
            f"    @{self.claim2.offset}: {self.claim2.value!r} - {self.claim2.text.strip()[:80]}",
            f"    Suggestion: {self.suggestion}",
        ]
        return "\n".join(lines)
