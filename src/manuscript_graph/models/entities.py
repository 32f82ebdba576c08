"""Entity models for the knowledge graph."""

from enum import Enum

from pydantic import Field

from .base import GraphModel, generate_id


class EntityType(str, Enum):
    """Kinds of entity the extractor recognises."""

    CHARACTER = "character"
    LOCATION = "location"
    OBJECT = "object"


class Mention(GraphModel):
    """One observed occurrence of an entity."""

    offset: int
    chapter_id: str


class EntityNode(GraphModel):
    """A character, location or object with every place it was seen."""

    id: str = Field(default_factory=generate_id)
    name: str
    type: EntityType
    aliases: list[str] = Field(default_factory=list)
    first_mention: int
    mention_count: int = 0
    mentions: list[Mention] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)

    def add_mention(self, offset: int, chapter_id: str) -> None:
        """Record a mention, keeping mention_count in step with mentions."""
        self.mentions.append(Mention(offset=offset, chapter_id=chapter_id))
        self.mention_count += 1

    def add_alias(self, alias: str) -> bool:
        """Add an alternate name unless it is already known.

        Returns:
            True if the alias was added
        """
        alias = alias.strip()
        alias_lower = alias.lower()
        if not alias or alias_lower == self.name.lower():
            return False
        if any(a.lower() == alias_lower for a in self.aliases):
            return False
        self.aliases.append(alias)
        return True

    @property
    def all_names(self) -> list[str]:
        return [self.name, *self.aliases]
