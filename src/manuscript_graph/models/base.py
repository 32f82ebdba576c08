"""Shared pydantic configuration for graph models."""

import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GraphModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """Serialize using the camelCase field names consumers expect."""
        return self.model_dump(mode="json", by_alias=True)


def generate_id() -> str:
    """Opaque, collision-resistant identifier."""
    return uuid.uuid4().hex
