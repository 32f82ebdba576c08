"""Timeline models produced by the timeline builder."""

from pydantic import Field

from .base import GraphModel


class TimelineEvent(GraphModel):
    """A narrated event anchored at a text offset."""

    offset: int
    description: str
    temporal_marker: str | None = None


class Timeline(GraphModel):
    """Ordered events of a chapter."""

    events: list[TimelineEvent] = Field(default_factory=list)
