"""Paragraph and dialogue models produced by the structural parser."""

from .base import GraphModel


class ClassifiedParagraph(GraphModel):
    """A paragraph span of chapter text with its structural classification."""

    offset: int
    length: int
    type: str = "exposition"  # dialogue, action, description, exposition
    speaker_id: str | None = None
    sentiment: float = 0.0
    tension: float = 0.0
    sentence_count: int = 0
    avg_sentence_length: float = 0.0

    @property
    def end(self) -> int:
        return self.offset + self.length

    def span(self, text: str) -> str:
        """Return this paragraph's slice of the chapter text."""
        return text[self.offset : self.end]


class DialogueLine(GraphModel):
    """A quoted line of dialogue with its attributed speaker."""

    id: str
    quote: str
    speaker: str | None = None
    offset: int
    length: int
    reply_to: str | None = None
    sentiment: float = 0.0
