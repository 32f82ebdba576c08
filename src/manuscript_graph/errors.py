"""Exceptions raised by Manuscript Graph."""


class ManuscriptGraphError(Exception):
    """Base class for all package errors."""


class InputTooLargeError(ManuscriptGraphError, ValueError):
    """Text exceeds the configured maximum length."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Text is {length:,} characters; the limit is {limit:,} (set MSG_MAX_TEXT_LENGTH to raise it)"
        )
