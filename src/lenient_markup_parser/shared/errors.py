"""Exception types raised by the lenient markup parser."""

from typing import Optional

# Max characters of unconsumed input quoted in an error message
REMAINDER_PREVIEW_LENGTH = 40


class LenientMarkupError(Exception):
    """Base exception for all lenient markup parser errors."""


class MarkupParseError(LenientMarkupError):
    """Raised when a tokenizer step cannot advance the cursor.

    This is the only fatal condition of a parse. Every other malformation is
    recovered silently, so seeing this error means the input defeated the
    progress guarantee and the parse was abandoned.

    Attributes:
        remainder: The unconsumed input, starting at ``offset``
        offset: Cursor offset at which the parse stalled
    """

    def __init__(
        self,
        remainder: str,
        offset: int,
        message: Optional[str] = None
    ) -> None:
        if message is None:
            preview = remainder[:REMAINDER_PREVIEW_LENGTH]
            if len(remainder) > REMAINDER_PREVIEW_LENGTH:
                preview += "..."
            message = f"Parse error at offset {offset}: {preview!r}"
        super().__init__(message)
        self.remainder = remainder
        self.offset = offset
