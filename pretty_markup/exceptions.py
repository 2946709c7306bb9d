"""Package-specific exception types."""

from __future__ import annotations


class FormatError(ValueError):
    """Base class for formatting-related errors.

    Represents errors encountered while pretty-printing or minifying text.
    """


class DepthExceededError(FormatError):
    """Raised when nesting goes deeper than the indentation table allows.

    Only raised when the overflow policy is ``"error"``; the default policy
    clamps to the deepest indentation instead.

    Args:
        depth: Nesting level that was requested.
        max_depth: Deepest level with a precomputed indentation string.
    """

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Nesting depth {self.depth} exceeds the maximum supported depth "
            f"of {self.max_depth}"
        )


class InvalidJsonError(FormatError):
    """Raised when text handed to the JSON formatter cannot be decoded."""


class UnsupportedLanguageError(FormatError):
    """Raised when a formatter is requested for an unknown language.

    Args:
        language: The language name that was requested.
    """

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Unsupported language: {self.language}")
