"""
stylecoach exception hierarchy.

Provides a base exception class with user-facing messages and debug context,
plus specialized subclasses for the classification pipeline.
"""

from __future__ import annotations

from typing import Any


class StyleCoachError(Exception):
    """Base exception for stylecoach errors.

    Attributes:
        user_message: Safe, user-facing error message.
        context: Dictionary of debug information.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context or {}


class LexiconConfigError(StyleCoachError):
    """Raised when a lexicon file cannot be parsed or fails validation.

    Fatal at load time: no classification can run without a valid lexicon.

    Attributes:
        line: Line number (1-indexed) if available from the YAML parser.
        column: Column number (1-indexed) if available from the YAML parser.
        report: Formatted validation report, empty for parse errors.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        report: str = "",
        user_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.line = line
        self.column = column
        self.report = report
        super().__init__(message, user_message=user_message, context=context)

    def __str__(self) -> str:
        text = super().__str__()
        if self.line is not None:
            loc = f"line {self.line}"
            if self.column is not None:
                loc += f", column {self.column}"
            text = f"{text} ({loc})"
        if self.report:
            text = f"{text}\n{self.report}"
        return text


class MalformedConversationError(StyleCoachError):
    """Input messages mix subjects or omit required fields."""

    pass


class InsufficientDataError(StyleCoachError):
    """Zero aggregate signal: no evidence to build a profile from."""

    pass


class UnknownClassificationError(StyleCoachError):
    """A profile carries a classification outside the known set."""

    pass


class ConfigError(StyleCoachError):
    """Configuration load/validation errors."""

    pass
