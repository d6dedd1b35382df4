"""Exception hierarchy shared by report parsers and the configuration layer."""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class RecoverableError(Exception):
    """Base class for recoverable business errors.

    These errors describe bad input rather than bad code: the caller can
    report them and move on to the next report.
    """
    pass


class ConfigurationError(RecoverableError):
    """Parser configuration is malformed or contains invalid values."""
    pass


class ParseError(RecoverableError):
    """A dependency report cannot be parsed."""
    pass


class ReportSyntaxError(ParseError):
    """Structural grammar error at a known position in the report.

    Attributes:
        literal: Source text of the offending token.
        start: Start offset of the offending token.
        end: End offset of the offending token.
    """

    def __init__(
        self,
        message: str,
        literal: str = "",
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> None:
        self.literal = literal
        self.start = start
        self.end = end
        if start is not None:
            message = (
                f"{message}: found {literal!r}. "
                f"Start position: {start}; End position: {end}"
            )
        super().__init__(message)


class PushbackError(RuntimeError):
    """Token stream misuse (double pushback, rewind without mark)."""
    pass
