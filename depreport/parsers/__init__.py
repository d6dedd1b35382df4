"""Parsers package.

Report parsers live in per-tool subpackages; shared errors in ``base``.
"""

from depreport.parsers.base import (
    ConfigurationError,
    ParseError,
    PushbackError,
    RecoverableError,
    ReportSyntaxError,
)

__all__ = [
    "ConfigurationError",
    "ParseError",
    "PushbackError",
    "RecoverableError",
    "ReportSyntaxError",
]
