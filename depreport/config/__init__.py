"""Configuration schema and validation for depreport."""

from .schema import DEFAULT_DEPENDENCY_TYPES, ReportParserConfig

__all__ = [
    "DEFAULT_DEPENDENCY_TYPES",
    "ReportParserConfig",
]
