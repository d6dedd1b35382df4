"""Structured model recovered from a Gradle dependency report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from depreport.parsers.gradle.tokens import TerminalSymbol


@dataclass(frozen=True)
class Dependency:
    """One dependency line of the report.

    Attributes:
        owning_project: Name of the project whose section listed the entry.
        configuration: Configuration symbol (``api``, ``runtimeClasspath``...).
        name: Coordinate without version, e.g. ``com.example:lib``.
        requested_version: Version printed left of the arrow. Its literal is
            empty when the report printed no version.
        resolved_version: Version right of ``->``; None when the report shows
            no override or when the entry ends in an annotation like ``(*)``.
        is_repeat: True when the tree prefix of the line contains ``|``.
    """

    owning_project: str
    configuration: TerminalSymbol
    name: TerminalSymbol
    requested_version: TerminalSymbol
    resolved_version: Optional[TerminalSymbol] = None
    is_repeat: bool = False

    @property
    def coordinate(self) -> str:
        if self.requested_version.literal:
            return f"{self.name.literal}:{self.requested_version.literal}"
        return self.name.literal

    @property
    def effective_version(self) -> str:
        if self.resolved_version is not None:
            return self.resolved_version.literal
        return self.requested_version.literal

    @property
    def is_project_dependency(self) -> bool:
        """True for ``project :lib`` entries pointing at a sibling project."""
        return self.name.literal.lower().startswith("project ")


@dataclass
class Project:
    """One ``Project ':name'`` section and the dependencies it declares."""

    name: TerminalSymbol
    dependencies: List[Dependency] = field(default_factory=list)

    @property
    def configurations(self) -> List[str]:
        """Configuration names in first-seen order."""
        seen: List[str] = []
        for dependency in self.dependencies:
            if dependency.configuration.literal not in seen:
                seen.append(dependency.configuration.literal)
        return seen
