"""Gradle dependency report tokenizer and parser."""

from depreport.parsers.gradle.model import Dependency, Project
from depreport.parsers.gradle.report_parser import (
    ReportParseResult,
    ReportParser,
    parse_report,
)
from depreport.parsers.gradle.scanner import Scanner
from depreport.parsers.gradle.stream import TokenStream
from depreport.parsers.gradle.tokens import TerminalSymbol, Token

__all__ = [
    "Dependency",
    "Project",
    "ReportParseResult",
    "ReportParser",
    "Scanner",
    "TerminalSymbol",
    "Token",
    "TokenStream",
    "parse_report",
]
