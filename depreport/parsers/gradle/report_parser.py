"""Parser for the tree report printed by ``gradle dependencies``.

A report is a sequence of project sections::

    ------------------------------------------------------------
    Project ':app'
    ------------------------------------------------------------

    api - API dependencies for compilation 'main'.
    +--- com.example:lib:1.0 -> 2.0
    |    \\--- com.example:core:2.0
    \\--- project :shared (*)

    runtimeOnly - Runtime only dependencies for 'main'.
    No dependencies

Each section holds configuration blocks separated by blank lines, and each
block holds one dependency per line. None of these boundaries are marked
explicitly, so the parser recovers them with token lookahead: blank-line
runs (``MULTI_NEW_LINE``) end blocks, a dash line followed by ``Project``
ends a section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional, Tuple

from depreport.config.schema import ReportParserConfig
from depreport.parsers.base import ReportSyntaxError
from depreport.parsers.gradle.model import Dependency, Project
from depreport.parsers.gradle.scanner import ReportSource, Scanner
from depreport.parsers.gradle.stream import TokenStream
from depreport.parsers.gradle.tokens import (
    IDENTIFIER_KINDS,
    LINE_END_KINDS,
    TREE_KINDS,
    TerminalSymbol,
    Token,
)

logger = logging.getLogger("depreport.parsers.gradle.report_parser")

_NAME_PART_KINDS: FrozenSet[Token] = IDENTIFIER_KINDS | {Token.NUMBER}
_COORDINATE_KINDS: FrozenSet[Token] = _NAME_PART_KINDS | {Token.POINT, Token.MINUS}
_VERSION_KINDS: FrozenSet[Token] = _NAME_PART_KINDS | {
    Token.POINT,
    Token.MINUS,
    Token.PLUS,
}
_PREFIX_KINDS: FrozenSet[Token] = frozenset(
    {Token.PLUS, Token.MINUS, Token.SLASH, Token.WS}
)
_ARROW_KINDS: FrozenSet[Token] = frozenset({Token.MINUS, Token.ARROW, Token.WS})
_HEADER_SEPARATOR_KINDS: FrozenSet[Token] = frozenset(
    {Token.QUOTE, Token.MINUS, Token.NEW_LINE, Token.WS}
)

# Braces are not report punctuation; they only wrap rich version constraints.
_CONSTRAINT_OPEN = "{"
_CONSTRAINT_CLOSE = "}"


def _opens_constraint(tok: TerminalSymbol) -> bool:
    return tok.kind is Token.ILLEGAL and tok.literal == _CONSTRAINT_OPEN


@dataclass
class ReportParseResult:
    """Everything recovered from one report."""

    projects: List[Project] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)


class ReportParser:
    """Pull-based parser turning a report stream into :class:`Project` values.

    A parser instance is single-use: it owns its scanner and token stream
    and consumes the source once.
    """

    def __init__(
        self,
        source: ReportSource,
        config: Optional[ReportParserConfig] = None,
    ) -> None:
        """Initialize parser.

        Args:
            source: Report text or an open text stream.
            config: Parser configuration; defaults to
                ``ReportParserConfig.default()``.
        """
        self.config = config or ReportParserConfig.default()
        self._stream = TokenStream(Scanner(source, self.config.dependency_types))
        self._all_dependencies: List[Dependency] = []

    @property
    def all_dependencies(self) -> List[Dependency]:
        """Every dependency parsed so far, repeats included, in report order."""
        return list(self._all_dependencies)

    def parse_next_project(self) -> Optional[Project]:
        """Parse the next project section.

        Returns:
            The next :class:`Project`, or None once the report holds no
            further ``Project`` header.

        Raises:
            ReportSyntaxError: The section violates the report grammar.
        """
        keyword, is_root = self._skip_to_project()
        if keyword.kind is Token.EOF:
            logger.debug("Project not found")
            return None

        project = Project(name=self._parse_project_name(keyword, is_root))
        logger.debug(
            "Found project %s at %d-%d",
            project.name.literal,
            project.name.start_offset,
            project.name.end_offset,
        )
        self._skip_header_rest()
        self._skip_header_separator()
        self._scan_dependencies(project)
        return project

    def iter_projects(self) -> Iterator[Project]:
        """Yield projects until the report is exhausted."""
        while True:
            project = self.parse_next_project()
            if project is None:
                return
            yield project

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _scan_ignore_blanks(self) -> TerminalSymbol:
        while True:
            tok = self._stream.next()
            if tok.kind is not Token.WS:
                return tok

    def _scan_ignore_whitespace(self) -> TerminalSymbol:
        while True:
            tok = self._stream.next()
            if tok.kind not in (Token.WS, Token.NEW_LINE):
                return tok

    def _scan_ignore_layout(self) -> TerminalSymbol:
        while True:
            tok = self._stream.next()
            if tok.kind not in (Token.WS, Token.NEW_LINE, Token.MULTI_NEW_LINE):
                return tok

    def _is_project_keyword(self, tok: TerminalSymbol) -> bool:
        return (
            tok.kind in IDENTIFIER_KINDS
            and tok.literal.lower() == self.config.project_keyword
        )

    def _is_configuration(self, tok: TerminalSymbol) -> bool:
        if tok.kind is Token.TYPE_DEPENDENCY:
            return True
        return not self.config.strict_configurations and tok.kind in IDENTIFIER_KINDS

    # ------------------------------------------------------------------
    # Project header
    # ------------------------------------------------------------------

    def _quote_follows(self) -> bool:
        """True when the next non-blank token is the quote opening a header path."""
        self._stream.mark()
        try:
            return self._scan_ignore_blanks().kind is Token.QUOTE
        finally:
            self._stream.rewind()

    def _is_header_keyword(self, tok: TerminalSymbol, after_separator: bool) -> bool:
        """The project keyword in header position.

        ``Project`` opens a header as written; the lowercase form (as in
        ``Root project 'x'``) needs a quoted path or a dash line above it.
        """
        if not self._is_project_keyword(tok):
            return False
        return after_separator or tok.kind is Token.PROJECT or self._quote_follows()

    def _skip_to_project(self) -> Tuple[TerminalSymbol, bool]:
        """Discard tokens up to a project header or EOF.

        Build log lines such as ``> Configure project :app`` are skipped:
        they use the lowercase keyword with neither a quoted path nor a dash
        line above.

        Returns:
            The keyword (or EOF) token, and whether it was written as
            ``Root project``, the header form without a ``:`` path.
        """
        previous: Optional[TerminalSymbol] = None
        separator_above = False
        dashes_only = False
        line_started = False
        while True:
            tok = self._stream.next()
            if tok.kind is Token.EOF:
                return tok, False
            if self._is_header_keyword(tok, separator_above):
                is_root = previous is not None and previous.literal.lower() == "root"
                return tok, is_root

            if tok.kind in (Token.NEW_LINE, Token.MULTI_NEW_LINE):
                separator_above = tok.kind is Token.NEW_LINE and dashes_only
                dashes_only = line_started = False
            elif tok.kind is Token.MINUS:
                dashes_only = dashes_only or not line_started
                line_started = True
            elif tok.kind is not Token.WS:
                dashes_only = False
                line_started = True
            if tok.kind is not Token.WS:
                previous = tok

    def _parse_project_name(self, keyword: TerminalSymbol, is_root: bool) -> TerminalSymbol:
        while True:
            tok = self._stream.next()
            if tok.kind not in (Token.QUOTE, Token.WS):
                break

        if tok.kind is Token.COLON:
            tok = self._scan_ignore_whitespace()
        elif not is_root:
            raise ReportSyntaxError(
                f"After {keyword.literal} keyword should be ':'",
                tok.literal,
                tok.start_offset,
                tok.end_offset,
            )

        if tok.kind not in _NAME_PART_KINDS:
            raise ReportSyntaxError(
                "Expected project name",
                tok.literal,
                tok.start_offset,
                tok.end_offset,
            )

        literal, start, end = tok.literal, tok.start_offset, tok.end_offset
        while True:
            # "-module" suffixes and ":nested" paths belong to the name, but a
            # separator with no name part behind it does not.
            self._stream.mark()
            separator = self._stream.next()
            if separator.kind is Token.NUMBER:
                self._stream.release()
                literal += separator.literal
                end = separator.end_offset
                continue
            if separator.kind in (Token.MINUS, Token.COLON):
                part = self._stream.next()
                if part.kind in _NAME_PART_KINDS:
                    self._stream.release()
                    literal += separator.literal + part.literal
                    end = part.end_offset
                    continue
            self._stream.rewind()
            break

        return TerminalSymbol(Token.NAME, literal, start, end)

    def _skip_header_rest(self) -> None:
        """Discard the closing quote and any project description."""
        while True:
            tok = self._stream.next()
            if tok.kind in LINE_END_KINDS:
                self._stream.push_back()
                return
            if tok.kind not in (Token.QUOTE, Token.WS):
                logger.debug(
                    "Skip header terminal sym: %s Start Position: %d End position: %d",
                    tok.literal,
                    tok.start_offset,
                    tok.end_offset,
                )

    def _skip_header_separator(self) -> None:
        while True:
            tok = self._stream.next()
            if tok.kind not in _HEADER_SEPARATOR_KINDS:
                self._stream.push_back()
                return

    def _skip_section_breaks(self) -> None:
        while True:
            tok = self._stream.next()
            if tok.kind is Token.MULTI_NEW_LINE:
                logger.debug(
                    "Found MultiNewLine. Start: %d End pos: %d",
                    tok.start_offset,
                    tok.end_offset,
                )
                continue
            self._stream.push_back()
            return

    def _check_project_next(self) -> bool:
        """Look ahead for the header of the next project section.

        Matches a dash separator line followed by the project keyword, or a
        header directly. Blank lines, including ones holding only
        spaces, are skipped first. Every token read here is restored before
        returning, whatever the outcome.
        """
        self._stream.mark()
        try:
            tok = self._scan_ignore_layout()
            if self._at_project_header(tok):
                return True

            found_minus = False
            while tok.kind is Token.MINUS:
                found_minus = True
                tok = self._stream.next()
            if not found_minus or tok.kind is not Token.NEW_LINE:
                return False
            return self._at_project_header(self._scan_ignore_blanks(), after_separator=True)
        finally:
            self._stream.rewind()

    def _check_legend_next(self) -> bool:
        """Look ahead for the legend Gradle prints after the last section.

        Legend lines read ``(*) - ...``, ``(c) - ...`` or ``(n) - ...``. The
        tokens are restored before returning.
        """
        self._stream.mark()
        try:
            if self._scan_ignore_layout().kind is not Token.LEFT_BRACKET:
                return False
            marker = self._stream.next()
            if marker.kind not in (Token.MULTIPLY, Token.NAME):
                return False
            if self._stream.next().kind is not Token.RIGHT_BRACKET:
                return False
            return self._scan_ignore_blanks().kind is Token.MINUS
        finally:
            self._stream.rewind()

    def _at_project_header(self, tok: TerminalSymbol, after_separator: bool = False) -> bool:
        if tok.kind in IDENTIFIER_KINDS and tok.literal.lower() == "root":
            tok = self._scan_ignore_blanks()
        return self._is_header_keyword(tok, after_separator)

    # ------------------------------------------------------------------
    # Configuration blocks
    # ------------------------------------------------------------------

    def _scan_dependencies(self, project: Project) -> None:
        project_name = project.name.literal
        while True:
            configuration, section_done = self._scan_type_dependency()
            if section_done:
                logger.debug("All dependencies of %s analysed", project_name)
                return
            if configuration is None:
                continue
            logger.debug("Success scan configuration: %s", configuration.literal)

            while True:
                dependency = self._scan_dependency(project_name, configuration)
                logger.debug("Success scanned dependency: %s", dependency)
                self._all_dependencies.append(dependency)
                if dependency.is_repeat and not self.config.include_repeats_in_projects:
                    logger.debug("Skip repeated dependency %s", dependency.name.literal)
                else:
                    project.dependencies.append(dependency)

                if not self._check_continue_scan_dependency():
                    break

            if not self._check_continue_scan():
                return

    def _scan_type_dependency(self) -> Tuple[Optional[TerminalSymbol], bool]:
        """Read the configuration keyword opening the next block.

        Returns:
            ``(configuration, section_done)``. The configuration is None when
            the block is empty or was skipped; ``section_done`` is True at EOF
            or when the next project header follows.
        """
        self._skip_section_breaks()
        if self._check_project_next():
            logger.debug("Scanned next project")
            return None, True
        if self._check_legend_next():
            logger.debug("Reached report legend")
            return None, True

        tok = self._scan_ignore_layout()
        if tok.kind is Token.EOF:
            return None, True

        if not self._is_configuration(tok):
            if self.config.strict_configurations:
                raise ReportSyntaxError(
                    "Expected dependency configuration, like api, implementation, "
                    "runtimeClasspath",
                    tok.literal,
                    tok.start_offset,
                    tok.end_offset,
                )
            logger.warning(
                "Skipping unknown configuration block %r at %d-%d",
                tok.literal,
                tok.start_offset,
                tok.end_offset,
            )
            self._skip_to_section_break()
            return None, False

        if not self._move_to_first_entry(tok):
            return None, False
        return tok, False

    def _move_to_first_entry(self, configuration: TerminalSymbol) -> bool:
        """Skip the configuration description up to the first tree line.

        Returns:
            False when the block reads ``No dependencies`` (or was skipped in
            non-strict mode), True when positioned on the first entry.
        """
        saw_no = False
        at_line_start = False
        while True:
            tok = self._stream.next()
            if tok.kind in IDENTIFIER_KINDS:
                word = tok.literal.lower()
                if saw_no and word == "dependencies":
                    logger.debug("Configuration %s has no dependencies", configuration.literal)
                    return False
                saw_no = word == "no"
            elif tok.kind in TREE_KINDS and at_line_start:
                self._stream.push_back()
                return True
            elif tok.kind in (Token.MULTI_NEW_LINE, Token.EOF):
                self._stream.push_back()
                if self.config.strict_configurations:
                    raise ReportSyntaxError(
                        f"Configuration {configuration.literal} has no dependency tree",
                        tok.literal,
                        tok.start_offset,
                        tok.end_offset,
                    )
                logger.warning(
                    "Configuration %s has no dependency tree; skipped",
                    configuration.literal,
                )
                return False

            if tok.kind is Token.NEW_LINE:
                at_line_start = True
            elif tok.kind is not Token.WS:
                at_line_start = False
                logger.debug(
                    "Skip terminal sym: %s Start Position: %d End position: %d",
                    tok.literal,
                    tok.start_offset,
                    tok.end_offset,
                )

    def _skip_to_section_break(self) -> None:
        while True:
            tok = self._stream.next()
            if tok.kind in (Token.MULTI_NEW_LINE, Token.EOF):
                self._stream.push_back()
                return

    def _check_continue_scan_dependency(self) -> bool:
        """Decide whether another entry of the current block follows."""
        tok = self._stream.next()
        if tok.kind in (Token.MULTI_NEW_LINE, Token.EOF):
            self._stream.push_back()
            return False
        if tok.kind is not Token.NEW_LINE:
            self._stream.push_back()
            return True

        self._stream.mark()
        try:
            following = self._scan_ignore_blanks()
        finally:
            self._stream.rewind()
        if following.kind is Token.EOF:
            logger.debug("Can not continue, because eof")
            return False
        return following.kind in TREE_KINDS

    def _check_continue_scan(self) -> bool:
        return self._stream.peek().kind is not Token.EOF

    # ------------------------------------------------------------------
    # Dependency entries
    # ------------------------------------------------------------------

    def _scan_dependency(self, project_name: str, configuration: TerminalSymbol) -> Dependency:
        is_repeat = False
        while True:
            tok = self._stream.next()
            if tok.kind is Token.LINE:
                is_repeat = True
            elif tok.kind not in _PREFIX_KINDS:
                self._stream.push_back()
                break

        name, version_start = self._scan_coordinate()
        if version_start is not None:
            requested = self._scan_version_run(version_start)
        else:
            requested = TerminalSymbol(
                Token.DEPENDENCY_VERSION, "", name.end_offset, name.end_offset
            )

        def build(resolved: Optional[TerminalSymbol]) -> Dependency:
            return Dependency(
                owning_project=project_name,
                configuration=configuration,
                name=name,
                requested_version=requested,
                resolved_version=resolved,
                is_repeat=is_repeat,
            )

        tok = self._scan_ignore_blanks()
        self._stream.push_back()
        if tok.kind is Token.LEFT_BRACKET:
            # Annotated entries such as "(*)" never carry an override.
            self._skip_brackets()
            self._skip_line_rest()
            return build(None)

        resolved = None
        if tok.kind in (Token.MINUS, Token.ARROW):
            resolved = self._scan_resolved_version()
        self._skip_line_rest()
        return build(resolved)

    def _scan_coordinate(self) -> Tuple[TerminalSymbol, Optional[TerminalSymbol]]:
        """Read ``group:artifact`` and stop where the version begins.

        Returns:
            The name symbol (trailing ``:`` stripped) and the first token of
            the requested version, if the coordinate carries one.
        """
        first = self._stream.next()
        if first.kind not in _NAME_PART_KINDS:
            raise ReportSyntaxError(
                "Expected dependency coordinate",
                first.literal,
                first.start_offset,
                first.end_offset,
            )

        literal, start, end = first.literal, first.start_offset, first.end_offset
        is_project_ref = self._is_project_keyword(first)

        def name_symbol() -> TerminalSymbol:
            return TerminalSymbol(Token.DEPENDENCY_NAME, literal, start, end)

        while True:
            if is_project_ref and self._project_path_follows():
                literal += self._stream.next().literal
                is_project_ref = False

            tok = self._stream.next()
            if tok.kind is Token.COLON:
                part = self._stream.next()
                if part.kind is Token.NUMBER or _opens_constraint(part):
                    return name_symbol(), part
                if part.kind in _NAME_PART_KINDS:
                    if ":" in literal and " " not in literal:
                        # group:artifact:version with a non-numeric version
                        return name_symbol(), part
                    literal += tok.literal + part.literal
                    end = part.end_offset
                    continue
                self._stream.push_back()
                return name_symbol(), None
            if tok.kind in _COORDINATE_KINDS:
                literal += tok.literal
                end = tok.end_offset
                continue
            self._stream.push_back()
            return name_symbol(), None

    def _project_path_follows(self) -> bool:
        """True when ``project`` is followed by `` :path`` (project dependency)."""
        self._stream.mark()
        try:
            blank = self._stream.next()
            colon = self._stream.next()
            return blank.kind is Token.WS and colon.kind is Token.COLON
        finally:
            self._stream.rewind()

    def _scan_version_run(self, first: TerminalSymbol) -> TerminalSymbol:
        if _opens_constraint(first):
            return self._scan_constraint(first)
        literal, end = first.literal, first.end_offset
        while True:
            tok = self._stream.next()
            if tok.kind not in _VERSION_KINDS:
                self._stream.push_back()
                break
            literal += tok.literal
            end = tok.end_offset
        return TerminalSymbol(Token.DEPENDENCY_VERSION, literal, first.start_offset, end)

    def _scan_constraint(self, first: TerminalSymbol) -> TerminalSymbol:
        """Read a rich version such as ``{strictly 1.0}`` as one version symbol."""
        literal, end = first.literal, first.end_offset
        while True:
            tok = self._stream.next()
            if tok.kind in LINE_END_KINDS:
                self._stream.push_back()
                logger.debug("Unclosed version constraint at offset %d", first.start_offset)
                break
            literal += tok.literal
            end = tok.end_offset
            if tok.kind is Token.ILLEGAL and tok.literal == _CONSTRAINT_CLOSE:
                break
        return TerminalSymbol(Token.DEPENDENCY_VERSION, literal, first.start_offset, end)

    def _scan_resolved_version(self) -> Optional[TerminalSymbol]:
        """Read the version right of a ``->`` override arrow."""
        while True:
            tok = self._stream.next()
            if tok.kind not in _ARROW_KINDS:
                break
        if tok.kind not in _NAME_PART_KINDS:
            self._stream.push_back()
            logger.debug(
                "Override arrow without version at %d-%d", tok.start_offset, tok.end_offset
            )
            return None
        return self._scan_version_run(tok)

    def _skip_brackets(self) -> None:
        tok = self._scan_ignore_blanks()
        if tok.kind is not Token.LEFT_BRACKET:
            self._stream.push_back()
            return

        depth = 1
        while depth:
            tok = self._stream.next()
            if tok.kind in LINE_END_KINDS:
                self._stream.push_back()
                logger.debug("Unbalanced annotation ends at offset %d", tok.start_offset)
                return
            if tok.kind is Token.LEFT_BRACKET:
                depth += 1
            elif tok.kind is Token.RIGHT_BRACKET:
                depth -= 1
            logger.debug(
                "Skip terminal sym: %s Start Position: %d End position: %d",
                tok.literal,
                tok.start_offset,
                tok.end_offset,
            )

    def _skip_line_rest(self) -> None:
        """Discard what is left of the entry line, keeping its terminator."""
        while True:
            tok = self._stream.next()
            if tok.kind in LINE_END_KINDS:
                self._stream.push_back()
                return
            if tok.kind is Token.LEFT_BRACKET:
                self._stream.push_back()
                self._skip_brackets()
            elif tok.kind is not Token.WS:
                logger.debug(
                    "Skip trailing terminal sym: %s Start Position: %d End position: %d",
                    tok.literal,
                    tok.start_offset,
                    tok.end_offset,
                )


def parse_report(
    source: ReportSource,
    config: Optional[ReportParserConfig] = None,
) -> ReportParseResult:
    """Parse a whole report.

    Args:
        source: Report text or an open text stream.
        config: Parser configuration.

    Returns:
        ReportParseResult with every project and the flat dependency list.
    """
    parser = ReportParser(source, config)
    projects = list(parser.iter_projects())
    return ReportParseResult(projects=projects, dependencies=parser.all_dependencies)
