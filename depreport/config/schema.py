"""Configuration schema definitions using Pydantic for validation.

The report parser is configured through :class:`ReportParserConfig`. Using
Pydantic ensures configuration errors are caught early with clear error
messages instead of surfacing as confusing grammar errors mid-report.
"""

from typing import FrozenSet, List

from pydantic import BaseModel, Field, field_validator

# Configuration names printed by stock Gradle, the Java/Kotlin plugins and
# the Android plugin. Matched case-sensitively against whole identifiers.
DEFAULT_DEPENDENCY_TYPES: FrozenSet[str] = frozenset(
    {
        "allMain",
        "annotationProcessor",
        "api",
        "apiElements",
        "archives",
        "compile",
        "compileClasspath",
        "compileOnly",
        "compileOnlyApi",
        "default",
        "developmentOnly",
        "implementation",
        "kapt",
        "kotlinCompilerClasspath",
        "kotlinCompilerPluginClasspath",
        "kotlinKlibCommonizerClasspath",
        "kotlinNativeCompilerPluginClasspath",
        "kotlinScriptDef",
        "productionRuntimeClasspath",
        "runtime",
        "runtimeClasspath",
        "runtimeElements",
        "runtimeOnly",
        "shadow",
        "testAnnotationProcessor",
        "testApi",
        "testCompile",
        "testCompileClasspath",
        "testCompileOnly",
        "testImplementation",
        "testRuntime",
        "testRuntimeClasspath",
        "testRuntimeOnly",
    }
)


class ReportParserConfig(BaseModel):
    """Configuration for the Gradle dependency report parser.

    Attributes:
        dependency_types: Configuration names recognised as dependency-type
            keywords. Matched case-sensitively against whole identifiers.
        project_keyword: Word that opens a project header (case-insensitive).
        strict_configurations: Raise on an unknown configuration name. When
            disabled, the unknown block is skipped up to the next blank line.
        include_repeats_in_projects: Keep ``|``-prefixed entries in each
            project's dependency list too. The flat list always has them.
    """

    dependency_types: List[str] = Field(
        default_factory=lambda: sorted(DEFAULT_DEPENDENCY_TYPES)
    )
    project_keyword: str = "project"
    strict_configurations: bool = True
    include_repeats_in_projects: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("dependency_types")
    @classmethod
    def validate_dependency_types(cls, v: List[str]) -> List[str]:
        """Identifiers are letters only, so other names could never match."""
        if not v:
            raise ValueError("dependency_types must name at least one configuration")
        for name in v:
            if not name.isascii() or not name.isalpha():
                raise ValueError(
                    f"Invalid configuration name '{name}': only ASCII letters are allowed"
                )
        return v

    @field_validator("project_keyword")
    @classmethod
    def validate_project_keyword(cls, v: str) -> str:
        if not v.isascii() or not v.isalpha():
            raise ValueError(f"Invalid project keyword '{v}': only ASCII letters are allowed")
        return v.lower()

    @classmethod
    def default(cls) -> "ReportParserConfig":
        return cls()
