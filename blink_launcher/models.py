"""Data models for the Blink launcher core."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ConfigDict

from blink_launcher.util.patterns import matches_pattern


class InstanceMode(str, Enum):
    """How the process spawner should open an application."""

    NEW_INSTANCE = "NEW_INSTANCE"
    REUSE_EXISTING = "REUSE_EXISTING"


class ApplicationRecord(BaseModel):
    """One launchable application in the catalog."""

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        json_schema_extra={
            "example": {
                "display_name": "Safari",
                "path": "/Applications/Safari.app",
                "package_identifier": "com.apple.Safari",
                "is_cli": False,
            }
        },
    )

    display_name: str = Field(description="Human-readable name used for matching and display")
    path: str = Field(description="Filesystem path; unique identity of the record")
    package_identifier: str | None = Field(
        default=None,
        description="CFBundleIdentifier, informational only"
    )
    icon_handle: Any = Field(
        default=None,
        exclude=True,
        description="Opaque display resource owned by the presentation layer"
    )
    is_cli: bool = Field(default=False, description="Script-like entry rather than a GUI app")

    @property
    def id(self) -> str:
        """Identity key of the record (its path)."""
        return self.path


class CustomApp(BaseModel):
    """User-declared application entry from the config file."""

    name: str = Field(min_length=1)
    path: str = Field(min_length=1)


class AliasRule(BaseModel):
    """Maps one canonical application name to a set of search shortcuts."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"app": "Code", "shortcuts": ["vsc", "vscode", "editor"]}
        }
    )

    app: str = Field(min_length=1, description="Application display name, as shown in results")
    shortcuts: list[str] = Field(default_factory=list, description="Case-insensitive shortcut strings")


class ExclusionRules(BaseModel):
    """Exact names and wildcard patterns removed from the catalog."""

    names: set[str] = Field(default_factory=set, description="Exact display names (case-sensitive)")
    patterns: list[str] = Field(
        default_factory=list,
        description="Wildcard patterns, '*' matches any run of characters (case-insensitive)"
    )

    def excludes(self, display_name: str) -> bool:
        """Return True if an application with this name must be hidden."""
        if display_name in self.names:
            return True
        return any(matches_pattern(display_name, pattern) for pattern in self.patterns)


class ScoredApplication(BaseModel):
    """A catalog entry paired with its ranking score."""

    model_config = ConfigDict(frozen=True)

    application: ApplicationRecord
    score: int = 0


class MatchResult(BaseModel):
    """Ordered outcome of a single search."""

    query: str = ""
    matches: list[ScoredApplication] = Field(default_factory=list)

    def applications(self) -> list[ApplicationRecord]:
        """Ranked applications without their scores."""
        return [match.application for match in self.matches]

    def first(self) -> ApplicationRecord | None:
        """Top-ranked application, or None for an empty result."""
        return self.matches[0].application if self.matches else None

    def __len__(self) -> int:
        return len(self.matches)
