"""Canonical data model for a scanned reactor inventory."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Coordinates:
    """The group/artifact/version identity of a module or dependency."""

    group_id: str | None
    artifact_id: str | None
    version: str | None

    def __str__(self) -> str:
        return ":".join(part or "" for part in (self.group_id, self.artifact_id, self.version))


@dataclass(frozen=True)
class Exclusion:
    """A versionless groupId/artifactId pair excluded from a dependency."""

    group_id: str
    artifact_id: str


@dataclass(frozen=True)
class DependencyRecord:
    """One resolved package edge in a dependency tree."""

    coordinates: Coordinates
    scope: str | None = None
    classifier: str | None = None
    extension: str | None = None  # "jar", "pom", "war", ...
    optional: bool = False
    sha1: str | None = None
    system_path: str | None = None
    filename: str | None = None
    exclusions: tuple[Exclusion, ...] = ()
    children: tuple[DependencyRecord, ...] = ()

    @property
    def group_id(self) -> str | None:
        return self.coordinates.group_id

    @property
    def artifact_id(self) -> str | None:
        return self.coordinates.artifact_id

    @property
    def version(self) -> str | None:
        return self.coordinates.version

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class ProjectRecord:
    """One buildable module and its accepted top-level dependencies."""

    coordinates: Coordinates
    parent_coordinates: Coordinates | None = None
    token: str | None = None
    dependencies: tuple[DependencyRecord, ...] = ()


@dataclass(frozen=True)
class ModuleError:
    """A per-module failure that was tolerated during the walk."""

    coordinates: Coordinates
    message: str


class AggregationStrategy(enum.Enum):
    """How module records are merged before reporting."""

    NONE = "none"
    FLAT = "flat"
    PRESERVE_MODULES = "preserve-modules"


@dataclass(frozen=True)
class AggregateInventory:
    """Final inventory handed to the reporting side.

    For ``AggregationStrategy.NONE`` *projects* holds the module records
    unchanged; for the other strategies it holds a single synthetic project.
    """

    strategy: AggregationStrategy
    projects: tuple[ProjectRecord, ...] = ()
    errors: tuple[ModuleError, ...] = field(default_factory=tuple)

    @property
    def is_aggregated(self) -> bool:
        return self.strategy is not AggregationStrategy.NONE
