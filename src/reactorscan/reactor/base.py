"""Build-tool protocol — the reactor scanner consumes this interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from reactorscan.model import Coordinates, Exclusion


@dataclass(frozen=True)
class ResolvedArtifact:
    """An artifact as reported by the build tool's resolver."""

    group_id: str
    artifact_id: str
    version: str
    classifier: str | None = None
    extension: str | None = None
    file: Path | None = None  # None when resolution produced metadata only


@dataclass
class ResolvedNode:
    """A node of the build tool's resolved dependency tree."""

    artifact: ResolvedArtifact | None
    scope: str | None = None
    optional: bool = False
    exclusions: list[Exclusion] = field(default_factory=list)
    children: list[ResolvedNode] = field(default_factory=list)


@dataclass(frozen=True)
class ReactorModule:
    """One module of the reactor, with the metadata the filter needs."""

    coordinates: Coordinates
    packaging: str = "jar"
    parent: Coordinates | None = None
    ignore: bool = False
    name: str | None = None
    path: Path | None = None

    @property
    def artifact_id(self) -> str | None:
        return self.coordinates.artifact_id

    @property
    def id(self) -> str:
        return f"{self.coordinates}:{self.packaging}"


class Reactor(Protocol):
    """Protocol for build-tool adapters."""

    @property
    def root_module(self) -> ReactorModule:
        """The module the build was invoked on."""
        ...

    def modules(self) -> list[ReactorModule]:
        """Return every reactor module in declaration order."""
        ...

    def resolve_dependency_graph(self, module: ReactorModule) -> ResolvedNode:
        """Return the root node of *module*'s resolved dependency tree.

        Raises GraphResolutionError when resolution fails.
        """
        ...
