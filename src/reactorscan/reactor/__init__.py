"""Build-tool adapters."""

from __future__ import annotations

from reactorscan.reactor.base import (
    Reactor,
    ReactorModule,
    ResolvedArtifact,
    ResolvedNode,
)
from reactorscan.reactor.maven import MavenReactor, is_maven_project

__all__ = [
    "MavenReactor",
    "Reactor",
    "ReactorModule",
    "ResolvedArtifact",
    "ResolvedNode",
    "is_maven_project",
]
