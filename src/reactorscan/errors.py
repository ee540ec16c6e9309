"""Exception hierarchy for reactor scanning."""

from __future__ import annotations

from reactorscan.model import Coordinates


class ReactorScanError(Exception):
    """Base class for all reactorscan failures."""


class ConfigurationError(ReactorScanError):
    """Invalid configuration value."""


class ConfigurationConflictError(ConfigurationError):
    """Two mutually exclusive options were requested together."""


class HashComputationError(ReactorScanError):
    """An artifact file could not be read or hashed."""


class GraphResolutionError(ReactorScanError):
    """The build tool failed to resolve a module's dependency graph."""

    def __init__(self, message: str, coordinates: Coordinates | None = None) -> None:
        super().__init__(message)
        self.coordinates = coordinates


class CyclicGraphError(ReactorScanError):
    """A resolved dependency graph turned out not to be a tree."""
