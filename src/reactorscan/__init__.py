"""Collect, filter and aggregate the dependency inventory of a build reactor."""

from __future__ import annotations

from reactorscan.config import ScanConfig
from reactorscan.model import (
    AggregateInventory,
    AggregationStrategy,
    Coordinates,
    DependencyRecord,
    ProjectRecord,
)
from reactorscan.pipeline import run, scan

__all__ = [
    "AggregateInventory",
    "AggregationStrategy",
    "Coordinates",
    "DependencyRecord",
    "ProjectRecord",
    "ScanConfig",
    "run",
    "scan",
]
