"""Merge module records into a single reported inventory."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence

from reactorscan.model import (
    AggregateInventory,
    AggregationStrategy,
    Coordinates,
    DependencyRecord,
    ModuleError,
    ProjectRecord,
)
from reactorscan.reactor.base import ReactorModule

logger = logging.getLogger(__name__)


def flatten(records: Iterable[DependencyRecord]) -> list[DependencyRecord]:
    """Pull every descendant up to a single pre-order list of childless records.

    Duplicates are kept.  Flattening an already flat list returns an equal list.
    """
    flat: list[DependencyRecord] = []
    stack = list(reversed(list(records)))
    while stack:
        record = stack.pop()
        flat.append(dataclasses.replace(record, children=()) if record.children else record)
        stack.extend(reversed(record.children))
    return flat


def aggregate_project_name(
    root_module: ReactorModule | None,
    name: str | None = None,
    token: str | None = None,
) -> str | None:
    """Explicit name, else nothing when a token identifies the project, else root artifactId-version."""
    if name:
        return name
    if token:
        return None
    if root_module is None:
        return None
    return f"{root_module.coordinates.artifact_id}-{root_module.coordinates.version}"


def aggregate(
    records: Sequence[ProjectRecord],
    strategy: AggregationStrategy,
    root_module: ReactorModule | None = None,
    *,
    name: str | None = None,
    token: str | None = None,
    packaging: dict[Coordinates, str] | None = None,
    errors: Iterable[ModuleError] = (),
) -> AggregateInventory:
    """Merge *records* according to *strategy*.

    *packaging* optionally maps module coordinates to their packaging type,
    used as the extension of the pseudo-artifacts of PRESERVE_MODULES.
    """
    records = tuple(records)
    errors = tuple(errors)

    if strategy is AggregationStrategy.NONE:
        return AggregateInventory(strategy=strategy, projects=records, errors=errors)

    if strategy is AggregationStrategy.FLAT:
        dependencies = tuple(flatten(dep for r in records for dep in r.dependencies))
    else:
        packaging = packaging or {}
        dependencies = tuple(
            DependencyRecord(
                coordinates=r.coordinates,
                extension=packaging.get(r.coordinates),
                children=r.dependencies,
            )
            for r in records
        )

    project_name = aggregate_project_name(root_module, name, token)
    project = ProjectRecord(
        coordinates=Coordinates(None, project_name, None),
        token=token,
        dependencies=dependencies,
    )
    logger.info(
        "Aggregated %d modules into %s (%s, %d dependencies)",
        len(records),
        project_name or token,
        strategy.value,
        len(dependencies),
    )
    return AggregateInventory(strategy=strategy, projects=(project,), errors=errors)
