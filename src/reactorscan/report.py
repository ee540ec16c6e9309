"""Serialize an AggregateInventory for the reporting service."""

from __future__ import annotations

import json
from pathlib import Path

from reactorscan.model import (
    AggregateInventory,
    Coordinates,
    DependencyRecord,
    ProjectRecord,
)

DEFAULT_REPORT_NAME = "reactorscan-inventory.json"


def _coordinates_to_dict(c: Coordinates) -> dict:
    return {"groupId": c.group_id, "artifactId": c.artifact_id, "version": c.version}


def _dependency_to_dict(dep: DependencyRecord) -> dict:
    d: dict = _coordinates_to_dict(dep.coordinates)
    for key, value in (
        ("scope", dep.scope),
        ("classifier", dep.classifier),
        ("type", dep.extension),
        ("sha1", dep.sha1),
        ("systemPath", dep.system_path),
        ("filename", dep.filename),
    ):
        if value is not None:
            d[key] = value
    if dep.optional:
        d["optional"] = True
    if dep.exclusions:
        d["exclusions"] = [
            {"groupId": e.group_id, "artifactId": e.artifact_id} for e in dep.exclusions
        ]
    if dep.children:
        d["children"] = [_dependency_to_dict(c) for c in dep.children]
    return d


def _project_to_dict(project: ProjectRecord) -> dict:
    d: dict = {"coordinates": _coordinates_to_dict(project.coordinates)}
    if project.parent_coordinates is not None:
        d["parentCoordinates"] = _coordinates_to_dict(project.parent_coordinates)
    if project.token is not None:
        d["projectToken"] = project.token
    d["dependencies"] = [_dependency_to_dict(dep) for dep in project.dependencies]
    return d


def inventory_to_dict(
    inventory: AggregateInventory,
    product: str | None = None,
    product_version: str | None = None,
) -> dict:
    """Convert *inventory* into the JSON-ready structure of the report."""
    return {
        "product": product,
        "productVersion": product_version,
        "aggregation": inventory.strategy.value,
        "projects": [_project_to_dict(p) for p in inventory.projects],
        "errors": [
            {"coordinates": str(e.coordinates), "message": e.message}
            for e in inventory.errors
        ],
    }


def write_inventory(
    inventory: AggregateInventory,
    output_path: Path,
    product: str | None = None,
    product_version: str | None = None,
) -> None:
    """Write *inventory* as JSON to *output_path*."""
    data = inventory_to_dict(inventory, product, product_version)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))
