"""Orchestrator: configure → walk reactor → aggregate → report."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from reactorscan.aggregation import aggregate
from reactorscan.builder import ProjectTreeBuilder
from reactorscan.config import ScanConfig
from reactorscan.model import AggregateInventory, ProjectRecord
from reactorscan.reactor.base import Reactor, ReactorModule
from reactorscan.report import DEFAULT_REPORT_NAME, write_inventory

logger = logging.getLogger(__name__)


def _default_product(config: ScanConfig, root_module: ReactorModule | None) -> ScanConfig:
    """Take the product name from the top-level module when not configured."""
    if config.product or root_module is None:
        return config
    product = root_module.name or root_module.artifact_id
    return dataclasses.replace(config, product=product)


def _drop_empty_projects(records: list[ProjectRecord]) -> list[ProjectRecord]:
    kept = []
    for record in records:
        if record.dependencies:
            kept.append(record)
        else:
            logger.warning(
                "Skipping %s, it has no dependencies (update_empty_project=false)",
                record.coordinates,
            )
    return kept


def scan(config: ScanConfig, reactor: Reactor) -> AggregateInventory:
    """Build and aggregate the inventory of *reactor*, without writing anything.

    Configuration conflicts are reported before any module is touched.
    """
    config.validate()
    strategy = config.aggregation

    modules = reactor.modules()
    root_module = reactor.root_module
    builder = ProjectTreeBuilder(config, reactor)
    records, errors = builder.build_project_records(modules, root_module)

    inventory = aggregate(
        records,
        strategy,
        root_module,
        name=config.aggregate_project_name,
        token=config.aggregate_project_token,
        packaging={m.coordinates: m.packaging for m in modules},
        errors=errors,
    )
    if config.update_empty_project:
        return inventory
    return dataclasses.replace(
        inventory, projects=tuple(_drop_empty_projects(list(inventory.projects)))
    )


def run(
    project_dir: Path,
    config: ScanConfig,
    *,
    reactor: Reactor | None = None,
    output: Path | None = None,
) -> AggregateInventory | None:
    """Run the full scan and write the JSON inventory; return it, or None when skipped."""
    if config.skip:
        logger.info("Skipping update")
        return None

    project_dir = project_dir.resolve()
    config.validate()
    if reactor is None:
        from reactorscan.reactor.maven import MavenReactor

        reactor = MavenReactor(project_dir)

    config = _default_product(config, reactor.root_module)
    inventory = scan(config, reactor)

    if inventory.errors:
        logger.warning(
            "%d module(s) skipped because of dependency resolution errors",
            len(inventory.errors),
        )

    out_dir = config.output_directory or project_dir
    out_path = output or (out_dir / DEFAULT_REPORT_NAME)
    write_inventory(inventory, out_path, config.product, config.product_version)
    logger.info("Generated %s", out_path)
    return inventory
