"""Walk the reactor and produce one ProjectRecord per accepted module."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from reactorscan.config import ScanConfig
from reactorscan.errors import GraphResolutionError
from reactorscan.filters import ModuleFilter
from reactorscan.mapper import map_node
from reactorscan.model import DependencyRecord, ModuleError, ProjectRecord
from reactorscan.reactor.base import Reactor, ReactorModule

logger = logging.getLogger(__name__)


class ProjectTreeBuilder:
    """Build ProjectRecords for the modules of a reactor.

    The walk is sequential so that module order and top-level dependency
    order stay exactly as the resolver produced them.
    """

    def __init__(self, config: ScanConfig, reactor: Reactor):
        self.config = config
        self.reactor = reactor
        self._module_tokens = config.merged_module_tokens

    def build_project_records(
        self,
        modules: Iterable[ReactorModule],
        root_module: ReactorModule | None,
    ) -> tuple[list[ProjectRecord], list[ModuleError]]:
        """Return the accepted modules' records and the tolerated per-module errors.

        Raises GraphResolutionError on the first failing module unless
        ``ignore_dependency_resolution_errors`` is set.
        """
        module_filter = ModuleFilter(self.config, root_module)
        records: list[ProjectRecord] = []
        errors: list[ModuleError] = []

        for module in modules:
            if not module_filter.should_process_module(module):
                continue
            try:
                records.append(self._process_module(module, root_module, module_filter))
            except GraphResolutionError as e:
                if not self.config.ignore_dependency_resolution_errors:
                    logger.error(
                        "Error resolving dependencies for project %s, exiting",
                        module.artifact_id,
                    )
                    raise
                logger.warning(
                    "Skipping project %s, error resolving dependencies "
                    "(ignore_dependency_resolution_errors=true): %s",
                    module.artifact_id,
                    e,
                )
                errors.append(ModuleError(module.coordinates, str(e)))

        log_project_records(records)
        return records, errors

    def _process_module(
        self,
        module: ReactorModule,
        root_module: ReactorModule | None,
        module_filter: ModuleFilter,
    ) -> ProjectRecord:
        start = time.monotonic()
        logger.info("Processing %s", module.id)

        if module == root_module:
            token = self.config.project_token
        else:
            token = self._module_tokens.get(module.artifact_id)

        root = self.reactor.resolve_dependency_graph(module)
        dependencies = tuple(
            map_node(child, self.config.max_depth)
            for child in root.children
            if not module_filter.should_ignore_scope(child.scope)
        )

        logger.debug("*** Dependency graph of %s ***", module.name or module.artifact_id)
        for dependency in dependencies:
            _log_tree(dependency, "")

        logger.debug(
            "Total processing time = %d [msec]", (time.monotonic() - start) * 1000
        )
        return ProjectRecord(
            coordinates=module.coordinates,
            parent_coordinates=module.parent,
            token=token,
            dependencies=dependencies,
        )


def _log_tree(record: DependencyRecord, prefix: str) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    stack = [(record, prefix)]
    while stack:
        current, indent = stack.pop()
        logger.debug("%s%s:%s", indent, current.coordinates, current.scope)
        stack.extend((child, indent + "   ") for child in reversed(current.children))


def log_project_records(records: list[ProjectRecord]) -> None:
    """Dump *records* at DEBUG level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("----------------- dumping project records -----------------")
    logger.debug("Total number of projects: %d", len(records))
    for record in records:
        logger.debug("Project coordinates: %s", record.coordinates)
        logger.debug("Project parent coordinates: %s", record.parent_coordinates or "")
        logger.debug("Project token: %s", record.token)
        logger.debug("Total number of dependencies: %d", len(record.dependencies))
        for dep in record.dependencies:
            logger.debug("%s SHA-1: %s", dep.coordinates, dep.sha1)
    logger.debug("----------------- dump finished -----------------")
