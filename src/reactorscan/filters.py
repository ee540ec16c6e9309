"""Module selection and dependency-scope filtering."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from reactorscan.config import ScanConfig
from reactorscan.reactor.base import ReactorModule

logger = logging.getLogger(__name__)

POM_PACKAGING = "pom"


def compile_pattern(glob: str) -> re.Pattern[str]:
    """Translate a ``*`` glob into a full-match regex; everything else is literal."""
    return re.compile(".*".join(re.escape(part) for part in glob.split("*")))


def _compile_all(globs: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    return tuple(compile_pattern(g) for g in globs if g is not None)


def match_any(value: str | None, patterns: Iterable[re.Pattern[str]]) -> bool:
    if value is None:
        return False
    return any(p.fullmatch(value) for p in patterns)


class ModuleFilter:
    """Decide which modules are scanned and which dependency edges are kept."""

    def __init__(self, config: ScanConfig, root_module: ReactorModule | None):
        self.config = config
        self.root_module = root_module
        self.ignored_scopes = config.ignored_scope_set
        self._includes = _compile_all(config.includes)
        self._excludes = _compile_all(config.excludes)

    def should_ignore_scope(self, scope: str | None) -> bool:
        if scope is None or not scope.strip():
            return False
        return scope in self.ignored_scopes

    def should_process_module(self, module: ReactorModule | None) -> bool:
        """Apply the first matching rule: pom skip, root flag, exclude, include."""
        if module is None:
            return False

        if self.config.ignore_pom_modules and module.packaging == POM_PACKAGING:
            logger.info("Skipping %s (ignore_pom_modules=true)", module.id)
            return False

        if module == self.root_module:
            ignored = self.config.ignore or module.ignore
            if ignored:
                logger.info("Skipping %s (marked as ignored)", module.id)
            return not ignored

        if match_any(module.artifact_id, self._excludes):
            logger.info("Skipping %s (marked as excluded)", module.id)
            return False

        if self._includes and not match_any(module.artifact_id, self._includes):
            logger.info("Skipping %s (not marked as included)", module.id)
            return False

        return True
