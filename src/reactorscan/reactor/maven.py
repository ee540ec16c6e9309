"""Maven reactor adapter built on jgo."""

from __future__ import annotations

import logging
from pathlib import Path

from reactorscan.errors import CyclicGraphError, GraphResolutionError
from reactorscan.model import Coordinates, Exclusion
from reactorscan.reactor.base import ReactorModule, ResolvedArtifact, ResolvedNode

logger = logging.getLogger(__name__)


def is_maven_project(project_dir: Path) -> bool:
    """Return True if *project_dir* contains a pom.xml."""
    return (project_dir / "pom.xml").exists()


def _read_module(pom_path: Path) -> tuple[ReactorModule, list[str]]:
    """Read coordinates, packaging, parent and submodule names from a POM.

    jgo's POM falls back to the parent's groupId/version when a module
    does not declare its own.
    """
    from jgo.maven import POM

    pom = POM(pom_path)
    parent = None
    if pom.value("parent/artifactId"):
        parent = Coordinates(
            pom.value("parent/groupId"),
            pom.value("parent/artifactId"),
            pom.value("parent/version"),
        )
    module = ReactorModule(
        coordinates=Coordinates(pom.groupId, pom.artifactId, pom.version),
        packaging=pom.value("packaging") or "jar",
        parent=parent,
        name=pom.name,
        path=pom_path.parent,
    )
    return module, pom.values("modules/module")


class MavenReactor:
    """Expose a Maven multi-module build as a Reactor."""

    def __init__(self, project_dir: Path):
        self.project_dir = project_dir
        self._modules: list[ReactorModule] | None = None

    @property
    def root_module(self) -> ReactorModule:
        return self.modules()[0]

    def modules(self) -> list[ReactorModule]:
        if self._modules is None:
            self._modules = self._discover(self.project_dir)
            logger.debug(
                "Maven reactor: %d modules under %s",
                len(self._modules),
                self.project_dir,
            )
        return list(self._modules)

    def _discover(self, project_dir: Path) -> list[ReactorModule]:
        """Walk <modules> recursively, root first, in declaration order."""
        pom_path = project_dir / "pom.xml"
        try:
            module, submodules = _read_module(pom_path)
        except (OSError, ValueError, KeyError) as e:
            raise GraphResolutionError(f"Could not parse {pom_path}: {e}") from e

        found = [module]
        for name in submodules:
            child_dir = project_dir / name
            if not is_maven_project(child_dir):
                logger.warning("Module %s has no pom.xml, skipping", child_dir)
                continue
            found.extend(self._discover(child_dir))
        return found

    def resolve_dependency_graph(self, module: ReactorModule) -> ResolvedNode:
        from jgo.maven import POM, MavenContext, Model

        if module.path is None:
            raise GraphResolutionError(
                f"Module {module.coordinates} has no project directory",
                module.coordinates,
            )

        try:
            pom = POM(module.path / "pom.xml")
            model = Model(pom, MavenContext())
            _, tree = model.dependencies()
        except (OSError, ValueError, KeyError, RuntimeError) as e:
            raise GraphResolutionError(
                f"Could not resolve dependencies of {module.coordinates}: {e}",
                module.coordinates,
            ) from e

        return convert_node(tree)


def _artifact_file(artifact) -> Path | None:
    """Return the local file of a jgo Artifact, downloading it if needed.

    A failed download is not fatal: the artifact is then reported without
    a file, hence without a SHA-1.
    """
    cached = artifact.cached_path
    if cached is not None and cached.exists():
        return cached
    try:
        return artifact.resolve()
    except (OSError, RuntimeError, ValueError) as e:
        logger.warning("Could not resolve the file of %s: %s", artifact, e)
        return None


def _convert_artifact(artifact) -> ResolvedArtifact:
    return ResolvedArtifact(
        group_id=artifact.groupId,
        artifact_id=artifact.artifactId,
        version=artifact.version,
        classifier=artifact.classifier or None,
        extension=artifact.packaging or None,
        file=_artifact_file(artifact),
    )


def _convert_shallow(node) -> ResolvedNode:
    dep = node.dep
    if dep is None:
        return ResolvedNode(artifact=None)
    return ResolvedNode(
        artifact=_convert_artifact(dep.artifact),
        scope=dep.scope,
        optional=bool(dep.optional),
        exclusions=[
            Exclusion(group_id=ex.groupId, artifact_id=ex.artifactId)
            for ex in dep.exclusions
        ],
    )


def convert_node(tree) -> ResolvedNode:
    """Convert a jgo DependencyNode tree into ResolvedNodes.

    A node that reappears on its own ancestor path raises CyclicGraphError.
    """
    root = _convert_shallow(tree)
    on_path: set[int] = {id(tree)}
    # (jgo node, converted node, index of the next child to visit)
    stack = [(tree, root, 0)]
    while stack:
        node, converted, index = stack.pop()
        if index == len(node.children):
            on_path.discard(id(node))
            continue
        stack.append((node, converted, index + 1))

        child = node.children[index]
        if id(child) in on_path:
            raise CyclicGraphError(f"Dependency cycle through {child}")
        on_path.add(id(child))
        child_converted = _convert_shallow(child)
        converted.children.append(child_converted)
        stack.append((child, child_converted, 0))
    return root
