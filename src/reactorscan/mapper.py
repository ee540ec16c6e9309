"""Map resolved build-tool nodes onto DependencyRecords."""

from __future__ import annotations

import logging

from reactorscan.errors import CyclicGraphError
from reactorscan.identity import resolve_identity
from reactorscan.model import Coordinates, DependencyRecord
from reactorscan.reactor.base import ResolvedNode

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 500


def map_node(node: ResolvedNode, max_depth: int = DEFAULT_MAX_DEPTH) -> DependencyRecord:
    """Convert *node* and its whole subtree, children before parents.

    Resolved graphs are trees, so there is no cycle detection; a walk
    deeper than *max_depth* is treated as a cycle and raises
    CyclicGraphError.  The walk uses an explicit stack, so its depth is
    bounded by *max_depth* only, not by the interpreter's recursion limit.
    """
    # (node, depth, records of the children mapped so far)
    stack: list[tuple[ResolvedNode, int, list[DependencyRecord]]] = [(node, 0, [])]
    while True:
        current, depth, mapped = stack[-1]
        if len(mapped) < len(current.children):
            child = current.children[len(mapped)]
            if depth + 1 > max_depth:
                raise CyclicGraphError(
                    f"Dependency tree deeper than {max_depth} levels at {_describe(child)}"
                )
            stack.append((child, depth + 1, []))
            continue

        stack.pop()
        record = _to_record(current, tuple(mapped))
        if not stack:
            return record
        stack[-1][2].append(record)


def _to_record(node: ResolvedNode, children: tuple[DependencyRecord, ...]) -> DependencyRecord:
    artifact = node.artifact
    if artifact is None:
        return DependencyRecord(
            coordinates=Coordinates(None, None, None),
            scope=node.scope,
            optional=node.optional,
            exclusions=tuple(node.exclusions),
            children=children,
        )

    identity = resolve_identity(artifact)
    return DependencyRecord(
        coordinates=Coordinates(artifact.group_id, artifact.artifact_id, artifact.version),
        scope=node.scope,
        classifier=artifact.classifier,
        extension=artifact.extension,
        optional=node.optional,
        sha1=identity.sha1,
        system_path=identity.system_path,
        filename=identity.filename,
        exclusions=tuple(node.exclusions),
        children=children,
    )


def _describe(node: ResolvedNode) -> str:
    a = node.artifact
    if a is None:
        return "<root>"
    return f"{a.group_id}:{a.artifact_id}:{a.version}"
