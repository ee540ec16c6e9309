"""Compute the identity (SHA-1, filename, path) of a resolved artifact."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

from reactorscan.errors import HashComputationError
from reactorscan.reactor.base import ResolvedArtifact

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ArtifactIdentity:
    sha1: str | None = None
    filename: str | None = None
    system_path: str | None = None


def compute_sha1(path: Path) -> str:
    """Return the hex SHA-1 of the raw bytes of *path*."""
    digest = hashlib.sha1()  # noqa: S324
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise HashComputationError(f"Error calculating SHA-1 for {path}: {e}") from e
    return digest.hexdigest()


def synthesize_filename(artifact: ResolvedArtifact) -> str | None:
    """Return ``{artifactId}-{version}.{extension}``, or None without an extension."""
    if not artifact.extension or not artifact.extension.strip():
        return None
    return f"{artifact.artifact_id}-{artifact.version}.{artifact.extension}"


def resolve_identity(artifact: ResolvedArtifact) -> ArtifactIdentity:
    """Fingerprint *artifact*.

    Hashing failures are not fatal: the SHA-1 is left empty and the walk
    continues.  The filename prefers the real file's base name and falls back
    to the synthesized pattern.
    """
    path = artifact.file
    if path is None or not path.exists():
        return ArtifactIdentity(filename=synthesize_filename(artifact))

    sha1 = None
    try:
        sha1 = compute_sha1(path)
    except HashComputationError as e:
        logger.warning("%s", e)

    return ArtifactIdentity(
        sha1=sha1,
        filename=path.name or synthesize_filename(artifact),
        system_path=str(path.absolute()),
    )
