"""Path resolution and temporary artifacts."""

from __future__ import annotations

import shutil
import tempfile
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

ARTIFACT_PREFIX = "rh_"


def resolve_path(raw_path: str, base: Path | None = None) -> str:
    """Return ``raw_path`` as an absolute path, rooted at ``base`` or the current directory."""
    if not raw_path:
        return ""
    path = Path(raw_path)
    if path.is_absolute():
        return str(path)
    return str((base or Path.cwd()) / path)


@contextmanager
def temporary_artifact(suffix: str = ".rc", *, directory: Path | None = None) -> Iterator[Path]:
    """Yield a fresh, unused artifact path and remove everything written next to it afterwards.

    Each call gets a private directory, so concurrent callers never share a path.
    """
    workdir = Path(tempfile.mkdtemp(prefix=ARTIFACT_PREFIX, dir=directory))
    artifact = workdir / f"{ARTIFACT_PREFIX}{uuid.uuid4().hex}{suffix}"
    try:
        yield artifact
    finally:
        _remove_tree(workdir)


def _remove_tree(workdir: Path) -> None:
    try:
        shutil.rmtree(workdir)
    except OSError as exc:
        logger.warning("artifact.cleanup.error path={} error={}", workdir, exc)
