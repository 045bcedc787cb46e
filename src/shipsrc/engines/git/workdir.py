#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Ephemeral working directories and file materialization.

A ``WorkingDirectory`` is created under the staging root when entered and
removed when the ``with`` block exits, whether the block succeeded or
raised. Removal problems never replace the original outcome: they are
logged and exposed as ``cleanup_warning``.
"""

from __future__ import annotations

import posixpath
import re
import shutil
import tempfile
from pathlib import Path, PureWindowsPath
from types import TracebackType

from provide.foundation.logger import get_logger

from shipsrc.engines.git.errors import CleanupWarning, StagingIOError, UnsafePathError
from shipsrc.types import FileSet

log = get_logger(__name__)

_UNSAFE_PREFIX_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
GIT_METADATA_DIR = ".git"


def directory_prefix(name_hint: str) -> str:
    """Turn a repository name into a safe temp-directory prefix."""
    cleaned = _UNSAFE_PREFIX_CHARS.sub("-", name_hint).strip(".-")
    return f"{cleaned or 'repo'}-"


class WorkingDirectory:
    """Temporary checkout owned by exactly one publish operation."""

    def __init__(self, staging_root: Path, name_hint: str) -> None:
        self.staging_root = Path(staging_root)
        self.name_hint = name_hint
        self.path: Path | None = None
        self.cleanup_warning: CleanupWarning | None = None

    def __enter__(self) -> WorkingDirectory:
        try:
            self.staging_root.mkdir(parents=True, exist_ok=True)
            self.path = Path(tempfile.mkdtemp(prefix=directory_prefix(self.name_hint), dir=self.staging_root))
        except OSError as e:
            raise StagingIOError(
                f"Cannot create working directory under {self.staging_root}",
                repo_name=self.name_hint,
                cause=e,
            ) from e
        log.debug("Created temporary directory", path=str(self.path))
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.remove()

    def remove(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            shutil.rmtree(self.path)
        except OSError as e:
            self.cleanup_warning = CleanupWarning(
                f"Could not delete temporary directory {self.path}",
                repo_name=self.name_hint,
                cause=e,
            )
            log.warning("Could not delete temporary directory", path=str(self.path), error=str(e))
        else:
            log.debug("Removed temporary directory", path=str(self.path))


def validate_relative_path(path: str) -> str:
    """Check a caller-supplied path lexically and return its normalized form.

    Rejects empty and absolute paths, paths that climb above the root, and
    anything inside the repository metadata directory.
    """
    if not path or not path.strip():
        raise UnsafePathError(path, "empty path")
    posix = path.replace("\\", "/")
    if posix.startswith("/") or PureWindowsPath(path).drive:
        raise UnsafePathError(path, "absolute path")
    normalized = posixpath.normpath(posix)
    if normalized == ".":
        raise UnsafePathError(path, "does not name a file")
    if normalized == ".." or normalized.startswith("../"):
        raise UnsafePathError(path, "escapes the working directory")
    if GIT_METADATA_DIR in (part.lower() for part in normalized.split("/")):
        raise UnsafePathError(path, "targets repository metadata")
    return normalized


def resolve_target(working_dir: Path, path: str) -> Path:
    """Resolve ``path`` under ``working_dir``, following symlinks, and confirm it stays inside."""
    root = working_dir.resolve()
    target = (root / validate_relative_path(path)).resolve()
    if target == root or not target.is_relative_to(root):
        raise UnsafePathError(path, "escapes the working directory")
    return target


def write_files(working_dir: Path, files: FileSet) -> list[str]:
    """Write every entry of ``files`` below ``working_dir``, overwriting existing files.

    All paths are validated before the first byte is written.

    Returns:
        The normalized relative paths written, in input order.
    """
    targets = [
        (validate_relative_path(path), resolve_target(working_dir, path), content)
        for path, content in files.items()
    ]

    for _, target, content in targets:
        parent = target.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingIOError(f"Cannot create directory {parent}", cause=e) from e
        try:
            target.write_bytes(content)
        except OSError as e:
            raise StagingIOError(f"Cannot write file {target}", cause=e) from e

    log.debug("Wrote files to working directory", path=str(working_dir), count=len(targets))
    return [relative for relative, _, _ in targets]


# 🔼⚙️🔚
