#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Publish in-memory project files to a remote Git repository.

Usage:
    publisher = RepositoryPublisher.from_config(load_config(path))
    result = publisher.create_files(
        "https://git.example.com/org/demo.git",
        "demo",
        Author(name="Jane", email="jane@example.com"),
        "initial import",
        {"app.yaml": b"name: demo"},
        Credentials("jane", token),
    )

Both operations finish with a forced push: whatever the remote branch held
before is replaced by the new commit. Concurrent publishes to the same
branch are not coordinated, the last push to complete wins.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
from provide.foundation.logger import get_logger

from shipsrc.engines.git.callbacks import PublishCallbacks
from shipsrc.engines.git.errors import PublishError, PublisherDisabledError
from shipsrc.engines.git.models import Author, Credentials, PublishRequest, PublishResult
from shipsrc.engines.git.operations import GitOperationsHelper
from shipsrc.engines.git.remote import DEFAULT_ALLOWED_SCHEMES, redact_url, validate_remote_url
from shipsrc.engines.git.workdir import WorkingDirectory, validate_relative_path, write_files
from shipsrc.types import FileSet

if TYPE_CHECKING:
    from shipsrc.config.models import PublisherConfig

log = get_logger(__name__)

# Name pygit2 gives the remote of a fresh clone.
CLONE_REMOTE_NAME = "origin"


class RepositoryPublisher:
    """Materializes a file set into a fresh checkout, commits it and force-pushes it."""

    def __init__(
        self,
        staging_root: Path | str,
        *,
        enabled: bool = True,
        default_branch: str = "main",
        remote_name: str = "origin",
        allowed_schemes: Iterable[str] = DEFAULT_ALLOWED_SCHEMES,
    ) -> None:
        self.staging_root = Path(staging_root)
        self.default_branch = default_branch
        self.remote_name = remote_name
        self.allowed_schemes = tuple(allowed_schemes)
        self._enabled = enabled
        self._git = GitOperationsHelper()
        self._log = log.bind(publisher_id=id(self))
        self._log.debug(
            "RepositoryPublisher initialized",
            staging_root=str(self.staging_root),
            enabled=enabled,
            default_branch=default_branch,
        )

    @classmethod
    def from_config(cls, config: PublisherConfig) -> RepositoryPublisher:
        return cls(
            config.staging_root,
            enabled=config.enabled,
            default_branch=config.default_branch,
            remote_name=config.remote_name,
            allowed_schemes=config.allowed_schemes,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    def create_files(
        self,
        remote_url: str,
        repo_name: str,
        author: Author,
        message: str,
        files: FileSet,
        credentials: Credentials,
    ) -> PublishResult:
        """Initialize a new repository holding ``files`` and force-push it to ``remote_url``.

        Args:
            remote_url: HTTP(S) (not SSH) URL of the remote repository
            repo_name: Repository name, used as the working directory prefix
            author: Commit author
            message: Commit message
            files: Relative file paths mapped to their content
            credentials: Username and password or access token for the push

        Raises:
            PublishError: One of its subclasses, depending on the failing step
        """
        request = PublishRequest(remote_url, repo_name, author, message, credentials, files)
        return self.publish(request, update=False)

    def update_files(
        self,
        remote_url: str,
        repo_name: str,
        author: Author,
        message: str,
        files: FileSet,
        credentials: Credentials,
    ) -> PublishResult:
        """Clone ``remote_url``, overwrite ``files`` on top of it and force-push the result.

        Paths present in the remote but absent from ``files`` are kept.
        Arguments and errors are the same as for ``create_files``.
        """
        request = PublishRequest(remote_url, repo_name, author, message, credentials, files)
        return self.publish(request, update=True)

    async def create_files_async(self, *args, **kwargs) -> PublishResult:
        """Run ``create_files`` in a worker thread."""
        return await asyncio.to_thread(self.create_files, *args, **kwargs)

    async def update_files_async(self, *args, **kwargs) -> PublishResult:
        """Run ``update_files`` in a worker thread."""
        return await asyncio.to_thread(self.update_files, *args, **kwargs)

    def publish(self, request: PublishRequest, *, update: bool = False) -> PublishResult:
        """Run one publish end to end. The working directory never outlives the call."""
        mode = "update" if update else "create"
        shown_url = redact_url(request.remote_url)
        op_log = self._log.bind(remote_url=shown_url, repo_name=request.repo_name, mode=mode)

        try:
            if not self._enabled:
                raise PublisherDisabledError("Repository publishing is disabled")
            remote_url = validate_remote_url(request.remote_url, self.allowed_schemes)
            for path in request.files:
                validate_relative_path(path)

            with WorkingDirectory(self.staging_root, request.repo_name) as workdir:
                if update:
                    clone_callbacks = PublishCallbacks(request.credentials)
                    repo = self._git.clone_repo(remote_url, workdir.path, clone_callbacks)
                    push_remote = CLONE_REMOTE_NAME
                else:
                    repo = self._git.init_repo(workdir.path, self.default_branch)
                    push_remote = self.remote_name

                callbacks = PublishCallbacks(request.credentials)
                try:
                    written = write_files(workdir.path, request.files)
                    if not update:
                        self._git.add_remote(repo, push_remote, remote_url)
                    commit_id, branch = self._commit_and_push(repo, request, written, push_remote, callbacks)
                finally:
                    repo.free()
        except PublishError as e:
            e.remote_url = e.remote_url or shown_url
            e.repo_name = e.repo_name or request.repo_name
            op_log.error("Publish failed", kind=e.kind.value, error=str(e))
            raise

        result = PublishResult(
            commit_id=commit_id,
            branch=branch,
            remote_url=redact_url(remote_url),
            files_written=len(written),
            remote_messages=callbacks.messages,
            cleanup_warning=workdir.cleanup_warning,
        )
        op_log.info("Published", commit_id=result.short_id, branch=branch, files=len(written))
        return result

    def _commit_and_push(
        self,
        repo: pygit2.Repository,
        request: PublishRequest,
        paths: list[str],
        remote_name: str,
        callbacks: PublishCallbacks,
    ) -> tuple[str, str]:
        commit_id = self._git.commit_all(repo, request.author, request.message, paths)
        branch = self._git.push_force(repo, remote_name, callbacks)
        return str(commit_id), branch


# 🔼⚙️🔚
