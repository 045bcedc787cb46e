#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Git operation helpers for the RepositoryPublisher.

Each helper wraps exactly one step of the publish sequence and translates
pygit2 failures into the matching ``PublishError`` subclass.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pygit2
from provide.foundation.logger import get_logger

from shipsrc.engines.git.callbacks import AuthenticationRejectedError, PublishCallbacks
from shipsrc.engines.git.errors import (
    CommitError,
    PushError,
    RemoteConfigError,
    RepositoryInitError,
)
from shipsrc.engines.git.models import Author
from shipsrc.engines.git.remote import redact_url

log = get_logger(__name__)


class GitOperationsHelper:
    """Helper class for the Git steps of a publish."""

    def __init__(self) -> None:
        self._log = log.bind(helper_id=id(self))
        self._log.debug("GitOperationsHelper initialized")

    def init_repo(self, working_dir: Path, initial_head: str) -> pygit2.Repository:
        """``git init`` with ``initial_head`` as the unborn branch."""
        try:
            repo = pygit2.init_repository(str(working_dir), bare=False, initial_head=initial_head)
        except (pygit2.GitError, OSError, ValueError) as e:
            raise RepositoryInitError(f"Cannot initialize repository in {working_dir}", cause=e) from e
        self._log.debug("Initialized repository", path=str(working_dir), initial_head=initial_head)
        return repo

    def clone_repo(self, remote_url: str, working_dir: Path, callbacks: PublishCallbacks) -> pygit2.Repository:
        """``git clone`` into an existing, empty working directory."""
        try:
            repo = pygit2.clone_repository(remote_url, str(working_dir), callbacks=callbacks)
        except (pygit2.GitError, AuthenticationRejectedError, OSError, KeyError, ValueError) as e:
            shown = redact_url(remote_url)
            raise RepositoryInitError(f"Cannot clone {shown}", remote_url=shown, cause=e) from e
        self._log.debug("Cloned repository", remote_url=redact_url(remote_url), path=str(working_dir))
        return repo

    def add_remote(self, repo: pygit2.Repository, name: str, remote_url: str) -> None:
        try:
            repo.remotes.create(name, remote_url)
        except (pygit2.GitError, ValueError) as e:
            raise RemoteConfigError(
                f"Cannot add remote '{name}'", remote_url=redact_url(remote_url), cause=e
            ) from e
        self._log.debug("Added remote", name=name, remote_url=redact_url(remote_url))

    def commit_all(
        self, repo: pygit2.Repository, author: Author, message: str, paths: Iterable[str] = ()
    ) -> pygit2.Oid:
        """Stage the whole working tree (``git add .``) and commit it on HEAD.

        ``paths`` are staged even when a ``.gitignore`` rule matches them.
        """
        try:
            index = repo.index
            index.add_all()
            for path in paths:
                index.add(path)
            index.write()
            self._log.debug("git add all files", entries=len(index))

            tree_id = index.write_tree()
            parents = [] if repo.head_is_unborn else [repo.head.target]
            signature = author.signature()
            commit_id = repo.create_commit("HEAD", signature, signature, message, tree_id, parents)
        except (pygit2.GitError, OSError, KeyError, ValueError) as e:
            raise CommitError("Cannot commit working tree", cause=e) from e

        self._log.info("git commit", commit_id=str(commit_id), author=str(author))
        return commit_id

    def current_branch(self, repo: pygit2.Repository) -> str:
        """Full ref name of the checked-out branch (e.g. ``refs/heads/main``)."""
        if repo.head_is_unborn:
            return repo.references["HEAD"].target
        return repo.head.name

    def push_force(
        self, repo: pygit2.Repository, remote_name: str, callbacks: PublishCallbacks
    ) -> str:
        """``git push -f`` of the current branch.

        The remote ref is overwritten unconditionally: last writer wins and
        there is no conflict detection.

        Returns:
            The pushed ref name.
        """
        branch_ref = self.current_branch(repo)
        try:
            remote = repo.remotes[remote_name]
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise PushError(f"Remote '{remote_name}' is not configured", cause=e) from e

        remote_url = redact_url(remote.url)
        try:
            remote.push([f"+{branch_ref}:{branch_ref}"], callbacks=callbacks)
        except (pygit2.GitError, AuthenticationRejectedError, OSError, KeyError, ValueError) as e:
            raise PushError(f"Cannot push {branch_ref}", remote_url=remote_url, cause=e) from e

        if callbacks.rejected_refs:
            details = ", ".join(f"{ref}: {msg}" for ref, msg in callbacks.rejected_refs.items())
            raise PushError(
                f"Remote rejected {details}",
                remote_url=remote_url,
                rejected_refs=callbacks.rejected_refs,
            )

        if callbacks.messages:
            self._log.warning("git push messages", messages=callbacks.messages)
        self._log.debug("Pushed", ref=branch_ref, remote_url=remote_url)
        return branch_ref


# 🔼⚙️🔚
