#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Error family raised by the repository publisher.

Every failure of a publish operation is raised as a subclass of
``PublishError``. Callers can catch the base class to handle all failures
at once, or branch on the concrete type (or ``error.kind``) to tell a local
I/O problem from a rejected push. The underlying exception is always
chained as ``__cause__`` and kept on ``error.cause``.
"""

from __future__ import annotations

from enum import Enum


class PublishErrorKind(Enum):
    """Where in the publish sequence a failure originated."""

    STAGING_IO = "staging_io"
    REPOSITORY_INIT = "repository_init"
    REMOTE_CONFIG = "remote_config"
    COMMIT = "commit"
    PUSH = "push"
    CLEANUP = "cleanup"
    DISABLED = "disabled"


class PublishError(Exception):
    """Base exception for repository publishing errors."""

    kind: PublishErrorKind = PublishErrorKind.STAGING_IO

    def __init__(
        self,
        message: str,
        *,
        remote_url: str | None = None,
        repo_name: str | None = None,
        cause: BaseException | None = None,
    ):
        self.remote_url = remote_url
        self.repo_name = repo_name
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}: {self.cause}"
        return message


class StagingIOError(PublishError):
    """Raised when the working directory or a file in it cannot be written."""

    kind = PublishErrorKind.STAGING_IO


class UnsafePathError(StagingIOError):
    """Raised when a file path would resolve outside the working directory."""

    def __init__(self, path: str, reason: str, **kwargs):
        self.path = path
        super().__init__(f"Refusing to write '{path}' ({reason})", **kwargs)


class RepositoryInitError(PublishError):
    """Raised when the local repository cannot be initialized or cloned."""

    kind = PublishErrorKind.REPOSITORY_INIT


class RemoteConfigError(PublishError):
    """Raised for malformed or unsupported remote URLs and remote setup failures."""

    kind = PublishErrorKind.REMOTE_CONFIG


class CommitError(PublishError):
    """Raised when staging or committing the working tree fails."""

    kind = PublishErrorKind.COMMIT


class PushError(PublishError):
    """Raised when the forced push fails or the remote rejects the update."""

    kind = PublishErrorKind.PUSH

    def __init__(self, message: str, *, rejected_refs: dict[str, str] | None = None, **kwargs):
        self.rejected_refs = dict(rejected_refs or {})
        super().__init__(message, **kwargs)


class CleanupWarning(PublishError):
    """Working directory removal failed.

    Never raised by a publish operation; it is logged and attached to the
    ``PublishResult`` so the caller can see the leaked path.
    """

    kind = PublishErrorKind.CLEANUP


class PublisherDisabledError(PublishError):
    """Raised when a publish is requested from a disabled publisher."""

    kind = PublishErrorKind.DISABLED


# 🔼⚙️🔚
