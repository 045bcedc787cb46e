#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Value objects passed into and returned from the repository publisher."""

from __future__ import annotations

from typing import Any

from attrs import define, field, validators
import pygit2

from shipsrc.types import FileSet


def _freeze_files(files: FileSet) -> dict[str, bytes]:
    frozen: dict[str, bytes] = {}
    for path, content in files.items():
        if not isinstance(content, bytes | bytearray | memoryview):
            raise TypeError(f"Content for '{path}' must be bytes, got {type(content).__name__}")
        frozen[str(path)] = bytes(content)
    return frozen


@define(frozen=True)
class Author:
    """Commit author identity.

    ``name`` falls back to ``login`` when it is not set.
    """

    email: str = field(validator=validators.instance_of(str))
    name: str | None = field(default=None)
    login: str | None = field(default=None)

    def __attrs_post_init__(self) -> None:
        if not (self.name or self.login):
            raise ValueError("Author requires a name or a login")

    @property
    def display_name(self) -> str:
        return self.name or self.login  # type: ignore[return-value]

    def signature(self) -> pygit2.Signature:
        """Build the pygit2 signature used for both author and committer."""
        return pygit2.Signature(self.display_name, self.email)

    def __str__(self) -> str:
        return f"{self.display_name} <{self.email}>"


@define(frozen=True)
class Credentials:
    """Username and password (or token) handed to the HTTP transport."""

    username: str = field(validator=validators.instance_of(str))
    password: str = field(repr=False, validator=validators.instance_of(str))

    def user_pass(self) -> pygit2.UserPass:
        return pygit2.UserPass(self.username, self.password)


@define(frozen=True)
class PublishRequest:
    """Everything needed to publish one commit to a remote repository."""

    remote_url: str
    repo_name: str
    author: Author
    message: str
    credentials: Credentials
    files: dict[str, bytes] = field(factory=dict, converter=_freeze_files)


@define(frozen=True)
class PublishResult:
    """Outcome of a successful publish."""

    commit_id: str
    branch: str
    remote_url: str
    files_written: int = field(default=0)
    remote_messages: tuple[str, ...] = field(factory=tuple, converter=tuple)
    cleanup_warning: Any = field(default=None)

    @property
    def short_id(self) -> str:
        return self.commit_id[:7]

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for reporting."""
        return {
            "commit_id": self.commit_id,
            "branch": self.branch,
            "remote_url": self.remote_url,
            "files_written": self.files_written,
            "remote_messages": list(self.remote_messages),
            "cleanup_warning": str(self.cleanup_warning) if self.cleanup_warning else None,
        }


# 🔼⚙️🔚
