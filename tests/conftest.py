#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures for publisher tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
import shutil

import pygit2
import pytest

from shipsrc.engines.git import Author, Credentials, RepositoryPublisher
from tests.helpers.http_remote import GitHttpServer, create_http_bare_repo

LOCAL_SCHEMES = ("http", "https", "file")


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """Staging root for working directories (created lazily by the publisher)."""
    return tmp_path / "staging"


@pytest.fixture
def bare_remote(tmp_path: Path) -> Path:
    """Create an empty bare repository that acts as the push target."""
    remote_path = tmp_path / "remote.git"
    pygit2.init_repository(str(remote_path), bare=True, initial_head="main")
    return remote_path


@pytest.fixture
def remote_url(bare_remote: Path) -> str:
    """file:// URL of the bare remote."""
    return bare_remote.as_uri()


@pytest.fixture
def publisher(staging_root: Path) -> RepositoryPublisher:
    """Publisher that also accepts local file:// remotes."""
    return RepositoryPublisher(staging_root, allowed_schemes=LOCAL_SCHEMES)


@pytest.fixture
def author() -> Author:
    return Author(name="Jane", email="jane@example.com")


@pytest.fixture
def credentials() -> Credentials:
    return Credentials("jane", "s3cret-token")


@pytest.fixture
def git_http_server(tmp_path: Path, credentials: Credentials) -> Iterator[GitHttpServer]:
    """Smart-HTTP server that only accepts ``credentials``."""
    if shutil.which("git") is None:
        pytest.skip("git executable is required to serve repositories over HTTP")
    project_root = tmp_path / "served"
    project_root.mkdir()
    server = GitHttpServer(project_root, credentials.username, credentials.password).start()
    yield server
    server.stop()


@pytest.fixture
def http_remote(git_http_server: GitHttpServer) -> Path:
    """Empty bare repository served by ``git_http_server``."""
    return create_http_bare_repo(git_http_server.project_root, "remote.git")


@pytest.fixture
def http_remote_url(git_http_server: GitHttpServer, http_remote: Path) -> str:
    return git_http_server.url_for(http_remote.name)


# 🔼⚙️🔚
