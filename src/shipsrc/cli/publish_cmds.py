#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Publish commands: push a local directory's files to a remote repository."""

from __future__ import annotations

from pathlib import Path
import sys

import click
from provide.foundation.cli.decorators import logging_options
from provide.foundation.logger import get_logger
from structlog.typing import FilteringBoundLogger as StructLogger

from shipsrc.config import ConfigurationError, load_config
from shipsrc.engines.git import Author, Credentials, PublishError, RepositoryPublisher

log: StructLogger = get_logger(__name__)


def collect_files(source_dir: Path) -> dict[str, bytes]:
    """Read every regular file below ``source_dir`` except repository metadata."""
    files: dict[str, bytes] = {}
    for path in sorted(source_dir.rglob("*")):
        relative = path.relative_to(source_dir)
        if ".git" in relative.parts or not path.is_file():
            continue
        files[relative.as_posix()] = path.read_bytes()
    return files


_PUBLISH_OPTIONS = (
    click.argument(
        "source_dir",
        type=click.Path(exists=True, file_okay=False, dir_okay=True, readable=True, path_type=Path),
    ),
    click.option("-r", "--remote", "remote_url", required=True, help="HTTP(S) URL of the remote repository."),
    click.option("-n", "--name", "repo_name", default=None, help="Repository name (defaults to SOURCE_DIR's name)."),
    click.option("-m", "--message", required=True, help="Commit message."),
    click.option("--author-name", default=None, help="Author display name."),
    click.option("--author-login", default=None, help="Author login, used when no display name is given."),
    click.option("--author-email", required=True, help="Author email."),
    click.option(
        "--username",
        required=True,
        envvar="SHIPSRC_GIT_USERNAME",
        show_envvar=True,
        help="Username for the remote.",
    ),
    click.option(
        "--password",
        required=True,
        envvar="SHIPSRC_GIT_PASSWORD",
        show_envvar=True,
        help="Password or access token for the remote.",
    ),
    click.option(
        "-c",
        "--config-path",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
        default=None,
        envvar="SHIPSRC_CONF",
        help="Path to the shipsrc configuration file (env var SHIPSRC_CONF).",
        show_envvar=True,
    ),
    logging_options,
)


def publish_options(func):
    """Options shared by ``create`` and ``update``."""
    for decorator in reversed(_PUBLISH_OPTIONS):
        func = decorator(func)
    return func


def _run_publish(
    *,
    update: bool,
    source_dir: Path,
    remote_url: str,
    repo_name: str | None,
    message: str,
    author_name: str | None,
    author_login: str | None,
    author_email: str,
    username: str,
    password: str,
    config_path: Path | None,
) -> None:
    try:
        config = load_config(config_path)
        publisher = RepositoryPublisher.from_config(config)
        author = Author(email=author_email, name=author_name, login=author_login)
        files = collect_files(source_dir)
        operation = publisher.update_files if update else publisher.create_files
        result = operation(
            remote_url,
            repo_name or source_dir.resolve().name,
            author,
            message,
            files,
            Credentials(username, password),
        )
    except PublishError as e:
        click.echo(f"❌ Error ({e.kind.value}): {e}", err=True)
        sys.exit(1)
    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        log.exception("Publish command failed", remote_url=remote_url)
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"✅ Pushed {result.files_written} file(s) as {result.short_id} to {result.branch}")
    for line in result.remote_messages:
        click.echo(f"   remote: {line}")
    if result.cleanup_warning is not None:
        click.echo(f"⚠️  {result.cleanup_warning}", err=True)


@click.command(name="create")
@publish_options
def create_command(**kwargs):
    """Initialize a new repository from SOURCE_DIR and force-push it.

    Any history on the remote branch is replaced.

    Example:
        shipsrc create ./generated -r https://git.example.com/org/demo.git \\
            -m "initial import" --author-email jane@example.com --author-name Jane
    """
    _run_publish(update=False, **_publish_kwargs(kwargs))


@click.command(name="update")
@publish_options
def update_command(**kwargs):
    """Clone the remote, overlay the files from SOURCE_DIR and force-push.

    Files on the remote that are not in SOURCE_DIR are kept.
    """
    _run_publish(update=True, **_publish_kwargs(kwargs))


def _publish_kwargs(kwargs: dict) -> dict:
    names = (
        "source_dir",
        "remote_url",
        "repo_name",
        "message",
        "author_name",
        "author_login",
        "author_email",
        "username",
        "password",
        "config_path",
    )
    return {name: kwargs[name] for name in names}


# 🔼⚙️🔚
