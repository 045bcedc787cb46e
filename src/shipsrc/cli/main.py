#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Main CLI entry point for shipsrc."""

from __future__ import annotations

import click

from shipsrc import __version__
from shipsrc.cli.config_cmds import config_cli
from shipsrc.cli.publish_cmds import create_command, update_command


@click.group()
@click.version_option(version=__version__, prog_name="shipsrc")
def cli():
    """shipsrc: publish generated project files as a Git repository."""


cli.add_command(create_command)
cli.add_command(update_command)
cli.add_command(config_cli)

# 🔼⚙️🔚
