#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration inspection commands for shipsrc."""

from __future__ import annotations

import json
from pathlib import Path
import sys

import click
from provide.foundation.cli.decorators import logging_options

from shipsrc.config import ConfigurationError, load_config


@click.group(name="config")
def config_cli():
    """Configuration commands."""


@config_cli.command(name="show")
@click.option(
    "-c",
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    envvar="SHIPSRC_CONF",
    help="Path to the shipsrc configuration file (env var SHIPSRC_CONF).",
    show_envvar=True,
)
@logging_options
def show_config(config_path: Path | None, **kwargs):
    """Print the effective publisher configuration as JSON."""
    try:
        config = load_config(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(config.to_dict(), indent=2))


# 🔼⚙️🔚
