#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration module for shipsrc.

Re-exports the configuration model and loading functions."""

from __future__ import annotations

from shipsrc.config.models import (
    ENV_ENABLED,
    ENV_STAGING_ROOT,
    ConfigurationError,
    PublisherConfig,
    build_config,
    load_config,
)

__all__ = [
    "ENV_ENABLED",
    "ENV_STAGING_ROOT",
    "ConfigurationError",
    "PublisherConfig",
    "build_config",
    "load_config",
]

# 🔼⚙️🔚
