#
# SPDX-FileCopyrightText: Copyright (c) provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test helper modules for shipsrc testing.

This package contains utilities for inspecting the bare repositories that
stand in for remote Git servers."""

from __future__ import annotations

# 🔼⚙️🔚
