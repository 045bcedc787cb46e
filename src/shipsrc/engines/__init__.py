#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shipsrc Engines Package.

This package contains the repository engines used by shipsrc to publish
generated files (currently Git over HTTP(S))."""

# 🔼⚙️🔚
