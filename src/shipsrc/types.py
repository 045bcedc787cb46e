#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Common type definitions to avoid circular imports."""

from collections.abc import Mapping
from typing import TypeAlias

# Relative path inside the repository mapped to its raw content
FileSet: TypeAlias = Mapping[str, bytes]

# 🔼⚙️🔚
