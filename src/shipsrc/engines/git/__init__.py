#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Git publishing engine for shipsrc."""

from .errors import (
    CleanupWarning,
    CommitError,
    PublisherDisabledError,
    PublishError,
    PublishErrorKind,
    PushError,
    RemoteConfigError,
    RepositoryInitError,
    StagingIOError,
    UnsafePathError,
)
from .models import Author, Credentials, PublishRequest, PublishResult
from .publisher import RepositoryPublisher

__all__ = [
    "Author",
    "CleanupWarning",
    "CommitError",
    "Credentials",
    "PublishError",
    "PublishErrorKind",
    "PublishRequest",
    "PublishResult",
    "PublisherDisabledError",
    "PushError",
    "RemoteConfigError",
    "RepositoryInitError",
    "RepositoryPublisher",
    "StagingIOError",
    "UnsafePathError",
]

# 🔼⚙️🔚
