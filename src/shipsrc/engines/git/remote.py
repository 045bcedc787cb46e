#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Remote URL checks."""

from __future__ import annotations

from collections.abc import Iterable
import re
from urllib.parse import urlsplit

from shipsrc.engines.git.errors import RemoteConfigError

DEFAULT_ALLOWED_SCHEMES = ("http", "https")

# Everything between "scheme://" and the last "@" of the authority.
_USERINFO = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*://)[^/?#]*@")


def redact_url(remote_url: str) -> str:
    """Drop the ``user:password@`` part of a URL so it can be logged or shown."""
    if not isinstance(remote_url, str):
        return remote_url
    return _USERINFO.sub(r"\1", remote_url)


def validate_remote_url(remote_url: str, allowed_schemes: Iterable[str] = DEFAULT_ALLOWED_SCHEMES) -> str:
    """Return the URL unchanged if it is a usable remote, else raise RemoteConfigError.

    SSH and scp-style remotes (``git@host:org/repo.git``) have no allowed
    scheme and are rejected.
    """
    allowed = {scheme.lower() for scheme in allowed_schemes}
    if not isinstance(remote_url, str) or not remote_url.strip():
        raise RemoteConfigError("Remote URL is empty", remote_url=remote_url)

    shown = redact_url(remote_url.strip())
    try:
        parts = urlsplit(remote_url.strip())
        # Accessing port validates it
        _ = parts.port
    except ValueError as e:
        raise RemoteConfigError(f"Malformed remote URL '{shown}'", remote_url=shown, cause=e) from e

    scheme = parts.scheme.lower()
    if scheme not in allowed:
        raise RemoteConfigError(
            f"Unsupported remote URL scheme '{scheme or 'none'}' in '{shown}' "
            f"(allowed: {', '.join(sorted(allowed))})",
            remote_url=shown,
        )
    if scheme != "file" and not parts.hostname:
        raise RemoteConfigError(f"Remote URL '{shown}' has no host", remote_url=shown)
    if not parts.path.strip("/"):
        raise RemoteConfigError(f"Remote URL '{shown}' has no repository path", remote_url=shown)
    return remote_url.strip()


# 🔼⚙️🔚
