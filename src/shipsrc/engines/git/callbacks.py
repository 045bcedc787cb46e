#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""pygit2 remote callbacks used for clone and push."""

from __future__ import annotations

import pygit2
from pygit2.enums import CredentialType
from provide.foundation.logger import get_logger

from shipsrc.engines.git.models import Credentials
from shipsrc.engines.git.remote import redact_url

log = get_logger(__name__)


class AuthenticationRejectedError(Exception):
    """The remote asked for credentials again after the supplied ones were sent."""


class PublishCallbacks(pygit2.RemoteCallbacks):
    """Supplies credentials once and records what the remote reports back.

    libgit2 calls the credentials callback again whenever the server answers
    401, so handing out the same ``UserPass`` unconditionally would loop on
    bad credentials. The second request is turned into an error instead.
    """

    def __init__(self, credentials: Credentials | None = None) -> None:
        super().__init__()
        self._credentials = credentials
        self.auth_attempts = 0
        self.messages: list[str] = []
        self.rejected_refs: dict[str, str] = {}
        self.updated_refs: list[str] = []

    def credentials(self, url, username_from_url, allowed_types):
        url = redact_url(url)
        if self._credentials is None:
            raise AuthenticationRejectedError(f"Remote {url} requires credentials but none were supplied")
        if not allowed_types & CredentialType.USERPASS_PLAINTEXT:
            raise AuthenticationRejectedError(
                f"Remote {url} does not accept username/password authentication"
            )
        self.auth_attempts += 1
        if self.auth_attempts > 1:
            raise AuthenticationRejectedError(
                f"Remote {url} rejected the credentials for user '{self._credentials.username}'"
            )
        return self._credentials.user_pass()

    def sideband_progress(self, string: str) -> None:
        text = string.strip()
        if text:
            self.messages.append(text)

    def push_update_reference(self, refname: str, message: str | None) -> None:
        if message:
            log.debug("Remote rejected reference", refname=refname, message=message)
            self.rejected_refs[refname] = message
        else:
            self.updated_refs.append(refname)


# 🔼⚙️🔚
