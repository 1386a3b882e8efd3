#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import re

from modules.crypto.SRPErrors import MissingUsernameError

_SEPARATORS = re.compile(r"[.\-_]")


def clean_username(name: str | None = "") -> str:
    """Remove dots, dashes and underscores, then lowercase."""
    return _SEPARATORS.sub("", name or "").lower()


def check_username(
    version: int,
    username: str | None = None,
    server_username: str | None = None,
) -> bool:
    """
    Compare the local username with the one the server has on file.

    v3 and later bind the identity through the salted hash and always pass.
    v2 compares cleaned names, v1 and v0 only ignore case.
    """
    if version >= 3:
        return True

    if not username or not server_username:
        raise MissingUsernameError()

    if version == 2:
        return clean_username(username) == clean_username(server_username)

    return username.lower() == server_username.lower()
