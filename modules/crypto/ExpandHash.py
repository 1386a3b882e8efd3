#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from modules.crypto.CryptoProxy import CryptoProxy

EXPAND_ROUNDS = 4


def expand_hash(data: bytes) -> bytes:
    """
    256-byte hash: SHA512(data | 0) | SHA512(data | 1) | SHA512(data | 2) | SHA512(data | 3).

    Serves as H() in the SRP exchange and as the last step of password hashing.
    """
    data = bytes(data)
    return b"".join(
        CryptoProxy.compute_hash("SHA512", data + bytes([i]))
        for i in range(EXPAND_ROUNDS)
    )


def srp_hasher(*parts: bytes) -> bytes:
    """expand_hash over the concatenation of parts."""
    return expand_hash(b"".join(bytes(part) for part in parts))

