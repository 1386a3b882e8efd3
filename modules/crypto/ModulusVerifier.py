#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Verification of the SRP modulus sent by the server.

The server sends N as a PGP cleartext-signed message whose text is the
base64 encoded modulus. It is only accepted when signed by the pinned
modulus key; a forged N would let the server pick a weak group.
"""

import base64
import binascii
import threading

from modules.crypto.CryptoProxy import CryptoProxy, VerificationStatus
from modules.crypto.SRPErrors import ServerIdentityError
from utils.Logger import Logger

SRP_MODULUS_KEY = """-----BEGIN PGP PUBLIC KEY BLOCK-----

xjMEXAHLgxYJKwYBBAHaRw8BAQdAFurWXXwjTemqjD7CXjXVyKf0of7n9Ctm
L8v9enkzggHNEnByb3RvbkBzcnAubW9kdWx1c8J3BBAWCgApBQJcAcuDBgsJ
BwgDAgkQNQWFxOlRjyYEFQgKAgMWAgECGQECGwMCHgEAAPGRAP9sauJsW12U
MnTQUZpsbJb53d0Wv55mZIIiJL2XulpWPQD/V6NglBd96lZKBmInSXX/kXat
Sv+y0io+LR8i2+jV+AbOOARcAcuDEgorBgEEAZdVAQUBAQdAeJHUz1c9+KfE
kSIgcBRE3WuXC4oj5a2/U3oASExGDW4DAQgHwmEEGBYIABMFAlwBy4MJEDUF
hcTpUY8mAhsMAAD/XQD8DxNI6E78meodQI+wLsrKLeHn32iLvUqJbVDhfWSU
WO4BAMcm1u02t4VKw++ttECPt+HUgPUq5pqQWe5Q2cW4TMsE
=Y4Mw
-----END PGP PUBLIC KEY BLOCK-----
"""


class ModulusKeyCache:
    """
    Holds the imported modulus key.

    A key handle can go stale when the key store behind it is cleared, so
    every get() first probes the cached handle by exporting it and imports
    the key again when that fails.
    """

    def __init__(self, armored_key: str | None = None, proxy=CryptoProxy) -> None:
        self.armored_key = armored_key or SRP_MODULUS_KEY
        self.proxy = proxy
        self._key = None
        self._lock = threading.Lock()

    def _is_usable(self, key) -> bool:
        if key is None:
            return False
        try:
            self.proxy.export_public_key(key)
        except Exception as e:
            Logger.debug(f"Cached modulus key failed export probe: {e}")
            return False
        return True

    def _import(self):
        self._key = None
        self._key = self.proxy.import_public_key(self.armored_key)
        return self._key

    def get(self):
        with self._lock:
            if self._is_usable(self._key):
                return self._key
            return self._import()

    def invalidate(self) -> None:
        with self._lock:
            self._key = None

    def invalidate_and_reimport(self):
        with self._lock:
            return self._import()


class ModulusVerifier:
    """Checks the modulus signature and extracts the modulus bytes."""

    def __init__(self, key_cache: ModulusKeyCache | None = None, proxy=CryptoProxy) -> None:
        self.proxy = proxy
        self.key_cache = key_cache or ModulusKeyCache(proxy=proxy)

    def verify(self, signed_cleartext: str) -> str:
        """
        Verify the signature of a cleartext-signed message.

        Returns:
            str: The signed text.

        Raises:
            ServerIdentityError: for any failure, without the reason.
        """
        try:
            key = self.key_cache.get()
            text, status = self.proxy.verify_cleartext_message(signed_cleartext, key)
            if status != VerificationStatus.SIGNED_AND_VALID:
                raise ValueError(f"Modulus signature verification failed ({status.name})")
        except Exception as e:
            Logger.debug(f"Modulus verification failed: {e}")
            raise ServerIdentityError() from None

        return text

    def verify_and_get_modulus(self, signed_modulus: str) -> bytes:
        """
        Verify the signed modulus and return the raw modulus bytes.
        """
        modulus_data = self.verify(signed_modulus)

        try:
            modulus = base64.b64decode(modulus_data.strip(), validate=False)
        except (binascii.Error, ValueError):
            Logger.debug("Signed modulus is not valid base64")
            raise ServerIdentityError() from None

        Logger.debug(f"Verified SRP modulus ({len(modulus)} bytes)")
        return modulus


_default_verifier = None
_default_lock = threading.Lock()


def get_default_verifier() -> ModulusVerifier:
    global _default_verifier
    with _default_lock:
        if _default_verifier is None:
            _default_verifier = ModulusVerifier()
        return _default_verifier


def verify_and_get_modulus(signed_modulus: str) -> bytes:
    """Module-level shortcut using the shared verifier and its key cache."""
    return get_default_verifier().verify_and_get_modulus(signed_modulus)
