#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Thin wrapper around the primitives the handshake borrows from libraries:
hashlib for SHA-512 / MD5, os.urandom for secrets and pgpy for the signed
modulus. Everything else in modules.crypto goes through this class, so tests
can swap a single object.
"""

import hashlib
import os
from enum import IntEnum

import pgpy
from pgpy.errors import PGPError

from utils.Logger import Logger


class VerificationStatus(IntEnum):
    NOT_SIGNED = 0
    SIGNED_AND_VALID = 1
    SIGNED_AND_INVALID = 2


class CryptoProxy:
    """Static access to hash, random and OpenPGP primitives."""

    HASH_ALGORITHMS = {
        "SHA512": hashlib.sha512,
        "unsafeMD5": hashlib.md5,
    }

    # ------------------------------------------------------------------
    # Hashes + randomness
    # ------------------------------------------------------------------

    @staticmethod
    def compute_hash(algorithm: str, data: bytes) -> bytes:
        """
        Hash data with one of HASH_ALGORITHMS.

        Returns:
            bytes: 64 bytes for SHA512, 16 bytes for unsafeMD5.
        """
        try:
            factory = CryptoProxy.HASH_ALGORITHMS[algorithm]
        except KeyError:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        return factory(data).digest()

    @staticmethod
    def random_bytes(length: int) -> bytes:
        """Cryptographically secure random bytes."""
        return os.urandom(length)

    # ------------------------------------------------------------------
    # OpenPGP
    # ------------------------------------------------------------------

    @staticmethod
    def import_public_key(armored_key: str) -> pgpy.PGPKey:
        try:
            key, _ = pgpy.PGPKey.from_blob(armored_key)
        except (PGPError, ValueError) as e:
            raise RuntimeError(f"Failed to import public key: {e}")
        return key

    @staticmethod
    def export_public_key(key: pgpy.PGPKey) -> bytes:
        """Binary export; used to check that a cached key is still usable."""
        if key is None:
            raise RuntimeError("Failed to export public key: no key")
        return bytes(key)

    @staticmethod
    def verify_cleartext_message(
        armored_message: str,
        verification_key: pgpy.PGPKey,
    ) -> tuple[str, VerificationStatus]:
        """
        Verify a cleartext-signed message.

        Returns:
            (text, status): the signed text and how its signature checked out.
            Parse errors are raised, not reported as a status.
        """
        message = pgpy.PGPMessage.from_blob(armored_message)

        text = message.message
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")

        if not message.signatures:
            return text, VerificationStatus.NOT_SIGNED

        try:
            verified = verification_key.verify(message)
        except PGPError as e:
            Logger.debug(f"Cleartext signature rejected: {e}")
            return text, VerificationStatus.SIGNED_AND_INVALID

        # An empty verification result is truthy, so require a good signature
        if not verified or not any(True for _ in verified.good_signatures):
            return text, VerificationStatus.SIGNED_AND_INVALID

        return text, VerificationStatus.SIGNED_AND_VALID
