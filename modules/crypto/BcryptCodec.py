#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import base64

import bcrypt

from utils.ConfigLoader import ConfigLoader

cfg = ConfigLoader.get_config()
crypto = cfg["crypto"]

BCRYPT_SALT_LEN = 16
BCRYPT_SALT_CHARS = 22
BCRYPT_MAX_PASSWORD_BYTES = 72

_STD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BCRYPT_ALPHABET = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

_TO_BCRYPT = str.maketrans(_STD_ALPHABET, _BCRYPT_ALPHABET)
_FROM_BCRYPT = str.maketrans(_BCRYPT_ALPHABET, _STD_ALPHABET)


def encode_base64(data: bytes, length: int | None = None) -> str:
    """
    Encode the first `length` bytes of data with bcrypt's alphabet, unpadded.
    """
    data = bytes(data)
    if length is None:
        length = len(data)
    if length > len(data):
        raise ValueError(f"Illegal length: {length} > {len(data)}")

    encoded = base64.b64encode(data[:length]).decode("ascii").rstrip("=")
    return encoded.translate(_TO_BCRYPT)


def decode_base64(encoded: str, length: int) -> bytes:
    """
    Decode bcrypt-alphabet text into at most `length` bytes.
    Leftover bits of a trailing partial character are ignored.
    """
    std = encoded.translate(_FROM_BCRYPT)
    # A single dangling character carries no full byte
    if len(std) % 4 == 1:
        std = std[:-1]
    std += "=" * (-len(std) % 4)
    return base64.b64decode(std)[:length]


def normalize_salt(salt: str) -> str:
    """
    Canonical 22-character bcrypt salt for an encoded salt string.

    Only the first 22 characters count, which is how a hex MD5 salt ends up
    usable. Fewer than 16 decoded bytes is an error.
    """
    raw = decode_base64(salt[:BCRYPT_SALT_CHARS], BCRYPT_SALT_LEN)
    if len(raw) != BCRYPT_SALT_LEN:
        raise ValueError(f"Illegal bcrypt salt length: {len(raw)} bytes")
    return encode_base64(raw, BCRYPT_SALT_LEN)


def bcrypt_hash(password: str | bytes, salt: str) -> bytes:
    """
    bcrypt(password) with the configured cost prefix prepended to salt.

    Returns:
        bytes: the 60-character modular crypt string, e.g. b"$2y$10$...".
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    # bcrypt only ever reads 72 bytes of key material
    password = password[:BCRYPT_MAX_PASSWORD_BYTES]

    full_salt = crypto["bcrypt_prefix"] + normalize_salt(salt)
    return bcrypt.hashpw(password, full_salt.encode("ascii"))
