#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Password hashing for the SRP login, auth versions 0 to 4.

Every version ends the same way: bcrypt(password, salt) is appended to the
modulus and run through expand_hash, giving the 256-byte value the SRP
engine reads as x. The versions only differ in where the salt and password
come from:

    v4 / v3   salt from the server, suffixed with "proton"
    v2        v1 with a cleaned username (no . - _, lowercase)
    v1        hex MD5 of the lowercased username as salt
    v0        base64(SHA512(username + password)) fed into v1 as password

Callers describe the version with one of the parameter records below.
password_params() builds the right record and is the single place that
complains about a missing salt or username.
"""

import base64
from dataclasses import dataclass, field
from enum import IntEnum

from modules.crypto.BcryptCodec import bcrypt_hash, encode_base64, BCRYPT_SALT_LEN
from modules.crypto.CryptoProxy import CryptoProxy
from modules.crypto.ExpandHash import expand_hash
from modules.crypto.SRPErrors import (
    MissingSaltError,
    MissingUsernameError,
    UnsupportedAuthVersionError,
)
from modules.crypto.UsernameCheck import clean_username
from utils.ConfigLoader import ConfigLoader
from utils.Logger import Logger

cfg = ConfigLoader.get_config()
crypto = cfg["crypto"]

# "$2y$10$" + 22 salt characters
BCRYPT_HEADER_LEN = 29


class AuthVersion(IntEnum):
    V0 = 0
    V1 = 1
    V2 = 2
    V3 = 3
    V4 = 4


# ----------------------------------------------------------------------
# Version parameter records
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class SaltedParams:
    """v3 and v4: server-provided binary salt."""
    salt: bytes
    version: AuthVersion = AuthVersion.V4


@dataclass(frozen=True)
class CleanUsernameParams:
    """v2: username is cleaned before the v1 algorithm."""
    username: str
    version: AuthVersion = field(default=AuthVersion.V2, init=False)


@dataclass(frozen=True)
class UsernameParams:
    """v1: MD5(username) salt."""
    username: str
    version: AuthVersion = field(default=AuthVersion.V1, init=False)


@dataclass(frozen=True)
class PrehashParams:
    """v0: SHA-512 prehash of username + password, then v1."""
    username: str
    version: AuthVersion = field(default=AuthVersion.V0, init=False)


PasswordParams = SaltedParams | CleanUsernameParams | UsernameParams | PrehashParams


def password_params(version: int, salt: bytes | None = None, username: str | None = None) -> PasswordParams:
    """
    Build the parameter record for an auth version.

    Raises:
        MissingSaltError: v3/v4 without salt.
        MissingUsernameError: v0-v2 without username.
        UnsupportedAuthVersionError: anything outside 0-4.
    """
    try:
        auth_version = AuthVersion(version)
    except (ValueError, TypeError):
        raise UnsupportedAuthVersionError(version)

    if auth_version in (AuthVersion.V3, AuthVersion.V4):
        if not salt:
            raise MissingSaltError()
        return SaltedParams(salt=bytes(salt), version=auth_version)

    if not username:
        raise MissingUsernameError()

    if auth_version == AuthVersion.V2:
        return CleanUsernameParams(username=username)
    if auth_version == AuthVersion.V1:
        return UsernameParams(username=username)
    return PrehashParams(username=username)


# ----------------------------------------------------------------------
# Hash steps
# ----------------------------------------------------------------------

def _binary_string(text: str) -> bytes:
    """One byte per character, keeping the low 8 bits of each code point."""
    return bytes(ord(char) & 0xFF for char in text)


def _format_hash(password: str, salt: str, modulus: bytes) -> bytes:
    unexpanded = bcrypt_hash(password, salt)
    return expand_hash(unexpanded + bytes(modulus))


def _hash_password_3(password: str, salt: bytes, modulus: bytes) -> bytes:
    salt_binary = bytes(salt) + crypto["salt_suffix"].encode("ascii")
    bcrypt_salt = encode_base64(salt_binary, len(salt_binary))
    return _format_hash(password, bcrypt_salt, modulus)


def _hash_password_1(password: str, username: str, modulus: bytes) -> bytes:
    value = username.lower().encode("utf-8")
    salt = CryptoProxy.compute_hash("unsafeMD5", value).hex()
    return _format_hash(password, salt, modulus)


def _hash_password_0(password: str, username: str, modulus: bytes) -> bytes:
    value = CryptoProxy.compute_hash(
        "SHA512",
        _binary_string(username.lower()) + password.encode("utf-8"),
    )
    prehashed = base64.b64encode(value).decode("ascii")
    return _hash_password_1(prehashed, username, modulus)


def hash_password_with(params: PasswordParams, password: str, modulus: bytes) -> bytes:
    """Hash a password for an already-built parameter record."""
    Logger.debug(f"Hashing password for auth version {int(params.version)}")

    if isinstance(params, SaltedParams):
        return _hash_password_3(password, params.salt, modulus)
    if isinstance(params, CleanUsernameParams):
        return _hash_password_1(password, clean_username(params.username), modulus)
    if isinstance(params, UsernameParams):
        return _hash_password_1(password, params.username, modulus)
    if isinstance(params, PrehashParams):
        return _hash_password_0(password, params.username, modulus)

    raise UnsupportedAuthVersionError(getattr(params, "version", None))


def hash_password(
    password: str,
    modulus: bytes,
    version: int,
    salt: bytes | None = None,
    username: str | None = None,
) -> bytes:
    """
    Hash a password according to the auth version.

    Args:
        password (str): Cleartext password.
        modulus (bytes): Verified SRP modulus bytes.
        version (int): Auth version, 0-4.
        salt (bytes | None): Binary salt, required for v3/v4.
        username (str | None): Username, required for v0-v2.

    Returns:
        bytes: 256-byte hashed password.
    """
    params = password_params(version, salt=salt, username=username)
    return hash_password_with(params, password, modulus)


def compute_key_password(password: str, key_salt: str) -> str:
    """
    Derive the passphrase that unlocks the user's private keys.

    Args:
        password (str): Login password.
        key_salt (str): Base64 key salt from the API.

    Returns:
        str: The 31-character bcrypt hash part, without the "$2y$10$<salt>" header.
    """
    salt_binary = base64.b64decode(key_salt)
    if len(salt_binary) < BCRYPT_SALT_LEN:
        raise ValueError(f"Key salt must be at least {BCRYPT_SALT_LEN} bytes")

    bcrypt_salt = encode_base64(salt_binary, len(salt_binary))
    hashed = bcrypt_hash(password, bcrypt_salt).decode("ascii")
    return hashed[BCRYPT_HEADER_LEN:]
