#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import base64
import binascii
import hmac
from dataclasses import dataclass, field

from modules.crypto.ModulusVerifier import ModulusVerifier, get_default_verifier
from modules.crypto.PasswordHasher import AuthVersion, hash_password
from modules.crypto.SRPErrors import MalformedBase64Error, UsernameMismatchError
from modules.crypto.SRPProofs import generate_proofs
from modules.crypto.UsernameCheck import check_username
from utils.ConfigLoader import ConfigLoader
from utils.Logger import Logger

cfg = ConfigLoader.get_config()
crypto = cfg["crypto"]


@dataclass(frozen=True)
class AuthInfo:
    """Server parameters from the auth/info call."""
    version: int
    modulus: str
    server_ephemeral: str
    salt: str | None = None
    username: str | None = None

    @classmethod
    def from_api(cls, payload: dict) -> "AuthInfo":
        """Build from the API's field names (Version, Modulus, ...)."""
        return cls(
            version=int(payload["Version"]),
            modulus=payload["Modulus"],
            server_ephemeral=payload["ServerEphemeral"],
            salt=payload.get("Salt"),
            username=payload.get("Username"),
        )


@dataclass(frozen=True)
class AuthCredentials:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class HandshakeResult:
    client_ephemeral: str
    client_proof: str
    expected_server_proof: str
    shared_session: bytes = field(repr=False)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: str, field_name: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedBase64Error(field_name) from None


def compute_handshake(
    auth_info: AuthInfo,
    credentials: AuthCredentials,
    verifier: ModulusVerifier | None = None,
) -> HandshakeResult:
    """
    Compute the client side of the SRP login.

    Args:
        auth_info (AuthInfo): Parameters returned by the server.
        credentials (AuthCredentials): Local username and password.
        verifier (ModulusVerifier | None): Defaults to the shared verifier.

    Returns:
        HandshakeResult: base64 ephemeral and proofs, raw shared session.
    """
    verifier = verifier or get_default_verifier()
    version = auth_info.version

    modulus = verifier.verify_and_get_modulus(auth_info.modulus)

    if version == AuthVersion.V2 and not check_username(version, credentials.username, auth_info.username):
        raise UsernameMismatchError()

    salt = None
    if version >= AuthVersion.V3 and auth_info.salt:
        salt = _b64decode(auth_info.salt, "salt")

    hashed_password = hash_password(
        credentials.password,
        modulus,
        version,
        salt=salt,
        username=auth_info.username or credentials.username,
    )

    server_ephemeral = _b64decode(auth_info.server_ephemeral, "server_ephemeral")
    proofs = generate_proofs(
        byte_length=int(crypto["srp_len_bytes"]),
        modulus=modulus,
        hashed_password=hashed_password,
        server_ephemeral=server_ephemeral,
    )

    Logger.debug(f"SRP handshake computed (auth version {version})")
    return HandshakeResult(
        client_ephemeral=_b64encode(proofs.client_ephemeral),
        client_proof=_b64encode(proofs.client_proof),
        expected_server_proof=_b64encode(proofs.expected_server_proof),
        shared_session=proofs.shared_session,
    )


def verify_server_proof(server_proof: str, expected_server_proof: str) -> bool:
    """Constant-time comparison of the base64 server proof with the expected one."""
    try:
        received = base64.b64decode(server_proof, validate=True)
        expected = base64.b64decode(expected_server_proof, validate=True)
    except (binascii.Error, ValueError):
        return False

    if len(received) != len(expected):
        return False
    return hmac.compare_digest(received, expected)


class SRPClient:
    """Entry point with the argument order the login command uses."""

    @staticmethod
    def compute_handshake(
        username: str,
        password: str,
        salt: str,
        modulus: str,
        server_ephemeral: str,
        version: int = AuthVersion.V4,
        server_username: str | None = None,
        verifier: ModulusVerifier | None = None,
    ) -> HandshakeResult:
        auth_info = AuthInfo(
            version=int(version),
            modulus=modulus,
            server_ephemeral=server_ephemeral,
            salt=salt,
            username=server_username,
        )
        credentials = AuthCredentials(username=username, password=password)
        return compute_handshake(auth_info, credentials, verifier=verifier)

    @staticmethod
    def verify_server_proof(server_proof: str, expected_server_proof: str) -> bool:
        return verify_server_proof(server_proof, expected_server_proof)
