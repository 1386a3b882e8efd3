#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
SRPProofs – client-side SRP-6a math for the storage service login.

Purpose
-------
Given the verified modulus N, the hashed password x and the server's public
ephemeral B, compute the client ephemeral A, the shared session S and the two
proofs exchanged with the server.

Wire format
-----------
Every number travels little-endian and padded to byte_length (256 bytes for
the 2048-bit modulus). H() is expand_hash, so proofs are 256 bytes.

    k  = H(pad(g) | N)                  reduced mod N
    A  = g^a mod N
    u  = H(A | B)
    S  = (B - k * g^x)^(a + u * x) mod N
    M1 = H(A | B | S)
    M2 = H(A | M1 | S)
"""

from dataclasses import dataclass
from typing import Callable

from modules.crypto.BigIntCodec import byte_length as int_byte_length, int_to_le, le_to_int, mod, mod_exp
from modules.crypto.CryptoProxy import CryptoProxy
from modules.crypto.ExpandHash import srp_hasher
from modules.crypto.SRPErrors import (
    ModulusSizeError,
    ServerEphemeralOutOfBoundsError,
    ServerEphemeralSizeError,
)
from utils.ConfigLoader import ConfigLoader
from utils.Logger import Logger

cfg = ConfigLoader.get_config()
crypto = cfg["crypto"]


@dataclass(frozen=True)
class SRPProofs:
    client_ephemeral: bytes
    client_proof: bytes
    expected_server_proof: bytes
    shared_session: bytes

    def __repr__(self) -> str:
        # shared_session is secret
        return (
            f"SRPProofs(client_ephemeral=<{len(self.client_ephemeral)} bytes>, "
            f"client_proof=<{len(self.client_proof)} bytes>, "
            f"expected_server_proof=<{len(self.expected_server_proof)} bytes>, "
            f"shared_session=<hidden>)"
        )


class SRPProofEngine:
    """
    One SRP-6a client computation.

    Responsibilities
    ----------------
    * Validate N and B
    * Compute k, a, A and u
    * Derive the shared session S
    * Compute client proof M1 and expected server proof M2
    """

    def __init__(
        self,
        byte_length: int,
        modulus: bytes,
        server_ephemeral: bytes,
        generator: int | None = None,
        random_bytes: Callable[[int], bytes] | None = None,
    ) -> None:
        """
        Args:
            byte_length (int): Size of N, A, B and S on the wire.
            modulus (bytes): N, little-endian.
            server_ephemeral (bytes): B, little-endian.
            generator (int | None): g, configured value when omitted.
            random_bytes (Callable | None): Secure random source.
        """
        self.byte_length = byte_length
        self.modulus_bytes = bytes(modulus)
        self.server_ephemeral_bytes = bytes(server_ephemeral)
        self.generator = generator if generator is not None else int(crypto["generator"])
        self.random_bytes = random_bytes or CryptoProxy.random_bytes

        self.modulus = le_to_int(self.modulus_bytes)
        if len(self.modulus_bytes) != byte_length or int_byte_length(self.modulus) != byte_length:
            raise ModulusSizeError()

        if len(self.server_ephemeral_bytes) != byte_length:
            raise ServerEphemeralSizeError()

        self.server_ephemeral = le_to_int(self.server_ephemeral_bytes)
        if mod(self.server_ephemeral, self.modulus) == 0:
            raise ServerEphemeralOutOfBoundsError()

    # ------------------------------------------------------------------
    def compute_multiplier(self) -> int:
        """k = H(pad(g) | N), reduced mod N."""
        hashed = srp_hasher(int_to_le(self.generator, self.byte_length), self.modulus_bytes)
        return mod(le_to_int(hashed), self.modulus)

    # ------------------------------------------------------------------
    def generate_client_secret(self) -> tuple[int, int, bytes, int]:
        """
        Draw a fresh secret a and derive A and u from it.

        Returns:
            (a, A, A_bytes, u)
        """
        # Same lower bound as the reference client; also redraw on A == 0 or u == 0
        lower_bound = self.byte_length * 2

        while True:
            secret = le_to_int(self.random_bytes(self.byte_length))
            if secret <= lower_bound:
                continue

            client_ephemeral = mod_exp(self.generator, secret, self.modulus)
            if client_ephemeral == 0:
                continue

            client_ephemeral_bytes = int_to_le(client_ephemeral, self.byte_length)
            scrambling = le_to_int(srp_hasher(client_ephemeral_bytes, self.server_ephemeral_bytes))
            if scrambling == 0:
                continue

            return secret, client_ephemeral, client_ephemeral_bytes, scrambling

    # ------------------------------------------------------------------
    def compute_shared_session(self, hashed_password: int, secret: int, scrambling: int) -> bytes:
        """S = (B - k * g^x)^(a + u * x) mod N, little-endian."""
        multiplier = self.compute_multiplier()
        verifier = mod_exp(self.generator, hashed_password, self.modulus)

        base = mod(self.server_ephemeral - mod(multiplier * verifier, self.modulus), self.modulus)
        exponent = secret + scrambling * hashed_password

        shared = mod_exp(base, exponent, self.modulus)
        return int_to_le(shared, self.byte_length)

    # ------------------------------------------------------------------
    def compute_proofs(self, hashed_password: bytes) -> SRPProofs:
        x = le_to_int(hashed_password)

        secret, _, client_ephemeral_bytes, scrambling = self.generate_client_secret()
        shared_session = self.compute_shared_session(x, secret, scrambling)

        client_proof = srp_hasher(client_ephemeral_bytes, self.server_ephemeral_bytes, shared_session)
        expected_server_proof = srp_hasher(client_ephemeral_bytes, client_proof, shared_session)

        Logger.debug("Generated SRP client proofs")
        return SRPProofs(
            client_ephemeral=client_ephemeral_bytes,
            client_proof=client_proof,
            expected_server_proof=expected_server_proof,
            shared_session=shared_session,
        )


def generate_proofs(
    byte_length: int,
    modulus: bytes,
    hashed_password: bytes,
    server_ephemeral: bytes,
    random_bytes: Callable[[int], bytes] | None = None,
) -> SRPProofs:
    """
    Run the SRP-6a client side once.

    Raises:
        ModulusSizeError: N is not byte_length bytes long.
        ServerEphemeralSizeError: B is not byte_length bytes long.
        ServerEphemeralOutOfBoundsError: B mod N == 0.
    """
    engine = SRPProofEngine(
        byte_length,
        modulus,
        server_ephemeral,
        random_bytes=random_bytes,
    )
    return engine.compute_proofs(hashed_password)
