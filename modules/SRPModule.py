#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from modules.SRPHandshake import SRPClient
from modules.crypto.ModulusVerifier import ModulusVerifier
from modules.crypto.PasswordHasher import compute_key_password


class SRPModule:
    """
    SDK-facing SRP module.
    Thin adapter: the SDK never passes a username, so only auth
    versions 3 and 4 can succeed through get_srp().
    """

    def __init__(self, verifier: ModulusVerifier | None = None) -> None:
        self.verifier = verifier

    def get_srp(
        self,
        version: int,
        modulus: str,
        server_ephemeral: str,
        salt: str,
        password: str,
    ) -> dict:
        result = SRPClient.compute_handshake(
            "",
            password,
            salt,
            modulus,
            server_ephemeral,
            version,
            verifier=self.verifier,
        )
        return {
            "expectedServerProof": result.expected_server_proof,
            "clientProof": result.client_proof,
            "clientEphemeral": result.client_ephemeral,
        }

    def get_srp_verifier(self, password: str) -> dict:
        raise NotImplementedError(
            "get_srp_verifier is not implemented: password change is not supported"
        )

    def compute_key_password(self, password: str, salt: str) -> str:
        return compute_key_password(password, salt)
