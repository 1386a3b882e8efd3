#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Unit tests for the SDK-facing SRPModule adapter."""

import base64
import unittest
from unittest.mock import Mock

from modules.SRPModule import SRPModule
from modules.crypto.ModulusVerifier import ModulusVerifier
from modules.crypto.PasswordHasher import compute_key_password
from modules.crypto.SRPErrors import MissingUsernameError

TEST_MODULUS = bytes([0x07]) + bytes(254) + bytes([0xFF])
TEST_SERVER_EPHEMERAL = bytes([0x42]) + bytes(254) + bytes([0x80])


class TestSRPModule(unittest.TestCase):

    def setUp(self) -> None:
        verifier = Mock(spec=ModulusVerifier)
        verifier.verify_and_get_modulus.return_value = TEST_MODULUS
        self.module = SRPModule(verifier=verifier)
        self.server_ephemeral = base64.b64encode(TEST_SERVER_EPHEMERAL).decode()
        self.salt = base64.b64encode(b"0123456789").decode()

    def test_get_srp_keys(self) -> None:
        """get_srp returns the three base64 values under SDK key names."""
        result = self.module.get_srp(4, "signed", self.server_ephemeral, self.salt, "password")

        self.assertEqual(set(result), {"expectedServerProof", "clientProof", "clientEphemeral"})
        for value in result.values():
            self.assertEqual(len(base64.b64decode(value)), 256)

    def test_get_srp_legacy_version_needs_username(self) -> None:
        """Without a username, legacy versions cannot be hashed."""
        with self.assertRaises(MissingUsernameError):
            self.module.get_srp(1, "signed", self.server_ephemeral, self.salt, "password")

    def test_get_srp_verifier_unsupported(self) -> None:
        """Password changes are not supported."""
        with self.assertRaises(NotImplementedError):
            self.module.get_srp_verifier("password")

    def test_compute_key_password(self) -> None:
        """Delegates to compute_key_password."""
        key_salt = base64.b64encode(bytes(range(16))).decode()
        self.assertEqual(
            self.module.compute_key_password("password", key_salt),
            compute_key_password("password", key_salt),
        )


if __name__ == "__main__":
    unittest.main()
