#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Unit tests for the username consistency rules."""

import unittest

from modules.crypto.SRPErrors import MissingUsernameError
from modules.crypto.UsernameCheck import check_username, clean_username


class TestCleanUsername(unittest.TestCase):

    def test_strips_separators_and_lowercases(self) -> None:
        """Dots, dashes and underscores go, case is folded."""
        self.assertEqual(clean_username("John.Doe-Smith_Jr"), "johndoesmithjr")

    def test_empty(self) -> None:
        """None and empty become an empty string."""
        self.assertEqual(clean_username(None), "")
        self.assertEqual(clean_username(), "")


class TestCheckUsername(unittest.TestCase):

    def test_modern_versions_always_pass(self) -> None:
        """v3+ needs no usernames at all."""
        self.assertTrue(check_username(3))
        self.assertTrue(check_username(4, "alice", "bob"))

    def test_version_2_normalizes(self) -> None:
        """v2 ignores separators and case."""
        self.assertTrue(check_username(2, "User.Name", "username"))
        self.assertTrue(check_username(2, "user_name", "User-Name"))
        self.assertFalse(check_username(2, "alice", "bob"))

    def test_version_1_case_insensitive_only(self) -> None:
        """v1 is stricter: separators matter."""
        self.assertTrue(check_username(1, "UserName", "username"))
        self.assertFalse(check_username(1, "user.name", "username"))
        self.assertFalse(check_username(0, "user_name", "username"))

    def test_missing_usernames(self) -> None:
        """Legacy versions need both usernames."""
        for version in (0, 1, 2):
            with self.assertRaisesRegex(MissingUsernameError, "Missing username"):
                check_username(version, "user", None)
            with self.assertRaises(MissingUsernameError):
                check_username(version, None, "user")


if __name__ == "__main__":
    unittest.main()
