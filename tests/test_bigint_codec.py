#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Unit tests for BigIntCodec."""

import unittest

from modules.crypto.BigIntCodec import (
    Endianness,
    byte_length,
    bytes_to_int,
    int_to_bytes,
    int_to_le,
    le_to_int,
    mod,
    mod_exp,
)


class TestModExp(unittest.TestCase):
    """Tests for square-and-multiply exponentiation."""

    def test_modulus_one_returns_zero(self) -> None:
        """Anything mod 1 is 0."""
        self.assertEqual(mod_exp(5, 3, 1), 0)
        self.assertEqual(mod_exp(0, 0, 1), 0)

    def test_zero_exponent_returns_one(self) -> None:
        """b^0 mod N is 1 for N >= 2."""
        for modulus in (2, 7, 2**127 - 1):
            self.assertEqual(mod_exp(12345, 0, modulus), 1)

    def test_matches_builtin_pow(self) -> None:
        """Results agree with pow() on small and 2048-bit operands."""
        self.assertEqual(mod_exp(4, 13, 497), 445)

        modulus = (1 << 2048) - 159
        base = (1 << 2047) + 12345
        exponent = (1 << 2040) + 999
        self.assertEqual(mod_exp(base, exponent, modulus), pow(base, exponent, modulus))

    def test_base_larger_than_modulus(self) -> None:
        """The base is reduced first."""
        self.assertEqual(mod_exp(100, 2, 7), pow(100, 2, 7))


class TestMod(unittest.TestCase):
    """Tests for the non-negative modulo."""

    def test_negative_numbers(self) -> None:
        """Negative inputs wrap into [0, m)."""
        self.assertEqual(mod(-1, 7), 6)
        self.assertEqual(mod(-14, 7), 0)
        self.assertEqual(mod(-(10**30) - 3, 10), 7)

    def test_range_and_periodicity(self) -> None:
        """mod(n, m) is in range and unchanged by adding m."""
        for n in (-50, -7, -1, 0, 1, 6, 7, 8, 123456789):
            for m in (1, 2, 7, 256):
                result = mod(n, m)
                self.assertGreaterEqual(result, 0)
                self.assertLess(result, m)
                self.assertEqual(result, mod(n + m, m))


class TestByteCodec(unittest.TestCase):
    """Tests for integer <-> bytes conversion."""

    def test_byte_length(self) -> None:
        """Minimal byte counts, with one byte for zero."""
        self.assertEqual(byte_length(0), 1)
        self.assertEqual(byte_length(1), 1)
        self.assertEqual(byte_length(255), 1)
        self.assertEqual(byte_length(256), 2)
        self.assertEqual(byte_length(1 << 2047), 256)

    def test_zero_encoding(self) -> None:
        """Zero is one zero byte, or zero padding of the requested length."""
        self.assertEqual(int_to_bytes(0, Endianness.BE), b"\x00")
        self.assertEqual(int_to_bytes(0, Endianness.LE, 4), b"\x00" * 4)

    def test_big_endian_pads_front(self) -> None:
        """Big-endian padding goes in front."""
        self.assertEqual(int_to_bytes(0x0102, Endianness.BE), b"\x01\x02")
        self.assertEqual(int_to_bytes(0x0102, Endianness.BE, 4), b"\x00\x00\x01\x02")

    def test_little_endian_pads_back(self) -> None:
        """Little-endian output is reversed, padding goes at the end."""
        self.assertEqual(int_to_bytes(0x0102, Endianness.LE), b"\x02\x01")
        self.assertEqual(int_to_bytes(0x0102, Endianness.LE, 4), b"\x02\x01\x00\x00")

    def test_short_length_keeps_natural_size(self) -> None:
        """A length smaller than needed does not truncate."""
        self.assertEqual(int_to_bytes(0x010203, Endianness.BE, 2), b"\x01\x02\x03")

    def test_decode(self) -> None:
        """Decoding honors the byte order; all-zero buffers decode to 0."""
        self.assertEqual(bytes_to_int(b"\x01\x02", Endianness.BE), 0x0102)
        self.assertEqual(bytes_to_int(b"\x01\x02", Endianness.LE), 0x0201)
        self.assertEqual(bytes_to_int(b"\x00" * 32, Endianness.LE), 0)
        self.assertEqual(bytes_to_int(b"", Endianness.BE), 0)

    def test_round_trip_with_padding(self) -> None:
        """bytes -> int -> bytes is lossless for both orders."""
        for value in (0, 1, 0xFF, 0x1234, (1 << 2048) - 1):
            for endianness in Endianness:
                encoded = int_to_bytes(value, endianness, 300)
                self.assertEqual(len(encoded), 300)
                self.assertEqual(bytes_to_int(encoded, endianness), value)

    def test_little_endian_helpers(self) -> None:
        """int_to_le / le_to_int are the LE specializations."""
        self.assertEqual(int_to_le(2, 4), b"\x02\x00\x00\x00")
        self.assertEqual(le_to_int(b"\x02\x00\x00\x00"), 2)

    def test_negative_rejected(self) -> None:
        """Negative integers have no encoding."""
        with self.assertRaises(ValueError):
            int_to_bytes(-1, Endianness.BE)


if __name__ == "__main__":
    unittest.main()
