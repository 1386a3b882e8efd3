#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Big integer helpers for SRP.

Generic conversions always take an explicit Endianness. The SRP engine
talks little-endian on the wire and goes through int_to_le / le_to_int.
"""

from enum import Enum


class Endianness(Enum):
    BE = "big"
    LE = "little"


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Computes base^exponent mod modulus with square-and-multiply.

    Returns 0 for a modulus of 1.
    """
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    if exponent < 0:
        raise ValueError("exponent must be non-negative")
    if modulus == 1:
        return 0

    result = 1
    base %= modulus

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus

    return result


def mod(n: int, modulus: int) -> int:
    """Mathematical modulo: the result is in [0, modulus) even for negative n."""
    return ((n % modulus) + modulus) % modulus


def byte_length(n: int) -> int:
    """Minimal number of bytes needed to hold n; zero takes one byte."""
    if n == 0:
        return 1
    return (n.bit_length() + 7) // 8


def int_to_bytes(n: int, endianness: Endianness, length: int | None = None) -> bytes:
    """
    Serializes a non-negative integer.

    Without a length the minimal encoding is returned. A larger length pads
    with zero bytes on the most significant side: the front for big-endian,
    the back for little-endian.
    """
    if n < 0:
        raise ValueError("cannot encode a negative integer")

    size = byte_length(n)
    if length is not None and length > size:
        size = length

    return n.to_bytes(size, endianness.value)


def bytes_to_int(data: bytes, endianness: Endianness) -> int:
    """Inverse of int_to_bytes; empty or all-zero input decodes to 0."""
    return int.from_bytes(bytes(data), endianness.value)


def int_to_le(n: int, length: int | None = None) -> bytes:
    return int_to_bytes(n, Endianness.LE, length)


def le_to_int(data: bytes) -> int:
    return bytes_to_int(data, Endianness.LE)
