#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised by the SRP handshake.

Input errors mean the caller sent an incomplete or malformed request and must
fix it. Security errors mean the server's parameters were rejected and the
handshake must not continue. Failures inside hashlib, bcrypt or pgpy are not
wrapped and reach the caller as raised.
"""


class SRPError(Exception):
    """Base class for every error raised by the handshake core."""


# ----------------------------------------------------------------------
# Input errors
# ----------------------------------------------------------------------

class SRPInputError(SRPError, ValueError):
    """The request is missing a field or carries a malformed value."""


class MissingSaltError(SRPInputError):
    def __init__(self, message: str = "Missing salt") -> None:
        super().__init__(message)


class MissingUsernameError(SRPInputError):
    def __init__(self, message: str = "Missing username") -> None:
        super().__init__(message)


class UnsupportedAuthVersionError(SRPInputError):
    def __init__(self, version=None) -> None:
        message = "Unsupported auth version"
        if version is not None:
            message = f"{message}: {version}"
        super().__init__(message)
        self.version = version


class ModulusSizeError(SRPInputError):
    def __init__(self, message: str = "SRP modulus has incorrect size") -> None:
        super().__init__(message)


class ServerEphemeralSizeError(SRPInputError):
    def __init__(self, message: str = "SRP server ephemeral has incorrect size") -> None:
        super().__init__(message)


class MalformedBase64Error(SRPInputError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"Invalid base64 in {field_name}")
        self.field_name = field_name


# ----------------------------------------------------------------------
# Security rejections
# ----------------------------------------------------------------------

class SRPSecurityError(SRPError):
    """The server's parameters failed a security check."""


class ServerIdentityError(SRPSecurityError):
    def __init__(self, message: str = "Unable to verify server identity") -> None:
        super().__init__(message)


class ServerEphemeralOutOfBoundsError(SRPSecurityError):
    def __init__(self, message: str = "SRP server ephemeral is out of bounds") -> None:
        super().__init__(message)


class UsernameMismatchError(SRPSecurityError):
    def __init__(
        self,
        message: str = "Username does not match: please login with just your "
                       "ProtonMail username (without @protonmail.com or @protonmail.ch)",
    ) -> None:
        super().__init__(message)
