import base64
import secrets
from typing import NamedTuple, Sequence

from .counter import encode_counter as encode_counter
from .exceptions import InvalidCounter as InvalidCounter
from .exceptions import InvalidSecret as InvalidSecret
from .exceptions import OTPError as OTPError
from .hotp import HOTP as HOTP
from .hotp import generate_code as generate_code
from .otp import OTP as OTP
from .totp import TOTP as TOTP
from .totp import totp as totp
from .totp import verify as verify
from .utils import normalize_secret

SECRET_BYTES = 20


class GeneratedSecret(NamedTuple):
    """The same random key as lowercase hex and as unpadded base32."""

    hex: str
    base32: str


def generate_secret(length: int = SECRET_BYTES) -> GeneratedSecret:
    """
    Generates a random secret of ``length`` bytes.

    20 bytes encode to 32 base32 characters, which read as 8 groups of 4.

    :param length: number of random bytes, at least 20 (160 bits)
    :returns: the secret in hex and base32 form
    """
    if length < SECRET_BYTES:
        raise ValueError("Secrets should be at least 160 bits")
    key = secrets.token_bytes(length)
    # The otpauth world does not use base32 padding, and the decoders in
    # this package restore it, so it is dropped here.
    return GeneratedSecret(hex=key.hex(), base32=base64.b32encode(key).decode("ascii").rstrip("="))


def random_base32(length: int = 32, chars: Sequence[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567") -> str:
    # Note: secret lengths not divisible by 8 decode to a partial last byte.
    # Some third-party tools have bugs when dealing with such secrets.
    if length < 32:
        raise ValueError("Secrets should be at least 160 bits")

    return "".join(secrets.choice(chars) for _ in range(length))


def random_hex(length: int = 40, chars: Sequence[str] = "ABCDEF0123456789") -> str:
    if length < 40:
        raise ValueError("Secrets should be at least 160 bits")
    return "".join(secrets.choice(chars) for _ in range(length))


def format_secret(secret: str, group: int = 4) -> str:
    """
    Splits a base32 secret into space separated groups for display.

    "JBSWY3DPEHPK3PXP" -> "JBSW Y3DP EHPK 3PXP"

    Padding is dropped; every decoder in this package restores it.
    """
    secret = normalize_secret(secret).rstrip("=").upper()
    return " ".join(secret[i : i + group] for i in range(0, len(secret), group))
