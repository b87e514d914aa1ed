import hashlib
import hmac
from typing import Any

from . import utils
from .counter import COUNTER_BYTES, int_to_bytestring
from .exceptions import InvalidCounter


def dynamic_truncate(hmac_hash: bytes) -> int:
    """
    RFC 4226 dynamic truncation: picks 4 bytes of the digest at the offset
    named by its last nibble and folds them into a 31-bit integer.
    """
    offset = hmac_hash[-1] & 0xF
    # The top bit of the first byte is masked off so the value is never
    # negative when read as a signed 32-bit int.
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def format_code(code: int, digits: int = 6, legacy_truncation: bool = False) -> str:
    """
    Reduces a truncated integer to a ``digits`` long decimal string.

    :param legacy_truncation: take the last ``digits`` characters of ``str(code)``
        without left padding, as older deployments did. Only differs from the
        default when ``code`` itself has fewer than ``digits`` digits.
    """
    if legacy_truncation:
        return str(code)[-digits:]
    # 10_000_000_000 is one digit wider than the largest supported code, so
    # slicing keeps the leading zeros of the modulo.
    return str(10_000_000_000 + (code % 10**digits))[-digits:]


# OTP (base class)


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: str,
        digits: int = 6,
        digest: Any = hashlib.sha1,
        legacy_truncation: bool = False,
    ) -> None:
        self.digits = digits
        if digits > 10:
            raise ValueError("digits must be no greater than 10")
        self.digest = digest
        if digest in [hashlib.md5, hashlib.shake_128]:
            raise ValueError("selected digest function must generate digest size greater than or equals to 18 bytes")
        self.secret = s
        self.legacy_truncation = legacy_truncation

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return self.generate_from_bytes(int_to_bytestring(input))

    def generate_from_bytes(self, counter: bytes) -> str:
        """
        :param counter: the 8-byte big-endian counter fed to the HMAC
        """
        if len(counter) != COUNTER_BYTES:
            raise InvalidCounter("counter must be exactly {} bytes, got {}".format(COUNTER_BYTES, len(counter)))
        hasher = hmac.new(self.byte_secret(), counter, self.digest)
        if hasher.digest_size < 18:
            raise ValueError("digest size is lower than 18 bytes, which will trigger error on otp generation")
        code = dynamic_truncate(hasher.digest())
        return format_code(code, self.digits, self.legacy_truncation)

    def byte_secret(self) -> bytes:
        return utils.decode_secret(self.secret)
