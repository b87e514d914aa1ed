import hashlib
from typing import Any

from . import utils
from .otp import OTP


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = 6,
        digest: Any = None,
        legacy_truncation: bool = False,
        initial_count: int = 0,
    ) -> None:
        """
        :param s: secret in base32 format
        :param initial_count: starting HMAC counter value, defaults to 0
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param legacy_truncation: keep the unpadded "last N characters" codes
        """
        if digest is None:
            digest = hashlib.sha1

        self.initial_count = initial_count
        super().__init__(s=s, digits=digits, digest=digest, legacy_truncation=legacy_truncation)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    def verify(self, otp: str, counter: int) -> bool:
        """
        Verifies the OTP passed in against the current counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        """
        return utils.strings_equal(str(otp), str(self.at(counter)))


def generate_code(
    counter: bytes,
    secret: str,
    digits: int = 6,
    digest: Any = None,
    legacy_truncation: bool = False,
) -> str:
    """
    Computes the HOTP code for an already encoded counter.

    :param counter: 8-byte big-endian counter, see :func:`totpcore.counter.encode_counter`
    :param secret: secret in base32 format; whitespace is ignored
    :returns: OTP
    :raises InvalidSecret: if the secret is not valid base32
    """
    hotp = HOTP(secret, digits=digits, digest=digest, legacy_truncation=legacy_truncation)
    return hotp.generate_from_bytes(counter)
