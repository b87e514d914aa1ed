import hashlib
import logging
import time
from typing import Any, Callable, Optional

from . import utils
from .counter import DEFAULT_STEP, iteration
from .otp import OTP
from .utils import TimeLike

log = logging.getLogger(__name__)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = 6,
        digest: Any = None,
        legacy_truncation: bool = False,
        interval: int = DEFAULT_STEP,
    ) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param legacy_truncation: keep the unpadded "last N characters" codes
        """
        if digest is None:
            digest = hashlib.sha1

        self.interval = interval
        super().__init__(s=s, digits=digits, digest=digest, legacy_truncation=legacy_truncation)

    def at(self, for_time: TimeLike, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self, clock: Callable[[], float] = time.time) -> str:
        """
        Generate the current time OTP

        :param clock: source of the current Unix time
        :returns: OTP value
        """
        return self.at(clock())

    def verify(self, otp: str, for_time: Optional[TimeLike] = None, valid_window: int = 1) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        A mismatch is reported as False, never raised. Only a malformed
        secret raises (InvalidSecret).

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        # Decode up front so a bad secret fails even if every counter is skipped.
        self.byte_secret()
        if for_time is None:
            for_time = time.time()

        otp = str(otp)
        current = self.timecode(for_time)
        for i in range(-valid_window, valid_window + 1):
            if current + i < 0:
                continue
            if utils.strings_equal(otp, self.generate_otp(current + i)):
                log.debug("totp accepted at window offset %d", i)
                return True
        log.debug("totp rejected, no match within %d step(s)", valid_window)
        return False

    def timecode(self, for_time: TimeLike) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).
        """
        return iteration(for_time, self.interval)


def totp(secret: str, now: Optional[TimeLike] = None, step: int = DEFAULT_STEP, digits: int = 6, legacy_truncation: bool = False) -> str:
    """
    Code for ``secret`` in the time step containing ``now`` (default: the current time).
    """
    if now is None:
        now = time.time()
    return TOTP(secret, digits=digits, legacy_truncation=legacy_truncation, interval=step).at(now)


def verify(
    secret: str,
    code: str,
    now: Optional[TimeLike] = None,
    step: int = DEFAULT_STEP,
    digits: int = 6,
    legacy_truncation: bool = False,
) -> bool:
    """
    Checks ``code`` against the previous, current and next time steps.

    No replay protection: a code stays valid for the whole window. Callers
    that need single use must remember accepted counters themselves.
    """
    handler = TOTP(secret, digits=digits, legacy_truncation=legacy_truncation, interval=step)
    return handler.verify(code, for_time=now, valid_window=1)
