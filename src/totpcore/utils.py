import base64
import calendar
import datetime
import re
import time
from hmac import compare_digest
from typing import Union

from .exceptions import InvalidSecret

TimeLike = Union[int, float, datetime.datetime]

_WHITESPACE = re.compile(r"\s+")


def normalize_secret(secret: str) -> str:
    """
    Strips whitespace from a base32 secret and restores the ``=`` padding.

    Secrets are often shown to users in 4 character groups
    ("ABCD EFGH IJKL ..."), so any whitespace is dropped before decoding.
    """
    secret = _WHITESPACE.sub("", secret)
    # Base32 wants the length to be a multiple of 8; authenticator apps
    # usually hand out secrets without the trailing "=".
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    return secret


def decode_secret(secret: str) -> bytes:
    """
    Base32-decodes a secret to the raw key bytes fed to the HMAC.

    :param secret: secret in base32 format, case-insensitive, whitespace allowed
    :raises InvalidSecret: if the text is empty or not valid base32
    """
    if not isinstance(secret, str):
        raise InvalidSecret("secret must be a base32 string")
    normalized = normalize_secret(secret)
    try:
        key = base64.b32decode(normalized, casefold=True)
    except ValueError as e:
        raise InvalidSecret("secret is not valid base32: {}".format(e)) from e
    if not key:
        raise InvalidSecret("secret must not be empty")
    return key


def to_unix_time(for_time: TimeLike) -> float:
    """
    Converts a timestamp or datetime to seconds since the Unix epoch.

    Naive datetimes are taken as local time, aware ones are converted to UTC.
    """
    if isinstance(for_time, datetime.datetime):
        if not for_time.tzinfo:
            return time.mktime(for_time.timetuple())
        return calendar.timegm(for_time.utctimetuple())
    return for_time


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
