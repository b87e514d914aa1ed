from typing import Optional, Union

from .exceptions import InvalidCounter
from .utils import TimeLike, to_unix_time

DEFAULT_STEP = 30

# Counters are unsigned 64-bit values, i.e. 8 bytes / 16 hex digits.
COUNTER_BYTES = 8
MAX_COUNTER = 2 ** (COUNTER_BYTES * 8) - 1


def iteration(unix_time: TimeLike, step: Optional[float] = DEFAULT_STEP, offset: Union[int, str, None] = 0) -> int:
    """
    Number of whole steps since the Unix epoch, shifted by ``offset``.

    :param unix_time: seconds since the epoch (floats are floored) or a datetime
    :param step: seconds per step; falls back to 30 when falsy
    :param offset: steps to add, -1 for the previous window, 1 for the next;
        ``None`` or ``""`` mean 0
    :returns: ``floor(unix_time / step) + offset``
    """
    step = step or DEFAULT_STEP
    if step < 0:
        raise ValueError("step must be a positive number of seconds")
    if offset is None or offset == "":
        offset = 0
    return int(to_unix_time(unix_time) // step) + int(offset)


def int_to_bytestring(i: int, padding: int = COUNTER_BYTES) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret

    :raises InvalidCounter: if ``i`` is negative or wider than ``padding`` bytes
    """
    if i < 0:
        raise InvalidCounter("counter must not be negative, got {}".format(i))
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    if len(result) > padding:
        raise InvalidCounter("counter does not fit in {} bytes".format(padding))
    # Bytes come off least significant first, the HMAC wants them big-endian.
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def encode_counter(unix_time: TimeLike, step: Optional[float] = DEFAULT_STEP, offset: Union[int, str, None] = 0) -> bytes:
    """
    8-byte big-endian counter for the time step containing ``unix_time``.

    e.g. 1111111109 with a 30 second step is iteration 37037036,
    encoded as 00000000023523ec.
    """
    return int_to_bytestring(iteration(unix_time, step, offset))
