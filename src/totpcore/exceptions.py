class OTPError(ValueError):
    """
    Base class for errors raised while generating or checking a code.

    Subclasses ValueError so callers catching the plain ValueError
    raised elsewhere in the package still see these.
    """


class InvalidSecret(OTPError):
    """
    The secret could not be decoded from base32.

    :param reason: short human-readable cause
    """

    def __init__(self, reason: str = "secret is not valid base32") -> None:
        self.reason = reason
        super().__init__(self.reason)


class InvalidCounter(OTPError):
    """
    The HMAC counter is negative or does not fit in 8 bytes.
    """

    def __init__(self, reason: str = "counter must fit in an unsigned 64-bit integer") -> None:
        self.reason = reason
        super().__init__(self.reason)
