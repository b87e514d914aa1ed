import hashlib

import pytest

from totpcore import HOTP, InvalidCounter, InvalidSecret, encode_counter, generate_code
from totpcore.counter import int_to_bytestring
from totpcore.otp import dynamic_truncate, format_code

# base32 of the ASCII key "12345678901234567890" from RFC 4226 Appendix D
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

RFC4226_CODES = [
    "755224",
    "287082",
    "359152",
    "969429",
    "338314",
    "254676",
    "287922",
    "162583",
    "399871",
    "520489",
]


@pytest.mark.parametrize("count, code", list(enumerate(RFC4226_CODES)))
def test_rfc4226_vectors(count, code):
    assert HOTP(RFC_SECRET).at(count) == code
    assert generate_code(int_to_bytestring(count), RFC_SECRET) == code


def test_dynamic_truncation_rfc4226_digests():
    # HMAC-SHA1 values for counts 0 and 7 from RFC 4226 Appendix D
    assert dynamic_truncate(bytes.fromhex("cc93cf18508d94934c64b65d8ba7667fb7cde4b0")) == 1284755224
    assert dynamic_truncate(bytes.fromhex("a4fb960c0bc06e1eabb804e5b397cdc4b45596fa")) == 82162583


def test_format_code_pads_with_zeros():
    assert format_code(82162583) == "162583"
    assert format_code(1234) == "001234"
    assert format_code(1284755224, digits=8) == "84755224"


def test_legacy_truncation_keeps_short_codes_unpadded():
    assert format_code(1234, legacy_truncation=True) == "1234"
    assert format_code(82162583, legacy_truncation=True) == "162583"


def test_legacy_truncation_matches_rfc_vectors():
    hotp = HOTP(RFC_SECRET, legacy_truncation=True)
    assert [hotp.at(i) for i in range(10)] == RFC4226_CODES


def test_whitespace_in_secret_is_ignored():
    counter = encode_counter(1111111109)
    assert generate_code(counter, "ABCD EFGH IJKL MNOP QRST") == generate_code(counter, "ABCDEFGHIJKLMNOPQRST")
    assert generate_code(counter, "GEZD GNBV GY3T QOJQ\nGEZD GNBV GY3T QOJQ") == generate_code(counter, RFC_SECRET)


def test_secret_is_case_insensitive():
    assert HOTP(RFC_SECRET.lower()).at(0) == "755224"


@pytest.mark.parametrize("secret", ["", "   ", "ABC!DEFG", "A", "01234567", "GEZDGNBVGY3TQOJÄ", "éééééééé"])
def test_invalid_secret_raises(secret):
    with pytest.raises(InvalidSecret):
        generate_code(encode_counter(0), secret)


def test_invalid_secret_is_a_value_error():
    with pytest.raises(ValueError):
        HOTP("not base32!").at(0)


def test_counter_buffer_must_be_eight_bytes():
    with pytest.raises(InvalidCounter):
        generate_code(b"\0" * 7, RFC_SECRET)


def test_negative_count_is_rejected():
    with pytest.raises(InvalidCounter):
        HOTP(RFC_SECRET).at(-1)


def test_single_bit_change_in_secret_changes_codes():
    # "12345678901234567890" with the low bit of the first byte flipped
    flipped = "GAZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    hotp = HOTP(flipped)
    assert [hotp.at(i) for i in range(10)] != RFC4226_CODES


def test_initial_count_offsets_at():
    assert HOTP(RFC_SECRET, initial_count=5).at(2) == RFC4226_CODES[7]


def test_verify():
    hotp = HOTP(RFC_SECRET)
    assert hotp.verify("755224", 0)
    assert hotp.verify(287082, 1)
    assert not hotp.verify("755224", 1)
    assert not hotp.verify("000000", 0)


def test_digits_configuration():
    with pytest.raises(ValueError):
        HOTP(RFC_SECRET, digits=11)
    assert len(HOTP(RFC_SECRET, digits=8).at(0)) == 8


def test_weak_digest_is_rejected():
    with pytest.raises(ValueError):
        HOTP(RFC_SECRET, digest=hashlib.md5)


def test_all_zero_key_at_counter_zero():
    # 20 zero bytes; HMAC-SHA1 dab69ad98e28764f977ee2487e4f3f6873b2a297, offset 7
    zero_key = "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
    assert dynamic_truncate(bytes.fromhex("dab69ad98e28764f977ee2487e4f3f6873b2a297")) == 1335328482
    assert generate_code(b"\0" * 8, zero_key) == "328482"
    assert HOTP(zero_key).at(0) == "328482"
