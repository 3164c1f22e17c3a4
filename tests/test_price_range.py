import pytest

from catalog.core.validation import (
    MSG_MAX_PRICE_INVALID,
    MSG_MIN_PRICE_INVALID,
    MSG_PRICE_RANGE_INVERTED,
    validate_price_range,
)


@pytest.mark.parametrize(
    "lo,hi",
    [("", ""), ("20", "50"), ("20", "20"), ("0", ""), ("", "99.99"), ("9", "10"), (None, None)],
)
def test_valid_ranges(lo, hi):
    result = validate_price_range(lo, hi)
    assert result.is_valid is True
    assert result.error is None
    assert result.to_dict() == {"is_valid": True}


def test_min_greater_than_max_is_rejected():
    result = validate_price_range("50", "20")
    assert result.is_valid is False
    assert result.error == MSG_PRICE_RANGE_INVERTED


@pytest.mark.parametrize("lo", ["abc", "-1", "1.234", "1e2", "5."])
def test_malformed_min_is_rejected(lo):
    assert validate_price_range(lo, "").error == MSG_MIN_PRICE_INVALID


@pytest.mark.parametrize("hi", ["abc", "-1", "1.234"])
def test_malformed_max_is_rejected(hi):
    assert validate_price_range("", hi).error == MSG_MAX_PRICE_INVALID


def test_min_is_checked_before_max():
    result = validate_price_range("abc", "xyz")
    assert result.error == MSG_MIN_PRICE_INVALID
    assert result.to_dict() == {"is_valid": False, "error": MSG_MIN_PRICE_INVALID}


def test_bounds_beyond_float_range_are_still_valid():
    assert validate_price_range("9" * 400, "").is_valid is True
    assert validate_price_range("", "9" * 400).is_valid is True
    assert validate_price_range("10", "9" * 400).is_valid is True
    assert validate_price_range("9" * 400, "10").error == MSG_PRICE_RANGE_INVERTED
