"""
Validation rules for the product entry form and the price-range filter.

Both validators are pure: they never raise for bad input and report every
problem as data. Each form field reports at most one message, the first rule
it fails; fields are checked independently of each other.
"""
from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from catalog.models.form_draft import FormDraft
from catalog.models.product import ProductCategory

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200

# digits, then optionally a dot and one or two digits; nothing else
PRICE_PATTERN = re.compile(r"[0-9]+(\.[0-9]{1,2})?")

# leading numeric prefix, the way browsers parse form numbers ("12abc" -> 12)
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?)0*([0-9]+)")

# longer digit runs are cut to their leading digits so int/str conversion never hits
# the interpreter limit (4300 digits by default)
MAX_INT_DIGITS = 4000

MSG_NAME_REQUIRED = "Product name is required"
MSG_NAME_TOO_SHORT = f"Product name must be at least {NAME_MIN_LENGTH} characters"
MSG_NAME_TOO_LONG = f"Product name must not exceed {NAME_MAX_LENGTH} characters"
MSG_PRICE_REQUIRED = "Price is required"
MSG_PRICE_NOT_POSITIVE = "Price must be a positive number"
MSG_PRICE_DECIMALS = "Price must have at most 2 decimal places"
MSG_CATEGORY_REQUIRED = "Category is required"
MSG_CATEGORY_UNKNOWN = "Category must be one of: " + ", ".join(ProductCategory.values())
MSG_STOCK_REQUIRED = "Stock quantity is required"
MSG_STOCK_INVALID = "Stock quantity must be a non-negative integer"
MSG_DESCRIPTION_TOO_LONG = f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters"

MSG_MIN_PRICE_INVALID = "Minimum price must be a positive number"
MSG_MAX_PRICE_INVALID = "Maximum price must be a positive number"
MSG_PRICE_RANGE_INVERTED = "Minimum price cannot be greater than maximum price"


@dataclass
class ValidationResult:
    field_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "field_errors": dict(self.field_errors)}


@dataclass
class PriceRangeResult:
    is_valid: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"is_valid": self.is_valid}
        if self.error is not None:
            out["error"] = self.error
        return out


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, ProductCategory):
        return value.value
    return value if isinstance(value, str) else str(value)


def parse_leading_float(raw: str) -> Optional[float]:
    """Parse the numeric prefix of `raw`. Returns None when there is none or it is not finite."""
    m = _FLOAT_PREFIX.match(raw)
    if not m:
        return None
    try:
        value = float(m.group(1))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_leading_int(raw: str) -> Optional[int]:
    """Truncating integer parse: "5.9" -> 5, "abc" -> None."""
    m = _INT_PREFIX.match(raw)
    if not m:
        return None
    sign, digits = m.groups()
    value = int(digits[:MAX_INT_DIGITS])
    return -value if sign == "-" else value


def text_length(text: str) -> int:
    """Length in UTF-16 code units, the way browser form limits count (an emoji is 2)."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def is_price_text(raw: str) -> bool:
    return PRICE_PATTERN.fullmatch(raw) is not None


def _check_name(raw: str) -> Optional[str]:
    name = raw.strip()
    if not name:
        return MSG_NAME_REQUIRED
    if text_length(name) < NAME_MIN_LENGTH:
        return MSG_NAME_TOO_SHORT
    if text_length(name) > NAME_MAX_LENGTH:
        return MSG_NAME_TOO_LONG
    return None


def _check_price(raw: str) -> Optional[str]:
    if not raw:
        return MSG_PRICE_REQUIRED
    price = parse_leading_float(raw)
    if price is None or price <= 0:
        return MSG_PRICE_NOT_POSITIVE
    # numeric check passed; the text itself may still be too loose ("10.999", "1e3")
    if not is_price_text(raw):
        return MSG_PRICE_DECIMALS
    return None


def _check_category(value: Any) -> Optional[str]:
    if not _text(value):
        return MSG_CATEGORY_REQUIRED
    if ProductCategory.coerce(value) is None:
        return MSG_CATEGORY_UNKNOWN
    return None


def _check_stock_quantity(raw: str) -> Optional[str]:
    if not raw:
        return MSG_STOCK_REQUIRED
    quantity = parse_leading_int(raw)
    if quantity is None or quantity < 0:
        return MSG_STOCK_INVALID
    return None


def _check_description(raw: str) -> Optional[str]:
    if raw and text_length(raw) > DESCRIPTION_MAX_LENGTH:
        return MSG_DESCRIPTION_TOO_LONG
    return None


def validate(draft: FormDraft) -> ValidationResult:
    """
    Validate a product form draft. The image is never validated.
    Returns a fresh ValidationResult; `draft` is not modified.
    """
    checks = (
        ("name", _check_name(_text(draft.name))),
        ("price", _check_price(_text(draft.price))),
        ("category", _check_category(draft.category)),
        ("stock_quantity", _check_stock_quantity(_text(draft.stock_quantity))),
        ("description", _check_description(_text(draft.description))),
    )
    result = ValidationResult({name: msg for name, msg in checks if msg is not None})
    if not result.is_valid:
        logger.debug("product form rejected: %s", sorted(result.field_errors))
    return result


def _is_price_bound(raw: str) -> bool:
    if not is_price_text(raw):
        return False
    # overflowing bounds ("9" * 400) parse to inf, which is still a valid bound
    return float(raw) >= 0


def validate_price_range(min_price: Optional[str], max_price: Optional[str]) -> PriceRangeResult:
    """
    Check a min/max price filter. Empty bounds mean "no bound"; the first failing
    rule wins.
    """
    lo = _text(min_price)
    hi = _text(max_price)
    if lo and not _is_price_bound(lo):
        return PriceRangeResult(False, MSG_MIN_PRICE_INVALID)
    if hi and not _is_price_bound(hi):
        return PriceRangeResult(False, MSG_MAX_PRICE_INVALID)
    if lo and hi and float(lo) > float(hi):
        return PriceRangeResult(False, MSG_PRICE_RANGE_INVERTED)
    return PriceRangeResult(True)
