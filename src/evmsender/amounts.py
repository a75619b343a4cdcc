"""Conversion of human-readable amounts to smallest-unit integers.

Amounts arrive as decimal strings ("1.5") and leave as exact integers in
the chain's smallest unit (wei for 18 decimals). Float never touches the
value: the decimal digits are scaled with integer arithmetic.
"""

import re
from decimal import Context, Decimal, InvalidOperation
from functools import reduce

from evmsender.errors import InvalidAmountFormat

# Native values are uint256 on EVM chains
MAX_UINT256 = 2**256 - 1
MAX_UINT256_DIGITS = len(str(MAX_UINT256))

# Plain decimal notation only: no exponents, underscores or special values
_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_decimal(amount_str: str) -> Decimal:
    """Parse a base-10 decimal string.

    Raises:
        InvalidAmountFormat: If the string is not a plain decimal number
    """
    if not isinstance(amount_str, str):
        raise InvalidAmountFormat(f"expected a decimal string, got {type(amount_str).__name__}")

    text = amount_str.strip()
    if not text:
        raise InvalidAmountFormat("amount is empty")
    if not _DECIMAL_RE.match(text):
        raise InvalidAmountFormat(f"'{amount_str}' is not a decimal number")

    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidAmountFormat(f"'{amount_str}' is not a decimal number")


def _fold_digits(digits) -> int:
    return reduce(lambda acc, d: acc * 10 + d, digits, 0)


def normalize(amount_str: str, precision: int = 18, *, strict: bool = False) -> int:
    """Convert a decimal amount string to an integer in the smallest unit.

    Fractional digits beyond ``precision`` are truncated toward zero unless
    ``strict`` is set, in which case they are rejected.

    Args:
        amount_str: Human-readable amount, e.g. "1.5"
        precision: Decimal places of the smallest unit (18 for wei)
        strict: Reject amounts that are not a whole number of smallest units

    Returns:
        Amount in the smallest unit

    Raises:
        InvalidAmountFormat: Malformed, negative or out-of-range amount
        ValueError: If precision is negative
    """
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"precision must be a non-negative integer, got {precision!r}")

    value = parse_decimal(amount_str)
    if value < 0:
        raise InvalidAmountFormat(f"amount must not be negative, got '{amount_str}'")

    if value and value.adjusted() + precision >= MAX_UINT256_DIGITS:
        raise InvalidAmountFormat(f"'{amount_str}' exceeds the maximum transferable value")

    _, digits, exponent = value.as_tuple()
    scale = exponent + precision

    if scale >= 0:
        result = _fold_digits(digits) * 10**scale
    else:
        result = _fold_digits(digits[:scale])
        if strict and any(digits[scale:]):
            raise InvalidAmountFormat(
                f"'{amount_str}' has more than {precision} fractional digits"
            )

    if result > MAX_UINT256:
        raise InvalidAmountFormat(f"'{amount_str}' exceeds the maximum transferable value")

    return result


def format_units(value: int, precision: int = 18) -> Decimal:
    """Convert a smallest-unit integer back to a human-readable Decimal."""
    if not value:
        return Decimal(0)
    exact = Context(prec=max(MAX_UINT256_DIGITS, abs(value).bit_length() // 3 + 2))
    return Decimal(value).scaleb(-precision, exact).normalize(exact)
