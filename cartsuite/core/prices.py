# cartsuite/core/prices.py
"""Display-price normalization.

Storefront prices render as e.g. ``"$ 129.000"``: currency symbol,
non-breaking space and a dot as thousands separator. Validation always
compares normalized integers, never the raw strings.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional

_NON_DIGITS = re.compile(r"[^0-9]")


def price_digits(raw: Optional[str]) -> str:
    """Digits of `raw` in their original order ("" for None)."""
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)


def normalize_price(raw: Optional[str]) -> int:
    """
    Integer value of a display price; "" (or no digits at all) is 0.

    >>> normalize_price("$ 129.000")
    129000
    """
    digits = price_digits(raw)
    return int(digits, 10) if digits else 0


def sum_prices(raws: Iterable[Optional[str]]) -> int:
    return sum(normalize_price(r) for r in raws)


def same_price(a: Optional[str], b: Optional[str]) -> bool:
    return normalize_price(a) == normalize_price(b)


__all__ = ["price_digits", "normalize_price", "sum_prices", "same_price"]
