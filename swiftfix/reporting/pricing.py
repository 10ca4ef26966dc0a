"""Price extraction from free-form price-range display strings."""

import re
from typing import Optional

_FIRST_NUMBER = re.compile(r"[0-9]+")


def extract_price(price_range: Optional[str]) -> int:
    """Representative numeric value of a price string.

    Anything mentioning "free" is 0. Otherwise thousands separators are
    dropped and the first run of digits is taken, so a range reports its
    lower bound and no currency conversion happens.

    Examples:
        >>> extract_price("₱3,500 - ₱12,000")
        3500
        >>> extract_price("Free")
        0
        >>> extract_price("₱1,000 Diagnostic")
        1000
        >>> extract_price("TBD")
        0
    """
    if not price_range or not isinstance(price_range, str):
        return 0
    if "free" in price_range.lower():
        return 0
    match = _FIRST_NUMBER.search(price_range.replace(",", ""))
    return int(match.group(0)) if match else 0
