# smartlist/engine/price_normalizer.py

"""Turn free-form store price text into comparable numbers."""

import math
import re

# Anything that is not a digit or a decimal point is noise
_NON_NUMERIC_RE = re.compile(r"[^0-9.]")


def parse_price(text: str | None) -> float | None:
    """Extract a numeric price from text like ``'$12.50'`` or ``'€ 9.99'``.

    Every character other than digits and ``.`` is discarded before
    parsing, so currency symbols, whitespace and thousands separators
    vanish.  The parse is locale-naive: ``'12,50'`` becomes ``1250.0``,
    not ``12.5``.

    Returns ``None`` for empty input, input without digits, malformed
    remainders (``'1.2.3'``) and values that overflow to infinity.
    """
    if not text:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", text)
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
