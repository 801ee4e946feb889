import locale
import math
from typing import Optional, Tuple

MAX_FRACTION_DIGITS = 6


def _separators() -> Tuple[str, str]:
    """Return (decimal_point, grouping_separator) for the current locale."""
    conv = locale.localeconv()
    point = conv.get("decimal_point") or "."
    group = conv.get("thousands_sep") or ","
    if group == point:
        group = "," if point != "," else "."
    return point, group


def decimal_point() -> str:
    """Decimal point the display uses for the current locale."""
    return _separators()[0]


def format_number(value: float) -> str:
    """
    Format a number the way the display shows it: decimal notation,
    grouping separators and at most six fraction digits, trailing zeros dropped.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"

    text = f"{value:,.{MAX_FRACTION_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    point, group = _separators()
    if (point, group) == (".", ","):
        return text
    return text.replace(",", "\0").replace(".", point).replace("\0", group)


def parse_number(text: str) -> Optional[float]:
    """Parse display text back to a float; None if it is not a number."""
    if not isinstance(text, str):
        return None
    point, group = _separators()
    cleaned = text.strip().replace(group, "")
    if point != ".":
        cleaned = cleaned.replace(point, ".")
    if cleaned in ("", "-", ".", "-."):
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None
