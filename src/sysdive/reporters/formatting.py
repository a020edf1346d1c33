"""Value formatting helpers for the text report."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

MISSING = "N/A"
RULE = "=" * 60

BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB")


def format_number(value: float, places: Optional[int] = None) -> str:
    """Render a number without a trailing ``.0`` or trailing decimal zeros.

    With ``places``, the value is first rounded half-up to that many decimals
    (``2.005`` -> ``2.01``; ``2.00`` -> ``2``).
    """
    if isinstance(value, bool):
        return str(value)
    if places is not None:
        rounded = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        text = format(rounded, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def show(value: Any) -> str:
    """Render a scalar field, ``N/A`` when it is None or an empty string.

    Zero is a real value and renders as ``0``.
    """
    if value is None or value == "":
        return MISSING
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return str(value)


def format_bytes(num_bytes: Optional[float]) -> str:
    """Render a byte count in the largest base-1024 unit that keeps it >= 1.

    ``format_bytes(1536) == "1.5 KB"``, ``format_bytes(0) == "0 Bytes"``,
    ``format_bytes(None) == "N/A"``.
    """
    if num_bytes is None:
        return MISSING
    if num_bytes == 0:
        return "0 Bytes"

    exponent = int(math.floor(math.log(abs(num_bytes), 1024)))
    exponent = max(0, min(exponent, len(BYTE_UNITS) - 1))
    scaled = num_bytes / 1024**exponent

    # Rounding can carry into the next unit (1023.999 KB -> 1024 KB)
    if round(abs(scaled), 2) >= 1024 and exponent < len(BYTE_UNITS) - 1:
        exponent += 1
        scaled = num_bytes / 1024**exponent

    return f"{format_number(scaled, places=2)} {BYTE_UNITS[exponent]}"


def yes_no(flag: Any, yes: str = "Yes", no: str = "No") -> str:
    """Render a boolean flag; a missing flag counts as unset."""
    return yes if flag else no


def with_unit(value: Any, unit: str) -> str:
    """``show(value)`` followed by a unit, e.g. ``3200 MHz`` or ``N/A MHz``."""
    return f"{show(value)}{unit}"


def header(title: str) -> str:
    """Section header: a bracketed title framed by 60-character rules."""
    return f"\n{RULE}\n[ {title} ]\n{RULE}\n"


def subheader(title: str) -> str:
    return f"\n--- {title} ---\n"


def field_line(label: str, value: str, indent: str = "") -> str:
    """One ``Label : value`` report line with the label column padded."""
    width = 11 if indent else 13
    return f"{indent}{label.ljust(width)}: {value}\n"
