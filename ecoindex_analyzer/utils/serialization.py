"""Shared serialization helpers for the camelCase JSON payloads.

``snake_to_camel`` is the alias generator used by every pydantic
model; ``round_display`` is the rounding applied to displayed scores.
"""

from __future__ import annotations

import decimal


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as ``"dom_elements"``.

    Returns:
        The camelCase equivalent, e.g. ``"domElements"``.
    """
    parts = name.split("_")
    return parts[0] + "".join(w.capitalize() for w in parts[1:])


def round_display(value: float, digits: int = 2) -> float:
    """Round half away from zero to *digits* decimals.

    Python's ``round`` uses banker's rounding on binary floats, so
    ``round(2.675, 2)`` gives ``2.67``; displayed scores round the
    way a person would.
    """
    quantum = decimal.Decimal(1).scaleb(-digits)
    return float(decimal.Decimal(repr(value)).quantize(quantum, rounding=decimal.ROUND_HALF_UP))
