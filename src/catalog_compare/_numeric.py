"""Rounding helper shared by the similarity scorer and the rating aggregate.

Python's builtin ``round`` uses banker's rounding (``round(0.5) == 0``);
scores shown to shoppers round ties away from zero instead, so
``round_half_up(60.5) == 61`` and ``round_half_up(4.25, 1) == 4.3``.

The value is routed through ``repr`` into ``Decimal`` so that a float such
as ``4.35`` (stored as 4.3499999...) still rounds the way it prints.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals, ties away from zero.

    Args:
        value:   Finite number to round.
        ndigits: Number of decimal places to keep (>= 0).

    Returns:
        The rounded value as a float.  Use ``int()`` on the result when
        ``ndigits == 0`` and an integer is wanted.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
