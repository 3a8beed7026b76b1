"""Dollar formatting for tooltips, legends and edge labels."""

import math


def format_currency(value: float) -> str:
    """Compact dollar string: $1.7T, $650.0B, $12.5M, or the raw value."""
    if value >= 1e12:
        return f"${value / 1e12:.1f}T"
    if value >= 1e9:
        return f"${value / 1e9:.1f}B"
    if value >= 1e6:
        return f"${value / 1e6:.1f}M"
    return f"${value:g}"


def format_amount_label(amount: float) -> str:
    """
    Edge label for an investment amount, rounded to whole millions.

    Halves round up (2.5M -> $3M). Amounts of a billion or more switch
    to one-decimal billions.
    """
    millions = math.floor(amount / 1_000_000 + 0.5)
    if millions >= 1000:
        return f"${millions / 1000:.1f}B"
    return f"${millions}M"
