"""Display formatting for dates and counters"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal


def format_date(value: str | None) -> str:
    """Format an ISO date as 'Jan 5, 2024'; 'Undated' when empty or unparseable."""
    if not value:
        return "Undated"
    try:
        dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return "Undated"
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_number(value: int | None) -> str:
    """Compact counter: 1234 -> '1.2k', 1250 -> '1.3k', falsy -> '0'."""
    if not value:
        return "0"
    if value > 999:
        # halves round up, 1250 is 1.3k
        compact = (Decimal(value) / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        text = f"{compact:f}"
        if text.endswith(".0"):
            text = text[:-2]
        return f"{text}k"
    return str(value)
