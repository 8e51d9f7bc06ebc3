"""Date Formatting — ISO calendar dates to short human-readable labels.

Invariants:
    - Input is always YYYY-MM-DD (the stored invoice date format)
    - Output is US style: "Dec 6, 2022" (no leading zero on the day)
"""

import calendar
from datetime import date


def format_date_to_local(iso_date: str) -> str:
    """'2022-12-06' → 'Dec 6, 2022'."""
    d = date.fromisoformat(iso_date)
    return f"{calendar.month_abbr[d.month]} {d.day}, {d.year}"


def month_label(year_month: str) -> str:
    """'2023-06' → 'Jun'. Used for revenue chart buckets."""
    month = int(year_month.split("-")[1])
    return calendar.month_abbr[month]
