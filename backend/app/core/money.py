"""Money — lossless conversion between major units (Decimal) and stored minor units (int).

Invariants:
    - Persisted amounts are integer cents; floats never touch an amount
    - to_minor_units rounds half-up to the cent (more than two decimals is a user typo, not an error)
    - from_minor_units(to_minor_units(x)) == x for every two-decimal x
    - No persisted amount exceeds MAX_MINOR_UNITS

Design Decisions:
    - Decimal over float: 125.50 * 100 must be exactly 12550
"""

from decimal import Decimal, ROUND_HALF_UP

from app.core.domain_types import MinorUnits

CENTS_PER_UNIT = 100
_CENT = Decimal("0.01")

# invoices.amount is a 32-bit INTEGER column
MAX_MINOR_UNITS = 2**31 - 1


def to_minor_units(amount: Decimal) -> MinorUnits:
    """Major units → integer cents, rounded half-up."""
    cents = (Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP) * CENTS_PER_UNIT)
    return MinorUnits(int(cents))


def from_minor_units(minor_units: int) -> Decimal:
    """Integer cents → major units with exactly two decimal places."""
    return (Decimal(minor_units) / CENTS_PER_UNIT).quantize(_CENT)


def format_currency(minor_units: int) -> str:
    """Format cents as a US dollar string, e.g. 123456 → '$1,234.56'."""
    major = from_minor_units(minor_units)
    sign = "-" if major < 0 else ""
    return f"{sign}${abs(major):,.2f}"
