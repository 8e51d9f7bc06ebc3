"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId, CustomerId are opaque strings — never parsed, only compared
    - MinorUnits is an integer amount in cents; major-unit amounts are Decimal
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, compare equal to DB strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", str)
CustomerId = NewType("CustomerId", str)


# ─── Value Types ─────────────────────────────────────────────────

MinorUnits = NewType("MinorUnits", int)   # cents, always > 0 when persisted


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


# ─── Paths ───────────────────────────────────────────────────────

# Logical resource path of the invoice list: target of both the cache
# invalidation and the post-write redirect.
INVOICES_PATH: str = "/dashboard/invoices"
