"""Invoice ORM — persists a single bill issued to a customer.

Invariants:
    - amount is integer minor units (cents) and strictly positive (CHECK constraint)
    - status is one of: pending, paid (CHECK constraint)
    - date is an ISO calendar date string YYYY-MM-DD, set once at creation
    - customer_id must reference an existing customer (FK)

Design Decisions:
    - date as String(10), not DATE: lexical order == chronological order, and the
      search predicate can substring-match it without a dialect-specific cast
    - Index on (date, id): the list ordering (date DESC, id) is served by one index
"""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Invoice(Base):
    """Invoice entity — an amount owed by a customer."""
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount > 0", name="amount_positive"),
        CheckConstraint("status IN ('pending', 'paid')", name="status_valid"),
        Index("ix_invoices_date_id", "date", "id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    customer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customers.id"), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(
        String(10), nullable=False, default="pending",
    )

    # Relationships
    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices", lazy="raise",
    )
