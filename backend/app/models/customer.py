"""Customer ORM — persists the people invoices are billed to.

Invariants:
    - id is an opaque string primary key (UUID text by default)
    - name and email are non-nullable and non-empty (CHECK constraints)
    - Customers are read-only from the API's perspective (created by seeding)

Design Decisions:
    - image_url stored as a path or URL string, never as binary
    - invoices relationship is lazy="raise": every read path uses explicit joins
"""

import uuid

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Customer(Base):
    """Customer entity — owner of zero or more invoices."""
    __tablename__ = "customers"
    __table_args__ = (
        CheckConstraint("length(name) > 0", name="name_not_empty"),
        CheckConstraint("length(email) > 0", name="email_not_empty"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Relationships
    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", back_populates="customer", lazy="raise",
    )
