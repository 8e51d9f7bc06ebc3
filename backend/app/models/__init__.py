"""ORM Models — SQLAlchemy declarative models for customers and invoices.

Invariants:
    - All models inherit from Base (db/base.py)
    - Customer is referenced by Invoice.customer_id; invoices are never orphaned

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.customer import Customer  # noqa: F401
from app.models.invoice import Invoice  # noqa: F401
