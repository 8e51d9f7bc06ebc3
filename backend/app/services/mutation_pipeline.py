"""Mutation Pipeline — validate → persist → invalidate → redirect, one invoice write per call.

Invariants:
    - Validation completes before any statement is issued; Invalid never touches the store
    - Exactly one single-row statement per call, committed before invalidation
    - Invalidation happens only after a successful commit, and before the Ok is returned
    - Store failures collapse to one generic Failed reason per operation (logged, never retried)
    - Update of an unknown id is Failed (same reason as a store failure); delete of one is Ok

Design Decisions:
    - Results are values (Ok | Invalid | Failed), not exceptions: the HTTP layer maps them
      to a redirect or a FormState body without try/except
    - Issue date derived from an injected clock (UTC calendar date by default) so tests are deterministic
    - prev_state is accepted for form-action parity (the UI passes back the last FormState)
      but never consulted: every submission is validated from scratch
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Mapping

from sqlalchemy import delete, update

from app.core.domain_types import INVOICES_PATH, InvoiceId
from app.core.errors import DatabaseError
from app.core.form_state import Failed, FormState, Invalid, MutationResult, Ok
from app.core.money import to_minor_units
from app.core.repository_protocols import PathInvalidator, SessionProvider
from app.models.invoice import Invoice
from app.schemas.invoice_form import InvoiceForm, validate_invoice_form

logger = logging.getLogger(__name__)

CREATE_INVALID_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_INVALID_MESSAGE = "Missing Fields. Failed to Update Invoice."
CREATE_FAILED_MESSAGE = "Database Error: Failed to Create Invoice."
UPDATE_FAILED_MESSAGE = "Database Error: Failed to Update Invoice."
DELETE_FAILED_MESSAGE = "Database Error: Failed to Delete Invoice."


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class MutationPipeline:
    """Write side of the dashboard: create, update, delete invoices."""

    def __init__(
        self,
        store: SessionProvider,
        invalidator: PathInvalidator,
        today: Callable[[], date] = utc_today,
    ):
        self._store = store
        self._invalidator = invalidator
        self._today = today

    async def create_invoice(
        self, prev_state: FormState | None, form: Mapping[str, str],
    ) -> MutationResult:
        """Insert a new invoice dated today. Ok redirects to the invoice list."""
        parsed = validate_invoice_form(form)
        if not isinstance(parsed, InvoiceForm):
            return Invalid(FormState(errors=parsed, message=CREATE_INVALID_MESSAGE))

        invoice = Invoice(
            customer_id=parsed.customer_id,
            amount=to_minor_units(parsed.amount),
            status=parsed.status.value,
            date=self._today().isoformat(),
        )
        try:
            async with self._store.session() as db:
                db.add(invoice)
                await db.commit()
        except DatabaseError as e:
            logger.error(
                f"Failed to create invoice: {e.message}",
                extra={
                    "error_code": e.code,
                    "customer_id": parsed.customer_id,
                    "operation": "create_invoice",
                },
            )
            return Failed(CREATE_FAILED_MESSAGE)

        logger.info(
            f"Created invoice {invoice.id}",
            extra={"invoice_id": invoice.id, "customer_id": invoice.customer_id},
        )
        return self._committed(redirect_to=INVOICES_PATH)

    async def update_invoice(
        self, invoice_id: InvoiceId, prev_state: FormState | None, form: Mapping[str, str],
    ) -> MutationResult:
        """Overwrite customer, amount and status of an existing invoice. Date is kept."""
        parsed = validate_invoice_form(form)
        if not isinstance(parsed, InvoiceForm):
            return Invalid(FormState(errors=parsed, message=UPDATE_INVALID_MESSAGE))

        stmt = (
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(
                customer_id=parsed.customer_id,
                amount=to_minor_units(parsed.amount),
                status=parsed.status.value,
            )
        )
        try:
            async with self._store.session() as db:
                result = await db.execute(stmt)
                matched = result.rowcount
                await db.commit()
        except DatabaseError as e:
            logger.error(
                f"Failed to update invoice {invoice_id}: {e.message}",
                extra={
                    "error_code": e.code,
                    "invoice_id": invoice_id,
                    "operation": "update_invoice",
                },
            )
            return Failed(UPDATE_FAILED_MESSAGE)

        if not matched:
            logger.warning(
                f"Update matched no invoice {invoice_id}",
                extra={"invoice_id": invoice_id, "operation": "update_invoice"},
            )
            return Failed(UPDATE_FAILED_MESSAGE)

        logger.info(f"Updated invoice {invoice_id}", extra={"invoice_id": invoice_id})
        return self._committed(redirect_to=INVOICES_PATH)

    async def delete_invoice(self, invoice_id: InvoiceId) -> MutationResult:
        """Delete by id. Unknown ids are a successful no-op."""
        try:
            async with self._store.session() as db:
                result = await db.execute(
                    delete(Invoice).where(Invoice.id == invoice_id),
                )
                deleted = result.rowcount
                await db.commit()
        except DatabaseError as e:
            logger.error(
                f"Failed to delete invoice {invoice_id}: {e.message}",
                extra={
                    "error_code": e.code,
                    "invoice_id": invoice_id,
                    "operation": "delete_invoice",
                },
            )
            return Failed(DELETE_FAILED_MESSAGE)

        logger.info(
            f"Deleted invoice {invoice_id} ({deleted} row(s))",
            extra={"invoice_id": invoice_id},
        )
        return self._committed(redirect_to=None)

    def _committed(self, redirect_to: str | None) -> Ok:
        self._invalidator.revalidate_path(INVOICES_PATH)
        return Ok(redirect_to=redirect_to)
