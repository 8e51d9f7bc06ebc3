"""Customer Routes — searchable customer table and the invoice form's customer select.

Invariants:
    - Read-only: customers are never written through the API
    - A query matching nothing returns [] with 200, not an error
"""

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_query_service
from app.schemas.customer import CustomerOption, CustomerSummary
from app.services.query_service import QueryService

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("", response_model=list[CustomerSummary])
async def list_customers(
    query: str = Query(""),
    service: QueryService = Depends(get_query_service),
):
    """Customers with invoice counts and pending/paid totals."""
    return await service.list_customers(query)


@router.get("/options", response_model=list[CustomerOption])
async def list_customer_options(
    service: QueryService = Depends(get_query_service),
):
    return await service.fetch_customer_options()
