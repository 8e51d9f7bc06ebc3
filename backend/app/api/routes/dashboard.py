"""Dashboard Routes — overview cards, revenue chart and latest invoices.

Invariants:
    - Every endpoint is a single QueryService call plus pure formatting
    - Failures surface as the generic FETCH_FAILED envelope (global handler)
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_query_service
from app.core.revenue_chart import generate_y_axis
from app.schemas.dashboard import CardSummary, RevenueChart
from app.schemas.invoice import InvoiceView
from app.services.query_service import QueryService

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/cards", response_model=CardSummary)
async def get_cards(service: QueryService = Depends(get_query_service)):
    return await service.fetch_card_summary()


@router.get("/revenue", response_model=RevenueChart)
async def get_revenue(service: QueryService = Depends(get_query_service)):
    """Monthly revenue with the y-axis scale for the bar chart."""
    months = await service.fetch_revenue()
    labels, top_label = generate_y_axis([m.revenue for m in months])
    return RevenueChart(months=months, y_axis_labels=labels, top_label=top_label)


@router.get("/latest-invoices", response_model=list[InvoiceView])
async def get_latest_invoices(service: QueryService = Depends(get_query_service)):
    return await service.fetch_latest_invoices()
