"""Invoice Routes — paginated list, point lookup, and form-driven create/update/delete.

Invariants:
    - Reads delegate to QueryService; writes delegate to MutationPipeline (no SQL here)
    - Write endpoints take untyped form bodies; the pipeline owns all validation
    - Ok → 303 redirect to the invoice list (or 204 when there is nowhere to go);
      Invalid → 422 FormState; Failed → 503 FormState. Never both errors and a redirect
    - List responses cached per (query, page) under INVOICES_PATH until the next write
    - A list render that raced a write is returned but not cached (generation check)

Design Decisions:
    - /pages registered before /{invoice_id} so it is not captured as an id
    - Form parsed with request.form(): urlencoded and multipart both accepted
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.dependencies import (
    get_mutation_pipeline, get_query_service, get_render_cache,
)
from app.core.domain_types import INVOICES_PATH
from app.core.form_state import Invalid, MutationResult, Ok
from app.core.pagination import generate_pagination
from app.infrastructure.render_cache import RenderCache
from app.schemas.invoice import InvoiceDetail, InvoicePage, InvoicePageCount
from app.schemas.invoice_form import first_values
from app.services.mutation_pipeline import MutationPipeline
from app.services.query_service import QueryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


async def _read_form(request: Request) -> dict[str, str]:
    form = await request.form()
    return first_values(form.multi_items())


def to_http_response(result: MutationResult) -> Response:
    """Translate a pipeline result into a redirect or a FormState body."""
    if isinstance(result, Ok):
        if result.redirect_to is None:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return RedirectResponse(
            result.redirect_to, status_code=status.HTTP_303_SEE_OTHER,
        )
    if isinstance(result, Invalid):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=result.state.to_dict(),
        )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=result.state.to_dict(),
    )


@router.get("", response_model=InvoicePage)
async def list_invoices(
    query: str = Query(""),
    page: int = Query(1, ge=1),
    service: QueryService = Depends(get_query_service),
    cache: RenderCache = Depends(get_render_cache),
):
    """Invoice table page with pager data."""
    key = (query, page)
    generation = cache.generation(INVOICES_PATH)
    cached = cache.get(INVOICES_PATH, key)
    if cached is not None:
        return cached

    invoices = await service.list_invoices(query, page)
    pages = await service.count_invoice_pages(query)
    body = InvoicePage(
        query=query,
        page=page,
        total_pages=pages,
        pagination=generate_pagination(page, pages),
        invoices=invoices,
    )
    cache.put(INVOICES_PATH, key, body, generation)
    return body


@router.get("/pages", response_model=InvoicePageCount)
async def count_invoice_pages(
    query: str = Query(""),
    service: QueryService = Depends(get_query_service),
):
    pages = await service.count_invoice_pages(query)
    return InvoicePageCount(query=query, total_pages=pages)


@router.get("/{invoice_id}", response_model=InvoiceDetail)
async def get_invoice(
    invoice_id: str, service: QueryService = Depends(get_query_service),
):
    """Invoice for the edit form. 404 when it does not exist."""
    return await service.fetch_invoice_by_id(invoice_id)


@router.post("")
async def create_invoice(
    request: Request,
    pipeline: MutationPipeline = Depends(get_mutation_pipeline),
):
    form = await _read_form(request)
    result = await pipeline.create_invoice(None, form)
    return to_http_response(result)


@router.put("/{invoice_id}")
async def update_invoice(
    invoice_id: str,
    request: Request,
    pipeline: MutationPipeline = Depends(get_mutation_pipeline),
):
    form = await _read_form(request)
    result = await pipeline.update_invoice(invoice_id, None, form)
    return to_http_response(result)


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: str,
    pipeline: MutationPipeline = Depends(get_mutation_pipeline),
):
    result = await pipeline.delete_invoice(invoice_id)
    return to_http_response(result)
