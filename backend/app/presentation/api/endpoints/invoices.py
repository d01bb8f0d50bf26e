"""Invoice endpoints: payments carrying an invoice number."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.common import PageResponse
from app.application.schemas.invoice import InvoiceResponse, InvoiceSummaryResponse, InvoiceWrite
from app.application.services import InvoiceService
from app.domain.entities import InvoiceQuery, PageRequest, PaymentStatus, PaymentType, Sort
from app.infrastructure.dependencies import get_current_user, get_invoice_service
from app.presentation.api.errors import DOMAIN_ERRORS, http_error
from app.presentation.api.params import page_request, to_page_response

router = APIRouter(prefix="/invoices", tags=["Invoices"], dependencies=[Depends(get_current_user)])

INVOICE_SORTS = frozenset({"number", "amount", "status", "client", "duedate", "createdat", "date"})


def invoice_query(
    from_date: date | None = Query(None, alias="from", description="Invoice date lower bound"),
    to_date: date | None = Query(None, alias="to"),
    invoice_status: PaymentStatus | None = Query(None, alias="status"),
    type: PaymentType | None = Query(None),
    client_id: int | None = Query(None, alias="clientId"),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
) -> InvoiceQuery:
    return InvoiceQuery(
        from_date=from_date,
        to_date=to_date,
        status=invoice_status.value if invoice_status else None,
        type=type.value if type else None,
        client_id=client_id,
        search=search,
        sort=Sort.parse(sort_by, sort_dir, INVOICE_SORTS, "date", default_descending=True),
    )


@router.get("", response_model=PageResponse[InvoiceResponse])
async def list_invoices(
    query: InvoiceQuery = Depends(invoice_query),
    responsible_id: int | None = Query(None, alias="responsibleId"),
    page: PageRequest = Depends(page_request),
    service: InvoiceService = Depends(get_invoice_service),
) -> PageResponse[InvoiceResponse]:
    result = await service.list_invoices(query, page, responsible_id)
    return to_page_response(result, lambda item: item)


@router.get("/summary", response_model=InvoiceSummaryResponse)
async def invoice_summary(
    query: InvoiceQuery = Depends(invoice_query),
    responsible_id: int | None = Query(None, alias="responsibleId"),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceSummaryResponse:
    """Total, pending, paid and overdue amount and count under the same filters."""
    return await service.summary(query, responsible_id)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    try:
        return await service.get_invoice(invoice_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    data: InvoiceWrite,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    try:
        return await service.create_invoice(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: int,
    data: InvoiceWrite,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    try:
        return await service.update_invoice(invoice_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: int,
    service: InvoiceService = Depends(get_invoice_service),
) -> None:
    try:
        await service.delete_invoice(invoice_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
