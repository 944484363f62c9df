import logging

from fastapi import APIRouter, Depends, status

from hyperinvoice.dependencies.services import get_invoice_service
from hyperinvoice.schemas.billing import (
    InvoiceCreateRequest,
    InvoiceGenerateRequest,
    InvoiceRecordResponse,
    InvoiceResponse,
)
from hyperinvoice.services import InvoiceService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=InvoiceResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def generate_invoice(
    req: InvoiceGenerateRequest,
    service: InvoiceService = Depends(get_invoice_service),
):
    logger.info("Received invoice generation request for booking %s", req.booking_id)
    return await service.generate(req.booking_id)


@router.post(
    "",
    response_model=InvoiceResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    req: InvoiceCreateRequest,
    service: InvoiceService = Depends(get_invoice_service),
):
    return await service.create(req)


@router.get("/{invoice_number}", response_model=InvoiceRecordResponse)
async def get_invoice(
    invoice_number: str,
    service: InvoiceService = Depends(get_invoice_service),
):
    return await service.get(invoice_number)
