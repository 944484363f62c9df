from __future__ import annotations

import asyncio
import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional

from hyperinvoice.config import AmountPolicy
from hyperinvoice.models.invoice import InvoiceRecord
from hyperinvoice.schemas.billing import (
    InvoiceCreateRequest,
    InvoiceRecordResponse,
    InvoiceResponse,
    LineItem,
    make_render_context,
)
from hyperinvoice.schemas.booking import BookingRecord
from hyperinvoice.services.amount_words import amount_to_words
from hyperinvoice.services.booking_gateway import BookingGateway
from hyperinvoice.services.exceptions import ConfigurationError, NotFoundError, ValidationFailure
from hyperinvoice.services.invoice_number import InvoiceNumberGenerator
from hyperinvoice.services.observability import LoggingPipelineObserver, PipelineObserver
from hyperinvoice.services.renderer import DocumentRenderer
from hyperinvoice.services.repository import InvoiceRepository
from hyperinvoice.services.storage import ObjectStoreUploader

logger = logging.getLogger(__name__)

GST_RATE = Decimal("0.18")
CENTS = Decimal("0.01")
ZERO = Decimal("0")

GENERATED_MESSAGE = "Invoice generated and delivered successfully!"
CREATED_MESSAGE = "Invoice generated successfully!"


def compute_tax(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(gst, total)`` for a net amount at the flat GST rate."""

    gst = (amount * GST_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)
    return gst, amount + gst


class InvoiceService:
    """Runs the invoice pipeline.

    ``generate`` walks fetched -> validated -> numbered -> rendered ->
    uploaded -> notified -> persisted, aborting on the first error. Nothing
    is retried or rolled back: if notifying the booking service fails the
    uploaded PDF stays in storage unreferenced.
    """

    def __init__(
        self,
        gateway: BookingGateway | None,
        renderer: DocumentRenderer,
        uploader: ObjectStoreUploader,
        *,
        number_generator: InvoiceNumberGenerator | None = None,
        repository: InvoiceRepository | None = None,
        observer: PipelineObserver | None = None,
        amount_policy: AmountPolicy = AmountPolicy.LENIENT,
        issuer_name: str = "HyperInvoice",
        default_currency: str = "INR",
        template_name: str = "invoice.html",
        today: Callable[[], date] = date.today,
    ) -> None:
        self._gateway = gateway
        self._renderer = renderer
        self._uploader = uploader
        self._numbers = number_generator or InvoiceNumberGenerator()
        self._repository = repository
        self._observer = observer or LoggingPipelineObserver()
        self._amount_policy = AmountPolicy(amount_policy)
        self._issuer_name = issuer_name
        self._default_currency = default_currency
        self._template_name = template_name
        self._today = today

    async def generate(self, booking_id: int) -> InvoiceResponse:
        logger.info("Starting invoice generation for booking %s", booking_id)
        if self._gateway is None:
            raise ConfigurationError("Booking gateway not configured")
        observer = self._observer

        with observer.step("fetched", booking_id=booking_id):
            booking = await self._gateway.fetch_booking(booking_id)

        with observer.step("validated", booking_id=booking_id):
            self._validate(booking)
            amount = self._select_amount(booking)

        with observer.step("numbered"):
            invoice_number = self._numbers.generate()
        observer.event("invoice_number", booking_id=booking_id, invoice_number=invoice_number)

        context = self._booking_context(booking, invoice_number, amount)
        document_url = await self._render_and_upload(context, invoice_number)

        target_id = booking.id if booking.id is not None else booking_id
        with observer.step("notified", booking_id=target_id):
            await self._gateway.notify_invoice_ready(target_id, document_url)

        record = await self._persist(
            InvoiceRecord(
                invoice_number=invoice_number,
                booking_id=target_id,
                customer_name=booking.customer.name,
                customer_email=booking.customer.email,
                amount=context["invoice_total"],
                invoice_date=context["invoice_date"],
                document_url=document_url,
            )
        )
        return InvoiceResponse(
            id=record.id if record else None,
            invoice_number=invoice_number,
            document_url=document_url,
            customer_name=booking.customer.name,
            customer_email=booking.customer.email,
            amount=context["invoice_total"],
            created_at=record.created_at if record else None,
            message=GENERATED_MESSAGE,
        )

    async def create(self, request: InvoiceCreateRequest) -> InvoiceResponse:
        """Issue an invoice from a caller-supplied payload, without the booking service."""

        logger.info("Creating standalone invoice for %s", request.customer_name)
        with self._observer.step("numbered"):
            invoice_number = self._numbers.generate()
        self._observer.event("invoice_number", invoice_number=invoice_number)

        context = self._request_context(request, invoice_number)
        document_url = await self._render_and_upload(context, invoice_number)

        record = await self._persist(
            InvoiceRecord(
                invoice_number=invoice_number,
                booking_id=request.booking_id,
                customer_name=request.customer_name,
                customer_email=str(request.customer_email),
                amount=context["invoice_total"],
                invoice_date=request.invoice_date,
                document_url=document_url,
            )
        )
        return InvoiceResponse(
            id=record.id if record else None,
            invoice_number=invoice_number,
            document_url=document_url,
            customer_name=request.customer_name,
            customer_email=str(request.customer_email),
            amount=context["invoice_total"],
            created_at=record.created_at if record else None,
            message=CREATED_MESSAGE,
        )

    async def get(self, invoice_number: str) -> InvoiceRecordResponse:
        record = None
        if self._repository is not None:
            record = await asyncio.to_thread(self._repository.get_by_number, invoice_number)
        if record is None:
            raise NotFoundError("Invoice", "invoiceNumber", invoice_number)
        return InvoiceRecordResponse.model_validate(record)

    async def _render_and_upload(self, context: Mapping[str, Any], invoice_number: str) -> str:
        with self._observer.step("rendered", template=self._template_name):
            document = await asyncio.to_thread(
                self._renderer.render, self._template_name, context
            )
        self._observer.event("document", invoice_number=invoice_number, size=document.size)

        with self._observer.step("uploaded", invoice_number=invoice_number):
            return await asyncio.to_thread(
                self._uploader.upload, document.content, invoice_number
            )

    async def _persist(self, record: InvoiceRecord) -> Optional[InvoiceRecord]:
        if self._repository is None:
            return None
        with self._observer.step("persisted", invoice_number=record.invoice_number):
            return await asyncio.to_thread(self._repository.add, record)

    def _validate(self, booking: Optional[BookingRecord]) -> None:
        if booking is None:
            raise ValidationFailure("booking", "Booking API returned empty response")
        if booking.customer is None:
            raise ValidationFailure("user", "Booking has no user information")
        if booking.amount_breakdown is None:
            raise ValidationFailure("amountBreakdown", "Booking has no amount breakdown")

    def _select_amount(self, booking: BookingRecord) -> Decimal:
        total = booking.amount_breakdown.total_amount
        if total is not None:
            return total
        if self._amount_policy is AmountPolicy.STRICT:
            raise ValidationFailure(
                "amountBreakdown.totalAmount", "Booking amount breakdown has no total amount"
            )
        logger.warning("Booking %s has no total amount; invoicing zero", booking.id)
        return ZERO

    def _totals(self, amount: Decimal) -> Dict[str, Any]:
        gst_amount, invoice_total = compute_tax(amount)
        return {
            "amount": amount,
            "discount": ZERO,
            "net_assessable": amount,
            "gst_percent": (GST_RATE * 100).normalize(),
            "gst_amount": gst_amount,
            "invoice_total": invoice_total,
            "invoice_total_in_words": amount_to_words(invoice_total),
        }

    def _booking_context(
        self, booking: BookingRecord, invoice_number: str, amount: Decimal
    ) -> Mapping[str, Any]:
        breakdown = booking.amount_breakdown
        customer = booking.customer
        line_item = LineItem(
            description=f"{booking.service_name} - {booking.resource_name}",
            unit_of_measure=f"{booking.start_time} to {booking.end_time}",
            quantity=1,
            unit_price=breakdown.slot_subtotal if breakdown.slot_subtotal is not None else amount,
            discount=ZERO,
        )
        values: Dict[str, Any] = {
            "invoice_number": invoice_number,
            "invoice_date": booking.booking_date or self._today(),
            "booking_id": booking.id,
            "booking_reference": booking.reference,
            "document_type": "INV",
            "customer_name": customer.name,
            "customer_email": customer.email,
            "customer_phone": customer.phone,
            "customer_address": None,
            "issuer_name": self._issuer_name,
            "venue_name": booking.resource_name,
            "service_name": booking.service_name,
            "venue_gstin": None,
            "venue_address": None,
            "venue_state": None,
            "place_of_supply": None,
            "gstin": None,
            "sac_code": None,
            "start_time": booking.start_time,
            "end_time": booking.end_time,
            "booking_status": booking.status,
            "currency": breakdown.currency or self._default_currency,
            "slot_subtotal": breakdown.slot_subtotal,
            "platform_fee": breakdown.platform_fee,
            "platform_fee_percent": breakdown.platform_fee_percent,
            "online_amount": breakdown.online_amount,
            "venue_amount": breakdown.venue_amount,
            "line_items": [line_item],
        }
        values.update(self._totals(amount))
        return make_render_context(values)

    def _request_context(
        self, request: InvoiceCreateRequest, invoice_number: str
    ) -> Mapping[str, Any]:
        line_items: List[LineItem]
        if request.line_items:
            line_items = [
                LineItem(
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                for item in request.line_items
            ]
        else:
            line_items = [
                LineItem(description=f"Invoice for {request.customer_name}", unit_price=request.amount)
            ]
        values: Dict[str, Any] = {
            "invoice_number": invoice_number,
            "invoice_date": request.invoice_date,
            "booking_id": request.booking_id,
            "booking_reference": None,
            "document_type": "INV",
            "customer_name": request.customer_name,
            "customer_email": str(request.customer_email),
            "customer_phone": None,
            "customer_address": None,
            "issuer_name": self._issuer_name,
            "venue_name": None,
            "service_name": None,
            "venue_gstin": None,
            "venue_address": None,
            "venue_state": None,
            "place_of_supply": None,
            "gstin": None,
            "sac_code": None,
            "start_time": None,
            "end_time": None,
            "booking_status": None,
            "currency": self._default_currency,
            "slot_subtotal": None,
            "platform_fee": None,
            "platform_fee_percent": None,
            "online_amount": None,
            "venue_amount": None,
            "line_items": line_items,
        }
        values.update(self._totals(request.amount))
        return make_render_context(values)
