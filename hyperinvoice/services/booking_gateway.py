from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from hyperinvoice.clients.booking import BookingServiceClient
from hyperinvoice.schemas.booking import BookingRecord, InvoiceReadyNotice
from hyperinvoice.services.exceptions import NotFoundError, UpstreamFailure
from hyperinvoice.services.mock_store import MockBookingStore

logger = logging.getLogger(__name__)

BOOKING_PATH = "/services/booking/{booking_id}"
INVOICE_RECEIVE_PATH = "/invoice-receive"


class BookingGateway:
    """Reads bookings from, and reports invoice URLs to, the booking service.

    When constructed with a ``mock_store`` no HTTP calls are made; reads and
    notifications go to the in-process store instead.
    """

    def __init__(
        self,
        client: BookingServiceClient | None,
        *,
        mock_store: MockBookingStore | None = None,
    ) -> None:
        if client is None and mock_store is None:
            raise ValueError("BookingGateway needs a client or a mock store")
        self._client = client
        self._mock_store = mock_store

    @property
    def use_mock_data(self) -> bool:
        return self._mock_store is not None

    async def fetch_booking(self, booking_id: int) -> Optional[BookingRecord]:
        logger.info("Fetching booking %s", booking_id)
        if self._mock_store is not None:
            data = self._mock_store.get(booking_id)
            if data is None:
                raise NotFoundError("Booking", "id", booking_id)
        else:
            try:
                data = await self._client.get(BOOKING_PATH.format(booking_id=booking_id))
            except UpstreamFailure as exc:
                if exc.upstream_status == 404:
                    raise NotFoundError("Booking", "id", booking_id) from exc
                raise UpstreamFailure(
                    f"Failed to fetch booking details: {exc}",
                    status_code=exc.upstream_status,
                    cause=exc.cause or exc,
                ) from exc

        if data is None:
            logger.warning("Booking service returned an empty body for booking %s", booking_id)
            return None
        try:
            booking = BookingRecord.model_validate(data)
        except ValidationError as exc:
            raise UpstreamFailure(
                f"Failed to fetch booking details: {exc}", cause=exc
            ) from exc

        logger.info(
            "Fetched booking %s reference=%s status=%s total=%s",
            booking_id,
            booking.reference,
            booking.status,
            booking.amount_breakdown.total_amount if booking.amount_breakdown else None,
        )
        return booking

    async def notify_invoice_ready(self, booking_id: int, document_url: str) -> None:
        notice = InvoiceReadyNotice(booking_id=booking_id, document_url=document_url)
        payload = notice.model_dump(by_alias=True)
        logger.info("Delivering invoice URL for booking %s", booking_id)
        if self._mock_store is not None:
            self._mock_store.record_notification(payload)
            return
        try:
            await self._client.post(INVOICE_RECEIVE_PATH, payload)
        except UpstreamFailure as exc:
            raise UpstreamFailure(
                f"Failed to deliver invoice URL to booking service: {exc}",
                status_code=exc.upstream_status,
                cause=exc.cause or exc,
            ) from exc
