from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hyperinvoice.models.invoice import InvoiceRecord
from hyperinvoice.services.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)


class InvoiceRepository:
    """Insert-only store for issued invoices."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def add(self, record: InvoiceRecord) -> InvoiceRecord:
        with self._session_factory() as session:
            try:
                session.add(record)
                session.commit()
                session.refresh(record)
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Failed to persist invoice %s: %s", record.invoice_number, exc)
                raise PersistenceFailure(
                    f"Failed to save invoice {record.invoice_number}: {exc}", cause=exc
                ) from exc
        logger.info("Persisted invoice %s with id %s", record.invoice_number, record.id)
        return record

    def get_by_number(self, invoice_number: str) -> Optional[InvoiceRecord]:
        with self._session_factory() as session:
            return session.scalars(
                select(InvoiceRecord).where(InvoiceRecord.invoice_number == invoice_number)
            ).one_or_none()

    def list_for_booking(self, booking_id: int) -> List[InvoiceRecord]:
        with self._session_factory() as session:
            return list(
                session.scalars(
                    select(InvoiceRecord)
                    .where(InvoiceRecord.booking_id == booking_id)
                    .order_by(InvoiceRecord.id)
                )
            )
