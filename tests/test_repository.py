import os
import sys
from datetime import date, datetime
from decimal import Decimal

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from hyperinvoice.models.invoice import InvoiceRecord
from hyperinvoice.services.exceptions import PersistenceFailure


def _record(number: str, booking_id: int | None = 42) -> InvoiceRecord:
    return InvoiceRecord(
        invoice_number=number,
        booking_id=booking_id,
        customer_name="Asha Menon",
        customer_email="asha@example.com",
        amount=Decimal("590.00"),
        invoice_date=date(2026, 2, 21),
        document_url=f"https://cdn.test/invoices/{number}.pdf",
    )


def test_add_assigns_id_and_creation_timestamp(repository) -> None:
    saved = repository.add(_record("INV-20260221-AAAAAAAA"))

    assert saved.id is not None
    assert isinstance(saved.created_at, datetime)

    loaded = repository.get_by_number("INV-20260221-AAAAAAAA")
    assert loaded is not None
    assert loaded.amount == Decimal("590.00")
    assert loaded.document_url.endswith("INV-20260221-AAAAAAAA.pdf")


def test_invoice_number_is_unique(repository) -> None:
    repository.add(_record("INV-20260221-BBBBBBBB"))

    with pytest.raises(PersistenceFailure):
        repository.add(_record("INV-20260221-BBBBBBBB"))


def test_lookup_helpers(repository) -> None:
    repository.add(_record("INV-20260221-CCCCCCCC", booking_id=7))
    repository.add(_record("INV-20260221-DDDDDDDD", booking_id=7))
    repository.add(_record("INV-20260221-EEEEEEEE", booking_id=8))

    assert repository.get_by_number("INV-19990101-00000000") is None
    assert [r.invoice_number for r in repository.list_for_booking(7)] == [
        "INV-20260221-CCCCCCCC",
        "INV-20260221-DDDDDDDD",
    ]
