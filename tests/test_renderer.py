import os
import sys
from datetime import date
from decimal import Decimal

import pytest
from jinja2 import Environment, DictLoader

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from hyperinvoice.schemas.billing import LineItem, make_render_context
from hyperinvoice.services.exceptions import RenderFailure
from hyperinvoice.services.renderer import DocumentRenderer, format_money


def _context(**overrides):
    values = {
        "invoice_number": "INV-20260221-A1B2C3D4",
        "invoice_date": date(2026, 2, 21),
        "booking_id": 42,
        "booking_reference": "HYP-000042",
        "document_type": "INV",
        "customer_name": "Asha <Menon>",
        "customer_email": "asha@example.com",
        "customer_phone": None,
        "customer_address": None,
        "issuer_name": "HyperInvoice",
        "venue_name": "Court 3",
        "service_name": "Badminton",
        "venue_gstin": None,
        "venue_address": None,
        "venue_state": None,
        "place_of_supply": None,
        "gstin": None,
        "sac_code": None,
        "start_time": "18:00",
        "end_time": "19:00",
        "booking_status": "CONFIRMED",
        "currency": "INR",
        "slot_subtotal": Decimal("450"),
        "platform_fee": Decimal("50"),
        "platform_fee_percent": Decimal("10"),
        "online_amount": Decimal("500"),
        "venue_amount": None,
        "amount": Decimal("500"),
        "discount": Decimal("0"),
        "net_assessable": Decimal("500"),
        "gst_percent": Decimal("18"),
        "gst_amount": Decimal("90.00"),
        "invoice_total": Decimal("590.00"),
        "invoice_total_in_words": "Five Hundred Ninety Rupees Only",
        "line_items": [
            LineItem(
                description="Badminton - Court 3",
                unit_of_measure="18:00 to 19:00",
                unit_price=Decimal("450"),
            )
        ],
    }
    values.update(overrides)
    return make_render_context(values)


def test_render_html_contains_invoice_fields_and_escapes_values() -> None:
    html = DocumentRenderer().render_html("invoice.html", _context())

    assert "INV-20260221-A1B2C3D4" in html
    assert "Badminton - Court 3" in html
    assert "18:00 to 19:00" in html
    assert "590.00" in html
    assert "Five Hundred Ninety Rupees Only" in html
    assert "Asha &lt;Menon&gt;" in html


def test_render_produces_pdf_bytes() -> None:
    document = DocumentRenderer().render("invoice.html", _context())

    assert document.content.startswith(b"%PDF")
    assert document.size == len(document.content)
    assert document.size > 0


def test_missing_template_is_render_failure() -> None:
    with pytest.raises(RenderFailure) as excinfo:
        DocumentRenderer().render("missing.html", _context())

    assert str(excinfo.value).startswith("Failed to generate PDF:")
    assert excinfo.value.cause is not None


def test_missing_context_variable_is_render_failure() -> None:
    env = Environment(loader=DictLoader({"t.html": "{{ absent.value }}"}))
    with pytest.raises(RenderFailure):
        DocumentRenderer(env).render("t.html", {})


def test_conversion_failure_is_render_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    renderer = DocumentRenderer()

    def broken(html: str) -> bytes:
        raise RuntimeError("rasterizer crashed")

    monkeypatch.setattr(renderer, "html_to_pdf", broken)

    with pytest.raises(RenderFailure) as excinfo:
        renderer.render("invoice.html", _context())

    assert "rasterizer crashed" in str(excinfo.value)


def test_render_context_is_read_only() -> None:
    context = _context()

    with pytest.raises(TypeError):
        context["invoice_number"] = "changed"


def test_format_money() -> None:
    assert format_money(Decimal("1180.5")) == "1,180.50"
    assert format_money(None) == ""
    assert format_money(0) == "0.00"
    assert format_money(Decimal("2.005")) == "2.01"
    assert format_money(Decimal("0.125")) == "0.13"
