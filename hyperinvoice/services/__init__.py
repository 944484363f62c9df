"""Service package public API definitions.

Service implementations are imported lazily: ``hyperinvoice.clients.booking``
imports ``hyperinvoice.services.exceptions``, which executes this module
first, and an eager import of the services (which depend on the client)
would be circular.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "BookingGateway",
    "DocumentRenderer",
    "InvoiceNumberGenerator",
    "InvoiceRepository",
    "InvoiceService",
]

_SERVICE_MODULES = {
    "BookingGateway": "booking_gateway",
    "DocumentRenderer": "renderer",
    "InvoiceNumberGenerator": "invoice_number",
    "InvoiceRepository": "repository",
    "InvoiceService": "invoice",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .booking_gateway import BookingGateway as BookingGateway
    from .invoice import InvoiceService as InvoiceService
    from .invoice_number import InvoiceNumberGenerator as InvoiceNumberGenerator
    from .renderer import DocumentRenderer as DocumentRenderer
    from .repository import InvoiceRepository as InvoiceRepository
