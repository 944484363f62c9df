from __future__ import annotations

import logging
import re
import uuid
from datetime import date
from typing import Callable

logger = logging.getLogger(__name__)

INVOICE_NUMBER_PATTERN = re.compile(r"^INV-\d{8}-[A-Z0-9]{8}$")


class InvoiceNumberGenerator:
    """Produces identifiers like ``INV-20260221-A1B2C3D4``.

    The date segment is the day the number is generated, not the invoice
    date. Uniqueness relies on the random UUID suffix only; nothing checks
    issued numbers against storage.
    """

    def __init__(
        self,
        *,
        today: Callable[[], date] = date.today,
        entropy: Callable[[], uuid.UUID] = uuid.uuid4,
    ) -> None:
        self._today = today
        self._entropy = entropy

    def generate(self) -> str:
        date_part = self._today().strftime("%Y%m%d")
        unique_part = self._entropy().hex[:8].upper()
        invoice_number = f"INV-{date_part}-{unique_part}"
        logger.debug("Generated invoice number %s", invoice_number)
        return invoice_number
