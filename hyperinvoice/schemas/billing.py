from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class LineItem(BaseModel):
    """A rendered invoice row."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str
    unit_of_measure: Optional[str] = Field(default=None, alias="unitOfMeasure")
    quantity: int = 1
    unit_price: Decimal = Field(alias="unitPrice")
    discount: Decimal = Decimal("0")

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity - self.discount


def _require_text(value: str, message: str) -> str:
    if value is None or not value.strip():
        raise ValueError(message)
    return value.strip()


class LineItemInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(gt=0, alias="unitPrice")

    @field_validator("description")
    @classmethod
    def _description_required(cls, value: str) -> str:
        return _require_text(value, "Item description is required")


class InvoiceGenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int = Field(gt=0, alias="bookingId")


class InvoiceCreateRequest(BaseModel):
    """Standalone invoice request that does not go through the booking service."""

    model_config = ConfigDict(populate_by_name=True)

    booking_id: Optional[int] = Field(default=None, alias="bookingId")
    customer_name: str = Field(alias="customerName")
    customer_email: EmailStr = Field(alias="customerEmail")
    amount: Decimal = Field(gt=0)
    invoice_date: date = Field(alias="invoiceDate")
    line_items: Optional[List[LineItemInput]] = Field(default=None, alias="lineItems")

    @field_validator("customer_name")
    @classmethod
    def _customer_name_required(cls, value: str) -> str:
        return _require_text(value, "Customer name is required")


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    invoice_number: str = Field(alias="invoiceNumber")
    document_url: str = Field(alias="documentUrl")
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    amount: Optional[Decimal] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    message: Optional[str] = None


class InvoiceRecordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    invoice_number: str = Field(alias="invoiceNumber")
    booking_id: Optional[int] = Field(default=None, alias="bookingId")
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    amount: Decimal
    invoice_date: Optional[date] = Field(default=None, alias="invoiceDate")
    document_url: Optional[str] = Field(default=None, alias="documentUrl")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


def make_render_context(values: Mapping[str, Any]) -> Mapping[str, Any]:
    """Freeze template variables so the renderer cannot mutate them.

    List values become tuples; ``LineItem`` rows are already frozen.
    """

    return MappingProxyType(
        {key: tuple(value) if isinstance(value, list) else value for key, value in values.items()}
    )
