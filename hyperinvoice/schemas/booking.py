from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Payloads from the booking service carry more fields than we use; unknown
# keys are dropped rather than rejected, and numbers in text fields become
# strings.
_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class AmountBreakdown(BaseModel):
    model_config = _WIRE_CONFIG

    slot_subtotal: Optional[Decimal] = Field(default=None, alias="slotSubtotal")
    platform_fee_percent: Optional[Decimal] = Field(default=None, alias="platformFeePercent")
    platform_fee: Optional[Decimal] = Field(default=None, alias="platformFee")
    total_amount: Optional[Decimal] = Field(default=None, alias="totalAmount")
    online_payment_percent: Optional[Decimal] = Field(default=None, alias="onlinePaymentPercent")
    online_amount: Optional[Decimal] = Field(default=None, alias="onlineAmount")
    venue_amount: Optional[Decimal] = Field(default=None, alias="venueAmount")
    venue_amount_collected: Optional[bool] = Field(default=None, alias="venueAmountCollected")
    venue_payment_collection_method: Optional[str] = Field(
        default=None, alias="venuePaymentCollectionMethod"
    )
    currency: Optional[str] = None


class CustomerInfo(BaseModel):
    model_config = _WIRE_CONFIG

    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class BookingRecord(BaseModel):
    """Booking as returned by ``GET /services/booking/{id}``."""

    model_config = _WIRE_CONFIG

    id: Optional[int] = None
    reference: Optional[str] = None
    service_id: Optional[int] = Field(default=None, alias="serviceId")
    service_name: Optional[str] = Field(default=None, alias="serviceName")
    resource_id: Optional[int] = Field(default=None, alias="resourceId")
    resource_name: Optional[str] = Field(default=None, alias="resourceName")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    booking_date: Optional[date] = Field(default=None, alias="bookingDate")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    amount_breakdown: Optional[AmountBreakdown] = Field(default=None, alias="amountBreakdown")
    booking_type: Optional[str] = Field(default=None, alias="bookingType")
    message: Optional[str] = None
    child_bookings: Optional[List[str]] = Field(default=None, alias="childBookings")
    status: Optional[str] = None
    customer: Optional[CustomerInfo] = Field(default=None, alias="user")


class InvoiceReadyNotice(BaseModel):
    """Body of ``POST /invoice-receive``."""

    model_config = ConfigDict(populate_by_name=True)

    booking_id: int = Field(alias="bookingId")
    document_url: str = Field(alias="invoiceURL")
