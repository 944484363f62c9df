"""In-process stand-in for the booking service, used when mock mode is on."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _seed_bookings() -> Dict[int, Dict[str, Any]]:
    return {
        42: {
            "id": 42,
            "reference": "HYP-000042",
            "serviceId": 7,
            "serviceName": "Badminton",
            "resourceId": 3,
            "resourceName": "Court 3",
            "startTime": "18:00",
            "endTime": "19:00",
            "bookingDate": "2026-02-21",
            "createdAt": "2026-02-20T10:15:00+05:30",
            "amountBreakdown": {
                "slotSubtotal": "450.00",
                "platformFeePercent": "10.00",
                "platformFee": "50.00",
                "totalAmount": "500.00",
                "onlinePaymentPercent": "100.00",
                "onlineAmount": "500.00",
                "venueAmount": "0.00",
                "venueAmountCollected": False,
                "venuePaymentCollectionMethod": None,
                "currency": "INR",
            },
            "bookingType": "SINGLE",
            "message": None,
            "childBookings": [],
            "status": "CONFIRMED",
            "user": {
                "id": 11,
                "name": "Asha Menon",
                "email": "asha@example.com",
                "phone": "+91-9800000011",
            },
        },
        43: {
            "id": 43,
            "reference": "HYP-000043",
            "serviceName": "Turf Football",
            "resourceName": "Turf A",
            "startTime": "06:00",
            "endTime": "08:00",
            "bookingDate": "2026-02-22",
            "amountBreakdown": {
                "slotSubtotal": "2400.00",
                "platformFee": "120.00",
                "totalAmount": "2520.00",
                "currency": "INR",
            },
            "status": "CONFIRMED",
            "user": {
                "id": 12,
                "name": "Rahul Iyer",
                "email": "rahul@example.com",
                "phone": None,
            },
        },
        44: {
            "id": 44,
            "reference": "HYP-000044",
            "serviceName": "Swimming",
            "resourceName": "Lane 2",
            "startTime": "07:00",
            "endTime": "07:45",
            "amountBreakdown": {"currency": "INR"},
            "status": "PENDING",
            "user": {"id": 13, "name": "Neha Rao", "email": "neha@example.com"},
        },
    }


@dataclass
class MockBookingStore:
    bookings: Dict[int, Dict[str, Any]] = field(default_factory=_seed_bookings)
    notifications: List[Dict[str, Any]] = field(default_factory=list)

    def get(self, booking_id: int) -> Optional[Dict[str, Any]]:
        record = self.bookings.get(int(booking_id))
        return copy.deepcopy(record) if record is not None else None

    def add(self, record: Dict[str, Any]) -> None:
        self.bookings[int(record["id"])] = copy.deepcopy(record)

    def record_notification(self, payload: Dict[str, Any]) -> None:
        self.notifications.append(dict(payload))


_mock_store: Optional[MockBookingStore] = None


def get_mock_store() -> MockBookingStore:
    global _mock_store
    if _mock_store is None:
        _mock_store = MockBookingStore()
    return _mock_store


def reset_mock_store() -> None:
    global _mock_store
    _mock_store = None
