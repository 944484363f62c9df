"""Spell out rupee amounts using the Indian numbering system.

Amounts are grouped as thousands, then lakhs (1,00,000) and crores
(1,00,00,000) rather than millions, e.g.::

    >>> amount_to_words(Decimal("1180.50"))
    'One Thousand One Hundred Eighty Rupees and Fifty Paise Only'
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

ONES = (
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
    "Sixteen", "Seventeen", "Eighteen", "Nineteen",
)
TENS = (
    "", "", "Twenty", "Thirty", "Forty", "Fifty",
    "Sixty", "Seventy", "Eighty", "Ninety",
)

THOUSAND = 1_000
LAKH = 1_00_000
CRORE = 1_00_00_000

# (divisor, upper bound exclusive, group name), checked in order
_GROUPS = (
    (100, THOUSAND, "Hundred"),
    (THOUSAND, LAKH, "Thousand"),
    (LAKH, CRORE, "Lakh"),
)

ZERO_AMOUNT = "Zero Rupees Only"


def number_to_words(number: int) -> str:
    """Return the worded form of a non-negative integer."""

    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "Zero"
    return _spell(number)


def _spell(number: int) -> str:
    if number < 20:
        return ONES[number]
    if number < 100:
        tens, ones = divmod(number, 10)
        return TENS[tens] + (f" {ONES[ones]}" if ones else "")

    for divisor, bound, name in _GROUPS:
        if number < bound:
            return _group(number, divisor, name)
    return _group(number, CRORE, "Crore")


def _group(number: int, divisor: int, name: str) -> str:
    head, remainder = divmod(number, divisor)
    words = f"{_spell(head)} {name}"
    if remainder:
        words += f" {_spell(remainder)}"
    return words


def split_amount(amount: Decimal) -> tuple[int, int]:
    """Split an amount into whole rupees (truncated) and paise (0-99)."""

    rupees = amount.to_integral_value(rounding=ROUND_DOWN)
    paise = ((amount - rupees) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(rupees), int(paise)


def amount_to_words(amount: Decimal | int | str | None) -> str:
    """Convert ``amount`` to e.g. ``"One Lakh Rupees Only"``.

    ``None`` is treated as zero. Floats are rejected so that paise are
    never computed from a binary approximation.
    """

    if amount is None:
        return ZERO_AMOUNT
    if isinstance(amount, float):
        raise TypeError("amount must be a Decimal, int or str, not float")
    if not isinstance(amount, Decimal):
        amount = Decimal(amount)
    if amount < 0:
        raise ValueError("amount must be non-negative")

    rupees, paise = split_amount(amount)
    if paise == 100:
        # x.995 and above rounds into the next rupee
        rupees, paise = rupees + 1, 0

    words = f"{number_to_words(rupees)} Rupees"
    if paise > 0:
        words += f" and {number_to_words(paise)} Paise"
    return words + " Only"
