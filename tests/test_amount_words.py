import os
import re
import sys
from decimal import Decimal

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from hyperinvoice.services.amount_words import amount_to_words, number_to_words, split_amount


def test_zero_and_missing_amounts() -> None:
    assert amount_to_words(Decimal("0")) == "Zero Rupees Only"
    assert amount_to_words(None) == "Zero Rupees Only"
    assert amount_to_words(Decimal("0.00")) == "Zero Rupees Only"


def test_rupees_and_paise() -> None:
    assert (
        amount_to_words(Decimal("1180.50"))
        == "One Thousand One Hundred Eighty Rupees and Fifty Paise Only"
    )
    assert amount_to_words(Decimal("0.75")) == "Zero Rupees and Seventy Five Paise Only"


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (Decimal("100000"), "One Lakh Rupees Only"),
        (Decimal("10000000"), "One Crore Rupees Only"),
        (Decimal("99999"), "Ninety Nine Thousand Nine Hundred Ninety Nine Rupees Only"),
        (
            Decimal("9999999"),
            "Ninety Nine Lakh Ninety Nine Thousand Nine Hundred Ninety Nine Rupees Only",
        ),
        (Decimal("1000"), "One Thousand Rupees Only"),
        (Decimal("590"), "Five Hundred Ninety Rupees Only"),
        (Decimal("2500000"), "Twenty Five Lakh Rupees Only"),
        (Decimal("1000000000"), "One Hundred Crore Rupees Only"),
    ],
)
def test_indian_grouping_boundaries(amount: Decimal, expected: str) -> None:
    assert amount_to_words(amount) == expected


def test_large_amount_uses_all_groups() -> None:
    assert amount_to_words(Decimal("123456789.05")) == (
        "Twelve Crore Thirty Four Lakh Fifty Six Thousand Seven Hundred Eighty Nine "
        "Rupees and Five Paise Only"
    )


def test_number_to_words_small_values() -> None:
    assert number_to_words(0) == "Zero"
    assert number_to_words(7) == "Seven"
    assert number_to_words(19) == "Nineteen"
    assert number_to_words(20) == "Twenty"
    assert number_to_words(45) == "Forty Five"
    assert number_to_words(100) == "One Hundred"
    assert number_to_words(101) == "One Hundred One"


def test_paise_are_rounded_half_up_with_exact_decimals() -> None:
    assert split_amount(Decimal("10.005")) == (10, 1)
    assert split_amount(Decimal("10.004")) == (10, 0)
    assert amount_to_words(Decimal("1.005")) == "One Rupees and One Paise Only"


def test_paise_rounding_into_next_rupee() -> None:
    assert amount_to_words(Decimal("9.999")) == "Ten Rupees Only"


def test_rupees_are_truncated_not_rounded() -> None:
    assert split_amount(Decimal("1180.99")) == (1180, 99)


def test_no_dangling_connector_words() -> None:
    pattern = re.compile(r"(Hundred|Thousand|Lakh|Crore) (Hundred|Thousand|Lakh|Crore)\b|  ")
    for value in (100, 1000, 1100, 100000, 100100, 1000000, 10000000, 10000100, 20000000, 110000000):
        words = amount_to_words(Decimal(value))
        assert not pattern.search(words), words
        assert not words.startswith(" ")
        assert " Rupees Only" in words


def test_float_amounts_are_rejected() -> None:
    with pytest.raises(TypeError):
        amount_to_words(1180.5)


def test_negative_amounts_are_rejected() -> None:
    with pytest.raises(ValueError):
        amount_to_words(Decimal("-1"))
