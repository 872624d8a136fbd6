from decimal import Decimal

import pytest

from hotel_booking.domain.errors import InvalidMoneyError
from hotel_booking.domain.value_objects.money import Money, quantize


def test_quantize_rounds_half_up():
    assert quantize(Decimal("10.005")) == Decimal("10.01")
    assert quantize(Decimal("10.004")) == Decimal("10.00")


def test_money_normalizes_amount():
    money = Money("99.999")
    assert money.amount == Decimal("100.00")
    assert str(money) == "100.00 USD"


def test_money_addition_keeps_currency():
    total = Money(Decimal("300.00")) + Money(Decimal("45.50"))
    assert total == Money(Decimal("345.50"))


def test_money_rejects_mixed_currencies():
    with pytest.raises(InvalidMoneyError):
        Money(Decimal("1"), "USD") + Money(Decimal("1"), "LKR")


@pytest.mark.parametrize("amount", [Decimal("-0.01"), "abc"])
def test_money_rejects_invalid_amounts(amount):
    with pytest.raises(InvalidMoneyError):
        Money(amount)


def test_zero():
    assert Money.zero().is_zero()
