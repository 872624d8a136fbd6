import threading
from decimal import Decimal

import pytest

from hotel_booking.domain.errors import ValidationError
from hotel_booking.domain.pricing import (
    SEASONAL_RATE,
    STANDARD_RATE,
    SeasonalRateStrategy,
    StandardRateStrategy,
    build_pricing_strategy,
)


class TestStandardRate:
    def test_nights_times_rate(self):
        assert StandardRateStrategy().price(3, Decimal("100.00")) == Decimal("300.00")

    def test_less_than_one_night_is_billed_as_one(self):
        assert StandardRateStrategy().price(0, Decimal("100.00")) == Decimal("100.00")

    def test_price_is_not_rounded(self):
        assert StandardRateStrategy().price(3, Decimal("33.333")) == Decimal("99.999")


class TestSeasonalRate:
    def test_nights_times_rate_times_multiplier(self):
        strategy = SeasonalRateStrategy(Decimal("1.5"))
        assert strategy.price(3, Decimal("100.00")) == Decimal("450.00")

    def test_price_is_exact_product(self):
        strategy = SeasonalRateStrategy("1.115")
        assert strategy.price(3, Decimal("100.00")) == Decimal("334.5")
        assert strategy.price(1, Decimal("1.00")) == Decimal("1.115")

    def test_multiplier_can_change_at_runtime(self):
        strategy = SeasonalRateStrategy(Decimal("1.25"))
        strategy.multiplier = "2"
        assert strategy.multiplier == Decimal("2")
        assert strategy.price(2, Decimal("100.00")) == Decimal("400.00")

    @pytest.mark.parametrize("bad", [0, "-1.2", "NaN", "Infinity", "abc"])
    def test_multiplier_must_be_positive(self, bad):
        with pytest.raises(ValidationError) as exc_info:
            SeasonalRateStrategy(bad)
        assert exc_info.value.field == "multiplier"

    def test_invalid_update_keeps_previous_multiplier(self):
        strategy = SeasonalRateStrategy(Decimal("1.25"))
        with pytest.raises(ValidationError):
            strategy.multiplier = 0
        assert strategy.multiplier == Decimal("1.25")

    def test_concurrent_updates_never_leave_invalid_value(self):
        strategy = SeasonalRateStrategy(Decimal("1"))
        values = [Decimal(str(v)) for v in ("1.1", "1.2", "1.3", "1.4")]

        def writer(value):
            for _ in range(200):
                strategy.multiplier = value

        threads = [threading.Thread(target=writer, args=(value,)) for value in values]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert strategy.multiplier in values


class TestBuildPricingStrategy:
    @pytest.mark.parametrize("name", [STANDARD_RATE, "standard", " Standard_Rate "])
    def test_standard(self, name):
        assert isinstance(build_pricing_strategy(name), StandardRateStrategy)

    def test_seasonal_uses_multiplier(self):
        strategy = build_pricing_strategy(SEASONAL_RATE, "1.3")
        assert isinstance(strategy, SeasonalRateStrategy)
        assert strategy.multiplier == Decimal("1.3")

    def test_seasonal_requires_multiplier(self):
        with pytest.raises(ValidationError):
            build_pricing_strategy("SEASONAL")

    def test_unknown_name(self):
        with pytest.raises(ValidationError) as exc_info:
            build_pricing_strategy("HAPPY_HOUR")
        assert exc_info.value.field == "strategy"
