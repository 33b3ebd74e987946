"""Tests for the conversion engine and cent rounding."""

import math

import pytest

from core.errors import InvalidArgument, UnknownCurrencyCode
from pricing.conversion import ConversionEngine, coerce_amount
from pricing.rounding import round2


class TestRound2:

    def test_rounds_half_up(self):
        assert round2(1.005) == 1.01
        assert round2(2.675) == 2.68
        assert round2(0.125) == 0.13

    def test_rounds_down_below_half(self):
        assert round2(78.38341) == 78.38

    def test_negative_halves_round_away_from_zero(self):
        assert round2(-1.005) == -1.01

    def test_non_finite_passthrough(self):
        assert math.isnan(round2(float("nan")))
        assert round2(float("inf")) == float("inf")


class TestConvert:

    def test_usd_to_eur_grams(self, engine):
        # 2650 * 0.92 * 0.0321507 = 78.3834...
        assert engine.convert(2650.00, "USD", "EUR", "g") == 78.38

    def test_same_currency_is_identity_for_every_code(self, engine, tables):
        for code in tables.currency_rates:
            assert engine.convert(2650.4567, code, code, "oz") == round2(2650.4567)
            assert engine.convert(31.5, code, code, "oz") == 31.5

    def test_usd_scaling_for_every_unit(self, engine, tables):
        price = 2650.0
        for unit, factor in tables.weight_conversions.items():
            assert engine.convert(price, "USD", "USD", unit) == round2(price * factor)

    def test_kilogram_usd(self, engine):
        assert engine.convert(2000.0, "USD", "USD", "kg") == 64301.4

    def test_cross_currency_via_usd(self, engine):
        # 100 GBP -> USD -> INR
        expected = round2(100 / 0.79 * 83.12)
        assert engine.convert(100, "GBP", "INR") == expected

    def test_default_unit_is_troy_ounce(self, engine):
        assert engine.convert(2650.0, "USD", "JPY") == round2(2650.0 * 149.50)

    def test_codes_are_case_insensitive(self, engine):
        assert engine.convert(2650.0, "usd", "eur", "G") == 78.38

    def test_unknown_unit_falls_back_to_ounce(self, engine, caplog):
        with caplog.at_level("WARNING"):
            result = engine.convert(2650.0, "USD", "EUR", "stone")
        assert result == round2(2650.0 * 0.92)
        assert "stone" in caplog.text

    @pytest.mark.parametrize("source,target", [("XYZ", "USD"), ("USD", "XYZ"), ("", "EUR")])
    def test_unknown_currency_raises(self, engine, source, target):
        with pytest.raises(UnknownCurrencyCode):
            engine.convert(100.0, source, target)

    def test_unknown_currency_is_a_key_error(self, engine):
        with pytest.raises(KeyError) as exc_info:
            engine.convert(100.0, "USD", "BTC")
        assert "BTC" in str(exc_info.value)
        assert "EUR" in str(exc_info.value)

    @pytest.mark.parametrize("price", [-1.0, float("nan"), float("inf")])
    def test_rejects_bad_price(self, engine, price):
        with pytest.raises(InvalidArgument):
            engine.convert(price, "USD", "EUR")

    @pytest.mark.parametrize("price", ["abc", "", None])
    def test_non_numeric_price_is_invalid_argument(self, engine, price):
        with pytest.raises(InvalidArgument):
            engine.convert(price, "USD", "EUR")

    def test_numeric_string_price(self, engine):
        assert engine.convert("2650", "USD", "USD") == 2650.0

    def test_zero_price(self, engine):
        assert engine.convert(0, "USD", "EUR", "kg") == 0.0


class TestValueFor:

    def test_matches_calculator_formula(self, engine):
        # amount * weight * base * rate
        expected = round2(2 * 0.375 * 2650.0 * 83.12)
        assert engine.value_for(2, "tola", "INR", 2650.0) == expected

    def test_agrees_with_convert_from_usd(self, engine):
        assert engine.value_for(1, "g", "EUR", 2650.0) == engine.convert(2650.0, "USD", "EUR", "g")

    def test_string_amount(self, engine):
        assert engine.value_for("2", "oz", "GBP", 2650.0) == 4187.0

    @pytest.mark.parametrize("amount", ["", "abc", None, -3, "-1.5", float("nan")])
    def test_invalid_amount_is_zero(self, engine, amount):
        assert engine.value_for(amount, "oz", "USD", 2650.0) == 0.0

    def test_unknown_currency_raises(self, engine):
        with pytest.raises(UnknownCurrencyCode):
            engine.value_for(1, "oz", "ZZZ", 2650.0)


class TestCoerceAmount:

    def test_numeric_strings(self):
        assert coerce_amount(" 1.25 ") == 1.25
        assert coerce_amount("10") == 10.0

    def test_numbers_pass_through(self):
        assert coerce_amount(3) == 3.0
        assert coerce_amount(0.5) == 0.5

    def test_bool_is_not_an_amount(self):
        assert coerce_amount(True) == 0.0

    @pytest.mark.parametrize("text,expected", [
        ("12abc", 12.0),
        ("3.5 oz", 3.5),
        (".5", 0.5),
        ("2e2g", 200.0),
        ("1e", 1.0),
    ])
    def test_reads_leading_number(self, text, expected):
        assert coerce_amount(text) == expected

    @pytest.mark.parametrize("text", ["oz12", "-12abc", "1e999"])
    def test_unusable_leading_number_is_zero(self, text):
        assert coerce_amount(text) == 0.0


class TestCalculate:

    def test_gold_in_grams_eur(self, engine):
        result = engine.calculate("gold", "10", "g", "eur", gold_price=2650.0, silver_price=31.5)
        assert result.metal == "gold"
        assert result.from_amount == 10.0
        assert result.from_unit == "g"
        assert result.to_unit == "EUR"
        assert result.to_amount == round2(10 * 0.0321507 * 2650.0 * 0.92)
        assert result.price_per_unit == 78.38

    def test_silver_uses_silver_price(self, engine):
        result = engine.calculate("silver", 1, "oz", "USD", gold_price=2650.0, silver_price=31.5)
        assert result.to_amount == 31.5
        assert result.price_per_unit == 31.5

    def test_invalid_amount_still_reports_unit_price(self, engine):
        result = engine.calculate("gold", "n/a", "oz", "USD", gold_price=2650.0, silver_price=31.5)
        assert result.from_amount == 0.0
        assert result.to_amount == 0.0
        assert result.price_per_unit == 2650.0

    def test_unknown_metal(self, engine):
        with pytest.raises(InvalidArgument):
            engine.calculate("platinum", 1, "oz", "USD", gold_price=2650.0, silver_price=31.5)


class TestReferenceLookups:

    def test_lists(self):
        engine = ConversionEngine()
        assert [c.code for c in engine.currencies()][:3] == ["USD", "EUR", "GBP"]
        assert [u.code for u in engine.units()] == ["oz", "g", "kg", "tola", "tael"]

    def test_symbol_for(self, engine):
        assert engine.symbol_for("INR") == "₹"
        assert engine.symbol_for("chf") == "CHF"
        assert engine.symbol_for("XYZ") == "XYZ"
