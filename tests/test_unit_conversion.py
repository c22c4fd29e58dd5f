import pytest

from errors import InvalidInputError
import unit_conversion
from unit_conversion import RatioTable, TemperatureFormulaSet, convert


class TestRatioConversion:
    def test_reference_unit(self):
        assert convert("length", 1, "m", "cm") == 100
        assert convert("length", 250, "cm", "m") == 2.5
        assert convert("weight", 1, "kg", "g") == 1000

    def test_meter_feet_round_trip(self):
        feet = convert("length", 1, "m", "ft")
        assert feet == pytest.approx(3.28084)
        assert convert("length", feet, "ft", "m") == pytest.approx(1.0)

    def test_cross_units_go_through_reference(self):
        assert convert("length", 1, "km", "mm") == pytest.approx(1_000_000)
        assert convert("time", 2, "h", "min") == pytest.approx(120)

    @pytest.mark.parametrize("category", ["area", "volume", "time", "weight"])
    def test_categories_are_ratio_tables(self, category):
        assert isinstance(unit_conversion.CONVERSIONS[category], RatioTable)


class TestTemperature:
    def test_variant(self):
        assert isinstance(unit_conversion.CONVERSIONS["temperature"], TemperatureFormulaSet)

    def test_known_points(self):
        assert convert("temperature", 0, "c", "f") == 32
        assert convert("temperature", 100, "c", "k") == pytest.approx(373.15)
        assert convert("temperature", 212, "f", "c") == pytest.approx(100)
        assert convert("temperature", 273.15, "k", "c") == pytest.approx(0)
        assert convert("temperature", 32, "f", "k") == pytest.approx(273.15)
        assert convert("temperature", 273.15, "k", "f") == pytest.approx(32)

    @pytest.mark.parametrize("unit", ["c", "f", "k"])
    def test_identity(self, unit):
        assert convert("temperature", -40.5, unit, unit) == -40.5


class TestLookups:
    def test_default_units(self):
        assert unit_conversion.default_units("length") == ("m", "ft")
        assert unit_conversion.default_units("temperature") == ("c", "f")

    def test_unit_name(self):
        assert unit_conversion.unit_name("weight", "lb") == "Pound"

    def test_unknown_category(self):
        with pytest.raises(InvalidInputError):
            convert("speed", 1, "m", "ft")

    def test_unknown_unit(self):
        with pytest.raises(InvalidInputError):
            convert("length", 1, "m", "parsec")
        with pytest.raises(InvalidInputError):
            convert("temperature", 1, "c", "r")
