"""
Tests for unit conversion.
"""

from decimal import Decimal

import pytest

from supplyman import units
from supplyman.exceptions import IncompatibleUnit, InvalidUnit


class TestConvert:
    """Tests for units.convert()."""

    def test_same_unit(self):
        assert units.convert(5, 'kg', 'kg') == Decimal('5')

    def test_kilograms_to_grams(self):
        assert units.convert(2, 'kg', 'g') == Decimal('2000.000')

    def test_grams_to_kilograms(self):
        assert units.convert(1500, 'g', 'kg') == Decimal('1.500')

    def test_gallons_to_liters(self):
        assert units.convert(1, 'gal', 'l') == Decimal('3.785')

    def test_pounds_to_ounces(self):
        assert units.convert(1, 'lb', 'oz') == Decimal('16.000')

    def test_centimeters_to_meters(self):
        assert units.convert(250, 'cm', 'm') == Decimal('2.500')

    def test_mass_to_volume_fails(self):
        with pytest.raises(IncompatibleUnit) as exc:
            units.convert(1, 'kg', 'l')

        assert exc.value.code == 'INCOMPATIBLE_UNIT'

    def test_unknown_unit_fails(self):
        with pytest.raises(InvalidUnit):
            units.convert(1, 'arroba', 'kg')


class TestStockQuantity:
    """Tests for units.to_stock_quantity()."""

    def test_no_unit_means_resource_unit(self):
        assert units.to_stock_quantity(7, '', 'kg') == 7

    def test_resource_without_unit(self):
        assert units.to_stock_quantity(7, 'kg', '') == 7

    def test_converted_and_rounded(self):
        # 3 lb = 1360.776 g
        assert units.to_stock_quantity(3, 'lb', 'g') == 1361

    def test_rounds_half_up(self):
        # 5 g = 0.005 kg -> 0
        assert units.to_stock_quantity(5, 'g', 'kg') == 0
        # 500 g = 0.5 kg -> 1
        assert units.to_stock_quantity(500, 'g', 'kg') == 1


class TestUnitHelpers:

    def test_unit_kind(self):
        assert units.unit_kind('ml') == units.VOLUME

    def test_base_unit(self):
        assert units.base_unit('t') == 'g'
        assert units.base_unit('gal') == 'ml'
        assert units.base_unit('cm') == 'mm'

    def test_is_valid_unit(self):
        assert units.is_valid_unit('kg')
        assert not units.is_valid_unit('KILOGRAMOS')

    def test_available_units(self):
        grouped = units.available_units()

        assert 'kg' in grouped[units.MASS]
        assert 'l' in grouped[units.VOLUME]
        assert 'm' in grouped[units.LENGTH]
