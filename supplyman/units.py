"""
Units of measure — isolated, testable, reusable.

Detail lines may be recorded in any unit of the same kind as the
resource's stock unit. The ledger always stores integer amounts in the
resource unit.

Examples:
    - convert(Decimal('2'), 'kg', 'g')   -> Decimal('2000.000')
    - to_stock_quantity(3, 'lb', 'g')    -> 1361
    - to_stock_quantity(5, '', 'kg')     -> 5 (no unit = resource unit)
"""

from decimal import ROUND_HALF_UP, Decimal

from supplyman.exceptions import IncompatibleUnit, InvalidUnit

MASS = 'mass'
VOLUME = 'volume'
LENGTH = 'length'

# Factor to the base unit of each kind (g, ml, mm)
CONVERSION_FACTORS = {
    'g': Decimal('1'),
    'kg': Decimal('1000'),
    'lb': Decimal('453.592'),
    'oz': Decimal('28.3495'),
    't': Decimal('1000000'),
    'ml': Decimal('1'),
    'l': Decimal('1000'),
    'gal': Decimal('3785.41'),
    'mm': Decimal('1'),
    'cm': Decimal('10'),
    'm': Decimal('1000'),
}

UNIT_KINDS = {
    'g': MASS,
    'kg': MASS,
    'lb': MASS,
    'oz': MASS,
    't': MASS,
    'ml': VOLUME,
    'l': VOLUME,
    'gal': VOLUME,
    'mm': LENGTH,
    'cm': LENGTH,
    'm': LENGTH,
}

BASE_UNITS = {
    MASS: 'g',
    VOLUME: 'ml',
    LENGTH: 'mm',
}

THREE_PLACES = Decimal('0.001')


def is_valid_unit(unit: str) -> bool:
    return unit in UNIT_KINDS


def unit_kind(unit: str) -> str:
    """Return 'mass', 'volume' or 'length'."""
    try:
        return UNIT_KINDS[unit]
    except KeyError:
        raise InvalidUnit(unit) from None


def base_unit(unit: str) -> str:
    return BASE_UNITS[unit_kind(unit)]


def available_units() -> dict[str, list[str]]:
    """Units grouped by kind."""
    grouped: dict[str, list[str]] = {MASS: [], VOLUME: [], LENGTH: []}
    for unit, kind in UNIT_KINDS.items():
        grouped[kind].append(unit)
    return grouped


def convert(amount, from_unit: str, to_unit: str) -> Decimal:
    """
    Convert an amount between two units of the same kind.

    Raises:
        InvalidUnit: If either unit is unknown
        IncompatibleUnit: If units are of different kinds
    """
    amount = Decimal(amount)
    if from_unit == to_unit:
        return amount

    if unit_kind(from_unit) != unit_kind(to_unit):
        raise IncompatibleUnit(from_unit, to_unit)

    in_base = amount * CONVERSION_FACTORS[from_unit]
    return (in_base / CONVERSION_FACTORS[to_unit]).quantize(THREE_PLACES, rounding=ROUND_HALF_UP)


def to_stock_quantity(quantity: int, line_unit: str, resource_unit: str) -> int:
    """
    Integer ledger effect of a line quantity, in the resource unit.

    A blank unit on either side means "same as the resource", so no
    conversion happens.
    """
    if not line_unit or not resource_unit or line_unit == resource_unit:
        return quantity
    converted = convert(quantity, line_unit, resource_unit)
    return int(converted.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
