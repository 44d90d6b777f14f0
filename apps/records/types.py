"""
Record types for the trucking ledger.

Every record is a frozen dataclass. Records are never mutated in place: an
update builds a new record with ``dataclasses.replace`` over the old one, and
the owning service swaps it into its collection.

Dates are zero-padded ``YYYY-MM-DD`` strings so that plain string comparison
orders them chronologically; the aggregation code relies on this. Money and
quantities are ``Decimal``.
"""

from dataclasses import asdict, dataclass, fields
from decimal import Decimal
from typing import ClassVar, Optional

from django.db import models


ZERO = Decimal('0.00')


class ExpenseCategory(models.TextChoices):
    FUEL = 'fuel', 'Fuel'
    MAINTENANCE = 'maintenance', 'Maintenance'
    INSURANCE = 'insurance', 'Insurance'
    PERMITS = 'permits', 'Permits'
    TOLLS = 'tolls', 'Tolls'
    PARKING = 'parking', 'Parking'
    FOOD = 'food', 'Food'
    LODGING = 'lodging', 'Lodging'
    REPAIRS = 'repairs', 'Repairs'
    TIRES = 'tires', 'Tires'
    OTHER = 'other', 'Other'


def get_category_label(category: str) -> str:
    """Display label for a category; unknown values read as 'Other'."""
    try:
        return ExpenseCategory(category).label
    except ValueError:
        return ExpenseCategory.OTHER.label


def to_decimal(value) -> Optional[Decimal]:
    """Coerce a stored JSON value (str, int or float) to Decimal."""
    if value is None or value == '':
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class Record:
    """Base for all stored records."""

    decimal_fields: ClassVar[tuple] = ()

    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: dict):
        """Build a record from a stored dict, ignoring unknown keys."""
        names = cls.field_names()
        values = {key: value for key, value in data.items() if key in names}
        for name in cls.decimal_fields:
            if name in values:
                values[name] = to_decimal(values[name])
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Route(Record):
    """A reusable route template. Trips copy its name, not its id."""

    id: str
    name: str
    payment: Decimal
    created_at: str
    updated_at: str
    distance: Optional[Decimal] = None
    notes: Optional[str] = None

    decimal_fields: ClassVar[tuple] = ('payment', 'distance')


@dataclass(frozen=True)
class Trip(Record):
    id: str
    route_name: str
    date: str
    earnings: Decimal
    created_at: str
    route_id: Optional[str] = None
    trailer_number: Optional[str] = None
    fuel_cost: Optional[Decimal] = None
    other_expenses: Optional[Decimal] = None
    notes: Optional[str] = None

    decimal_fields: ClassVar[tuple] = ('earnings', 'fuel_cost', 'other_expenses')

    @property
    def trip_costs(self) -> Decimal:
        """Trip-scoped costs: fuel plus other expenses recorded on the trip."""
        return (self.fuel_cost or ZERO) + (self.other_expenses or ZERO)

    @property
    def net_profit(self) -> Decimal:
        return self.earnings - self.trip_costs


@dataclass(frozen=True)
class Expense(Record):
    id: str
    date: str
    category: str
    amount: Decimal
    description: str
    created_at: str
    notes: Optional[str] = None
    receipt_image: Optional[str] = None

    decimal_fields: ClassVar[tuple] = ('amount',)

    @property
    def category_label(self) -> str:
        return get_category_label(self.category)


@dataclass(frozen=True)
class FuelEntry(Record):
    """
    A fuel purchase.

    ``total_cost`` is whatever the caller supplied; it is not re-derived from
    gallons and price. ``mpg`` is an optional precomputed value and is never
    recalculated by the fuel statistics.
    """

    id: str
    date: str
    gallons: Decimal
    price_per_gallon: Decimal
    total_cost: Decimal
    odometer: Decimal
    created_at: str
    is_fill_up: bool = True
    truck_id: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    receipt_image: Optional[str] = None
    mpg: Optional[Decimal] = None

    decimal_fields: ClassVar[tuple] = (
        'gallons', 'price_per_gallon', 'total_cost', 'odometer', 'mpg',
    )


@dataclass(frozen=True)
class Truck(Record):
    id: str
    name: str
    make: str
    model: str
    year: int
    plate_number: str
    created_at: str
    updated_at: str
    is_active: bool = True
    vin: Optional[str] = None
    color: Optional[str] = None
    purchase_date: Optional[str] = None
    mileage: Optional[int] = None
    notes: Optional[str] = None
