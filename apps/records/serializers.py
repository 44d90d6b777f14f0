"""
Serializers for records app.

This module contains:
1. Input serializers - request body and query parameter validation. This is
   the form boundary: once data passes here the record store and the
   analytics code assume well-formed numbers and dates.
2. Output serializers - rendering of record dataclasses.
"""

import re
from datetime import date
from decimal import Decimal

from rest_framework import serializers

from .services.route_matching import MEDIUM_SIMILARITY_THRESHOLD
from .types import ExpenseCategory


VIN_REGEX = re.compile(r'^[A-HJ-NPR-Z0-9]{17}$')


def money_field(**kwargs):
    kwargs.setdefault('max_digits', 12)
    kwargs.setdefault('decimal_places', 2)
    return serializers.DecimalField(**kwargs)


# =============================================================================
# Input Serializers (Request Body)
# =============================================================================

class RecordInputSerializer(serializers.Serializer):
    """
    Base for record input.

    ``validated_data`` holds plain values ready for the record services:
    dates become ``YYYY-MM-DD`` strings; every other value passes
    through unchanged.
    """

    def validate(self, attrs):
        cleaned = {}
        for name, value in attrs.items():
            if isinstance(value, date):
                value = value.isoformat()
            cleaned[name] = value
        return cleaned


class RouteInputSerializer(RecordInputSerializer):
    name = serializers.CharField(max_length=200)
    payment = money_field(min_value=Decimal('0'))
    distance = serializers.DecimalField(
        max_digits=10, decimal_places=1, min_value=Decimal('0'),
        required=False, allow_null=True,
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('name is required')
        return value


class TripInputSerializer(RecordInputSerializer):
    route_name = serializers.CharField(max_length=200)
    route_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    date = serializers.DateField()
    earnings = money_field(min_value=Decimal('0'))
    trailer_number = serializers.CharField(
        max_length=50, required=False, allow_blank=True, allow_null=True
    )
    fuel_cost = money_field(min_value=Decimal('0'), required=False, allow_null=True)
    other_expenses = money_field(min_value=Decimal('0'), required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_route_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('route_name is required')
        return value


class ExpenseInputSerializer(RecordInputSerializer):
    date = serializers.DateField()
    category = serializers.ChoiceField(choices=ExpenseCategory.choices)
    amount = money_field(min_value=Decimal('0'))
    description = serializers.CharField(max_length=500)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    receipt_image = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, allow_null=True
    )


class FuelEntryInputSerializer(RecordInputSerializer):
    truck_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    date = serializers.DateField()
    gallons = serializers.DecimalField(
        max_digits=10, decimal_places=3, min_value=Decimal('0.001')
    )
    price_per_gallon = serializers.DecimalField(
        max_digits=8, decimal_places=3, min_value=Decimal('0.001')
    )
    total_cost = money_field(min_value=Decimal('0'), required=False)
    odometer = serializers.DecimalField(
        max_digits=12, decimal_places=1, min_value=Decimal('0')
    )
    location = serializers.CharField(
        max_length=200, required=False, allow_blank=True, allow_null=True
    )
    is_fill_up = serializers.BooleanField(default=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    receipt_image = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, allow_null=True
    )
    mpg = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal('0'),
        required=False, allow_null=True,
    )

    def validate(self, attrs):
        """Fill in total_cost from gallons and price when the form left it out."""
        attrs = super().validate(attrs)
        if not self.partial and 'total_cost' not in attrs:
            attrs['total_cost'] = (
                attrs['gallons'] * attrs['price_per_gallon']
            ).quantize(Decimal('0.01'))
        return attrs


class TruckInputSerializer(RecordInputSerializer):
    name = serializers.CharField(max_length=100)
    make = serializers.CharField(max_length=100)
    model = serializers.CharField(max_length=100)
    year = serializers.IntegerField(min_value=1900)
    vin = serializers.CharField(max_length=17, required=False, allow_blank=True, allow_null=True)
    plate_number = serializers.CharField(min_length=2, max_length=10)
    color = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(default=True)
    purchase_date = serializers.DateField(required=False, allow_null=True)
    mileage = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_year(self, value):
        if value > date.today().year + 1:
            raise serializers.ValidationError('year must be a valid year')
        return value

    def validate_vin(self, value):
        if not value:
            return value
        value = value.strip().upper()
        if not VIN_REGEX.match(value):
            raise serializers.ValidationError('vin must be 17 characters (no I, O or Q)')
        return value

    def validate_plate_number(self, value):
        value = value.strip().upper()
        if not 2 <= len(value) <= 10:
            raise serializers.ValidationError('plate_number must be 2-10 characters')
        return value


# =============================================================================
# Input Serializers (Query Parameters)
# =============================================================================

class RouteFilterSerializer(serializers.Serializer):
    """
    Query Parameters:
        search (str): Case-insensitive substring of the route name
    """

    search = serializers.CharField(required=False, allow_blank=True)


class RouteNameQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        name (str): Route name to look up or compare
        threshold (int): Minimum similarity score for fuzzy matches (0-100)
    """

    name = serializers.CharField()
    threshold = serializers.IntegerField(
        min_value=0, max_value=100, default=MEDIUM_SIMILARITY_THRESHOLD
    )


class TripFilterSerializer(serializers.Serializer):
    """
    Query Parameters:
        start_date (date): Trips on or after this date
        end_date (date): Trips on or before this date
        route (str): Exact route name, case-insensitive
    """

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    route = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be after start date'
            })
        return attrs


class ExpenseFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=ExpenseCategory.choices, required=False)


class TruckFilterSerializer(serializers.Serializer):
    active = serializers.BooleanField(required=False, allow_null=True, default=None)


class FuelEntryFilterSerializer(serializers.Serializer):
    truck = serializers.CharField(required=False, allow_blank=True)


# =============================================================================
# Output Serializers
# =============================================================================

class RouteSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    payment = money_field(read_only=True)
    distance = serializers.DecimalField(max_digits=10, decimal_places=1, read_only=True)
    notes = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True)
    updated_at = serializers.CharField(read_only=True)


class TripSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    route_id = serializers.CharField(read_only=True)
    route_name = serializers.CharField(read_only=True)
    date = serializers.CharField(read_only=True)
    earnings = money_field(read_only=True)
    trailer_number = serializers.CharField(read_only=True)
    fuel_cost = money_field(read_only=True)
    other_expenses = money_field(read_only=True)
    net_profit = money_field(read_only=True)
    notes = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True)


class ExpenseSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    date = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    category_label = serializers.CharField(read_only=True)
    amount = money_field(read_only=True)
    description = serializers.CharField(read_only=True)
    notes = serializers.CharField(read_only=True)
    receipt_image = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True)


class FuelEntrySerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    truck_id = serializers.CharField(read_only=True)
    date = serializers.CharField(read_only=True)
    gallons = serializers.DecimalField(max_digits=10, decimal_places=3, read_only=True)
    price_per_gallon = serializers.DecimalField(max_digits=8, decimal_places=3, read_only=True)
    total_cost = money_field(read_only=True)
    odometer = serializers.DecimalField(max_digits=12, decimal_places=1, read_only=True)
    location = serializers.CharField(read_only=True)
    is_fill_up = serializers.BooleanField(read_only=True)
    notes = serializers.CharField(read_only=True)
    receipt_image = serializers.CharField(read_only=True)
    mpg = serializers.DecimalField(max_digits=8, decimal_places=2, read_only=True)
    created_at = serializers.CharField(read_only=True)


class TruckSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    make = serializers.CharField(read_only=True)
    model = serializers.CharField(read_only=True)
    year = serializers.IntegerField(read_only=True)
    vin = serializers.CharField(read_only=True)
    plate_number = serializers.CharField(read_only=True)
    color = serializers.CharField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    purchase_date = serializers.CharField(read_only=True)
    mileage = serializers.IntegerField(read_only=True)
    notes = serializers.CharField(read_only=True)
    created_at = serializers.CharField(read_only=True)
    updated_at = serializers.CharField(read_only=True)


class SimilarRouteSerializer(serializers.Serializer):
    route = RouteSerializer(read_only=True)
    similarity = serializers.IntegerField(read_only=True)
    match_type = serializers.CharField(read_only=True)
