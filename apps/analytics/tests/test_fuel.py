from datetime import date
from decimal import Decimal
from apps.analytics.fuel_statistics import filter_fuel_entries, get_fuel_stats


TODAY = date(2024, 3, 31)


class TestFuelStats:
    def test_mileage_from_first_and_last_odometer(self, make_fuel):
        """Two fill-ups 400 miles apart with 20 gallons give 20 MPG."""
        entries = [
            make_fuel('2024-03-01', '10', '1000', total_cost='40'),
            make_fuel('2024-03-08', '10', '1400', total_cost='40'),
        ]

        stats = get_fuel_stats(entries, today=TODAY)

        assert stats['entry_count'] == 2
        assert stats['total_gallons'] == Decimal('20')
        assert stats['total_miles_driven'] == Decimal('400')
        assert stats['average_mpg'] == 20.0
        assert stats['average_price_per_gallon'] == Decimal('4.000')
        assert stats['cost_per_mile'] == Decimal('0.200')
        assert stats['last_fill_up'] == entries[1]

    def test_entries_are_sorted_by_date(self, make_fuel):
        """Mileage uses date order, not input order."""
        entries = [
            make_fuel('2024-03-08', '10', '1400'),
            make_fuel('2024-03-01', '10', '1000'),
        ]

        stats = get_fuel_stats(entries, today=TODAY)

        assert stats['total_miles_driven'] == Decimal('400')
        assert stats['last_fill_up'].date == '2024-03-08'

    def test_single_entry_has_no_mileage(self, make_fuel):
        """One entry cannot measure distance."""
        stats = get_fuel_stats([make_fuel('2024-03-01', '10', '1000', total_cost='40')], today=TODAY)

        assert stats['total_miles_driven'] == 0
        assert stats['average_mpg'] == 0.0
        assert stats['cost_per_mile'] == 0

    def test_empty_window(self):
        """No entries gives zeros and no last fill-up."""
        stats = get_fuel_stats([], today=TODAY)

        assert stats['entry_count'] == 0
        assert stats['total_gallons'] == 0
        assert stats['average_price_per_gallon'] == 0
        assert stats['monthly_average'] == 0
        assert stats['last_fill_up'] is None

    def test_truck_filter(self, make_fuel):
        """Only the requested truck's entries are used."""
        entries = [
            make_fuel('2024-03-01', '10', '1000', truck_id='truck-1'),
            make_fuel('2024-03-05', '50', '9000', truck_id='truck-2'),
            make_fuel('2024-03-08', '10', '1400', truck_id='truck-1'),
        ]

        stats = get_fuel_stats(entries, truck_id='truck-1', today=TODAY)

        assert stats['entry_count'] == 2
        assert stats['average_mpg'] == 20.0

    def test_monthly_average_uses_last_month(self, make_fuel):
        """Entries older than one month before today are left out."""
        entries = [
            make_fuel('2024-02-15', '10', '1000', total_cost='100'),
            make_fuel('2024-02-29', '10', '1200', total_cost='40'),
            make_fuel('2024-03-20', '10', '1400', total_cost='60'),
        ]

        stats = get_fuel_stats(entries, today=TODAY)

        assert stats['monthly_average'] == Decimal('50.00')


class TestFilterFuelEntries:
    def test_inclusive_range(self, make_fuel):
        """Entries on the range boundaries are kept."""
        entries = [
            make_fuel('2024-03-01', '10', '1000'),
            make_fuel('2024-03-10', '10', '1200'),
            make_fuel('2024-03-11', '10', '1400'),
        ]

        window = filter_fuel_entries(entries, start_date='2024-03-01', end_date='2024-03-10')

        assert [e.date for e in window] == ['2024-03-01', '2024-03-10']
