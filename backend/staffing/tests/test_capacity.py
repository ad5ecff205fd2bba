"""
Tests for staffing/services/capacity.py
"""
from datetime import date

from django.test import SimpleTestCase, TestCase

from staffing.models import Staff, StaffDayOff
from staffing.services.capacity import (
    DayOffRecord,
    StaffRecord,
    get_zone_capacity,
    resolve_zone_capacity,
)

DAY = date(2025, 2, 1)


class TestGetZoneCapacity(SimpleTestCase):

    def setUp(self):
        self.staff = [
            StaffRecord(id=1, role="hair"),
            StaffRecord(id=2, role="hair"),
            StaffRecord(id=3, role="nail"),
            StaffRecord(id=4, role="nail", active=False),
            StaffRecord(id=5, role="reception"),
        ]

    def test_day_off_reduces_capacity(self):
        day_offs = [DayOffRecord(staff_id=1, date=DAY)]
        self.assertEqual(get_zone_capacity("hair", DAY, self.staff, day_offs), 1)

    def test_day_off_on_other_date_is_ignored(self):
        day_offs = [DayOffRecord(staff_id=1, date=date(2025, 2, 2))]
        self.assertEqual(get_zone_capacity("hair", DAY, self.staff, day_offs), 2)

    def test_inactive_staff_do_not_count(self):
        self.assertEqual(get_zone_capacity("nail", DAY, self.staff, []), 1)

    def test_accepts_iso_dates(self):
        day_offs = [DayOffRecord(staff_id=3, date=DAY)]
        self.assertEqual(get_zone_capacity("nail", "2025-02-01", self.staff, day_offs), 0)

    def test_unknown_zone_has_no_capacity(self):
        self.assertEqual(get_zone_capacity("reception", DAY, self.staff, []), 0)


class TestResolveZoneCapacity(TestCase):

    def test_reads_staff_and_day_offs(self):
        ploy = Staff.objects.create(name="Ploy", role=Staff.ROLE_HAIR)
        Staff.objects.create(name="Beam", role=Staff.ROLE_HAIR)
        Staff.objects.create(name="Old", role=Staff.ROLE_HAIR, active=False)
        Staff.objects.create(name="Mint", role=Staff.ROLE_NAIL)
        StaffDayOff.objects.create(staff=ploy, date=DAY)

        self.assertEqual(resolve_zone_capacity("hair", DAY), 1)
        self.assertEqual(resolve_zone_capacity("hair", date(2025, 2, 2)), 2)
        self.assertEqual(resolve_zone_capacity("nail", DAY), 1)

    def test_no_staff_means_zero(self):
        self.assertEqual(resolve_zone_capacity("nail", DAY), 0)
