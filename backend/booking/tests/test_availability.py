"""
Tests for booking/services/availability.py

Overlap counting, capacity, cancelled exclusion and the consistency
between the single-slot check and the unavailable-times grid.
"""
from datetime import date, datetime, time
from types import SimpleNamespace

from django.test import SimpleTestCase
from django.utils import timezone

from booking.services.availability import (
    bookable_slots,
    build_slot_grid,
    count_overlaps,
    get_unavailable_times,
    is_time_slot_available,
    service_time_window,
)
from booking.services.records import (
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_NO_SHOW,
    BookingRecord,
)
from booking.services.timeslots import generate_time_slots

DAY = date(2025, 2, 1)


def _booking(ref, zone, time_label, duration, status="confirmed", on_date=DAY):
    return BookingRecord(reference=ref, zone=zone, date=on_date, time=time_label, total_duration=duration, status=status)


class TestHairScenario(SimpleTestCase):
    """Hair zone, capacity 1, one booking 10:00-11:00."""

    def setUp(self):
        self.bookings = [_booking("BK1", "hair", "10:00", 60)]

    def test_overlapping_slot_is_unavailable(self):
        self.assertFalse(is_time_slot_available(self.bookings, DAY, "10:30", "hair", 30, capacity=1))

    def test_touching_slot_is_available(self):
        self.assertTrue(is_time_slot_available(self.bookings, DAY, "11:00", "hair", 30, capacity=1))

    def test_slot_ending_at_booking_start_is_available(self):
        self.assertTrue(is_time_slot_available(self.bookings, DAY, "09:30", "hair", 30, capacity=1))

    def test_long_service_reaching_into_booking_is_unavailable(self):
        self.assertFalse(is_time_slot_available(self.bookings, DAY, "09:30", "hair", 60, capacity=1))

    def test_unavailable_times(self):
        self.assertEqual(
            get_unavailable_times(self.bookings, DAY, "hair", 30, 30, capacity=1),
            ["10:00", "10:30"],
        )
        self.assertEqual(
            get_unavailable_times(self.bookings, DAY, "hair", 60, 30, capacity=1),
            ["09:30", "10:00", "10:30"],
        )

    def test_other_zone_and_other_day_do_not_count(self):
        self.assertTrue(is_time_slot_available(self.bookings, DAY, "10:00", "nail", 30, capacity=1))
        self.assertTrue(is_time_slot_available(self.bookings, date(2025, 2, 2), "10:00", "hair", 30, capacity=1))


class TestNailScenario(SimpleTestCase):
    """Nail zone, capacity 2, two bookings at 14:00 for 45 minutes."""

    def test_third_booking_is_rejected_until_one_is_cancelled(self):
        first = _booking("BK1", "nail", "14:00", 45)
        second = _booking("BK2", "nail", "14:00", 45)

        self.assertFalse(is_time_slot_available([first, second], DAY, "14:00", "nail", 45, capacity=2))

        cancelled = _booking("BK2", "nail", "14:00", 45, status=STATUS_CANCELLED)
        self.assertTrue(is_time_slot_available([first, cancelled], DAY, "14:00", "nail", 45, capacity=2))

    def test_capacity_monotonicity(self):
        bookings = []
        for i in range(2):
            self.assertTrue(is_time_slot_available(bookings, DAY, "14:00", "nail", 45, capacity=2))
            bookings.append(_booking(f"BK{i}", "nail", "14:00", 45))
        self.assertFalse(is_time_slot_available(bookings, DAY, "14:00", "nail", 45, capacity=2))


class TestStatusFiltering(SimpleTestCase):

    def test_cancelled_never_counts(self):
        bookings = [
            _booking("BK1", "hair", "08:00", 14 * 60, status=STATUS_CANCELLED),
            _booking("BK2", "hair", "12:00", 30, status=STATUS_CANCELLED),
        ]
        self.assertEqual(count_overlaps(bookings, DAY, "hair", "12:00", 30), 0)
        self.assertEqual(get_unavailable_times(bookings, DAY, "hair", 30, 30, capacity=1), [])

    def test_completed_and_no_show_still_occupy(self):
        bookings = [
            _booking("BK1", "nail", "10:00", 60, status=STATUS_COMPLETED),
            _booking("BK2", "nail", "10:00", 60, status=STATUS_NO_SHOW),
        ]
        self.assertEqual(count_overlaps(bookings, DAY, "nail", "10:00", 30), 2)
        self.assertFalse(is_time_slot_available(bookings, DAY, "10:00", "nail", 30, capacity=2))


class TestCapacity(SimpleTestCase):

    def test_zero_capacity_blocks_every_slot(self):
        grid = generate_time_slots("08:00", "22:00", 30)
        self.assertEqual(get_unavailable_times([], DAY, "hair", 30, 30, capacity=0), grid)
        for slot in grid:
            self.assertFalse(is_time_slot_available([], DAY, slot, "hair", 30, capacity=0))

    def test_fallback_capacity_when_not_given(self):
        # hair=1, nail=2
        hair = [_booking("BK1", "hair", "10:00", 30)]
        self.assertFalse(is_time_slot_available(hair, DAY, "10:00", "hair", 30))

        nail = [_booking("BK1", "nail", "10:00", 30)]
        self.assertTrue(is_time_slot_available(nail, DAY, "10:00", "nail", 30))

    def test_live_capacity_overrides_fallback(self):
        hair = [_booking("BK1", "hair", "10:00", 30)]
        self.assertTrue(is_time_slot_available(hair, DAY, "10:00", "hair", 30, capacity=3))

    def test_non_positive_duration_is_rejected(self):
        with self.assertRaises(ValueError):
            is_time_slot_available([], DAY, "10:00", "hair", 0, capacity=1)
        with self.assertRaises(ValueError):
            get_unavailable_times([], DAY, "hair", -30, 30, capacity=1)

    def test_non_positive_duration_is_rejected_even_without_capacity(self):
        with self.assertRaises(ValueError):
            is_time_slot_available([], DAY, "10:00", "hair", 0, capacity=0)
        with self.assertRaises(ValueError):
            get_unavailable_times([], DAY, "hair", 0, 30, capacity=0)


class TestCrossConsistency(SimpleTestCase):

    def test_single_check_matches_grid(self):
        bookings = [
            _booking("BK1", "nail", "09:00", 90),
            _booking("BK2", "nail", "09:30", 45),
            _booking("BK3", "nail", "13:00", 120),
            _booking("BK4", "nail", "13:30", 30, status=STATUS_CANCELLED),
            _booking("BK5", "nail", "14:00", 60),
            _booking("BK6", "hair", "09:00", 600),
        ]
        for capacity in (0, 1, 2, 3):
            for duration in (30, 45, 60, 150):
                unavailable = get_unavailable_times(bookings, DAY, "nail", duration, 30, capacity=capacity)
                for slot in generate_time_slots("08:00", "22:00", 30):
                    with self.subTest(capacity=capacity, duration=duration, slot=slot):
                        self.assertEqual(
                            is_time_slot_available(bookings, DAY, slot, "nail", duration, capacity=capacity),
                            slot not in unavailable,
                        )


class TestServiceWindow(SimpleTestCase):

    def test_window_is_most_restrictive(self):
        services = [
            SimpleNamespace(available_from=time(8, 0), available_to=time(22, 0)),
            SimpleNamespace(available_from="10:00", available_to="20:00"),
            SimpleNamespace(available_from="09:00", available_to="21:00"),
        ]
        self.assertEqual(service_time_window(services), ("10:00", "20:00"))

    def test_empty_selection_uses_opening_hours(self):
        self.assertEqual(service_time_window([]), ("08:00", "22:00"))

    def test_bookable_slots_must_finish_inside_window(self):
        grid = generate_time_slots("08:00", "22:00", 30)
        now = timezone.make_aware(datetime(2025, 1, 20, 9, 0))
        slots = bookable_slots(grid, ("10:00", "12:00"), 60, DAY, now=now)
        self.assertEqual(slots, ["10:00", "10:30", "11:00"])

    def test_same_day_drops_past_slots(self):
        grid = generate_time_slots("08:00", "22:00", 30)
        now = timezone.make_aware(datetime(2025, 2, 1, 12, 10))
        slots = bookable_slots(grid, ("08:00", "22:00"), 30, DAY, now=now, same_day_buffer=30)
        self.assertEqual(slots[0], "13:00")
        self.assertEqual(slots[-1], "21:30")


class TestBuildSlotGrid(SimpleTestCase):

    def test_grid_payload(self):
        bookings = [_booking("BK1", "hair", "10:00", 60)]
        services = [SimpleNamespace(available_from="09:00", available_to="12:00")]
        now = timezone.make_aware(datetime(2025, 1, 20, 9, 0))

        payload = build_slot_grid(bookings, DAY, "hair", 60, 1, services=services, now=now)

        self.assertEqual(payload["window"], {"from": "09:00", "to": "12:00"})
        self.assertEqual(
            payload["slots"],
            [
                {"time": "09:00", "available": True},
                {"time": "09:30", "available": False},
                {"time": "10:00", "available": False},
                {"time": "10:30", "available": False},
                {"time": "11:00", "available": True},
            ],
        )
        self.assertEqual(payload["unavailable_times"], ["09:30", "10:00", "10:30"])

    def test_unrestricted_grid_covers_opening_hours(self):
        payload = build_slot_grid([], DAY, "nail", 30, 2, restrict_to_window=False)
        self.assertEqual(len(payload["slots"]), 28)
        self.assertTrue(all(s["available"] for s in payload["slots"]))
