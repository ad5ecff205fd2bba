import secrets
import time as _time

from django.conf import settings
from django.db import models
from django.utils import timezone

from booking.services.records import (
    BookingRecord,
    ServiceSnapshot,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_CONFIRMED,
    STATUS_NO_SHOW,
)
from booking.services.timeslots import calculate_end_time, minutes_to_time, time_to_minutes
from catalog.models import ZONE_CHOICES


_B36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _base36(n: int) -> str:
    out = ""
    while n:
        n, r = divmod(n, 36)
        out = _B36[r] + out
    return out or "0"


def generate_reference() -> str:
    # BK + timestamp ms en base36 + sufijo aleatorio (varias reservas en el mismo ms)
    return f"BK{_base36(int(_time.time() * 1000))}{secrets.token_hex(2).upper()}"


class Booking(models.Model):
    STATUS_CONFIRMED = STATUS_CONFIRMED
    STATUS_COMPLETED = STATUS_COMPLETED
    STATUS_CANCELLED = STATUS_CANCELLED
    STATUS_NO_SHOW = STATUS_NO_SHOW
    STATUS_CHOICES = [
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_NO_SHOW, "No show"),
    ]

    CHANNEL_WEB = "web"
    CHANNEL_WALK_IN = "walk-in"
    CHANNEL_LINE = "line"
    CHANNEL_CHOICES = [
        (CHANNEL_WEB, "Web"),
        (CHANNEL_WALK_IN, "Walk-in"),
        (CHANNEL_LINE, "LINE"),
    ]

    reference = models.CharField(max_length=32, unique=True, default=generate_reference, editable=False)

    zone = models.CharField(max_length=10, choices=ZONE_CHOICES)
    date = models.DateField()
    start_time = models.TimeField()
    # suma de duraciones (desnormalizado para chequear solapes rápido)
    total_duration = models.PositiveIntegerField()

    customer_name = models.CharField(max_length=120)
    customer_phone = models.CharField(max_length=20)
    notes = models.TextField(blank=True, default="")
    slip_image = models.CharField(max_length=500, blank=True, default="")

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_CONFIRMED)
    channel = models.CharField(max_length=20, choices=CHANNEL_CHOICES, default=CHANNEL_WEB)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="created_bookings"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "start_time", "id"]
        indexes = [
            models.Index(fields=["date", "zone", "status"], name="booking_date_zone_status_idx"),
            models.Index(fields=["customer_phone"], name="booking_customer_phone_idx"),
        ]

    def __str__(self):
        return f"{self.reference} {self.date} {self.start_time_label} ({self.zone})"

    @property
    def start_time_label(self) -> str:
        return minutes_to_time(time_to_minutes(self.start_time))

    @property
    def end_time_label(self) -> str:
        return calculate_end_time(self.start_time, self.total_duration)

    def to_record(self) -> BookingRecord:
        services = ()
        cache = getattr(self, "_prefetched_objects_cache", {}).get("services")
        if cache is not None:
            services = tuple(ln.to_snapshot() for ln in cache)
        return BookingRecord(
            reference=self.reference,
            zone=self.zone,
            date=self.date,
            time=self.start_time_label,
            total_duration=int(self.total_duration),
            status=self.status,
            services=services,
        )


class BookingService(models.Model):
    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="services")
    sequence = models.PositiveSmallIntegerField(default=1)
    # referencia informativa: si el servicio se edita, el snapshot no cambia
    service = models.ForeignKey("catalog.Service", null=True, blank=True, on_delete=models.SET_NULL)

    service_name = models.CharField(max_length=120)
    service_duration = models.PositiveSmallIntegerField()

    class Meta:
        ordering = ["booking", "sequence"]

    def __str__(self):
        return f"{self.service_name} ({self.service_duration} min)"

    def to_snapshot(self) -> ServiceSnapshot:
        return ServiceSnapshot(name=self.service_name, duration=int(self.service_duration))


class BookingAudit(models.Model):
    ACTION_CREATE = "CREATE"
    ACTION_STATUS_CHANGE = "STATUS_CHANGE"

    ACTION_CHOICES = [
        (ACTION_CREATE, "Create"),
        (ACTION_STATUS_CHANGE, "Status change"),
    ]

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="audits")
    action = models.CharField(max_length=30, choices=ACTION_CHOICES)
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="booking_audits"
    )
    performed_at = models.DateTimeField(default=timezone.now)
    reason = models.CharField(max_length=255, blank=True, default="")
    detail_json = models.JSONField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["booking", "performed_at"], name="booking_audit_booking_idx"),
        ]
