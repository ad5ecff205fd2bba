from __future__ import annotations

import re
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers

from booking.models import Booking, BookingAudit, BookingService
from booking.services.availability import DEFAULT_SLOT_INTERVAL
from booking.services.timeslots import InvalidTimeFormat, minutes_to_time, time_to_minutes


MAX_ADVANCE_DAYS = int(getattr(settings, "BOOKING_MAX_ADVANCE_DAYS", 14))
SLIP_REQUIRED_ZONES = set(getattr(settings, "BOOKING_SLIP_REQUIRED_ZONES", ["nail"]))

_THAI_MOBILE_RE = re.compile(r"^0[689]\d{8}$")


def normalize_phone(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def is_valid_thai_phone(value: str) -> bool:
    return bool(_THAI_MOBILE_RE.match(normalize_phone(value)))


class TimeLabelField(serializers.CharField):
    """
    "HH:MM" -> etiqueta normalizada (acepta también HH:MM:SS).
    """

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            return minutes_to_time(time_to_minutes(value))
        except InvalidTimeFormat as exc:
            raise serializers.ValidationError(str(exc))


# --------------------------
# Lectura
# --------------------------
class BookingServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingService
        fields = ["sequence", "service", "service_name", "service_duration"]


class BookingPublicSerializer(serializers.ModelSerializer):
    services = BookingServiceSerializer(many=True, read_only=True)
    time = serializers.CharField(source="start_time_label", read_only=True)
    end_time = serializers.CharField(source="end_time_label", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "reference",
            "zone",
            "date",
            "time",
            "end_time",
            "total_duration",
            "services",
            "customer_name",
            "status",
            "created_at",
        ]


class BookingStaffSerializer(BookingPublicSerializer):
    """
    Para recepción: incluye teléfono, notas, slip y canal.
    """
    created_by = serializers.SerializerMethodField()

    class Meta(BookingPublicSerializer.Meta):
        fields = ["id"] + BookingPublicSerializer.Meta.fields + [
            "customer_phone",
            "notes",
            "slip_image",
            "channel",
            "created_by",
            "updated_at",
        ]

    def get_created_by(self, obj: Booking):
        u = getattr(obj, "created_by", None)
        return str(u) if u is not None else None


class BookingAuditSerializer(serializers.ModelSerializer):
    performed_by = serializers.StringRelatedField()

    class Meta:
        model = BookingAudit
        fields = ["action", "performed_by", "performed_at", "reason", "detail_json"]


# --------------------------
# Escritura / consultas
# --------------------------
def validate_public_date(value):
    """
    La web del cliente solo permite reservar desde hoy hasta MAX_ADVANCE_DAYS.
    """
    today = timezone.localdate()
    if value < today:
        raise serializers.ValidationError("No se puede reservar en una fecha pasada.")
    if value > today + timedelta(days=MAX_ADVANCE_DAYS - 1):
        raise serializers.ValidationError(f"Solo se puede reservar hasta {MAX_ADVANCE_DAYS} días adelante.")
    return value


class SlotIntervalField(serializers.IntegerField):
    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("min_value", 5)
        kwargs.setdefault("max_value", 240)
        kwargs.setdefault("default", DEFAULT_SLOT_INTERVAL)
        super().__init__(**kwargs)


class AvailabilityQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    service_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    slot_interval_minutes = SlotIntervalField()


class PublicAvailabilityQuerySerializer(AvailabilityQuerySerializer):
    def validate_date(self, value):
        return validate_public_date(value)


class BookingCreateSerializer(serializers.Serializer):
    service_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    date = serializers.DateField()
    time = TimeLabelField()
    customer_name = serializers.CharField(max_length=120)
    customer_phone = serializers.CharField(max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    slip_image = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")

    def validate_customer_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("customer_name es requerido.")
        return value

    def validate_customer_phone(self, value):
        if not is_valid_thai_phone(value):
            raise serializers.ValidationError("Teléfono inválido (debe empezar con 06, 08 o 09 y tener 10 dígitos).")
        return normalize_phone(value)

    def validate_service_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("service_ids no puede tener repetidos.")
        return value


class PublicBookingCreateSerializer(BookingCreateSerializer):
    """
    Reserva desde la web del cliente: canal web, fecha dentro del rango
    permitido; el slip se valida cuando ya se conoce la zona.
    slot_interval_minutes debe ser el mismo con el que se pidió la grilla.
    """
    slot_interval_minutes = SlotIntervalField()

    def validate_date(self, value):
        return validate_public_date(value)


class StaffBookingCreateSerializer(BookingCreateSerializer):
    channel = serializers.ChoiceField(choices=[c[0] for c in Booking.CHANNEL_CHOICES], default=Booking.CHANNEL_WALK_IN)


class StatusChangeSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
