"""
Creación de reservas con revalidación del horario.

La grilla que ve el cliente puede estar vieja. Justo antes de escribir se
vuelven a leer las reservas del día/zona y la capacidad real, y se corre
otra vez is_time_slot_available. Si ya no hay lugar se lanza
SlotUnavailable y no se escribe nada; el cliente debe elegir otro horario.

Es un check-then-act optimista: entre la relectura y el INSERT sigue
existiendo una ventana mínima de carrera.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from booking.models import Booking, BookingAudit, BookingService
from booking.services.availability import is_time_slot_available
from booking.services.exceptions import MixedZoneServices, ServiceUnavailable, SlotUnavailable
from booking.services.records import BookingRecord
from booking.services.timeslots import minutes_to_time, time_to_minutes, to_time, TimeLike
from catalog.models import Service
from staffing.services.capacity import resolve_zone_capacity

logger = logging.getLogger(__name__)


def load_services(service_ids: Iterable[int]) -> list[Service]:
    """
    Servicios activos en el orden pedido. Falla si alguno no existe o está inactivo.
    """
    ids = [int(x) for x in service_ids]
    if not ids:
        raise ServiceUnavailable("Selecciona al menos un servicio.")

    by_id = {s.id: s for s in Service.objects.filter(id__in=ids, active=True)}
    services: list[Service] = []
    for sid in ids:
        svc = by_id.get(sid)
        if svc is None:
            raise ServiceUnavailable(f"Servicio inválido/inactivo: {sid}")
        services.append(svc)
    return services


def resolve_zone(services: Iterable[Service]) -> str:
    zones = {s.zone for s in services}
    if len(zones) != 1:
        raise MixedZoneServices()
    return zones.pop()


def total_duration_of(services: Iterable[Service]) -> int:
    total = sum(int(s.duration_minutes) for s in services)
    if total <= 0:
        raise ServiceUnavailable("Los servicios seleccionados no tienen duración válida.")
    return total


def fetch_bookings(zone: str, on_date: date) -> list[BookingRecord]:
    """
    Lectura fresca de las reservas que ocupan capacidad ese día en la zona.
    """
    qs = (
        Booking.objects
        .filter(zone=zone, date=on_date)
        .exclude(status=Booking.STATUS_CANCELLED)
        .only("reference", "zone", "date", "start_time", "total_duration", "status")
    )
    return [b.to_record() for b in qs]


def check_slot(zone: str, on_date: date, start: TimeLike, duration: int, capacity: Optional[int] = None) -> bool:
    bookings = fetch_bookings(zone, on_date)
    cap = resolve_zone_capacity(zone, on_date) if capacity is None else capacity
    return is_time_slot_available(bookings, on_date, start, zone, duration, cap)


def create_booking(
    *,
    services: list[Service],
    on_date: date,
    start_time: TimeLike,
    customer_name: str,
    customer_phone: str,
    notes: str = "",
    slip_image: str = "",
    channel: str = Booking.CHANNEL_WEB,
    performed_by=None,
) -> Booking:
    zone = resolve_zone(services)
    total = total_duration_of(services)
    label = minutes_to_time(time_to_minutes(start_time))

    with transaction.atomic():
        # -------- Revalidar antes de crear (evita carreras) --------
        if not check_slot(zone, on_date, label, total):
            logger.warning(
                "Slot taken at submission: zone=%s date=%s time=%s duration=%s channel=%s",
                zone, on_date, label, total, channel,
            )
            raise SlotUnavailable()

        booking = Booking.objects.create(
            zone=zone,
            date=on_date,
            start_time=to_time(label),
            total_duration=total,
            customer_name=customer_name.strip(),
            customer_phone=customer_phone.strip(),
            notes=(notes or "").strip(),
            slip_image=slip_image or "",
            status=Booking.STATUS_CONFIRMED,
            channel=channel,
            created_by=performed_by if getattr(performed_by, "is_authenticated", False) else None,
        )

        # snapshots: la reserva no depende de ediciones futuras del catálogo
        BookingService.objects.bulk_create([
            BookingService(
                booking=booking,
                sequence=i,
                service=svc,
                service_name=svc.name,
                service_duration=svc.duration_minutes,
            )
            for i, svc in enumerate(services, start=1)
        ])

        BookingAudit.objects.create(
            booking=booking,
            action=BookingAudit.ACTION_CREATE,
            performed_by=booking.created_by,
            performed_at=timezone.now(),
            reason=f"Creación ({channel})",
            detail_json={"service_ids": [s.id for s in services], "time": label, "total_duration": total},
        )

    logger.info("Booking %s created: zone=%s date=%s time=%s duration=%s", booking.reference, zone, on_date, label, total)
    return booking
