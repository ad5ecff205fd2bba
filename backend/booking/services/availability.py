"""
Motor de disponibilidad por zona.

No guarda estado: todo lo que necesita llega por parámetro (reservas,
capacidad ya resuelta o la capacidad fija de la zona). La capacidad es
compartida por la zona; aquí solo se responde "¿hay lugar?", nunca
"¿qué trabajador atiende?".

Las dos operaciones públicas cuentan solapes con el mismo helper para que
siempre coincidan:

    is_time_slot_available(...) == (slot not in get_unavailable_times(...))
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence

from django.conf import settings
from django.utils import timezone

from booking.services.records import BookingRecord
from booking.services.timeslots import (
    TimeLike,
    generate_time_slots,
    intervals_overlap,
    minutes_to_time,
    time_to_minutes,
)


# -----------------------------
# Config por defecto (ajustable en settings.py)
# -----------------------------
DEFAULT_OPEN_TIME = getattr(settings, "BOOKING_OPEN_TIME", "08:00")
DEFAULT_CLOSE_TIME = getattr(settings, "BOOKING_CLOSE_TIME", "22:00")
DEFAULT_SLOT_INTERVAL = int(getattr(settings, "BOOKING_SLOT_INTERVAL_MINUTES", 30))
DEFAULT_ZONE_CAPACITY: dict[str, int] = dict(getattr(settings, "BOOKING_ZONE_CAPACITY", {"hair": 1, "nail": 2}))
DEFAULT_SAME_DAY_BUFFER = int(getattr(settings, "BOOKING_SAME_DAY_BUFFER_MINUTES", 30))


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _effective_capacity(zone: str, capacity: Optional[int]) -> int:
    # sin capacidad en vivo se usa la fija de la zona (contextos sin datos de personal)
    if capacity is None:
        return int(DEFAULT_ZONE_CAPACITY.get(zone, 0))
    return int(capacity)


def _check_duration(duration: int) -> int:
    duration = int(duration)
    if duration <= 0:
        raise ValueError("La duración debe ser mayor que 0 minutos.")
    return duration


def active_bookings(bookings: Iterable[BookingRecord], on_date, zone: str) -> list[BookingRecord]:
    """
    Reservas del mismo día y zona que ocupan capacidad (todo menos canceladas).
    """
    target = _as_date(on_date)
    return [
        b for b in bookings
        if _as_date(b.date) == target and b.zone == zone and b.blocks_capacity
    ]


def _count(active: Sequence[BookingRecord], start: int, end: int) -> int:
    return sum(1 for b in active if intervals_overlap(start, end, b.start_minutes, b.end_minutes))


def count_overlaps(
    bookings: Iterable[BookingRecord],
    on_date,
    zone: str,
    start: TimeLike,
    duration: int,
) -> int:
    duration = _check_duration(duration)
    begin = time_to_minutes(start)
    return _count(active_bookings(bookings, on_date, zone), begin, begin + duration)


def is_time_slot_available(
    bookings: Iterable[BookingRecord],
    on_date,
    start: TimeLike,
    zone: str,
    duration: int,
    capacity: Optional[int] = None,
) -> bool:
    duration = _check_duration(duration)
    cap = _effective_capacity(zone, capacity)
    if cap <= 0:
        return False
    return count_overlaps(bookings, on_date, zone, start, duration) < cap


def get_unavailable_times(
    bookings: Iterable[BookingRecord],
    on_date,
    zone: str,
    duration: int = 30,
    slot_interval: int = DEFAULT_SLOT_INTERVAL,
    capacity: Optional[int] = None,
    *,
    open_time: TimeLike = DEFAULT_OPEN_TIME,
    close_time: TimeLike = DEFAULT_CLOSE_TIME,
) -> list[str]:
    duration = _check_duration(duration)
    grid = generate_time_slots(open_time, close_time, slot_interval)

    cap = _effective_capacity(zone, capacity)
    if cap <= 0:
        # sin personal: todo el día bloqueado
        return grid

    active = active_bookings(bookings, on_date, zone)
    unavailable: list[str] = []
    for slot in grid:
        begin = time_to_minutes(slot)
        if _count(active, begin, begin + duration) >= cap:
            unavailable.append(slot)
    return unavailable


# -----------------------------
# Ventana de servicios (la aplica quien llama, no el motor)
# -----------------------------
def service_time_window(services: Iterable[Any]) -> tuple[str, str]:
    """
    Ventana más restrictiva de una selección de servicios:
    el available_from más tardío y el available_to más temprano.
    Sin servicios -> horario completo del local.
    """
    services = list(services)
    if not services:
        return (
            minutes_to_time(time_to_minutes(DEFAULT_OPEN_TIME)),
            minutes_to_time(time_to_minutes(DEFAULT_CLOSE_TIME)),
        )
    latest_from = max(time_to_minutes(s.available_from) for s in services)
    earliest_to = min(time_to_minutes(s.available_to) for s in services)
    return minutes_to_time(latest_from), minutes_to_time(earliest_to)


def bookable_slots(
    slots: Iterable[str],
    window: tuple[TimeLike, TimeLike],
    total_duration: int,
    on_date,
    *,
    now: Optional[datetime] = None,
    same_day_buffer: int = DEFAULT_SAME_DAY_BUFFER,
) -> list[str]:
    """
    Filtra la grilla a los horarios en que la selección puede empezar
    y terminar dentro de la ventana. Si la fecha es hoy, descarta lo que
    empieza antes de ahora + same_day_buffer.
    """
    total_duration = _check_duration(total_duration)
    w_from = time_to_minutes(window[0])
    w_to = time_to_minutes(window[1])

    now_local = timezone.localtime(now) if now is not None else timezone.localtime()
    earliest = None
    if _as_date(on_date) == now_local.date():
        earliest = now_local.hour * 60 + now_local.minute + same_day_buffer

    out: list[str] = []
    for slot in slots:
        m = time_to_minutes(slot)
        if earliest is not None and m < earliest:
            continue
        if m >= w_from and m + total_duration <= w_to:
            out.append(slot)
    return out


def build_slot_grid(
    bookings: Iterable[BookingRecord],
    on_date,
    zone: str,
    total_duration: int,
    capacity: Optional[int],
    *,
    services: Optional[Iterable[Any]] = None,
    slot_interval: int = DEFAULT_SLOT_INTERVAL,
    restrict_to_window: bool = True,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Payload de la grilla de horarios para la UI: cada horario candidato
    con su bandera available, más la lista cruda de no disponibles.
    """
    bookings = list(bookings)
    grid = generate_time_slots(DEFAULT_OPEN_TIME, DEFAULT_CLOSE_TIME, slot_interval)

    window = service_time_window(services or [])
    if restrict_to_window:
        grid = bookable_slots(grid, window, total_duration, on_date, now=now)

    unavailable = get_unavailable_times(
        bookings, on_date, zone, total_duration, slot_interval, capacity,
    )
    blocked = set(unavailable)

    return {
        "window": {"from": window[0], "to": window[1]},
        "unavailable_times": unavailable,
        "slots": [{"time": t, "available": t not in blocked} for t in grid],
    }
