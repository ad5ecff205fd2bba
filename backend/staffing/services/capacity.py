from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from staffing.models import Staff, StaffDayOff

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaffRecord:
    id: int
    role: str
    active: bool = True


@dataclass(frozen=True)
class DayOffRecord:
    staff_id: int
    date: date


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def get_zone_capacity(
    zone: str,
    on_date,
    staff: Iterable[StaffRecord],
    day_offs: Iterable[DayOffRecord],
) -> int:
    """
    Cuántos trabajadores pueden atender la zona ese día:
    activos, con role == zone y sin día libre en esa fecha.
    0 significa "no hay personal": el día queda cerrado para la zona.
    """
    if zone not in Staff.ZONE_ROLES:
        return 0

    target = _as_date(on_date)
    off_ids = {d.staff_id for d in day_offs if _as_date(d.date) == target}

    return sum(1 for s in staff if s.active and s.role == zone and s.id not in off_ids)


def resolve_zone_capacity(zone: str, on_date) -> int:
    """
    Igual que get_zone_capacity pero leyendo Staff / StaffDayOff de la BD.
    """
    target = _as_date(on_date)

    staff = [
        StaffRecord(id=row["id"], role=row["role"], active=row["active"])
        for row in Staff.objects.filter(active=True, role=zone).values("id", "role", "active")
    ]
    day_offs = [
        DayOffRecord(staff_id=row["staff_id"], date=row["date"])
        for row in StaffDayOff.objects.filter(date=target, staff__role=zone).values("staff_id", "date")
    ]

    capacity = get_zone_capacity(zone, target, staff, day_offs)
    logger.debug("Capacity %s on %s: %s (staff=%s, off=%s)", zone, target, capacity, len(staff), len(day_offs))
    return capacity
