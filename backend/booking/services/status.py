from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from booking.models import Booking, BookingAudit
from booking.services.exceptions import InvalidStatusTransition

logger = logging.getLogger(__name__)


# confirmed es el único estado con salida; el resto es terminal
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    Booking.STATUS_CONFIRMED: {Booking.STATUS_COMPLETED, Booking.STATUS_CANCELLED, Booking.STATUS_NO_SHOW},
    Booking.STATUS_COMPLETED: set(),
    Booking.STATUS_CANCELLED: set(),
    Booking.STATUS_NO_SHOW: set(),
}


def can_transition(current: str, new_status: str) -> bool:
    return new_status in ALLOWED_TRANSITIONS.get(current, set())


def transition_booking(booking: Booking, new_status: str, *, performed_by=None, reason: str = "") -> Booking:
    with transaction.atomic():
        # releer con lock para no pisar un cambio concurrente
        locked = Booking.objects.select_for_update().get(pk=booking.pk)
        current = locked.status

        if not can_transition(current, new_status):
            raise InvalidStatusTransition(f"No se puede pasar de {current} a {new_status}.")

        locked.status = new_status
        locked.save(update_fields=["status", "updated_at"])

        BookingAudit.objects.create(
            booking=locked,
            action=BookingAudit.ACTION_STATUS_CHANGE,
            performed_by=performed_by if getattr(performed_by, "is_authenticated", False) else None,
            performed_at=timezone.now(),
            reason=reason or "",
            detail_json={"from": current, "to": new_status},
        )

    logger.info("Booking %s: %s -> %s", locked.reference, current, new_status)
    booking.status = locked.status
    return locked


def complete_booking(booking: Booking, **kwargs) -> Booking:
    return transition_booking(booking, Booking.STATUS_COMPLETED, **kwargs)


def cancel_booking(booking: Booking, **kwargs) -> Booking:
    return transition_booking(booking, Booking.STATUS_CANCELLED, **kwargs)


def mark_no_show(booking: Booking, **kwargs) -> Booking:
    return transition_booking(booking, Booking.STATUS_NO_SHOW, **kwargs)
