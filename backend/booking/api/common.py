from __future__ import annotations

from rest_framework.response import Response

from booking.services.exceptions import (
    BookingError,
    InvalidStatusTransition,
    SlotUnavailable,
)


def booking_error_response(exc: BookingError) -> Response:
    # conflictos de agenda/estado -> 409, el resto es error del request
    status = 409 if isinstance(exc, (SlotUnavailable, InvalidStatusTransition)) else 400
    return Response({"detail": exc.detail, "code": exc.code}, status=status)
