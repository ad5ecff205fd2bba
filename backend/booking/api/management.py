from __future__ import annotations

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffOrAdmin
from booking.api.common import booking_error_response
from booking.models import Booking
from booking.serializers import BookingStaffSerializer, StatusChangeSerializer
from booking.services.exceptions import BookingError
from booking.services.status import cancel_booking, complete_booking, mark_no_show


class BookingStatusActionAPIView(APIView):
    """
    Base de las acciones de recepción sobre una reserva confirmada.
    Body opcional: {"reason": "..."}
    """
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    transition = None

    def post(self, request, pk: int):
        booking = Booking.objects.filter(pk=pk).first()
        if not booking:
            return Response({"detail": "Reserva no encontrada."}, status=404)

        ser = StatusChangeSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)

        try:
            booking = type(self).transition(booking, performed_by=request.user, reason=ser.validated_data["reason"])
        except BookingError as exc:
            return booking_error_response(exc)

        return Response(BookingStaffSerializer(booking).data, status=200)


class CompleteBookingAPIView(BookingStatusActionAPIView):
    """
    POST /api/staff/bookings/<id>/complete/
    """
    transition = complete_booking


class CancelBookingAPIView(BookingStatusActionAPIView):
    """
    POST /api/staff/bookings/<id>/cancel/
    Libera el cupo: las canceladas no cuentan para la capacidad.
    """
    transition = cancel_booking


class MarkNoShowAPIView(BookingStatusActionAPIView):
    """
    POST /api/staff/bookings/<id>/no-show/
    """
    transition = mark_no_show
