from __future__ import annotations

import logging

from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffOrAdmin
from booking.api.common import booking_error_response
from booking.serializers import AvailabilityQuerySerializer, PublicAvailabilityQuerySerializer
from booking.services.availability import build_slot_grid
from booking.services.exceptions import BookingError
from booking.services.reservations import fetch_bookings, load_services, resolve_zone, total_duration_of
from staffing.services.capacity import resolve_zone_capacity

logger = logging.getLogger(__name__)


class AvailabilityBaseAPIView(APIView):
    """
    Grilla de horarios para una fecha y una selección de servicios.

    Body:
      {"date": "2025-02-01", "service_ids": [1, 2], "slot_interval_minutes": 30}

    La zona sale de los servicios (todos deben ser de la misma), la
    duración es la suma y la capacidad es la del personal real ese día.
    La web del cliente además recorta la grilla a la ventana de los
    servicios y descarta horarios pasados.
    """
    restrict_to_window = True
    query_serializer_class = AvailabilityQuerySerializer

    def post(self, request):
        ser = self.query_serializer_class(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            services = load_services(data["service_ids"])
            zone = resolve_zone(services)
            total = total_duration_of(services)
        except BookingError as exc:
            return booking_error_response(exc)

        on_date = data["date"]
        capacity = resolve_zone_capacity(zone, on_date)
        bookings = fetch_bookings(zone, on_date)

        grid = build_slot_grid(
            bookings,
            on_date,
            zone,
            total,
            capacity,
            services=services,
            slot_interval=data["slot_interval_minutes"],
            restrict_to_window=self.restrict_to_window,
        )
        logger.debug("Availability %s %s dur=%s cap=%s unavailable=%s", zone, on_date, total, capacity, len(grid["unavailable_times"]))

        return Response(
            {
                "date": on_date.isoformat(),
                "zone": zone,
                "total_duration": total,
                "capacity": capacity,
                **grid,
            },
            status=200,
        )


class PublicAvailabilityAPIView(AvailabilityBaseAPIView):
    """
    Grilla para la web del cliente: solo fechas reservables (hoy .. MAX_ADVANCE_DAYS).
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    query_serializer_class = PublicAvailabilityQuerySerializer


class StaffAvailabilityAPIView(AvailabilityBaseAPIView):
    """
    Misma grilla para recepción: horario completo del local, sin recorte.
    """
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    restrict_to_window = False
