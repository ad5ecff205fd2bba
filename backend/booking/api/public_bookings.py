from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from booking.api.common import booking_error_response
from booking.models import Booking
from booking.serializers import (
    BookingPublicSerializer,
    PublicBookingCreateSerializer,
    SLIP_REQUIRED_ZONES,
)
from booking.services.availability import (
    DEFAULT_CLOSE_TIME,
    DEFAULT_OPEN_TIME,
    bookable_slots,
    service_time_window,
)
from booking.services.exceptions import BookingError
from booking.services.reservations import create_booking, load_services, resolve_zone, total_duration_of
from booking.services.timeslots import generate_time_slots


class PublicBookingCreateAPIView(APIView):
    """
    Crea una reserva desde la web del cliente (NO requiere login).

    Body:
      {
        "service_ids": [7, 10],
        "date": "2025-02-01",
        "time": "14:00",
        "customer_name": "...",
        "customer_phone": "0812345678",
        "notes": "",          # opcional
        "slip_image": "...",  # requerido para zonas con depósito (uñas)
        "slot_interval_minutes": 30  # opcional, el mismo de la grilla
      }

    Antes de escribir se revalida el horario contra las reservas actuales;
    si se ocupó mientras tanto responde 409 y no se crea nada.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        ser = PublicBookingCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            services = load_services(data["service_ids"])
            zone = resolve_zone(services)
            total = total_duration_of(services)
        except BookingError as exc:
            return booking_error_response(exc)

        if zone in SLIP_REQUIRED_ZONES and not (data.get("slip_image") or "").strip():
            return Response({"slip_image": ["Se requiere el comprobante de depósito para esta zona."]}, status=400)

        # el horario debe caer dentro de la ventana de los servicios elegidos
        grid = generate_time_slots(DEFAULT_OPEN_TIME, DEFAULT_CLOSE_TIME, data["slot_interval_minutes"])
        allowed = bookable_slots(grid, service_time_window(services), total, data["date"])
        if data["time"] not in allowed:
            return Response({"time": ["Horario fuera del rango disponible para los servicios elegidos."]}, status=400)

        try:
            booking = create_booking(
                services=services,
                on_date=data["date"],
                start_time=data["time"],
                customer_name=data["customer_name"],
                customer_phone=data["customer_phone"],
                notes=data.get("notes", ""),
                slip_image=data.get("slip_image", ""),
                channel=Booking.CHANNEL_WEB,
            )
        except BookingError as exc:
            return booking_error_response(exc)

        return Response(BookingPublicSerializer(booking).data, status=201)


class PublicBookingDetailAPIView(APIView):
    """
    Resumen de una reserva por su referencia (pantalla de confirmación).
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, reference: str):
        booking = get_object_or_404(
            Booking.objects.prefetch_related("services"),
            reference=reference.strip().upper(),
        )
        return Response(BookingPublicSerializer(booking).data, status=200)
