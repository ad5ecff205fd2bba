from datetime import date

from django.db.models import Q
from rest_framework import status
from rest_framework.generics import ListCreateAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStaffOrAdmin
from booking.api.common import booking_error_response
from booking.models import Booking
from booking.serializers import (
    BookingAuditSerializer,
    BookingStaffSerializer,
    StaffBookingCreateSerializer,
)
from booking.services.exceptions import BookingError
from booking.services.reservations import create_booking, load_services


def _parse_date(value):
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


class BookingStaffListCreate(ListCreateAPIView):
    """
    GET  /api/staff/bookings/?date=&from=&to=&zone=&status=&q=
    POST /api/staff/bookings/   (walk-in / LINE, sin restricción de ventana)
    """
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = BookingStaffSerializer

    def get_queryset(self):
        qs = (
            Booking.objects
            .select_related("created_by")
            .prefetch_related("services")
            .order_by("date", "start_time", "id")
        )

        qp = self.request.query_params

        on_date = _parse_date(qp.get("date"))
        if on_date:
            qs = qs.filter(date=on_date)

        from_d = _parse_date(qp.get("from"))
        to_d = _parse_date(qp.get("to"))
        if from_d:
            qs = qs.filter(date__gte=from_d)
        if to_d:
            qs = qs.filter(date__lte=to_d)

        zone = qp.get("zone")
        if zone and zone != "ALL":
            qs = qs.filter(zone=zone)

        st = qp.get("status")
        if st and st != "ALL":
            qs = qs.filter(status=st)

        q = (qp.get("q") or "").strip()
        if q:
            qs = qs.filter(
                Q(customer_name__icontains=q)
                | Q(customer_phone__icontains=q)
                | Q(reference__icontains=q)
            )

        return qs

    def create(self, request, *args, **kwargs):
        ser = StaffBookingCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            services = load_services(data["service_ids"])
            booking = create_booking(
                services=services,
                on_date=data["date"],
                start_time=data["time"],
                customer_name=data["customer_name"],
                customer_phone=data["customer_phone"],
                notes=data.get("notes", ""),
                slip_image=data.get("slip_image", ""),
                channel=data["channel"],
                performed_by=request.user,
            )
        except BookingError as exc:
            return booking_error_response(exc)

        return Response(BookingStaffSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingStaffDetail(RetrieveAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = BookingStaffSerializer
    queryset = Booking.objects.select_related("created_by").prefetch_related("services", "audits__performed_by")

    def retrieve(self, request, *args, **kwargs):
        booking = self.get_object()
        data = BookingStaffSerializer(booking).data
        data["audits"] = BookingAuditSerializer(booking.audits.all().order_by("performed_at", "id"), many=True).data
        return Response(data)
