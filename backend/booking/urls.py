from django.urls import path

from booking.api.availability import PublicAvailabilityAPIView, StaffAvailabilityAPIView
from booking.api.public_bookings import PublicBookingCreateAPIView, PublicBookingDetailAPIView
from booking.views import BookingStaffDetail, BookingStaffListCreate

from booking.api.management import (
    CancelBookingAPIView,
    CompleteBookingAPIView,
    MarkNoShowAPIView,
)

urlpatterns = [
    # web del cliente
    path("public/availability/", PublicAvailabilityAPIView.as_view(), name="public-availability"),
    path("public/bookings/", PublicBookingCreateAPIView.as_view(), name="public-bookings-create"),
    path("public/bookings/<str:reference>/", PublicBookingDetailAPIView.as_view(), name="public-bookings-detail"),

    # recepción
    path("staff/availability/", StaffAvailabilityAPIView.as_view(), name="staff-availability"),
    path("staff/bookings/", BookingStaffListCreate.as_view(), name="staff-bookings"),
    path("staff/bookings/<int:pk>/", BookingStaffDetail.as_view(), name="staff-bookings-detail"),

    # acciones operativas
    path("staff/bookings/<int:pk>/complete/", CompleteBookingAPIView.as_view(), name="booking-complete"),
    path("staff/bookings/<int:pk>/cancel/", CancelBookingAPIView.as_view(), name="booking-cancel"),
    path("staff/bookings/<int:pk>/no-show/", MarkNoShowAPIView.as_view(), name="booking-no-show"),
]
