from django.urls import path
from staffing.api import ZoneCapacityAPIView
from staffing.api_manage import (
    StaffManageListCreateAPIView,
    StaffManageDetailAPIView,
    StaffDayOffListCreateAPIView,
    StaffDayOffDetailAPIView,
)

urlpatterns = [
    # staff manage (CRUD)
    path("staff/members/", StaffManageListCreateAPIView.as_view(), name="staff-members"),
    path("staff/members/<int:pk>/", StaffManageDetailAPIView.as_view(), name="staff-members-detail"),

    path("staff/members/<int:staff_id>/day-offs/", StaffDayOffListCreateAPIView.as_view(), name="staff-day-offs"),
    path("staff/members/<int:staff_id>/day-offs/<int:pk>/", StaffDayOffDetailAPIView.as_view(), name="staff-day-offs-detail"),

    # capacidad por zona
    path("staff/capacity/", ZoneCapacityAPIView.as_view(), name="staff-capacity"),
]
