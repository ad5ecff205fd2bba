from django.urls import path

from catalog.api import (
    ServicePublicListAPIView,
    ServiceStaffListCreateAPIView,
    ServiceStaffDetailAPIView,
    ServiceToggleActiveAPIView,
    ServiceReorderAPIView,
)

urlpatterns = [
    # Público
    path("public/services/", ServicePublicListAPIView.as_view(), name="public-services"),

    # Staff/Admin (CRUD)
    path("staff/services/", ServiceStaffListCreateAPIView.as_view(), name="staff-services"),
    path("staff/services/reorder/", ServiceReorderAPIView.as_view(), name="staff-services-reorder"),
    path("staff/services/<int:pk>/", ServiceStaffDetailAPIView.as_view(), name="staff-service-detail"),
    path("staff/services/<int:pk>/toggle-active/", ServiceToggleActiveAPIView.as_view(), name="staff-service-toggle-active"),
]
