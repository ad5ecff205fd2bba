import logging
from datetime import date

from django.shortcuts import get_object_or_404
from rest_framework.exceptions import ValidationError
from rest_framework.generics import DestroyAPIView, ListCreateAPIView, RetrieveUpdateDestroyAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStaffOrAdmin
from staffing.models import Staff, StaffDayOff
from staffing.serializers import StaffDayOffSerializer, StaffManageSerializer

logger = logging.getLogger(__name__)


def _date_param(request, name: str):
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError({name: ["Fecha inválida (se espera YYYY-MM-DD)."]})


class StaffManageListCreateAPIView(ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = StaffManageSerializer

    def get_queryset(self):
        qs = Staff.objects.all().order_by("id")
        q = (self.request.query_params.get("q") or "").strip()
        role = (self.request.query_params.get("role") or "").strip().lower()
        active = self.request.query_params.get("active")

        if q:
            qs = qs.filter(name__icontains=q)
        if role in {r for r, _ in Staff.ROLE_CHOICES}:
            qs = qs.filter(role=role)
        if active in ("0", "1"):
            qs = qs.filter(active=(active == "1"))
        return qs


class StaffManageDetailAPIView(RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = StaffManageSerializer
    queryset = Staff.objects.all()

    # “Delete” seguro: lo pasamos a inactivo para conservar el historial
    def delete(self, request, *args, **kwargs):
        obj = self.get_object()
        obj.active = False
        obj.save(update_fields=["active", "updated_at"])
        logger.info("Staff %s deactivated by %s", obj.pk, request.user)
        return Response({"detail": "Personal desactivado."}, status=200)


class StaffDayOffListCreateAPIView(ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = StaffDayOffSerializer

    def get_staff(self):
        return get_object_or_404(Staff, pk=self.kwargs["staff_id"])

    def get_queryset(self):
        qs = StaffDayOff.objects.filter(staff_id=self.kwargs["staff_id"]).order_by("-date")
        from_d = _date_param(self.request, "from")
        to_d = _date_param(self.request, "to")
        if from_d:
            qs = qs.filter(date__gte=from_d)
        if to_d:
            qs = qs.filter(date__lte=to_d)
        return qs

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx["staff_id"] = self.kwargs["staff_id"]
        return ctx

    def perform_create(self, serializer):
        staff = self.get_staff()
        serializer.save(staff=staff)
        logger.info("Day off added: staff=%s date=%s", staff.pk, serializer.instance.date)


class StaffDayOffDetailAPIView(DestroyAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = StaffDayOffSerializer

    def get_queryset(self):
        return StaffDayOff.objects.filter(staff_id=self.kwargs["staff_id"])
