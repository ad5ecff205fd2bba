import logging

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework.generics import (
    ListAPIView,
    ListCreateAPIView,
    RetrieveUpdateDestroyAPIView,
)
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffOrAdmin
from catalog.models import Service
from catalog.serializers import (
    ServicePublicSerializer,
    ServiceStaffSerializer,
    ServiceReorderSerializer,
)

logger = logging.getLogger(__name__)


def reorder_services(zone: str, ordered_ids: list[int]) -> int:
    """
    Reasigna sort_order dentro de una zona según ordered_ids (posición + 1).
    Los servicios de la zona que no vienen en la lista conservan su orden.
    Devuelve cuántos servicios cambiaron.
    """
    position = {sid: idx for idx, sid in enumerate(ordered_ids)}
    changed = 0
    with transaction.atomic():
        for svc in Service.objects.select_for_update().filter(zone=zone):
            idx = position.get(svc.id)
            if idx is None:
                continue
            new_order = idx + 1
            if svc.sort_order != new_order:
                svc.sort_order = new_order
                svc.save(update_fields=["sort_order", "updated_at"])
                changed += 1
    return changed


# --------------------------
# PUBLIC
# --------------------------
class ServicePublicListAPIView(ListAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = ServicePublicSerializer

    def get_queryset(self):
        qs = Service.objects.filter(active=True)
        zone = (self.request.query_params.get("zone") or "").strip().lower()
        if zone:
            qs = qs.filter(zone=zone)
        return qs.order_by("zone", "sort_order", "id")


# --------------------------
# STAFF / ADMIN  (CRUD)
# --------------------------
class ServiceStaffListCreateAPIView(ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = ServiceStaffSerializer

    def get_queryset(self):
        qs = Service.objects.all()
        zone = (self.request.query_params.get("zone") or "").strip().lower()
        active = self.request.query_params.get("active")
        if zone:
            qs = qs.filter(zone=zone)
        if active in ("0", "1"):
            qs = qs.filter(active=(active == "1"))
        return qs.order_by("zone", "sort_order", "id")


class ServiceStaffDetailAPIView(RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]
    serializer_class = ServiceStaffSerializer
    queryset = Service.objects.all()

    # Las reservas guardan snapshot del servicio: "borrar" = desactivar
    def delete(self, request, *args, **kwargs):
        obj = self.get_object()
        obj.active = False
        obj.save(update_fields=["active", "updated_at"])
        logger.info("Service %s deactivated by %s", obj.pk, request.user)
        return Response({"detail": "Servicio desactivado."}, status=200)


class ServiceToggleActiveAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]

    def post(self, request, pk: int):
        svc = get_object_or_404(Service, pk=pk)
        svc.active = not svc.active
        svc.save(update_fields=["active", "updated_at"])
        return Response(ServiceStaffSerializer(svc).data, status=200)


class ServiceReorderAPIView(APIView):
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]

    def post(self, request):
        ser = ServiceReorderSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        zone = ser.validated_data["zone"]
        changed = reorder_services(zone, ser.validated_data["ordered_ids"])

        services = Service.objects.filter(zone=zone).order_by("sort_order", "id")
        return Response(
            {"changed": changed, "services": ServiceStaffSerializer(services, many=True).data},
            status=200,
        )
