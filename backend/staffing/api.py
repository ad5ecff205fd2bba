from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffOrAdmin
from staffing.models import Staff, StaffDayOff
from staffing.serializers import ZoneCapacityQuerySerializer
from staffing.services.capacity import resolve_zone_capacity


class ZoneCapacityAPIView(APIView):
    """
    GET /api/staff/capacity/?zone=hair&date=2025-02-01

    Capacidad efectiva de la zona ese día y quién está libre.
    """
    permission_classes = [IsAuthenticated, IsStaffOrAdmin]

    def get(self, request):
        ser = ZoneCapacityQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        zone = ser.validated_data["zone"]
        on_date = ser.validated_data["date"]

        off = list(
            StaffDayOff.objects
            .filter(date=on_date, staff__role=zone, staff__active=True)
            .select_related("staff")
            .order_by("staff__name")
        )

        return Response(
            {
                "zone": zone,
                "date": on_date.isoformat(),
                "capacity": resolve_zone_capacity(zone, on_date),
                "active_staff": Staff.objects.filter(active=True, role=zone).count(),
                "day_offs": [{"staff_id": d.staff_id, "name": d.staff.name, "note": d.note} for d in off],
            },
            status=200,
        )
