from rest_framework import serializers
from staffing.models import Staff, StaffDayOff


class StaffManageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Staff
        fields = [
            "id",
            "name",
            "phone",
            "email",
            "role",
            "base_salary",
            "commission_enabled",
            "active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name es requerido.")
        return value

    def validate_base_salary(self, value):
        if value < 0:
            raise serializers.ValidationError("base_salary no puede ser negativo.")
        return value


class StaffDayOffSerializer(serializers.ModelSerializer):
    class Meta:
        model = StaffDayOff
        fields = ["id", "staff", "date", "note"]
        read_only_fields = ["staff"]

    def validate(self, attrs):
        # uniq_staff_day_off: un solo día libre por persona y fecha
        staff_id = self.context.get("staff_id") or getattr(self.instance, "staff_id", None)
        on_date = attrs.get("date", getattr(self.instance, "date", None))
        if staff_id and on_date:
            qs = StaffDayOff.objects.filter(staff_id=staff_id, date=on_date)
            if self.instance:
                qs = qs.exclude(id=self.instance.id)
            if qs.exists():
                raise serializers.ValidationError({"date": "Ya existe un día libre para esa fecha."})
        return attrs


class ZoneCapacityQuerySerializer(serializers.Serializer):
    zone = serializers.ChoiceField(choices=list(Staff.ZONE_ROLES))
    date = serializers.DateField()
