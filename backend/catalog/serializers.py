from rest_framework import serializers
from catalog.models import Service


class ServicePublicSerializer(serializers.ModelSerializer):
    available_from = serializers.TimeField(format="%H:%M")
    available_to = serializers.TimeField(format="%H:%M")

    class Meta:
        model = Service
        fields = [
            "id",
            "name",
            "zone",
            "duration_minutes",
            "available_from",
            "available_to",
            "sort_order",
        ]


class ServiceStaffSerializer(serializers.ModelSerializer):
    available_from = serializers.TimeField(format="%H:%M", required=False)
    available_to = serializers.TimeField(format="%H:%M", required=False)

    class Meta:
        model = Service
        fields = [
            "id",
            "name",
            "zone",
            "duration_minutes",
            "available_from",
            "available_to",
            "active",
            "sort_order",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_duration_minutes(self, value):
        if value <= 0:
            raise serializers.ValidationError("duration_minutes debe ser mayor que 0.")
        return value

    def validate(self, attrs):
        # Tomar valores actuales si es PATCH
        st = attrs.get("available_from") or getattr(self.instance, "available_from", None)
        en = attrs.get("available_to") or getattr(self.instance, "available_to", None)
        if st and en and en <= st:
            raise serializers.ValidationError("available_to debe ser mayor que available_from.")
        return attrs


class ServiceReorderSerializer(serializers.Serializer):
    zone = serializers.ChoiceField(choices=[c[0] for c in Service._meta.get_field("zone").choices])
    ordered_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
