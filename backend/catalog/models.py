from datetime import time

from django.db import models


ZONE_HAIR = "hair"
ZONE_NAIL = "nail"

ZONE_CHOICES = [
    (ZONE_HAIR, "Hair"),
    (ZONE_NAIL, "Nail"),
]


class Service(models.Model):
    name = models.CharField(max_length=120)
    zone = models.CharField(max_length=10, choices=ZONE_CHOICES)

    duration_minutes = models.PositiveSmallIntegerField()

    # ventana en la que se puede reservar (independiente del horario del local)
    available_from = models.TimeField(default=time(8, 0))
    available_to = models.TimeField(default=time(22, 0))

    active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["zone", "sort_order", "id"]
        indexes = [
            models.Index(fields=["active", "zone"], name="service_active_zone_idx"),
            models.Index(fields=["zone", "sort_order"], name="service_zone_order_idx"),
        ]

    def __str__(self):
        return self.name
