from django.db import models


class Staff(models.Model):
    ROLE_OWNER = "owner"
    ROLE_MANAGER = "manager"
    ROLE_RECEPTION = "reception"
    ROLE_HAIR = "hair"
    ROLE_NAIL = "nail"

    ROLE_CHOICES = [
        (ROLE_OWNER, "Owner"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_RECEPTION, "Reception"),
        (ROLE_HAIR, "Hair"),
        (ROLE_NAIL, "Nail"),
    ]

    # solo estos roles cuentan como capacidad de una zona
    ZONE_ROLES = (ROLE_HAIR, ROLE_NAIL)

    name = models.CharField(max_length=120)
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(null=True, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    base_salary = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    commission_enabled = models.BooleanField(default=False)
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "staff"
        indexes = [
            models.Index(fields=["role", "active"], name="staff_role_active_idx"),
        ]

    def __str__(self):
        return self.name


class StaffDayOff(models.Model):
    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name="day_offs")
    date = models.DateField()
    note = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["staff", "date"], name="uniq_staff_day_off"),
        ]
        indexes = [
            models.Index(fields=["date"], name="staff_day_off_date_idx"),
        ]

    def __str__(self):
        return f"{self.staff} - {self.date} off"
