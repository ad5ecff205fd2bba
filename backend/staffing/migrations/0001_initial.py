import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Staff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("phone", models.CharField(blank=True, default="", max_length=20)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("owner", "Owner"),
                            ("manager", "Manager"),
                            ("reception", "Reception"),
                            ("hair", "Hair"),
                            ("nail", "Nail"),
                        ],
                        max_length=20,
                    ),
                ),
                ("base_salary", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("commission_enabled", models.BooleanField(default=False)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "staff",
                "indexes": [models.Index(fields=["role", "active"], name="staff_role_active_idx")],
            },
        ),
        migrations.CreateModel(
            name="StaffDayOff",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("note", models.CharField(blank=True, default="", max_length=255)),
                (
                    "staff",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="day_offs",
                        to="staffing.staff",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["date"], name="staff_day_off_date_idx")],
                "constraints": [models.UniqueConstraint(fields=("staff", "date"), name="uniq_staff_day_off")],
            },
        ),
    ]
