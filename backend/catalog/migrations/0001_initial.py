import datetime

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("zone", models.CharField(choices=[("hair", "Hair"), ("nail", "Nail")], max_length=10)),
                ("duration_minutes", models.PositiveSmallIntegerField()),
                ("available_from", models.TimeField(default=datetime.time(8, 0))),
                ("available_to", models.TimeField(default=datetime.time(22, 0))),
                ("active", models.BooleanField(default=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["zone", "sort_order", "id"],
                "indexes": [
                    models.Index(fields=["active", "zone"], name="service_active_zone_idx"),
                    models.Index(fields=["zone", "sort_order"], name="service_zone_order_idx"),
                ],
            },
        ),
    ]
