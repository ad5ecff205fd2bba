from django.contrib import admin
from catalog.models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "zone", "duration_minutes", "available_from", "available_to", "active", "sort_order")
    list_filter = ("zone", "active")
    search_fields = ("name",)
    ordering = ("zone", "sort_order")
