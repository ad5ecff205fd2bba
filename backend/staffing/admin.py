from django.contrib import admin
from staffing.models import Staff, StaffDayOff


class StaffDayOffInline(admin.TabularInline):
    model = StaffDayOff
    extra = 0
    fields = ("date", "note")
    ordering = ("-date",)


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "role", "phone", "active")
    list_filter = ("role", "active")
    search_fields = ("name", "phone", "email")
    inlines = [StaffDayOffInline]


@admin.register(StaffDayOff)
class StaffDayOffAdmin(admin.ModelAdmin):
    list_display = ("staff", "date", "note")
    list_filter = ("date", "staff__role")
    search_fields = ("staff__name",)
