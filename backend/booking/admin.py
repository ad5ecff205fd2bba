from __future__ import annotations

from datetime import timedelta

from django.contrib import admin, messages
from django.utils import timezone

from booking.models import Booking, BookingAudit, BookingService
from booking.services.exceptions import InvalidStatusTransition
from booking.services.status import transition_booking


class DateRangeFilter(admin.SimpleListFilter):
    """
    Filtro por día de la reserva.
    """
    title = "Día"
    parameter_name = "day"

    def lookups(self, request, model_admin):
        return [
            ("today", "Hoy"),
            ("tomorrow", "Mañana"),
            ("next7", "Próximos 7 días"),
        ]

    def queryset(self, request, queryset):
        val = self.value()
        if not val:
            return queryset

        today = timezone.localdate()

        if val == "today":
            return queryset.filter(date=today)
        if val == "tomorrow":
            return queryset.filter(date=today + timedelta(days=1))
        if val == "next7":
            return queryset.filter(date__gte=today, date__lt=today + timedelta(days=7))

        return queryset


# ---- Inlines ---------------------------------------------------------------

class BookingServiceInline(admin.TabularInline):
    model = BookingService
    extra = 0
    can_delete = False

    fields = ("sequence", "service", "service_name", "service_duration")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class BookingAuditInline(admin.TabularInline):
    model = BookingAudit
    extra = 0
    can_delete = False

    fields = ("action", "performed_by", "performed_at", "reason", "detail_json")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# ---- Admins ----------------------------------------------------------------

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "status",
        "zone",
        "date",
        "start_time",
        "total_duration",
        "customer_name",
        "customer_phone",
        "channel",
    )
    search_fields = ("reference", "customer_name", "customer_phone")
    list_filter = ("status", "zone", "channel", DateRangeFilter)
    ordering = ("-date", "start_time")

    readonly_fields = ("reference", "created_by", "created_at", "updated_at")
    actions = ("action_mark_completed", "action_mark_no_show", "action_cancel_admin")

    inlines = [BookingServiceInline, BookingAuditInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("created_by").prefetch_related("services", "audits")

    def _bulk_transition(self, request, queryset, new_status: str, reason: str) -> tuple[int, int]:
        done, skipped = 0, 0
        for booking in queryset:
            try:
                transition_booking(booking, new_status, performed_by=request.user, reason=reason)
                done += 1
            except InvalidStatusTransition:
                skipped += 1
        return done, skipped

    # ---- Admin actions ------------------------------------------------------

    @admin.action(description="Marcar como completada")
    def action_mark_completed(self, request, queryset):
        done, skipped = self._bulk_transition(request, queryset, Booking.STATUS_COMPLETED, "Completada (admin)")
        self.message_user(request, f"{done} reserva(s) completadas, {skipped} omitidas.", level=messages.SUCCESS)

    @admin.action(description="Marcar como no-show")
    def action_mark_no_show(self, request, queryset):
        done, skipped = self._bulk_transition(request, queryset, Booking.STATUS_NO_SHOW, "No show (admin)")
        self.message_user(request, f"{done} reserva(s) marcadas como no-show, {skipped} omitidas.", level=messages.WARNING)

    @admin.action(description="Cancelar (admin)")
    def action_cancel_admin(self, request, queryset):
        done, skipped = self._bulk_transition(request, queryset, Booking.STATUS_CANCELLED, "Cancelada (admin)")
        self.message_user(request, f"{done} reserva(s) canceladas, {skipped} omitidas.", level=messages.ERROR)
