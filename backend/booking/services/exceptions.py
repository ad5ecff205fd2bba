from __future__ import annotations


class BookingError(Exception):
    code = "booking_error"
    default_detail = "No se pudo procesar la reserva."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class SlotUnavailable(BookingError):
    code = "slot_unavailable"
    default_detail = "Ese horario ya no está disponible. Vuelve a elegir un horario."


class MixedZoneServices(BookingError):
    code = "mixed_zone_services"
    default_detail = "Todos los servicios de una reserva deben ser de la misma zona."


class ServiceUnavailable(BookingError):
    code = "service_unavailable"
    default_detail = "Uno o más servicios no existen o están inactivos."


class InvalidStatusTransition(BookingError):
    code = "invalid_status_transition"
    default_detail = "Cambio de estado no permitido."
