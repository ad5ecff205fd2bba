"""
Aritmética de horas para la agenda.

Todas las horas viajan como etiquetas "HH:MM" (24h, con cero a la izquierda)
y se convierten a minutos desde medianoche para comparar intervalos.
Los intervalos son semiabiertos [inicio, fin): dos citas que solo se tocan
(fin de una == inicio de otra) no se solapan.
"""
from __future__ import annotations

import re
from datetime import time
from typing import Union

TimeLike = Union[str, time]

MINUTES_PER_DAY = 24 * 60

# acepta "HH:MM" y "HH:MM:SS" (lo que devuelven las columnas TIME)
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


class InvalidTimeFormat(ValueError):
    """La hora no tiene formato HH:MM válido (24h)."""


def time_to_minutes(value: TimeLike) -> int:
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    m = _TIME_RE.match(str(value).strip()) if value is not None else None
    if not m:
        raise InvalidTimeFormat(f"Hora inválida: {value!r} (se espera HH:MM)")
    return int(m.group(1)) * 60 + int(m.group(2))


def minutes_to_time(minutes: int) -> str:
    # sin wraparound: quien llama normaliza si pasa de 23:59
    if minutes < 0:
        raise InvalidTimeFormat(f"Minutos negativos: {minutes}")
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    return start_a < end_b and end_a > start_b


def generate_time_slots(start: TimeLike = "08:00", end: TimeLike = "22:00", interval: int = 30) -> list[str]:
    if interval <= 0:
        raise ValueError("interval debe ser mayor que 0.")
    first = time_to_minutes(start)
    last = time_to_minutes(end)
    return [minutes_to_time(m) for m in range(first, last, interval)]


def calculate_end_time(start: TimeLike, duration_minutes: int) -> str:
    """
    Hora de fin para mostrar en pantalla (da la vuelta a las 24h).
    """
    total = (time_to_minutes(start) + int(duration_minutes)) % MINUTES_PER_DAY
    return minutes_to_time(total)


def to_time(value: TimeLike) -> time:
    minutes = time_to_minutes(value)
    return time(minutes // 60, minutes % 60)
