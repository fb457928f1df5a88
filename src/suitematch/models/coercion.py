"""
Coerción tolerante de campos opcionales.

Los perfiles y listings llegan desde storage con tipos sueltos
("None" como string, NaN, booleanos, fechas ISO). Cualquier valor
que no sirva para el criterio se convierte en None en vez de fallar,
así ese término simplemente no suma.
"""

import math
from datetime import datetime, timezone
from typing import Any, Optional


def finite_float(value: Any) -> Optional[float]:
    """Devuelve el valor como float si es un número finito, si no None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        # Enteros más grandes que cualquier float
        return None
    if not math.isfinite(value):
        return None
    return value


def non_negative_int(value: Any) -> Optional[int]:
    """Entero >= 0. Acepta floats enteros (2.0); el resto es None."""
    number = finite_float(value)
    if number is None or number < 0 or not number.is_integer():
        return None
    return int(number)


def optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    return None


def epoch_ms(value: Any) -> Optional[float]:
    """
    Timestamp en epoch milisegundos.

    Acepta números, datetime y strings ISO-8601 (como los devuelve
    Supabase). Datetimes sin zona horaria se asumen UTC.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000
    return finite_float(value)
