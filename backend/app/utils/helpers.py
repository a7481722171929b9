"""Utilidades de fecha compartidas por los servicios."""

from datetime import datetime, timezone
from typing import Optional

SPANISH_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def utcnow() -> datetime:
    # El almacén guarda fechas UTC sin zona horaria.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def format_long_date(value: datetime) -> str:
    """Formato largo es-MX, p. ej. ``24 de octubre de 2026``."""
    return f"{value.day} de {SPANISH_MONTHS[value.month - 1]} de {value.year}"


def client_ip(request) -> Optional[str]:
    return request.client.host if request.client else None
