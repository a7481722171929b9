"""Niveles de urgencia por cercanía a la fecha de vencimiento."""

import math
from datetime import datetime, timedelta
from typing import Dict, Optional

EXPIRED = "expired"
CRITICAL = "critical"
URGENT = "urgent"
WARNING = "warning"
NONE = "none"

URGENCY_LABELS: Dict[str, str] = {
    EXPIRED: "VENCIDO",
    CRITICAL: "CRÍTICO",
    URGENT: "URGENTE",
    WARNING: "ADVERTENCIA",
}

# Nivel de aviso -> columna de Document que actúa como cerrojo de un solo uso.
LEVEL_EXPIRED = "expired"
LEVEL_7 = "7"
LEVEL_15 = "15"
LEVEL_30 = "30"
LATCH_COLUMNS: Dict[str, str] = {
    LEVEL_EXPIRED: "reminder_sent_expired",
    LEVEL_7: "reminder_sent_7",
    LEVEL_15: "reminder_sent_15",
    LEVEL_30: "reminder_sent_30",
}

ONE_DAY = timedelta(days=1)


def days_until_expiration(expiration_date: datetime, now: datetime) -> int:
    return math.ceil((expiration_date - now) / ONE_DAY)


def classify_urgency(days_left: int) -> str:
    if days_left <= 0:
        return EXPIRED
    if days_left <= 7:
        return CRITICAL
    if days_left <= 15:
        return URGENT
    if days_left <= 30:
        return WARNING
    return NONE


def urgency_label(days_left: int) -> Optional[str]:
    return URGENCY_LABELS.get(classify_urgency(days_left))
