"""Textos de avisos de vencimiento: deben ser exactos y deterministas."""

from datetime import datetime

from app.models.document import Document
from app.services.reminder_service import build_expired_incident, build_reminder
from app.utils.helpers import format_long_date


def _doc(**overrides) -> Document:
    values = dict(
        document_id=7,
        name="Dictamen estructural",
        doc_type="dictamen",
        center_id=3,
        department_id=1,
        expiration_date=datetime(2026, 11, 3, 9, 30),
    )
    values.update(overrides)
    return Document(**values)


def test_format_long_date_spanish():
    assert format_long_date(datetime(2026, 1, 5)) == "5 de enero de 2026"
    assert format_long_date(datetime(2027, 9, 30, 23, 59)) == "30 de septiembre de 2027"


def test_warning_reminder_text():
    reminder = build_reminder(_doc(), 25)
    assert reminder.noti_type == "document_expiring"
    assert reminder.title == "🔔 ADVERTENCIA: Dictamen estructural vence en 25 días"
    assert reminder.message == (
        'El documento "Dictamen estructural" (dictamen) vence el 3 de noviembre de 2026. '
        "Quedan 25 días para su vencimiento."
    )


def test_urgent_and_critical_labels():
    assert build_reminder(_doc(), 15).title.startswith("🔔 URGENTE:")
    assert build_reminder(_doc(), 7).title.startswith("🔔 CRÍTICO:")
    assert build_reminder(_doc(), 1).title == "🔔 CRÍTICO: Dictamen estructural vence en 1 días"


def test_expired_reminder_text():
    reminder = build_reminder(_doc(), 0)
    assert reminder.noti_type == "document_expired"
    assert reminder.title == "⚠️ Documento vencido: Dictamen estructural"
    assert reminder.message == (
        'El documento "Dictamen estructural" (dictamen) ha vencido. '
        "Se requiere acción inmediata para renovar o actualizar este documento."
    )


def test_building_reminder_is_repeatable():
    assert build_reminder(_doc(), 9) == build_reminder(_doc(), 9)


def test_expired_incident_with_unknown_center():
    incident = build_expired_incident(_doc(), None)
    assert incident.incident_type == "document_observed"
    assert incident.status == "pending"
    assert incident.center_id == 3
    assert incident.document_id == 7
    assert incident.created_by_name == "Sistema Automático"
    assert incident.description == (
        'El documento "Dictamen estructural" (dictamen) del centro "Desconocido" ha vencido el '
        "3 de noviembre de 2026. Se requiere renovación o actualización."
    )
