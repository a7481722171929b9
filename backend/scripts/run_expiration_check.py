"""Ejecuta un único barrido de vencimientos (uso manual o desde cron)."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
from datetime import datetime

from app.database import SessionLocal
import app.models  # noqa: F401
from app.services.expiration_service import check_expiring_documents


def main() -> int:
    parser = argparse.ArgumentParser(description="Revisa documentos próximos a vencer y envía avisos.")
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Fecha de referencia UTC en ISO 8601 (por defecto, ahora)",
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db = SessionLocal()
    try:
        result = check_expiring_documents(db, now=args.now)
    finally:
        db.close()

    print(
        f"Revisados: {result.checked}  avisos: {result.reminders_sent}  "
        f"notificaciones: {result.notifications_created}  incidencias: {result.incidents_created}  "
        f"fallidos: {result.failed}"
    )
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
