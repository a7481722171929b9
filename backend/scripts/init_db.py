"""Inicializa la base de datos: crea tablas y agrega columnas faltantes."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import engine, Base
import app.models  # noqa: F401 - registra todos los modelos
from app.utils.schema_sync import ensure_schema


def init_db():
    print("Creando tablas...")
    added = ensure_schema(engine, Base.metadata)
    for name in added:
        print(f"  + {name}")
    print("Base de datos inicializada.")


if __name__ == "__main__":
    init_db()
