"""Sincronización del esquema al arrancar sobre bases ya existentes."""

from __future__ import annotations

from typing import List

from sqlalchemy import Boolean, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.schema import Column, CreateColumn, CreateIndex, MetaData


def _column_ddl(engine: Engine, column: Column) -> str:
    ddl = str(CreateColumn(column).compile(dialect=engine.dialect)).strip()
    # Filas antiguas sin columna booleana (p. ej. cerrojos de aviso) quedan en falso.
    if isinstance(column.type, Boolean) and column.server_default is None:
        ddl = f"{ddl} DEFAULT {'0' if engine.dialect.name == 'sqlite' else 'false'}"
        if not column.nullable and "NOT NULL" not in ddl:
            ddl = f"{ddl} NOT NULL"
    return ddl


def ensure_schema(engine: Engine, metadata: MetaData) -> List[str]:
    """Crea tablas faltantes y agrega columnas e índices ausentes.

    Devuelve la lista de objetos agregados como ``tabla.columna`` o
    ``tabla:indice``.
    """
    metadata.create_all(bind=engine)
    inspector = inspect(engine)
    preparer = engine.dialect.identifier_preparer
    added: List[str] = []

    with engine.begin() as conn:
        for table in metadata.sorted_tables:
            existing_columns = {
                str(row.get("name"))
                for row in inspector.get_columns(table.name)
                if row.get("name")
            }
            table_sql = preparer.format_table(table)
            for column in table.columns:
                if column.name in existing_columns:
                    continue
                conn.execute(text(f"ALTER TABLE {table_sql} ADD COLUMN {_column_ddl(engine, column)}"))
                added.append(f"{table.name}.{column.name}")

            existing_indexes = {
                str(row.get("name"))
                for row in inspector.get_indexes(table.name)
                if row.get("name")
            }
            for index in table.indexes:
                if not index.name or index.name in existing_indexes:
                    continue
                conn.execute(CreateIndex(index))
                added.append(f"{table.name}:{index.name}")
    return added
