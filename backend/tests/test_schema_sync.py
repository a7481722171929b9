from pathlib import Path
from uuid import uuid4

from sqlalchemy import Boolean, Column, Index, Integer, MetaData, String, Table, create_engine, inspect, text

from app.utils.schema_sync import ensure_schema


def test_ensure_schema_adds_column_and_index():
    db_path = Path(f"./schema_sync_{uuid4().hex}.db").resolve()
    engine = create_engine(f"sqlite:///{db_path}")

    base_metadata = MetaData()
    Table(
        "sync_target",
        base_metadata,
        Column("id", Integer, primary_key=True),
        Column("name", String(100), nullable=False),
    )
    base_metadata.create_all(engine)

    target_metadata = MetaData()
    table = Table(
        "sync_target",
        target_metadata,
        Column("id", Integer, primary_key=True),
        Column("name", String(100), nullable=False),
        Column("email", String(150), nullable=True),
    )
    Index("idx_sync_target_name", table.c.name)

    added = ensure_schema(engine, target_metadata)

    inspector = inspect(engine)
    column_names = {row["name"] for row in inspector.get_columns("sync_target")}
    index_names = {row.get("name") for row in inspector.get_indexes("sync_target")}

    assert "email" in column_names
    assert "idx_sync_target_name" in index_names
    assert added == ["sync_target.email", "sync_target:idx_sync_target_name"]
    assert ensure_schema(engine, target_metadata) == []

    engine.dispose()
    if db_path.exists():
        db_path.unlink()


def test_legacy_documents_gain_unset_reminder_latch():
    db_path = Path(f"./schema_sync_{uuid4().hex}.db").resolve()
    engine = create_engine(f"sqlite:///{db_path}")

    legacy = MetaData()
    Table(
        "documents",
        legacy,
        Column("document_id", Integer, primary_key=True),
        Column("name", String(200), nullable=False),
    )
    legacy.create_all(engine)
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO documents (document_id, name) VALUES (1, 'Acta constitutiva')"))

    current = MetaData()
    Table(
        "documents",
        current,
        Column("document_id", Integer, primary_key=True),
        Column("name", String(200), nullable=False),
        Column("reminder_sent_expired", Boolean, nullable=False, default=False),
    )

    assert ensure_schema(engine, current) == ["documents.reminder_sent_expired"]
    with engine.connect() as conn:
        value = conn.execute(text("SELECT reminder_sent_expired FROM documents WHERE document_id = 1")).scalar()
    assert value == 0

    engine.dispose()
    if db_path.exists():
        db_path.unlink()
