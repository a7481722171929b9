import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.database import Base, get_db
from app.main import app
from app.models.center import Center, Department
from app.models.document import Document
from app.models.user import User
from datetime import datetime

TEST_DB_URL = "sqlite:///./test_centros.db"

# Fecha de referencia fija para la lógica de vencimientos.
NOW = datetime(2026, 10, 19, 12, 0, 0)

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_org(db):
    departments = {
        "legal": Department(name="Jurídico"),
        "maintenance": Department(name="Mantenimiento"),
    }
    db.add_all(departments.values())
    db.flush()
    centers = {
        "north": Center(name="Centro Norte", center_type="centro", state="Nuevo León",
                        city="Monterrey", address="Av. Siempre Viva 1"),
        "plant": Center(name="Planta Bajío", center_type="planta", state="Guanajuato",
                        city="León", address="Parque Industrial 5"),
    }
    db.add_all(centers.values())
    db.commit()
    for row in [*departments.values(), *centers.values()]:
        db.refresh(row)
    return {"departments": departments, "centers": centers}


@pytest.fixture
def seed_users(db, seed_org):
    legal_id = seed_org["departments"]["legal"].department_id
    users = {
        "super_admin": User(username="super", full_name="Laura Super", role="super_admin"),
        "admin": User(username="admin", full_name="Carlos Admin", role="admin", department_id=legal_id),
        "auxiliar": User(username="aux", full_name="Ana Auxiliar", role="auxiliar", department_id=legal_id),
        "viewer": User(username="viewer", full_name="Jorge Consulta", role="viewer"),
        "auditor": User(username="auditor", full_name="Sofía Auditora", role="auditor"),
        "inactive_admin": User(username="old_admin", full_name="Admin Inactivo", role="admin", is_active=False),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def make_document(db, seed_org):
    def _make(
        name: str = "Licencia de funcionamiento",
        doc_type: str = "licencia",
        center: str = "north",
        department: str = "legal",
        expiration_date=None,
        **flags,
    ) -> Document:
        doc = Document(
            name=name,
            doc_type=doc_type,
            center_id=seed_org["centers"][center].center_id,
            department_id=seed_org["departments"][department].department_id,
            expiration_date=expiration_date,
            **flags,
        )
        db.add(doc)
        db.commit()
        db.refresh(doc)
        return doc
    return _make


def get_token(client, username: str) -> str:
    resp = client.post("/api/auth/login", json={"username": username})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}
