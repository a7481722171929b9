"""Carga datos de ejemplo en la base de datos."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import timedelta
from app.database import SessionLocal, engine, Base
import app.models  # noqa: F401

from app.models.center import Center, Department
from app.models.document import APPROVED, Document, DocumentVersion
from app.models.user import User
from app.utils.helpers import utcnow


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("La base ya tiene datos. Se omite la carga.")
            return

        departments = [
            Department(name="Jurídico", description="Escrituras, contratos y litigios", icon="scale"),
            Department(name="Mantenimiento", description="Dictámenes y licencias de operación", icon="wrench"),
            Department(name="Finanzas", description="Predial y pagos de derechos", icon="banknote"),
        ]
        db.add_all(departments)
        db.flush()

        users = [
            User(username="superadmin", full_name="Laura Méndez", email="laura@example.com",
                 role="super_admin", department_id=departments[0].department_id),
            User(username="admin", full_name="Carlos Ruiz", email="carlos@example.com",
                 role="admin", department_id=departments[1].department_id),
            User(username="auxiliar", full_name="Ana Torres", email="ana@example.com",
                 role="auxiliar", department_id=departments[1].department_id),
            User(username="consulta", full_name="Jorge Pérez", email="jorge@example.com",
                 role="viewer", department_id=departments[2].department_id),
            User(username="auditor", full_name="Sofía Ramírez", email="sofia@example.com",
                 role="auditor"),
        ]
        db.add_all(users)
        db.flush()

        centers = [
            Center(name="Centro Monterrey Norte", center_type="centro", state="Nuevo León",
                   city="Monterrey", address="Av. Constitución 100", latitude="25.6866", longitude="-100.3161"),
            Center(name="Planta Querétaro", center_type="planta", state="Querétaro",
                   city="Querétaro", address="Parque Industrial 12", latitude="20.5888", longitude="-100.3899"),
            Center(name="Sucursal Guadalajara", center_type="sucursal", state="Jalisco",
                   city="Guadalajara", address="Av. Vallarta 2500", latitude="20.6597", longitude="-103.3496"),
        ]
        db.add_all(centers)
        db.flush()

        now = utcnow()
        documents = [
            Document(name="Escritura pública", doc_type="escritura", center_id=centers[0].center_id,
                     department_id=departments[0].department_id, created_by=users[0].user_id),
            Document(name="Licencia de funcionamiento", doc_type="licencia", center_id=centers[1].center_id,
                     department_id=departments[1].department_id, expiration_date=now + timedelta(days=5),
                     created_by=users[1].user_id),
            Document(name="Dictamen estructural", doc_type="dictamen", center_id=centers[1].center_id,
                     department_id=departments[1].department_id, expiration_date=now + timedelta(days=25),
                     created_by=users[1].user_id),
            Document(name="Pago de predial", doc_type="predial", center_id=centers[2].center_id,
                     department_id=departments[2].department_id, expiration_date=now - timedelta(days=2),
                     created_by=users[0].user_id),
        ]
        db.add_all(documents)
        db.flush()

        for doc in documents:
            db.add(DocumentVersion(
                document_id=doc.document_id,
                version=1,
                file_name=f"{doc.doc_type}_v1.pdf",
                file_size=250_000,
                mime_type="application/pdf",
                change_reason="Carga inicial del documento",
                approval_status=APPROVED,
                approved_by=users[0].user_id,
                approved_at=now,
                uploaded_by=doc.created_by,
                uploaded_at=now,
            ))

        db.commit()
        print("Datos de ejemplo cargados.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
