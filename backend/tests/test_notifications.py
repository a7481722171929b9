"""Bandeja de notificaciones del usuario actual."""

from datetime import timedelta

from app.services.expiration_service import check_expiring_documents
from tests.conftest import NOW, auth_headers


def test_admin_sees_expiration_notifications(client, db, seed_users, make_document):
    make_document(expiration_date=NOW + timedelta(days=5))
    check_expiring_documents(db, now=NOW)

    admin = auth_headers(client, "admin")
    resp = client.get("/api/notifications", headers=admin)
    assert resp.status_code == 200
    items = resp.json()
    assert len(items) == 1
    assert items[0]["noti_type"] == "document_expiring"
    assert items[0]["is_read"] is False

    viewer_items = client.get("/api/notifications", headers=auth_headers(client, "viewer")).json()
    assert viewer_items == []


def test_mark_read_and_read_all(client, db, seed_users, make_document):
    make_document(name="A", expiration_date=NOW + timedelta(days=5))
    make_document(name="B", expiration_date=NOW - timedelta(days=5))
    check_expiring_documents(db, now=NOW)

    admin = auth_headers(client, "admin")
    items = client.get("/api/notifications", headers=admin).json()
    assert len(items) == 2

    one = client.patch(f"/api/notifications/{items[0]['noti_id']}/read", headers=admin)
    assert one.status_code == 200
    assert one.json()["is_read"] is True
    unread = client.get("/api/notifications?unreadOnly=true", headers=admin).json()
    assert [n["noti_id"] for n in unread] == [items[1]["noti_id"]]

    assert client.post("/api/notifications/read-all", headers=admin).status_code == 200
    assert client.get("/api/notifications?unreadOnly=true", headers=admin).json() == []


def test_cannot_mark_someone_elses_notification(client, db, seed_users, make_document):
    make_document(expiration_date=NOW + timedelta(days=5))
    check_expiring_documents(db, now=NOW)
    admin_items = client.get("/api/notifications", headers=auth_headers(client, "admin")).json()

    resp = client.patch(
        f"/api/notifications/{admin_items[0]['noti_id']}/read",
        headers=auth_headers(client, "super"),
    )
    assert resp.status_code == 404
