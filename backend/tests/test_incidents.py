"""Alta y resolución de incidencias."""

from tests.conftest import auth_headers


def _create(client, headers, **overrides):
    payload = {
        "type": "missing_info",
        "title": "Falta plano catastral",
        "description": "El expediente no incluye el plano catastral actualizado.",
    }
    payload.update(overrides)
    return client.post("/api/incidents", json=payload, headers=headers)


def test_create_incident_uses_authenticated_author(client, seed_users, make_document):
    doc = make_document()
    resp = _create(client, auth_headers(client, "aux"), documentId=doc.document_id, centerId=doc.center_id)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["status"] == "pending"
    assert body["created_by"] == seed_users["auxiliar"].user_id
    assert body["created_by_name"] == "Ana Auxiliar"
    assert body["document_id"] == doc.document_id


def test_create_incident_rejects_unknown_type(client, seed_users):
    resp = _create(client, auth_headers(client, "aux"), type="something_else")
    assert resp.status_code == 400


def test_viewer_cannot_create_incident(client, seed_users):
    resp = _create(client, auth_headers(client, "viewer"))
    assert resp.status_code == 403


def test_resolve_incident_transitions(client, seed_users):
    created = _create(client, auth_headers(client, "aux")).json()
    admin = auth_headers(client, "admin")
    url = f"/api/incidents/{created['incident_id']}"

    approved = client.patch(url, json={"status": "approved", "resolutionComment": "Se adjuntó el plano"}, headers=admin)
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert approved.json()["resolved_by"] == seed_users["admin"].user_id
    assert approved.json()["resolution_comment"] == "Se adjuntó el plano"

    assert client.patch(url, json={"status": "rejected"}, headers=admin).status_code == 409

    closed = client.patch(url, json={"status": "closed"}, headers=admin)
    assert closed.status_code == 200
    assert client.patch(url, json={"status": "closed"}, headers=admin).status_code == 409


def test_only_reviewers_resolve_incidents(client, seed_users):
    created = _create(client, auth_headers(client, "aux")).json()
    resp = client.patch(
        f"/api/incidents/{created['incident_id']}",
        json={"status": "approved"},
        headers=auth_headers(client, "aux"),
    )
    assert resp.status_code == 403


def test_list_and_filter_incidents(client, seed_users):
    aux = auth_headers(client, "aux")
    first = _create(client, aux).json()
    _create(client, aux, type="sensitive_change", title="Cambio de domicilio")
    client.patch(f"/api/incidents/{first['incident_id']}", json={"status": "closed"}, headers=auth_headers(client, "admin"))

    viewer = auth_headers(client, "viewer")
    assert len(client.get("/api/incidents", headers=viewer).json()) == 2
    pending = client.get("/api/incidents?status=pending", headers=viewer).json()
    assert [i["title"] for i in pending] == ["Cambio de domicilio"]
    by_type = client.get("/api/incidents?type=missing_info", headers=viewer).json()
    assert [i["incident_id"] for i in by_type] == [first["incident_id"]]


def test_get_missing_incident_is_404(client, seed_users):
    resp = client.get("/api/incidents/999", headers=auth_headers(client, "viewer"))
    assert resp.status_code == 404
    assert resp.json()["error"] == "Incidencia no encontrada"


def test_create_incident_rejects_dangling_references(client, seed_users, make_document):
    doc = make_document()
    aux = auth_headers(client, "aux")

    assert _create(client, aux, centerId=9999).status_code == 400
    assert _create(client, aux, documentId=8888).status_code == 400
    assert _create(client, aux, assignedTo=7777).status_code == 400
    assert _create(client, aux, assignedTo=seed_users["inactive_admin"].user_id).status_code == 400
    assert client.get("/api/incidents", headers=aux).json() == []

    ok = _create(
        client, aux, centerId=doc.center_id, documentId=doc.document_id, assignedTo=seed_users["admin"].user_id
    )
    assert ok.status_code == 201
    assert ok.json()["assigned_to"] == seed_users["admin"].user_id
