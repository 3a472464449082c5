"""
API tests for the leads and quiz endpoints.

The store and the admin credential check are replaced through FastAPI's
dependency overrides, so no external service is needed.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_credential_check, get_store
from api.main import app
from conftest import MAX_SCORE_ANSWERS, valid_payload
from repositories.kv_store import InMemoryKeyValueStore
from services.admin_service import AllowAllCredentialCheck, PasswordCredentialCheck


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_credential_check] = lambda: AllowAllCredentialCheck()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_lead_returns_normalized_lead(client, store) -> None:
    response = client.post("/api/leads", json=valid_payload())

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["email"] == "max.mustermann@muster.de"
    assert body["data"]["company"] == "Muster GmbH"
    assert body["data"]["processed"] is False
    assert len(store) == 1


def test_create_lead_validation_error(client, store) -> None:
    response = client.post("/api/leads", json=valid_payload(consent=False))

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Consent must be true."}
    assert len(store) == 0


@pytest.mark.parametrize("content", [b"{not json", b"[1, 2]", b""])
def test_create_lead_malformed_body(client, content) -> None:
    response = client.post("/api/leads", content=content, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid JSON body"}


def test_list_leads_paginates_newest_first(client) -> None:
    """Verify a full walk over the pages returns every lead exactly once."""

    for n in range(5):
        client.post("/api/leads", json=valid_payload(company=f"Company {n}"))

    first = client.get("/api/leads", params={"limit": 3}).json()["data"]
    second = client.get("/api/leads", params={"limit": 3, "cursor": first["next"]}).json()["data"]

    assert len(first["items"]) == 3 and first["next"]
    assert len(second["items"]) == 2 and second["next"] is None
    companies = {item["company"] for item in first["items"] + second["items"]}
    assert companies == {f"Company {n}" for n in range(5)}
    for page in (first, second):
        created = [item["createdAt"] for item in page["items"]]
        assert created == sorted(created, reverse=True)


def test_list_leads_filter(client) -> None:
    client.post("/api/leads", json=valid_payload(company="Alpha AG"))
    client.post("/api/leads", json=valid_payload(company="Beta AG"))

    items = client.get("/api/leads", params={"q": "alpha"}).json()["data"]["items"]

    assert [item["company"] for item in items] == ["Alpha AG"]


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"limit": "ten"}])
def test_list_leads_rejects_bad_limit(client, params) -> None:
    response = client.get("/api/leads", params=params)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid request parameters"}


def test_list_leads_rejects_bad_cursor(client) -> None:
    response = client.get("/api/leads", params={"cursor": "not a cursor!"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_lead_stats(client) -> None:
    for average in (1.0, 3.0, 5.0, 6.0):
        summary = {"areaA": 0, "areaB": 0, "areaC": 0, "average": average}
        client.post("/api/leads", json=valid_payload(scoreSummary=summary))

    data = client.get("/api/leads/stats").json()["data"]

    assert data == {"total": 4, "low": 1, "medium": 1, "high": 2}


def test_patch_processed(client) -> None:
    lead_id = client.post("/api/leads", json=valid_payload()).json()["data"]["id"]

    response = client.patch(f"/api/leads/{lead_id}", json={"processed": True})

    assert response.status_code == 200
    assert response.json()["data"]["processed"] is True
    assert response.json()["data"]["id"] == lead_id


def test_patch_unknown_lead_is_404(client, store) -> None:
    response = client.patch("/api/leads/missing", json={"processed": True})

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}
    assert len(store) == 0


def test_patch_requires_boolean(client) -> None:
    lead_id = client.post("/api/leads", json=valid_payload()).json()["data"]["id"]

    response = client.patch(f"/api/leads/{lead_id}", json={"processed": "yes"})

    assert response.status_code == 400
    assert response.json()["error"] == "processed field must be a boolean"


@pytest.mark.parametrize("content", [b"{not json", b"[true]", b""])
def test_patch_unknown_lead_with_malformed_body_is_404(client, content) -> None:
    """Verify the lead lookup comes before the body is parsed."""

    response = client.patch("/api/leads/missing", content=content, headers={"Content-Type": "application/json"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


@pytest.mark.parametrize("content", [b"{not json", b"[true]", b""])
def test_patch_malformed_body(client, content) -> None:
    lead_id = client.post("/api/leads", json=valid_payload()).json()["data"]["id"]

    response = client.patch(f"/api/leads/{lead_id}", content=content, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid JSON body"}


def test_delete_is_idempotent(client, store) -> None:
    lead_id = client.post("/api/leads", json=valid_payload()).json()["data"]["id"]

    for _ in range(2):
        response = client.delete(f"/api/leads/{lead_id}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"deleted": True}, "error": None}
    assert len(store) == 0


def test_admin_endpoints_require_password(client) -> None:
    """Verify a configured admin password guards everything except lead creation."""

    app.dependency_overrides[get_credential_check] = lambda: PasswordCredentialCheck("s3cret")

    assert client.post("/api/leads", json=valid_payload()).status_code == 200
    denied = client.get("/api/leads")
    assert denied.status_code == 401
    assert denied.json()["success"] is False
    assert client.delete("/api/leads/x").status_code == 401
    allowed = client.get("/api/leads", headers={"X-Admin-Password": "s3cret"})
    assert allowed.status_code == 200


def test_questions_endpoint_language_fallback(client) -> None:
    english = client.get("/api/questions", params={"lang": "en"}).json()["data"]
    fallback = client.get("/api/questions", params={"lang": "fr"}).json()["data"]

    assert len(english) == 12
    assert english[0]["id"] == "L1-A"
    assert english[0]["text"] != fallback[0]["text"]
    assert fallback[0]["text"].startswith("1. Setzt du")


def test_visible_questions_follow_answers(client) -> None:
    response = client.post("/api/questions/visible", json={"answers": {"L1-A": "L1-A-3", "L1-B": "L1-B-1"}})

    data = response.json()["data"]
    assert data["level2"] == ["L2-B1", "L2-B2", "L2-C1"]
    assert data["level3"] == ["L3-A1-ALT", "L3-B1", "L3-C1"]


def test_results_endpoint(client) -> None:
    response = client.post("/api/results", json={"answers": MAX_SCORE_ANSWERS, "lang": "en"})

    data = response.json()["data"]
    assert data["areaA"] == data["areaB"] == data["areaC"] == 6
    assert data["average"] == 6.0
    assert data["level"] == "high"
    assert [area["key"] for area in data["areas"]] == ["areaA", "areaB", "areaC"]


class UnavailableStore(InMemoryKeyValueStore):
    def get(self, key):
        raise ConnectionError("store unavailable")

    def put(self, key, value):
        raise ConnectionError("store unavailable")

    def delete(self, key):
        raise ConnectionError("store unavailable")

    def list(self, prefix, limit, cursor=None):
        raise ConnectionError("store unavailable")


@pytest.mark.parametrize(
    "method, path, kwargs, message",
    [
        ("POST", "/api/leads", {"json": valid_payload()}, "Lead creation failed: save lead failed: store unavailable"),
        ("GET", "/api/leads", {}, "List error: list leads failed: store unavailable"),
        ("PATCH", "/api/leads/lead-1", {"json": {"processed": True}}, "Update failed: get lead failed: store unavailable"),
        ("DELETE", "/api/leads/lead-1", {}, "Delete failed: delete lead failed: store unavailable"),
    ],
)
def test_store_failures_become_500_envelopes(client, method, path, kwargs, message) -> None:
    """Verify store errors are reported in the envelope with the operation's prefix."""

    app.dependency_overrides[get_store] = lambda: UnavailableStore()

    response = client.request(method, path, **kwargs)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": message}
