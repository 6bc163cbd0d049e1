"""
HTTP API tests
"""

import pytest
from fastapi.testclient import TestClient

from concierge.agents import concierge_service as service_module
from concierge.interfaces.booking_directory import PRESET_AVATARS
from concierge.main import app


@pytest.fixture
def client(monkeypatch, concierge):
    monkeypatch.setattr(service_module, "concierge_service", concierge)
    with TestClient(app) as test_client:
        yield test_client


def start_journey(client, order_id="1002", style="Luxury"):
    response = client.post("/api/concierge/sessions", json={
        "order_id": order_id, "name": "Alex", "travel_style": style,
    })
    assert response.status_code == 200
    return response.json()


# ============================================
# Service
# ============================================

def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert "/api/concierge/health" in body["endpoints"]


def test_health(client):
    start_journey(client)
    body = client.get("/api/concierge/health").json()

    assert body["status"] == "healthy"
    assert body["credential_configured"] is True
    assert body["active_sessions"] == 1


# ============================================
# Login
# ============================================

def test_lookup_booking(client):
    response = client.post("/api/concierge/login/lookup", json={"order_id": "1001", "name": "Sam"})

    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Sam"
    assert body["hotel_name"] == "Hilton London Metropole"


def test_lookup_requires_name(client):
    response = client.post("/api/concierge/login/lookup", json={"order_id": "1001", "name": " "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter your name."


def test_lookup_unknown_order(client):
    response = client.post("/api/concierge/login/lookup", json={"order_id": "4242", "name": "Sam"})
    assert response.status_code == 404


def test_presets(client):
    assert client.get("/api/concierge/login/presets").json() == PRESET_AVATARS


def test_generate_avatar(client):
    body = client.post("/api/concierge/login/avatar", json={"travel_style": "Family"}).json()

    assert body["avatar"].startswith("data:image/png;base64,")
    assert body["error"] is None
    assert len(body["presets"]) == 4


def test_start_journey(client):
    body = start_journey(client, "1002")

    assert body["status"] == "DURING_STAY"
    assert body["screen"] == "dashboard"
    assert body["avatar"] == PRESET_AVATARS[0]
    assert client.get(f"/api/concierge/sessions/{body['session_id']}").json() == body


def test_invalid_travel_style_rejected(client):
    response = client.post("/api/concierge/sessions", json={
        "order_id": "1002", "name": "Alex", "travel_style": "Backpacker",
    })
    assert response.status_code == 422


# ============================================
# Dashboard
# ============================================

def test_dashboard_flow(client, fake_gemini):
    session_id = start_journey(client)["session_id"]
    base = f"/api/concierge/sessions/{session_id}"

    state = client.post(f"{base}/dashboard/load").json()
    assert len(state["attractions"]) == 6
    assert set(state["images"]) == {"1", "2", "4", "5"}

    insight = client.post(f"{base}/attractions/4/select").json()
    assert insight["insight"] == "A fine insight."
    assert insight["attraction"]["name"] == "The Bund"
    assert "z=15" in insight["map_url"]
    assert insight["directions_url"].startswith("https://www.google.com/maps/dir/?api=1&destination=")
    assert insight["image"].startswith("data:image/png;base64,")

    assert client.get(f"{base}/dashboard").json()["selected"]["id"] == 4

    state = client.post(f"{base}/attractions/deselect").json()
    assert state["selected"] is None
    assert "z=14" in state["map_url"]

    client.post(f"{base}/refresh")
    client.post(f"{base}/attractions/4/select")
    assert fake_gemini.count("insight") == 2


def test_unknown_attraction(client):
    session_id = start_journey(client)["session_id"]
    client.post(f"/api/concierge/sessions/{session_id}/dashboard/load")

    response = client.post(f"/api/concierge/sessions/{session_id}/attractions/999/select")
    assert response.status_code == 404


def test_chat(client):
    session_id = start_journey(client)["session_id"]
    base = f"/api/concierge/sessions/{session_id}/chat"

    body = client.post(base, json={"message": "Late checkout?"}).json()
    assert body["reply"] == "Happy to help."
    assert [t["speaker"] for t in body["transcript"]] == ["guest", "concierge"]

    blank = client.post(base, json={"message": "  "}).json()
    assert blank["reply"] is None
    assert len(blank["transcript"]) == 2

    assert len(client.get(base).json()["transcript"]) == 2


# ============================================
# Souvenir & screens
# ============================================

def test_souvenir_for_completed_trip(client):
    session = start_journey(client, "1003")
    assert session["screen"] == "souvenir"

    body = client.get(f"/api/concierge/sessions/{session['session_id']}/souvenir").json()

    assert body["caption"] == "Sun, sand and stillness."
    assert body["display_image"] == body["postcard_image"]
    assert body["avatar"] == PRESET_AVATARS[0]


def test_wrong_screen_is_conflict(client):
    during = start_journey(client, "1002")["session_id"]
    completed = start_journey(client, "1003")["session_id"]

    assert client.get(f"/api/concierge/sessions/{during}/souvenir").status_code == 409
    assert client.post(f"/api/concierge/sessions/{completed}/dashboard/load").status_code == 409


def test_unknown_and_ended_sessions(client):
    assert client.get("/api/concierge/sessions/nope").status_code == 404
    assert client.post("/api/concierge/sessions/nope/chat", json={"message": "hi"}).status_code == 404

    session_id = start_journey(client)["session_id"]
    assert client.delete(f"/api/concierge/sessions/{session_id}").status_code == 200
    assert client.get(f"/api/concierge/sessions/{session_id}").status_code == 404
    assert client.delete(f"/api/concierge/sessions/{session_id}").status_code == 404


# ============================================
# Credential
# ============================================

def test_credential_update_and_clear(client, fake_gemini):
    assert client.get("/api/concierge/credential").json() == {"configured": True, "source": "environment"}

    cleared = client.put("/api/concierge/credential", json={"api_key": "  "}).json()
    assert cleared == {"configured": False, "source": "none"}

    session_id = start_journey(client)["session_id"]
    body = client.post(f"/api/concierge/sessions/{session_id}/chat", json={"message": "Hello"}).json()
    assert body["reply"] == "System offline."
    assert fake_gemini.count() == 0

    updated = client.put("/api/concierge/credential", json={"api_key": "fresh"}).json()
    assert updated == {"configured": True, "source": "override"}
