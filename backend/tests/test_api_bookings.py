from fastapi.testclient import TestClient
import pytest

from app.main import app
from app.api.dependencies import get_db


@pytest.fixture
def client(Session):
    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    yield TestClient(app)
    app.dependency_overrides.clear()


BOOKING = {
    "event_date": "2030-01-15",
    "event_type": "Wedding",
    "venue": "Riverside Hall",
    "duration_hours": "4",
    "hourly_rate": "2500",
    "artist_name": "DJ Nok",
    "artist_category": "DJ",
    "customer_name": "Somchai",
}


def _create(client):
    res = client.post("/api/v1/bookings/", json=BOOKING)
    assert res.status_code == 201, res.text
    return res.json()


def _transition(client, booking_id, expected, target, role, payload=None):
    body = {"expected_status": expected, "target_status": target}
    if payload is not None:
        body["payload"] = payload
    return client.post(
        f"/api/v1/bookings/{booking_id}/transitions",
        json=body,
        headers={"X-Actor-Role": role},
    )


def test_create_and_read_booking(client):
    created = _create(client)
    assert created["status"] == "inquiry"
    assert created["currency"] == "THB"

    res = client.get(f"/api/v1/bookings/{created['id']}")
    assert res.status_code == 200
    assert res.json()["artist_name"] == "DJ Nok"


def test_create_booking_validates_input(client):
    res = client.post("/api/v1/bookings/", json={**BOOKING, "duration_hours": "0"})
    assert res.status_code == 422
    assert any(err["loc"][-1] == "duration_hours" for err in res.json()["detail"])


def test_missing_booking_is_404(client):
    assert client.get("/api/v1/bookings/999").status_code == 404
    assert client.get("/api/v1/bookings/999/transitions").status_code == 404
    res = _transition(client, 999, "inquiry", "quoted", "artist")
    assert res.status_code == 404
    assert res.json()["detail"]["field_errors"]["status"] == "BOOKING_NOT_FOUND"


def test_allowed_transitions(client):
    booking_id = _create(client)["id"]
    res = client.get(f"/api/v1/bookings/{booking_id}/transitions")
    assert res.json() == {"status": "inquiry", "allowed": ["cancelled", "quoted"]}


def test_transition_success(client):
    booking_id = _create(client)["id"]
    res = _transition(client, booking_id, "inquiry", "quoted", "artist")
    assert res.status_code == 200, res.text
    data = res.json()
    assert data["ok"] is True
    assert data["booking"]["status"] == "quoted"
    assert data["booking"]["quoted_price"] in ("10000", "10000.00")
    assert data["event"]["from_status"] == "inquiry"
    assert data["event"]["to_status"] == "quoted"
    assert data["event"]["actor"] == "artist"


def test_stale_expected_status_is_409(client):
    booking_id = _create(client)["id"]
    assert _transition(client, booking_id, "inquiry", "quoted", "artist").status_code == 200
    res = _transition(client, booking_id, "inquiry", "quoted", "operator")
    assert res.status_code == 409
    assert res.json()["detail"]["field_errors"]["status"] == "CONFLICT"


def test_wrong_actor_is_403(client):
    booking_id = _create(client)["id"]
    res = _transition(client, booking_id, "inquiry", "quoted", "customer")
    assert res.status_code == 403
    assert res.json()["detail"]["field_errors"]["status"] == "UNAUTHORIZED_ACTOR"


def test_unknown_actor_header_is_401(client):
    booking_id = _create(client)["id"]
    assert _transition(client, booking_id, "inquiry", "quoted", "promoter").status_code == 401
    res = client.post(
        f"/api/v1/bookings/{booking_id}/transitions",
        json={"expected_status": "inquiry", "target_status": "quoted"},
    )
    assert res.status_code == 401


def test_invalid_transition_and_payload_are_422(client):
    booking_id = _create(client)["id"]
    res = _transition(client, booking_id, "inquiry", "paid", "operator")
    assert res.status_code == 422
    assert res.json()["detail"]["field_errors"]["status"] == "INVALID_TRANSITION"

    res = _transition(client, booking_id, "inquiry", "cancelled", "customer")
    assert res.status_code == 422
    assert res.json()["detail"]["field_errors"]["status"] == "INVALID_PAYLOAD"


def test_terminal_state_is_422(client):
    booking_id = _create(client)["id"]
    ok = _transition(client, booking_id, "inquiry", "cancelled", "customer", {"cancellation_reason": "Rain"})
    assert ok.status_code == 200
    res = _transition(client, booking_id, "cancelled", "quoted", "operator")
    assert res.status_code == 422
    assert res.json()["detail"]["field_errors"]["status"] == "TERMINAL_STATE"


def test_unknown_status_value_is_request_validation_error(client):
    booking_id = _create(client)["id"]
    res = _transition(client, booking_id, "inquiry", "archived", "operator")
    assert res.status_code == 422
    assert isinstance(res.json()["detail"], list)


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_openapi_contains_routes(client):
    paths = client.get("/openapi.json").json()["paths"]
    assert "/api/v1/bookings/{booking_id}/transitions" in paths
    assert "/api/v1/bookings/{booking_id}/quotation" in paths
    assert "/api/v1/pricing/estimate" in paths
