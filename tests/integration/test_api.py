"""
API tests for the HTTP endpoints.

Exercises the routers through TestClient against an app wired to the test
database, including the error-to-status mapping.
"""

import uuid

import pytest

from tests.helpers import at, auth_headers


@pytest.fixture
def api_court(client):
    response = client.post("/api/resources", json={"name": "Court A", "category": "court", "capacity": 1})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def api_slot(client, api_court):
    response = client.post(
        f"/api/availability/{api_court['id']}",
        json={
            "start_time": at(10).isoformat(),
            "end_time": at(11).isoformat(),
            "capacity": 1,
            "price": "25.50",
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def api_user(client):
    response = client.post("/api/users", json={"email": "api@example.com", "name": "Api User"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def api_other_user(client):
    response = client.post("/api/users", json={"email": "other@example.com", "name": "Other User"})
    assert response.status_code == 201
    return response.json()


def _book(client, user, court, slot):
    return client.post(
        "/api/bookings",
        json={"resource_id": court["id"], "time_slot_id": slot["id"], "notes": "Doubles"},
        headers=auth_headers(user["id"]),
    )


class TestServiceEndpoints:
    """Test root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["timestamp"].endswith("Z")

    def test_request_id_header(self, client):
        response = client.get("/", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestResourceEndpoints:
    """Test resource administration endpoints."""

    def test_create_and_get(self, client, api_court):
        response = client.get(f"/api/resources/{api_court['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Court A"

    def test_list_by_category(self, client, api_court):
        client.post("/api/resources", json={"name": "Dr. Smith", "category": "doctor"})

        response = client.get("/api/resources", params={"category": "court"})

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Court A"]

    def test_unknown_category_is_422(self, client):
        response = client.get("/api/resources", params={"category": "pool"})
        assert response.status_code == 422
        assert response.json()["type"] == "validation_error"

    def test_update_is_partial(self, client, api_court):
        response = client.put(f"/api/resources/{api_court['id']}", json={"location": "Rooftop"})

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "Rooftop"
        assert data["capacity"] == 1

    def test_delete(self, client, api_court):
        response = client.delete(f"/api/resources/{api_court['id']}")
        assert response.status_code == 204
        assert client.get(f"/api/resources/{api_court['id']}").status_code == 404

    def test_unknown_resource_is_404(self, client):
        response = client.get(f"/api/resources/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"detail": "Resource not found.", "type": "not_found"}

    def test_list_time_slots(self, client, api_court, api_slot):
        response = client.get(f"/api/resources/{api_court['id']}/time-slots")
        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [api_slot["id"]]


class TestAvailabilityEndpoints:
    """Test availability reads and slot administration."""

    def test_get_availability(self, client, api_court, api_slot):
        response = client.get(
            f"/api/availability/{api_court['id']}",
            params={"start_date": at(0).isoformat(), "end_date": at(23).isoformat()},
        )

        assert response.status_code == 200
        slots = response.json()["time_slots"]
        assert [s["id"] for s in slots] == [api_slot["id"]]
        assert slots[0]["price"] == "25.50"

    def test_reversed_range_is_422(self, client, api_court):
        response = client.get(
            f"/api/availability/{api_court['id']}",
            params={"start_date": at(12).isoformat(), "end_date": at(9).isoformat()},
        )
        assert response.status_code == 422

    def test_invalid_slot_window_is_422(self, client, api_court):
        response = client.post(
            f"/api/availability/{api_court['id']}",
            json={"start_time": at(11).isoformat(), "end_time": at(10).isoformat()},
        )
        assert response.status_code == 422
        assert response.json()["type"] == "validation_error"

    @pytest.mark.parametrize("price", ["1e30", "100000000", "-1"])
    def test_out_of_range_price_is_422(self, client, api_court, price):
        response = client.post(
            f"/api/availability/{api_court['id']}",
            json={"start_time": at(10).isoformat(), "end_time": at(11).isoformat(), "price": price},
        )
        assert response.status_code == 422
        assert client.get(f"/api/resources/{api_court['id']}/time-slots").json() == []

    def test_slot_for_unknown_resource_is_404(self, client):
        response = client.post(
            f"/api/availability/{uuid.uuid4()}",
            json={"start_time": at(10).isoformat(), "end_time": at(11).isoformat()},
        )
        assert response.status_code == 404

    def test_set_and_get_slot_availability(self, client, api_slot):
        response = client.put(
            f"/api/availability/slot/{api_slot['id']}/availability",
            json={"is_available": False},
        )
        assert response.status_code == 200
        assert response.json()["is_available"] is False

        response = client.get(f"/api/availability/slot/{api_slot['id']}")
        assert response.status_code == 200
        assert response.json()["is_available"] is False


class TestBookingEndpoints:
    """Test booking endpoints."""

    def test_create_booking(self, client, api_user, api_court, api_slot):
        response = _book(client, api_user, api_court, api_slot)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "confirmed"
        assert data["user_id"] == api_user["id"]
        assert data["total_amount"] == "25.50"

    def test_missing_identity_is_401(self, client, api_court, api_slot):
        response = client.post(
            "/api/bookings",
            json={"resource_id": api_court["id"], "time_slot_id": api_slot["id"]},
        )
        assert response.status_code == 401

    def test_malformed_identity_is_401(self, client):
        response = client.get("/api/bookings", headers={"X-User-ID": "not-a-uuid"})
        assert response.status_code == 401

    def test_full_slot_is_409(self, client, api_user, api_other_user, api_court, api_slot):
        _book(client, api_user, api_court, api_slot)

        response = _book(client, api_other_user, api_court, api_slot)

        assert response.status_code == 409
        assert response.json()["type"] == "capacity_exceeded"

    def test_unknown_slot_is_409_unavailable(self, client, api_user, api_court):
        response = _book(client, api_user, api_court, {"id": str(uuid.uuid4())})
        assert response.status_code == 409
        assert response.json()["type"] == "not_found_or_unavailable"

    def test_list_and_get_bookings(self, client, api_user, api_court, api_slot):
        assert client.get("/api/bookings", headers=auth_headers(api_user["id"])).json() == []
        booking = _book(client, api_user, api_court, api_slot).json()

        listed = client.get("/api/bookings", headers=auth_headers(api_user["id"])).json()
        fetched = client.get(f"/api/bookings/{booking['id']}")

        assert [b["id"] for b in listed] == [booking["id"]]
        assert fetched.status_code == 200
        assert fetched.json()["notes"] == "Doubles"

    def test_cancel_booking(self, client, api_user, api_court, api_slot):
        booking = _book(client, api_user, api_court, api_slot).json()

        response = client.put(f"/api/bookings/{booking['id']}/cancel", headers=auth_headers(api_user["id"]))

        assert response.status_code == 204
        assert client.get(f"/api/bookings/{booking['id']}").json()["status"] == "cancelled"
        assert client.get(f"/api/availability/slot/{api_slot['id']}").json()["is_available"] is True

    def test_cancel_someone_elses_booking_is_404(self, client, api_user, api_other_user, api_court, api_slot):
        booking = _book(client, api_user, api_court, api_slot).json()

        response = client.put(f"/api/bookings/{booking['id']}/cancel", headers=auth_headers(api_other_user["id"]))

        assert response.status_code == 404

    def test_check_conflicts(self, client, api_user, api_court, api_slot):
        booking = _book(client, api_user, api_court, api_slot).json()

        overlapping = client.post(
            "/api/bookings/check-conflicts",
            json={
                "resource_id": api_court["id"],
                "start_time": at(10, 30).isoformat(),
                "end_time": at(11, 30).isoformat(),
            },
        )
        adjacent = client.post(
            "/api/bookings/check-conflicts",
            json={
                "resource_id": api_court["id"],
                "start_time": at(11).isoformat(),
                "end_time": at(12).isoformat(),
            },
        )

        assert overlapping.json() == {"has_conflicts": True, "conflicting_booking_ids": [booking["id"]]}
        assert adjacent.json() == {"has_conflicts": False, "conflicting_booking_ids": []}


class TestUserEndpoints:
    """Test user endpoints."""

    def test_create_and_get_user(self, client, api_user):
        response = client.get(f"/api/users/{api_user['id']}")
        assert response.status_code == 200
        assert response.json()["email"] == "api@example.com"

    def test_duplicate_email_is_409(self, client, api_user):
        response = client.post("/api/users", json={"email": "api@example.com", "name": "Again"})
        assert response.status_code == 409
        assert response.json()["type"] == "constraint_violation"
