from sqlalchemy import func, select

from hostel_app.models import Booking, User


def _payload(student, bed_id="bed-1", **extra):
    body = {
        "user_id": student.id,
        "user_name": student.name,
        "building_id": "building-1",
        "building_name": "North Hall",
        "room_id": "room-1",
        "room_number": "101",
        "bed_id": bed_id,
        "bed_number": 1,
    }
    body.update(extra)
    return body


def test_booking_routes_require_token(client):
    assert client.post("/api/bookings", json={}).status_code == 401
    assert client.get("/api/bookings/some-id").status_code == 401
    assert client.put("/api/bookings/some-id/cancel").status_code == 401
    assert client.get("/api/bookings/users/some-user").status_code == 401


def test_create_booking(client, student, student_headers, inventory):
    response = client.post("/api/bookings", json=_payload(student), headers=student_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["booking"]["status"] == "active"
    assert body["booking"]["bed_id"] == "bed-1"
    assert inventory.is_occupied("bed-1")


def test_create_booking_missing_bed(client, student, student_headers):
    response = client.post("/api/bookings", json=_payload(student, bed_id=""), headers=student_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_REQUIRED_FIELD"


def test_create_booking_malformed_body(client, student, student_headers):
    response = client.post(
        "/api/bookings",
        json=_payload(student, bed_number="first"),
        headers=student_headers,
    )

    assert response.status_code == 422


def test_second_booking_conflicts(client, student, student_headers):
    client.post("/api/bookings", json=_payload(student), headers=student_headers)

    response = client.post("/api/bookings", json=_payload(student, bed_id="bed-2"), headers=student_headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "BOOKING_CONFLICT"


def test_inventory_outage_rolls_back(client, student, student_headers, inventory, db_session):
    inventory.fail = True

    response = client.post("/api/bookings", json=_payload(student), headers=student_headers)

    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Failed to update bed occupancy"
    assert db_session.scalar(select(func.count(Booking.id))) == 0


def test_get_and_cancel_booking(client, student, student_headers, inventory):
    booking_id = client.post("/api/bookings", json=_payload(student), headers=student_headers).json()["booking"]["id"]

    fetched = client.get(f"/api/bookings/{booking_id}", headers=student_headers)
    cancelled = client.put(f"/api/bookings/{booking_id}/cancel", headers=student_headers)
    again = client.put(f"/api/bookings/{booking_id}/cancel", headers=student_headers)

    assert fetched.json()["booking"]["id"] == booking_id
    assert cancelled.status_code == 200
    assert cancelled.json()["booking"]["status"] == "cancelled"
    assert not inventory.is_occupied("bed-1")
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "BOOKING_ALREADY_CANCELLED"


def test_cancel_with_inventory_outage_still_succeeds(client, student, student_headers, inventory):
    booking_id = client.post("/api/bookings", json=_payload(student), headers=student_headers).json()["booking"]["id"]
    inventory.fail = True

    response = client.put(f"/api/bookings/{booking_id}/cancel", headers=student_headers)

    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "cancelled"


def test_unknown_booking(client, student_headers):
    response = client.get("/api/bookings/missing", headers=student_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "BOOKING_NOT_FOUND"


def test_list_all_bookings_is_admin_only(client, student, student_headers, admin_headers):
    client.post("/api/bookings", json=_payload(student), headers=student_headers)

    forbidden = client.get("/api/bookings", headers=student_headers)
    allowed = client.get("/api/bookings", headers=admin_headers)

    assert forbidden.status_code == 403
    assert allowed.status_code == 200
    assert len(allowed.json()["bookings"]) == 1


def test_list_user_bookings(client, student, student_headers):
    first = client.post("/api/bookings", json=_payload(student), headers=student_headers).json()["booking"]
    client.put(f"/api/bookings/{first['id']}/cancel", headers=student_headers)
    second = client.post("/api/bookings", json=_payload(student, bed_id="bed-2"), headers=student_headers).json()["booking"]

    response = client.get(f"/api/bookings/users/{student.id}", headers=student_headers)

    ids = [b["id"] for b in response.json()["bookings"]]
    assert set(ids) == {first["id"], second["id"]}
    assert response.json()["bookings"][0]["booking_date"] >= response.json()["bookings"][1]["booking_date"]


def test_student_cannot_book_for_someone_else(client, student, admin, student_headers, inventory):
    response = client.post("/api/bookings", json=_payload(admin), headers=student_headers)

    assert response.status_code == 403
    assert inventory.calls == []


def test_admin_can_book_for_a_student(client, student, admin_headers):
    response = client.post("/api/bookings", json=_payload(student), headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["booking"]["user_id"] == student.id


def test_student_cannot_cancel_someone_elses_booking(client, db_session, token_service, student, student_headers):
    other = User(email="other@example.com", name="Other", password_hash="not-a-real-hash", role="student")
    db_session.add(other)
    db_session.commit()
    other_headers = {"Authorization": f"Bearer {token_service.issue(other)}"}
    booking_id = client.post("/api/bookings", json=_payload(student), headers=student_headers).json()["booking"]["id"]

    response = client.put(f"/api/bookings/{booking_id}/cancel", headers=other_headers)

    assert response.status_code == 403
    assert client.get(f"/api/bookings/{booking_id}", headers=student_headers).json()["booking"]["status"] == "active"
