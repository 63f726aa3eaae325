from datetime import datetime, timezone

import pytest

from conftest import sign_in
from storefront.exceptions import ValidationError
from storefront.models import Appointment
from storefront.services.appointment_service import parse_slot


def _booking(**overrides):
    body = {
        "customerName": "Asha Rao",
        "customerEmail": "asha@indosaga.in",
        "customerPhone": "9876543210",
        "date": "2030-03-14",
        "time": "10:30",
        "type": "product_demo",
        "notes": "Interested in dining sets",
    }
    body.update(overrides)
    return body


def test_book_appointment_as_guest(client, db):
    response = client.post("/api/appointments", json=_booking())
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"] == "scheduled"
    assert body["duration"] == 30
    assert body["meetingType"] == "product_demo"
    assert body["meetingId"].startswith("APT-")
    assert body["meetingLink"].startswith("https://meet.jit.si/")
    assert body["userId"] is None

    stored = db.query(Appointment).one()
    assert stored.customer_email == "asha@indosaga.in"


def test_legacy_field_names_are_accepted(client):
    response = client.post("/api/appointments", json={
        "customerName": "Asha Rao",
        "customerEmail": "asha@indosaga.in",
        "appointmentDate": "2030-03-14",
        "appointmentTime": "04:00 PM",
        "meetingType": "consultation",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["meetingType"] == "consultation"
    assert body["appointmentDate"].startswith("2030-03-14T16:00")


@pytest.mark.parametrize("missing", ["customerName", "customerEmail", "date", "time"])
def test_required_fields(client, missing):
    body = _booking()
    body.pop(missing)
    response = client.post("/api/appointments", json=body)
    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields"


def test_unknown_meeting_type_is_400(client):
    assert client.post("/api/appointments", json=_booking(type="house_party")).status_code == 400


def test_list_appointments(client):
    assert client.get("/api/appointments").status_code == 401

    sign_in(client)
    client.post("/api/appointments", json=_booking())
    appointments = client.get("/api/appointments").json()
    assert len(appointments) == 1
    assert appointments[0]["customerName"] == "Asha Rao"


def test_video_call_marks_own_appointment_in_progress(client, db):
    assert client.post("/api/video-call/start", json={}).status_code == 401

    sign_in(client)
    appointment = client.post("/api/appointments", json=_booking()).json()
    response = client.post("/api/video-call/start", json={"appointmentId": appointment["id"]})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["sessionId"].startswith("VIDEO-")
    assert body["meetingLink"] == appointment["meetingLink"]

    assert db.get(Appointment, appointment["id"]).status == "in_progress"


def test_video_call_leaves_other_users_appointments_alone(client, db):
    sign_in(client, email="asha@indosaga.in")
    appointment = client.post("/api/appointments", json=_booking()).json()

    sign_in(client, email="ravi@indosaga.in", name="Ravi")
    response = client.post("/api/video-call/start", json={"appointmentId": appointment["id"]})
    assert response.status_code == 200
    assert response.json()["meetingLink"] is None
    assert db.get(Appointment, appointment["id"]).status == "scheduled"


def test_parse_slot():
    assert parse_slot("2030-03-14", "09:30") == datetime(2030, 3, 14, 9, 30, tzinfo=timezone.utc)
    assert parse_slot("2030-03-14", "2:00 pm") == datetime(2030, 3, 14, 14, 0, tzinfo=timezone.utc)
    assert parse_slot("2030-03-14T00:00:00", "2:00 pm") == datetime(2030, 3, 14, 14, 0, tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        parse_slot("14/03/2030", "09:30")
    with pytest.raises(ValidationError):
        parse_slot("2030-03-14", "half past nine")


def test_parse_slot_keeps_browser_instant():
    # 10:00 in Mumbai, sent through Date.toISOString()
    assert parse_slot("2026-10-20T04:30:00.000Z", "10:00") == datetime(2026, 10, 20, 4, 30, tzinfo=timezone.utc)
    # 19:00 on the 19th in New York is already the 20th in UTC
    assert parse_slot("2026-10-19T19:00:00-04:00", "7:00 PM") == datetime(2026, 10, 19, 23, 0, tzinfo=timezone.utc)


def test_booking_with_iso_instant_stores_that_moment(client, db):
    response = client.post("/api/appointments", json=_booking(date="2026-10-20T04:30:00.000Z", time="10:00"))
    assert response.status_code == 200, response.text
    assert response.json()["appointmentDate"] in ("2026-10-20T04:30:00Z", "2026-10-20T04:30:00+00:00")

    stored = db.query(Appointment).one()
    assert stored.appointment_date.replace(tzinfo=None) == datetime(2026, 10, 20, 4, 30)


def test_appointment_date_is_serialized_in_utc(client):
    body = client.post("/api/appointments", json=_booking()).json()
    assert body["appointmentDate"] in ("2030-03-14T10:30:00Z", "2030-03-14T10:30:00+00:00")


def test_booking_emails_customer_and_store(client, sent_emails):
    appointment = client.post("/api/appointments", json=_booking()).json()
    assert [message.to for message in sent_emails] == ["asha@indosaga.in", "owner@indosaga.in"]
    assert appointment["meetingLink"] in sent_emails[0].text
