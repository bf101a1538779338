# backend/tests/routes/test_booking_routes.py
from datetime import timedelta

from app.models.booking import BookingStatus
from tests.helpers import FUTURE_MONDAY, auth_headers_for

TEN = FUTURE_MONDAY.replace(hour=10)


def _payload(mentor, service, start=TEN):
    return {
        "mentorId": mentor.id,
        "serviceId": service.id,
        "sessionDate": start.isoformat().replace("+00:00", "Z"),
        "sessionTopic": "Career change",
    }


class TestCreateBooking:
    url = "/api/bookings"

    def test_creates_booking(self, client, notifier, auth_headers_student, test_student, test_mentor, test_service):
        response = client.post(self.url, json=_payload(test_mentor, test_service), headers=auth_headers_student)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Booking created successfully"
        data = body["data"]
        assert data["studentId"] == test_student.id
        assert data["status"] == "pending"
        assert data["paymentStatus"] == "pending"
        assert data["totalPrice"] == 140
        assert data["sessionDate"].startswith("2031-03-03T10:00:00")
        assert notifier.created == [data["id"]]

    def test_mentors_cannot_book(self, client, auth_headers_mentor, test_mentor, test_service):
        response = client.post(self.url, json=_payload(test_mentor, test_service), headers=auth_headers_mentor)
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Student only."

    def test_missing_fields(self, client, auth_headers_student, test_mentor):
        response = client.post(self.url, json={"mentorId": test_mentor.id}, headers=auth_headers_student)
        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields: mentorId, serviceId, sessionDate"

    def test_conflict_is_409(self, client, auth_headers_student, test_mentor, test_service, make_booking):
        make_booking(TEN)
        response = client.post(
            self.url,
            json=_payload(test_mentor, test_service, TEN + timedelta(minutes=30)),
            headers=auth_headers_student,
        )
        assert response.status_code == 409
        assert response.json()["code"] == "SLOT_CONFLICT"

    def test_past_session(self, client, auth_headers_student, test_mentor, test_service):
        payload = _payload(test_mentor, test_service)
        payload["sessionDate"] = "2020-01-01T10:00:00Z"
        response = client.post(self.url, json=payload, headers=auth_headers_student)
        assert response.status_code == 400
        assert response.json()["code"] == "PAST_SESSION"

    def test_expired_token(self, client, test_student, test_mentor, test_service):
        headers = auth_headers_for(test_student, expires_delta=timedelta(minutes=-1))
        response = client.post(self.url, json=_payload(test_mentor, test_service), headers=headers)
        assert response.status_code == 401

    def test_cookie_authentication(self, client, test_student, test_mentor, test_service):
        token = auth_headers_for(test_student)["Authorization"].split(" ", 1)[1]
        client.cookies.set("token", token)
        response = client.post(self.url, json=_payload(test_mentor, test_service))
        assert response.status_code == 201


class TestBookedTimesAndCheck:
    def test_booked_times(self, client, test_mentor, make_booking):
        make_booking(TEN, duration_minutes=60)
        make_booking(TEN + timedelta(hours=2), status=BookingStatus.CANCELLED_BY_STUDENT)

        response = client.get(
            f"/api/bookings/booked-times/{test_mentor.id}", params={"date": "2031-03-03"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["bookedSlots"]) == 1
        assert body["bookedSlots"][0]["durationMinutes"] == 60
        assert body["bookedSlots"][0]["sessionDate"].startswith("2031-03-03T10:00:00")

    def test_booked_times_requires_date(self, client, test_mentor):
        response = client.get(f"/api/bookings/booked-times/{test_mentor.id}")
        assert response.status_code == 400
        assert response.json()["message"] == "Date parameter is required"

    def test_booked_times_rejects_bad_date(self, client, test_mentor):
        response = client.get(
            f"/api/bookings/booked-times/{test_mentor.id}", params={"date": "03/03/2031"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_DATE"

    def test_check(self, client, auth_headers_student, test_mentor, make_booking):
        url = f"/api/bookings/check/{test_mentor.id}"
        assert client.get(url, headers=auth_headers_student).json() == {"success": True, "hasBooking": False}
        make_booking(TEN)
        assert client.get(url, headers=auth_headers_student).json()["hasBooking"] is True


class TestStatusEndpoint:
    def test_mentor_confirms(self, client, notifier, auth_headers_mentor, make_booking):
        booking = make_booking(TEN)
        response = client.patch(
            f"/api/bookings/{booking.id}/status", json={"status": "confirmed"}, headers=auth_headers_mentor
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "confirmed"
        assert notifier.status_changes == [(booking.id, "pending", "confirmed")]

    def test_illegal_transition_is_422(self, client, auth_headers_mentor, make_booking):
        booking = make_booking(TEN, status=BookingStatus.COMPLETED)
        response = client.patch(
            f"/api/bookings/{booking.id}/status",
            json={"status": "cancelled_by_mentor"},
            headers=auth_headers_mentor,
        )
        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_STATUS_TRANSITION"

    def test_unknown_status_is_400(self, client, auth_headers_mentor, make_booking):
        booking = make_booking(TEN)
        response = client.patch(
            f"/api/bookings/{booking.id}/status", json={"status": "archived"}, headers=auth_headers_mentor
        )
        assert response.status_code == 400

    def test_outsider_is_403(self, client, test_student_2, make_booking):
        booking = make_booking(TEN)
        response = client.patch(
            f"/api/bookings/{booking.id}/status",
            json={"status": "cancelled_by_student"},
            headers=auth_headers_for(test_student_2),
        )
        assert response.status_code == 403

    def test_payment_status(self, client, auth_headers_student, make_booking):
        booking = make_booking(TEN)
        response = client.patch(
            f"/api/bookings/{booking.id}/payment-status",
            json={"paymentStatus": "paid"},
            headers=auth_headers_student,
        )
        assert response.status_code == 200
        assert response.json()["data"]["paymentStatus"] == "paid"

    def test_booking_details_are_private(self, client, test_student_2, auth_headers_student, make_booking):
        booking = make_booking(TEN)
        assert client.get(f"/api/bookings/{booking.id}", headers=auth_headers_student).status_code == 200
        outsider = client.get(f"/api/bookings/{booking.id}", headers=auth_headers_for(test_student_2))
        assert outsider.status_code == 403
