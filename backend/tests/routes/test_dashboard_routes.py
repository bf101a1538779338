# backend/tests/routes/test_dashboard_routes.py
from fastapi.testclient import TestClient

from app.main import app
from tests.helpers import empty_week


def _week(**days):
    schedule = empty_week()
    schedule.update(days)
    return schedule


class TestAvailabilityEndpoints:
    url = "/api/dashboard/mentor/availability"

    def test_requires_authentication(self, client):
        response = client.get(self.url)
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authenticated"}

    def test_students_are_refused(self, client, auth_headers_student):
        response = client.get(self.url, headers=auth_headers_student)
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Mentor only."

    def test_unset_schedule_prompts_for_timezone(self, client, auth_headers_mentor):
        response = client.get(self.url, headers=auth_headers_mentor)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["requiresTimezone"] is True
        assert body["timezone"] is None
        assert set(body["schedule"]) == {
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        }

    def test_save_then_read_back(self, client, auth_headers_mentor, test_mentor):
        payload = {
            "timezone": "America/New_York",
            "schedule": _week(monday=[{"start": "9:00", "end": "12:00"}]),
        }
        saved = client.put(self.url, json=payload, headers=auth_headers_mentor)
        assert saved.status_code == 200
        data = saved.json()["data"]
        assert data["mentorId"] == test_mentor.id
        assert data["schedule"]["monday"] == [{"start": "09:00", "end": "12:00"}]

        body = client.get(self.url, headers=auth_headers_mentor).json()
        assert body["requiresTimezone"] is False
        assert body["schedule"]["Monday"] == [
            {"id": "monday-0", "startTime": "09:00", "endTime": "12:00"}
        ]

    def test_missing_fields(self, client, auth_headers_mentor):
        response = client.put(self.url, json={"timezone": "America/New_York"}, headers=auth_headers_mentor)
        assert response.status_code == 400
        assert response.json()["message"] == "Timezone and schedule are required"

    def test_overlap_reports_first_violation(self, client, auth_headers_mentor):
        payload = {
            "timezone": "America/New_York",
            "schedule": _week(
                wednesday=[{"start": "10:00", "end": "12:00"}, {"start": "11:00", "end": "13:00"}]
            ),
        }
        response = client.put(self.url, json=payload, headers=auth_headers_mentor)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Overlapping time slots detected on wednesday"
        assert body["code"] == "OVERLAPPING_SLOTS"

    def test_bad_timezone(self, client, auth_headers_mentor):
        response = client.put(
            self.url, json={"timezone": "Eastern Time", "schedule": _week()}, headers=auth_headers_mentor
        )
        assert response.status_code == 400
        assert response.json()["code"] == "BAD_TIMEZONE"

    def test_unknown_fields_are_rejected(self, client, auth_headers_mentor):
        response = client.put(
            self.url,
            json={"timezone": "America/New_York", "schedule": _week(), "mentorId": "someone-else"},
            headers=auth_headers_mentor,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestServicesEndpoints:
    url = "/api/dashboard/mentor/services"

    def test_list_own_services(self, client, auth_headers_mentor, test_service):
        response = client.get(self.url, headers=auth_headers_mentor)
        assert response.status_code == 200
        [service] = response.json()["data"]
        assert service["mentorshipService"] == "Career guidance"
        assert service["mentorSessionPrice"] == 100
        assert service["totalPrice"] == 140

    def test_replace_services(self, client, auth_headers_mentor, test_service):
        payload = {
            "services": [
                {
                    "mentorshipService": "Mock interview",
                    "mentorSessionPrice": 80,
                    "platformFee": 10,
                    "taxesFee": 5,
                    "totalPrice": 95,
                }
            ]
        }
        response = client.put(self.url, json=payload, headers=auth_headers_mentor)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Services saved successfully"
        assert [s["mentorshipService"] for s in body["data"]] == ["Mock interview"]

    def test_total_mismatch(self, client, auth_headers_mentor, test_service):
        payload = {
            "services": [
                {
                    "mentorshipService": "Mock interview",
                    "mentorSessionPrice": 80,
                    "platformFee": 10,
                    "taxesFee": 5,
                    "totalPrice": 100,
                }
            ]
        }
        response = client.put(self.url, json=payload, headers=auth_headers_mentor)
        assert response.status_code == 400
        assert response.json()["message"] == "Total price mismatch. Expected 95, got 100"

        listed = client.get(self.url, headers=auth_headers_mentor).json()["data"]
        assert [s["mentorshipService"] for s in listed] == ["Career guidance"]

    def test_replace_answers_success_once_committed(self, client, auth_headers_mentor, test_service):
        payload = {
            "services": [
                {
                    "mentorshipService": "Mock interview",
                    "mentorSessionPrice": 100,
                    "platformFee": 14,
                    "taxesFee": 26,
                    "totalPrice": 140,
                }
            ]
        }
        # Same overrides as ``client``, but server errors come back as responses
        lenient = TestClient(app, raise_server_exceptions=False)
        response = lenient.put(self.url, json=payload, headers=auth_headers_mentor)

        assert response.status_code == 200
        assert response.json()["success"] is True
        listed = lenient.get(self.url, headers=auth_headers_mentor).json()["data"]
        assert [s["totalPrice"] for s in listed] == [140]
