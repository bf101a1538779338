# backend/tests/routes/test_health_routes.py


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


def test_metrics_exposition(client, test_mentor):
    client.get(f"/api/mentors/{test_mentor.id}/services")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert b"mentorship_http_requests_total" in response.content
