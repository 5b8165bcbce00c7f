from flask.testing import FlaskClient


def test_health_reports_ok(client: FlaskClient):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json == {"status": "ok", "environment": "testing"}
