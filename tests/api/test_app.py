"""
Tests for the FastAPI application: lifespan, health check and GraphQL endpoint
"""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from ledgerql.api.app import create_app
from ledgerql.dbmodels import Users


def test_health_reports_connected_database(mock_db):
    with TestClient(create_app(database=mock_db)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    mock_db.dispose.assert_not_called()


def test_health_reports_unreachable_database(mock_db):
    mock_db.ping.return_value = (False, "Connection refused")

    with TestClient(create_app(database=mock_db)) as client:
        response = client.get("/health")

    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unreachable"


def test_graphql_endpoint_uses_injected_database(mock_db, mock_session):
    result = MagicMock()
    result.scalars.return_value.all.return_value = [
        Users(id=1, email="alice@example.com", name="Alice")
    ]
    mock_session.execute.return_value = result

    with TestClient(create_app(database=mock_db)) as client:
        response = client.post(
            "/graphql",
            json={"query": "query AllUsers { allUsers(nameFilter: \"Al\") { id email } }"},
        )

    assert response.status_code == 200
    assert response.json() == {
        "data": {"allUsers": [{"id": 1, "email": "alice@example.com"}]}
    }
    mock_db.session.assert_called()


def test_graphql_error_is_reported_in_payload(mock_db):
    with TestClient(create_app(database=mock_db)) as client:
        response = client.post(
            "/graphql",
            json={"query": "{ draftsByUser(userUniqueInput: {}) { id } }"},
        )

    payload = response.json()
    assert payload["data"] == {"draftsByUser": None}
    assert "requires an id or an email" in payload["errors"][0]["message"]
