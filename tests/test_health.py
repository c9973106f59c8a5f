"""
Tests for the root and health endpoints.
"""

from careers.db import database


class TestHealth:
    def test_root(self, client):
        assert client.get("/").json()["status"] == "healthy"

    def test_health_reports_each_store(self, client, monkeypatch):
        monkeypatch.setattr("careers.main.test_mongo_connection", lambda: False)
        body = client.get("/health").json()
        assert body == {"status": "healthy", "database": "connected", "mongodb": "disconnected"}

    def test_database_check_logs_failure(self, monkeypatch, caplog):
        def broken_session():
            raise RuntimeError("connection refused")

        monkeypatch.setattr(database, "get_db_session", broken_session)
        assert database.test_database_connection() is False
        assert "connection refused" in caplog.text
