"""
Shared test fixtures.

Points the app at a throwaway SQLite file before any careers imports, recreates
the tables for every test, and swaps the MongoDB CV collection for an
in-memory stand-in so no database servers are needed.
"""

import os
import tempfile

# === Set environment BEFORE any careers imports ===
_TMP_DIR = tempfile.mkdtemp(prefix="careers-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'careers.db')}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import copy
import itertools
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from careers.db.database import drop_schema, init_schema
from careers.main import app


class InMemoryCollection:
    """The slice of pymongo's Collection API the CV service uses."""

    def __init__(self):
        self.docs = []
        self._ids = itertools.count(1)

    @staticmethod
    def _matches(doc: dict, query: dict) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    def find_one(self, query: dict) -> Optional[dict]:
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def update_one(self, query: dict, update: dict, upsert: bool = False):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)

        if not upsert:
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

        doc = {"_id": next(self._ids), **query, **update.get("$setOnInsert", {}), **update.get("$set", {})}
        self.docs.append(doc)
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=doc["_id"])

    def delete_one(self, query: dict):
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    def create_index(self, *args, **kwargs):
        return "student_id_1"


@pytest.fixture(autouse=True)
def fresh_schema():
    drop_schema()
    init_schema()
    yield


@pytest.fixture(autouse=True)
def cv_collection(monkeypatch):
    collection = InMemoryCollection()
    monkeypatch.setattr("careers.services.cv_service.get_collection", lambda name: collection)
    return collection


@pytest.fixture
def client() -> TestClient:
    # Not used as a context manager, so startup hooks (Mongo indexes) never run
    return TestClient(app)


# ---------------------------------------------------------------------------
# Account factories
# ---------------------------------------------------------------------------


@pytest.fixture
def register_student(client):
    """Factory: register a student and return auth headers plus IDs."""

    def _factory(email: str = "ada@university.edu", password: str = "secret123", **fields: Any) -> dict:
        body = {
            "email": email,
            "password": password,
            "role": "student",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "university": "State University",
            "major": "Computer Science",
            "year_of_study": 3,
            **fields,
        }
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        return _login(client, email, password)

    return _factory


@pytest.fixture
def register_employer(client):
    """Factory: register an employer and return auth headers plus IDs."""

    def _factory(email: str = "hr@acme.io", password: str = "secret123", **fields: Any) -> dict:
        body = {
            "email": email,
            "password": password,
            "role": "EMPLOYER",
            "company_name": "Acme Corp",
            "industry": "Software",
            **fields,
        }
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        return _login(client, email, password)

    return _factory


def _login(client: TestClient, email: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()
    return {
        "headers": {"Authorization": f"Bearer {token['access_token']}"},
        "user_id": token["user_id"],
        "role": token["role"],
    }


@pytest.fixture
def student(register_student) -> dict:
    return register_student()


@pytest.fixture
def employer(register_employer) -> dict:
    return register_employer()


@pytest.fixture
def create_job(client, employer):
    """Factory: post a job as the default employer and return its JSON."""

    def _factory(title: str = "Backend Developer", skills=None, headers=None, **fields: Any) -> dict:
        body = {
            "title": title,
            "description": "Build and run our APIs.",
            "location": "Remote",
            "skills": skills if skills is not None else [],
            **fields,
        }
        response = client.post("/api/jobs", json=body, headers=headers or employer["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _factory


@pytest.fixture
def create_internship(client, employer):
    """Factory: post an internship as the default employer and return its JSON."""

    def _factory(title: str = "Data Intern", skills=None, headers=None, **fields: Any) -> dict:
        body = {
            "title": title,
            "description": "Summer internship on the data team.",
            "location": "Berlin",
            "duration": "12 weeks",
            "skills": skills if skills is not None else [],
            **fields,
        }
        response = client.post("/api/internships", json=body, headers=headers or employer["headers"])
        assert response.status_code == 201, response.text
        return response.json()

    return _factory
