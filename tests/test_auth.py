"""
Tests for registration, login and role checks.
"""

from datetime import timedelta

from careers.core.auth import create_access_token, decode_token, hash_password, verify_password


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:
    def test_round_trip_claims(self):
        token = create_access_token(7, "STUDENT")
        payload = decode_token(token)
        assert payload["sub"] == "7"
        assert payload["role"] == "STUDENT"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_rejected(self):
        token = create_access_token(7, "STUDENT", expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None

    def test_garbage_token(self):
        assert decode_token("not-a-token") is None


class TestRegister:
    def test_student_registration_creates_profile(self, client, register_student):
        student = register_student(first_name="Grace", last_name="Hopper")
        assert student["role"] == "STUDENT"

        response = client.get("/api/students/profile", headers=student["headers"])
        assert response.status_code == 200
        profile = response.json()
        assert profile["first_name"] == "Grace"
        assert profile["last_name"] == "Hopper"
        assert profile["email"] == "ada@university.edu"
        assert profile["skills"] == []

    def test_employer_registration_creates_profile(self, client, register_employer):
        employer = register_employer(company_name="Initech")
        assert employer["role"] == "EMPLOYER"

        response = client.get("/api/employers/profile", headers=employer["headers"])
        assert response.status_code == 200
        assert response.json()["company_name"] == "Initech"

    def test_duplicate_email_rejected(self, client, register_student):
        register_student()
        response = client.post("/api/auth/register", json={
            "email": "ADA@university.edu", "password": "another1", "role": "STUDENT"
        })
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

    def test_short_password_rejected(self, client):
        response = client.post("/api/auth/register", json={
            "email": "short@university.edu", "password": "123", "role": "STUDENT"
        })
        assert response.status_code == 422

    def test_unknown_role_rejected(self, client):
        response = client.post("/api/auth/register", json={
            "email": "admin@university.edu", "password": "secret123", "role": "ADMIN"
        })
        assert response.status_code == 422


class TestLogin:
    def test_wrong_password(self, client, register_student):
        register_student()
        response = client.post("/api/auth/login", json={"email": "ada@university.edu", "password": "nope"})
        assert response.status_code == 401

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@university.edu", "password": "secret123"})
        assert response.status_code == 401

    def test_me(self, client, student):
        response = client.get("/api/auth/me", headers=student["headers"])
        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == student["user_id"]
        assert body["role"] == "STUDENT"
        assert body["is_active"] is True

    def test_me_without_token(self, client):
        assert client.get("/api/auth/me").status_code in (401, 403)

    def test_me_with_bad_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer bogus"})
        assert response.status_code == 401


class TestRoles:
    def test_student_cannot_post_jobs(self, client, student):
        response = client.post("/api/jobs", json={"title": "Hacker", "description": "x"}, headers=student["headers"])
        assert response.status_code == 403

    def test_employer_cannot_read_recommendations(self, client, employer):
        response = client.get("/api/recommendations", headers=employer["headers"])
        assert response.status_code == 403
