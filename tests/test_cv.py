"""
Tests for the CV builder endpoints.
"""

CV = {
    "summary": "Final-year CS student.",
    "experience": "Teaching assistant, Algorithms",
    "education": "BSc Computer Science, State University",
    "projects": "Compiler for a toy language",
    "certifications": None,
    "languages": "English, French",
}


class TestCV:
    def test_no_cv_yet(self, client, student):
        assert client.get("/api/cv", headers=student["headers"]).status_code == 404

    def test_save_and_get(self, client, student, cv_collection):
        response = client.put("/api/cv", json=CV, headers=student["headers"])
        assert response.status_code == 200
        saved = response.json()
        assert saved["summary"] == CV["summary"]
        assert saved["updated_at"] is not None

        fetched = client.get("/api/cv", headers=student["headers"]).json()
        assert fetched["projects"] == "Compiler for a toy language"
        assert len(cv_collection.docs) == 1

    def test_save_replaces_sections(self, client, student, cv_collection):
        client.put("/api/cv", json=CV, headers=student["headers"])
        client.put("/api/cv", json={"summary": "Graduate engineer."}, headers=student["headers"])

        fetched = client.get("/api/cv", headers=student["headers"]).json()
        assert fetched["summary"] == "Graduate engineer."
        assert fetched["experience"] is None
        assert len(cv_collection.docs) == 1
        assert "created_at" in cv_collection.docs[0]

    def test_cvs_are_per_student(self, client, student, register_student):
        other = register_student(email="alan@university.edu")
        client.put("/api/cv", json=CV, headers=student["headers"])
        assert client.get("/api/cv", headers=other["headers"]).status_code == 404

    def test_delete(self, client, student):
        client.put("/api/cv", json=CV, headers=student["headers"])
        assert client.delete("/api/cv", headers=student["headers"]).status_code == 200
        assert client.delete("/api/cv", headers=student["headers"]).status_code == 404

    def test_employers_have_no_cv(self, client, employer):
        assert client.put("/api/cv", json=CV, headers=employer["headers"]).status_code == 403


class TestCVPreview:
    def test_preview_without_cv(self, client, student):
        body = client.get("/api/cv/preview", headers=student["headers"]).json()
        assert body["has_cv"] is False
        assert body["cv"] is None
        assert body["full_name"] == "Ada Lovelace"
        assert body["email"] == "ada@university.edu"

    def test_preview_merges_profile_skills_and_cv(self, client, student):
        client.put("/api/students/profile", json={"bio": "Loves compilers"}, headers=student["headers"])
        client.post("/api/students/skills", json={"skill_name": "Haskell", "level": "ADVANCED"}, headers=student["headers"])
        client.put("/api/cv", json=CV, headers=student["headers"])

        body = client.get("/api/cv/preview", headers=student["headers"]).json()
        assert body["has_cv"] is True
        assert body["university"] == "State University"
        assert body["major"] == "Computer Science"
        assert body["bio"] == "Loves compilers"
        assert [(s["skill_name"], s["level"]) for s in body["skills"]] == [("Haskell", "ADVANCED")]
        assert body["cv"]["languages"] == "English, French"
