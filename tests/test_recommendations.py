"""
Tests for the recommendation and per-posting match endpoints.
"""

import pytest
from sqlalchemy import text

from careers.core.config import get_settings
from careers.db.database import get_db_session


@pytest.fixture
def skilled_student(client, student):
    for name, level in (("Python", "EXPERT"), ("SQL", "ADVANCED"), ("Git", "BEGINNER")):
        response = client.post(
            "/api/students/skills", json={"skill_name": name, "level": level}, headers=student["headers"]
        )
        assert response.status_code == 201
    return student


class TestRecommendations:
    def test_ranked_by_score_with_tiers(self, client, skilled_student, create_job, create_internship):
        create_job(title="Python Developer", skills=[{"skill_name": "Python"}])                         # 100.0
        create_internship(title="Data Intern", skills=[{"skill_name": "SQL"}, {"skill_name": "Spark"}])  # 45.0
        create_job(title="Frontend Developer", skills=[{"skill_name": "React"}])                        # 0.0
        create_job(title="Ops Engineer", skills=[{"skill_name": "Git"}, {"skill_name": "Linux"}])       # 20.0

        body = client.get("/api/recommendations", headers=skilled_student["headers"]).json()

        assert body["total"] == 4
        assert body["tiers"] == {"high": 1, "medium": 1, "other": 2}

        recs = body["recommendations"]
        assert [(r["title"], r["match_score"]) for r in recs] == [
            ("Python Developer", 100.0),
            ("Data Intern", 45.0),
            ("Ops Engineer", 20.0),
            ("Frontend Developer", 0.0),
        ]
        assert [r["tier"] for r in recs] == ["high", "medium", "other", "other"]

        data_intern = recs[1]
        assert data_intern["posting_kind"] == "internship"
        assert data_intern["skill_matches"] == 1
        assert data_intern["total_skills"] == 2
        assert set(data_intern["skills"]) == {"Spark", "SQL"}
        assert data_intern["company_name"] == "Acme Corp"

    def test_equal_scores_keep_newest_first(self, client, skilled_student, create_job):
        for title in ("Older Role", "Middle Role", "Newest Role"):
            create_job(title=title, skills=[{"skill_name": "Python"}])

        recs = client.get("/api/recommendations", headers=skilled_student["headers"]).json()["recommendations"]
        assert [r["title"] for r in recs] == ["Newest Role", "Middle Role", "Older Role"]

    def test_same_timestamp_puts_jobs_before_internships(self, client, skilled_student, create_job, create_internship):
        create_job(title="Python Developer", skills=[{"skill_name": "Python"}])
        create_internship(title="Python Intern", skills=[{"skill_name": "Python"}])
        create_job(title="Python Engineer", skills=[{"skill_name": "Python"}])
        with get_db_session() as db:
            for table in ("jobs", "internships"):
                db.execute(text(f"UPDATE {table} SET created_at = '2026-01-01 09:00:00'"))

        recs = client.get("/api/recommendations", headers=skilled_student["headers"]).json()["recommendations"]
        assert [r["title"] for r in recs] == ["Python Engineer", "Python Developer", "Python Intern"]

    def test_posting_without_skills_scores_zero(self, client, skilled_student, create_job):
        create_job(title="General Role", skills=[])
        rec = client.get("/api/recommendations", headers=skilled_student["headers"]).json()["recommendations"][0]
        assert rec["match_score"] == 0
        assert rec["total_skills"] == 0

    def test_inactive_postings_excluded(self, client, skilled_student, employer, create_job):
        job = create_job(skills=[{"skill_name": "Python"}])
        client.put(f"/api/jobs/{job['job_id']}/active", json={"is_active": False}, headers=employer["headers"])

        body = client.get("/api/recommendations", headers=skilled_student["headers"]).json()
        assert body["total"] == 0
        assert body["recommendations"] == []

    def test_kind_filter_and_limit(self, client, skilled_student, create_job, create_internship):
        create_job(title="Python Developer", skills=[{"skill_name": "Python"}])
        create_job(title="SQL Analyst", skills=[{"skill_name": "SQL"}])
        create_internship(title="Python Intern", skills=[{"skill_name": "Python"}])

        jobs_only = client.get(
            "/api/recommendations", params={"kind": "job"}, headers=skilled_student["headers"]
        ).json()
        assert {r["posting_kind"] for r in jobs_only["recommendations"]} == {"job"}
        assert jobs_only["total"] == 2

        limited = client.get(
            "/api/recommendations", params={"limit": 1}, headers=skilled_student["headers"]
        ).json()
        assert len(limited["recommendations"]) == 1
        assert limited["total"] == 3
        assert limited["tiers"]["high"] == 3

    def test_student_without_skills(self, client, student, create_job):
        create_job(skills=[{"skill_name": "Python"}])
        rec = client.get("/api/recommendations", headers=student["headers"]).json()["recommendations"][0]
        assert rec["match_score"] == 0
        assert rec["skill_matches"] == 0
        assert rec["total_skills"] == 1

    def test_optional_skills_count_as_required_by_default(self, client, skilled_student, create_job):
        create_job(skills=[{"skill_name": "Python"}, {"skill_name": "Docker", "required": False}])
        rec = client.get("/api/recommendations", headers=skilled_student["headers"]).json()["recommendations"][0]
        assert rec["match_score"] == 50.0

    def test_optional_skills_honored_when_configured(self, client, skilled_student, create_job, monkeypatch):
        monkeypatch.setattr(get_settings(), "matching_honor_optional_skills", True)
        create_job(skills=[{"skill_name": "Python", "required": False}, {"skill_name": "Docker"}])
        rec = client.get("/api/recommendations", headers=skilled_student["headers"]).json()["recommendations"][0]
        # 1.0 * 1.0 against 2 * 1.2
        assert rec["match_score"] == 41.67


class TestPostingMatch:
    def test_job_match(self, client, skilled_student, create_job):
        job = create_job(skills=[{"skill_name": "Python"}, {"skill_name": "React"}])
        response = client.get(f"/api/jobs/{job['job_id']}/match", headers=skilled_student["headers"])
        assert response.status_code == 200
        assert response.json() == {
            "posting_kind": "job",
            "posting_id": job["job_id"],
            "match_score": 50.0,
            "skill_matches": 1,
            "total_skills": 2,
            "tier": "medium",
        }

    def test_internship_match(self, client, skilled_student, create_internship):
        internship = create_internship(skills=[{"skill_name": "sql"}])
        body = client.get(
            f"/api/internships/{internship['internship_id']}/match", headers=skilled_student["headers"]
        ).json()
        assert body["match_score"] == 90.0
        assert body["tier"] == "high"

    def test_missing_posting(self, client, student):
        assert client.get("/api/jobs/404/match", headers=student["headers"]).status_code == 404


class TestLegacyLevels:
    """Levels stored before validation existed, e.g. from imports."""

    @pytest.fixture
    def legacy_student(self, client, student, create_job):
        create_job(skills=[{"skill_name": "Python"}])
        client.post("/api/students/skills", json={"skill_name": "Python"}, headers=student["headers"])
        with get_db_session() as db:
            db.execute(text("UPDATE student_skills SET level = 'guru'"))
        return student

    def test_unknown_level_weighs_as_beginner(self, client, legacy_student):
        rec = client.get("/api/recommendations", headers=legacy_student["headers"]).json()["recommendations"][0]
        assert rec["match_score"] == 40.0
        assert rec["skill_matches"] == 1

    def test_strict_levels_reject_with_422(self, client, legacy_student, monkeypatch):
        monkeypatch.setattr(get_settings(), "matching_strict_levels", True)
        response = client.get("/api/recommendations", headers=legacy_student["headers"])
        assert response.status_code == 422
        assert "guru" in response.json()["detail"]
