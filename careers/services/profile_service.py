"""
Profile Store - students, employers and their skills.

Supplies the candidate side of matching: get_candidate_skills() returns the
(skill_id, level) pairs the scorer consumes.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.orm import Session

from careers.db.database import get_db_session, execute_raw_sql

logger = logging.getLogger(__name__)

STUDENT_FIELDS = ["first_name", "last_name", "phone", "university", "major", "year_of_study", "gpa", "bio"]
EMPLOYER_FIELDS = [
    "company_name", "description", "industry", "company_size", "location",
    "website", "contact_name", "contact_phone"
]

CANDIDATE_SEARCH_LIMIT = 50


# ============================================================
# SKILL CATALOG
# ============================================================

def _select_skill_id(db: Session, name: str) -> Optional[int]:
    row = db.execute(
        text("SELECT skill_id FROM skills WHERE LOWER(skill_name) = LOWER(:name)"),
        {"name": name}
    ).fetchone()
    return row[0] if row else None


def find_or_create_skill(db: Session, skill_name: str, category: str = "uncategorized") -> int:
    """Return the ID of a skill by name (case-insensitive), creating it if missing."""
    name = skill_name.strip()
    skill_id = _select_skill_id(db, name)
    if skill_id is not None:
        return skill_id

    # A concurrent request may insert the same name first; skip and re-read it
    row = db.execute(
        text("""
            INSERT INTO skills (skill_name, category) VALUES (:name, :category)
            ON CONFLICT (skill_name) DO NOTHING
            RETURNING skill_id
        """),
        {"name": name, "category": category}
    ).fetchone()
    if row is None:
        return _select_skill_id(db, name)

    logger.debug("Created skill %r (id=%s)", name, row[0])
    return row[0]


def list_skill_catalog() -> List[dict]:
    return execute_raw_sql("SELECT skill_id, skill_name, category FROM skills ORDER BY skill_name")


# ============================================================
# STUDENTS
# ============================================================

def create_student_profile(db: Session, user_id: int, data: dict) -> int:
    """Insert a student profile inside the caller's registration transaction."""
    result = db.execute(
        text("""
            INSERT INTO student_profiles (user_id, first_name, last_name, phone, university, major, year_of_study)
            VALUES (:user_id, :first_name, :last_name, :phone, :university, :major, :year_of_study)
            RETURNING student_id
        """),
        {
            "user_id": user_id,
            "first_name": data.get("first_name") or "",
            "last_name": data.get("last_name") or "",
            "phone": data.get("phone") or "",
            "university": data.get("university") or "",
            "major": data.get("major") or "",
            "year_of_study": data.get("year_of_study") or 1
        }
    )
    return result.fetchone()[0]


def get_student_profile(student_id: int) -> Optional[dict]:
    results = execute_raw_sql("""
        SELECT s.student_id, s.user_id, u.email, s.first_name, s.last_name, s.phone,
               s.university, s.major, s.year_of_study, s.gpa, s.bio, s.created_at
        FROM student_profiles s JOIN users u ON s.user_id = u.user_id
        WHERE s.student_id = :id
    """, {"id": student_id})

    if not results:
        return None

    profile = results[0]
    profile["skills"] = list_student_skills(student_id)
    return profile


def update_student_profile(student_id: int, fields: dict) -> bool:
    """Update only the provided fields. Returns False when nothing was given."""
    updates = []
    params = {"id": student_id}

    for field in STUDENT_FIELDS:
        value = fields.get(field)
        if value is not None:
            updates.append(f"{field} = :{field}")
            params[field] = value

    if not updates:
        return False

    with get_db_session() as db:
        db.execute(
            text(f"UPDATE student_profiles SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE student_id = :id"),
            params
        )
    return True


def list_student_skills(student_id: int) -> List[dict]:
    return execute_raw_sql("""
        SELECT sk.skill_id, sk.skill_name, sk.category, ss.level
        FROM student_skills ss JOIN skills sk ON ss.skill_id = sk.skill_id
        WHERE ss.student_id = :id ORDER BY sk.skill_name
    """, {"id": student_id})


def get_candidate_skills(student_id: int) -> List[Dict[str, object]]:
    """Skill ID and proficiency level pairs for the scorer."""
    return [
        {"skill_id": s["skill_id"], "level": s["level"]}
        for s in list_student_skills(student_id)
    ]


def add_student_skill(student_id: int, skill_name: str, level: str) -> int:
    """Add a skill to a student, or change its level if already present."""
    with get_db_session() as db:
        skill_id = find_or_create_skill(db, skill_name)
        db.execute(
            text("""
                INSERT INTO student_skills (student_id, skill_id, level)
                VALUES (:student_id, :skill_id, :level)
                ON CONFLICT (student_id, skill_id) DO UPDATE SET level = excluded.level
            """),
            {"student_id": student_id, "skill_id": skill_id, "level": level}
        )
    return skill_id


def remove_student_skill(student_id: int, skill_id: int) -> bool:
    with get_db_session() as db:
        result = db.execute(
            text("DELETE FROM student_skills WHERE student_id = :sid AND skill_id = :skid"),
            {"sid": student_id, "skid": skill_id}
        )
        return result.rowcount > 0


def search_candidates(term: Optional[str] = None, limit: int = CANDIDATE_SEARCH_LIMIT) -> List[dict]:
    """
    Student profiles for employers, optionally filtered by a case-insensitive
    substring of first name, last name, university or major.
    """
    sql = """
        SELECT s.student_id, s.first_name, s.last_name, u.email, s.university, s.major, s.year_of_study
        FROM student_profiles s JOIN users u ON s.user_id = u.user_id
        WHERE u.is_active = :active
    """
    params = {"active": True, "limit": limit}

    if term:
        sql += """
            AND (LOWER(s.first_name) LIKE :term OR LOWER(s.last_name) LIKE :term
                 OR LOWER(s.university) LIKE :term OR LOWER(s.major) LIKE :term)
        """
        params["term"] = f"%{term.lower()}%"

    sql += " ORDER BY s.created_at DESC, s.student_id DESC LIMIT :limit"
    candidates = execute_raw_sql(sql, params)

    if not candidates:
        return []

    skills_by_student: Dict[int, List[dict]] = {c["student_id"]: [] for c in candidates}
    stmt = text("""
        SELECT ss.student_id, sk.skill_id, sk.skill_name, sk.category, ss.level
        FROM student_skills ss JOIN skills sk ON ss.skill_id = sk.skill_id
        WHERE ss.student_id IN :ids
        ORDER BY sk.skill_name
    """).bindparams(bindparam("ids", expanding=True))

    with get_db_session() as db:
        result = db.execute(stmt, {"ids": list(skills_by_student)})
        columns = result.keys()
        rows = [dict(zip(columns, row)) for row in result.fetchall()]

    for row in rows:
        skills_by_student[row.pop("student_id")].append(row)

    for candidate in candidates:
        candidate["full_name"] = f"{candidate['first_name']} {candidate['last_name']}".strip()
        candidate["skills"] = skills_by_student[candidate["student_id"]]

    return candidates


# ============================================================
# EMPLOYERS
# ============================================================

def create_employer_profile(db: Session, user_id: int, data: dict) -> int:
    """Insert an employer profile inside the caller's registration transaction."""
    result = db.execute(
        text("""
            INSERT INTO employer_profiles (user_id, company_name, industry, company_size, website)
            VALUES (:user_id, :company_name, :industry, :company_size, :website)
            RETURNING employer_id
        """),
        {
            "user_id": user_id,
            "company_name": data.get("company_name") or "",
            "industry": data.get("industry") or "",
            "company_size": data.get("company_size") or "",
            "website": data.get("website") or ""
        }
    )
    return result.fetchone()[0]


def get_employer_profile(employer_id: int) -> Optional[dict]:
    results = execute_raw_sql("""
        SELECT e.employer_id, e.user_id, u.email, e.company_name, e.description, e.industry,
               e.company_size, e.location, e.website, e.contact_name, e.contact_phone, e.created_at
        FROM employer_profiles e JOIN users u ON e.user_id = u.user_id
        WHERE e.employer_id = :id
    """, {"id": employer_id})
    return results[0] if results else None


def update_employer_profile(employer_id: int, fields: dict) -> bool:
    updates = []
    params = {"id": employer_id}

    for field in EMPLOYER_FIELDS:
        value = fields.get(field)
        if value is not None:
            updates.append(f"{field} = :{field}")
            params[field] = value

    if not updates:
        return False

    with get_db_session() as db:
        db.execute(
            text(f"UPDATE employer_profiles SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE employer_id = :id"),
            params
        )
    return True
