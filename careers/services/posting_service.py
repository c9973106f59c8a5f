"""
Posting Store - jobs, internships, their skill lists and applications.

Jobs and internships share one shape (a posting with skills); POSTINGS maps
each kind to its tables so the same queries serve both. Table and column
names only ever come from POSTINGS, never from request data.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from sqlalchemy import bindparam, text

from careers.db.database import get_db_session, execute_raw_sql
from careers.schemas.schemas import PostingKind
from careers.services.profile_service import find_or_create_skill

logger = logging.getLogger(__name__)

POSTINGS = {
    PostingKind.job: {
        "table": "jobs",
        "id": "job_id",
        "skills_table": "job_skills",
        "fields": ["title", "description", "requirements", "location", "salary", "job_type", "level", "deadline"],
    },
    PostingKind.internship: {
        "table": "internships",
        "id": "internship_id",
        "skills_table": "internship_skills",
        "fields": ["title", "description", "requirements", "location", "compensation", "duration", "start_date", "deadline"],
    },
}


def _plain(value):
    # DB drivers get enum values, not enum members
    return value.value if isinstance(value, Enum) else value


def _select_postings(kind: PostingKind) -> str:
    cfg = POSTINGS[kind]
    columns = ", ".join(f"p.{field}" for field in cfg["fields"])
    return f"""
        SELECT p.{cfg['id']}, p.employer_id, e.company_name, {columns}, p.is_active, p.created_at,
               (SELECT COUNT(*) FROM applications a WHERE a.{cfg['id']} = p.{cfg['id']}) AS application_count
        FROM {cfg['table']} p JOIN employer_profiles e ON p.employer_id = e.employer_id
        WHERE 1 = 1
    """


def _attach_skills(kind: PostingKind, postings: List[dict]) -> List[dict]:
    """Load skill lists for many postings in one query."""
    cfg = POSTINGS[kind]
    by_id: Dict[int, dict] = {}
    for posting in postings:
        posting["posting_kind"] = kind
        posting["posting_id"] = posting[cfg["id"]]
        posting["skills"] = []
        by_id[posting["posting_id"]] = posting

    if not by_id:
        return postings

    stmt = text(f"""
        SELECT ps.{cfg['id']} AS posting_id, sk.skill_id, sk.skill_name, ps.required
        FROM {cfg['skills_table']} ps JOIN skills sk ON ps.skill_id = sk.skill_id
        WHERE ps.{cfg['id']} IN :ids
        ORDER BY sk.skill_name
    """).bindparams(bindparam("ids", expanding=True))

    with get_db_session() as db:
        rows = db.execute(stmt, {"ids": list(by_id)}).fetchall()

    for posting_id, skill_id, skill_name, required in rows:
        by_id[posting_id]["skills"].append({
            "skill_id": skill_id, "skill_name": skill_name, "required": bool(required)
        })

    return postings


# ============================================================
# POSTINGS
# ============================================================

def create_posting(kind: PostingKind, employer_id: int, data: dict, skills: List[dict]) -> int:
    """
    Insert a posting and its skills in one transaction.

    Args:
        kind: job or internship
        employer_id: owning employer profile
        data: posting fields (unknown keys are ignored)
        skills: [{"skill_name": str, "required": bool}, ...]

    Returns:
        The new posting's ID
    """
    cfg = POSTINGS[kind]
    fields = [f for f in cfg["fields"] if f in data]
    columns = ", ".join(["employer_id", *fields])
    values = ", ".join([":employer_id", *(f":{f}" for f in fields)])

    with get_db_session() as db:
        result = db.execute(
            text(f"INSERT INTO {cfg['table']} ({columns}) VALUES ({values}) RETURNING {cfg['id']}"),
            {"employer_id": employer_id, **{f: _plain(data[f]) for f in fields}}
        )
        posting_id = result.fetchone()[0]

        for skill in skills:
            skill_id = find_or_create_skill(db, skill["skill_name"])
            db.execute(
                text(f"""
                    INSERT INTO {cfg['skills_table']} ({cfg['id']}, skill_id, required)
                    VALUES (:pid, :sid, :required)
                    ON CONFLICT DO NOTHING
                """),
                {"pid": posting_id, "sid": skill_id, "required": skill.get("required", True)}
            )

    logger.info("Employer %s created %s %s with %d skills", employer_id, kind.value, posting_id, len(skills))
    return posting_id


def get_posting(kind: PostingKind, posting_id: int) -> Optional[dict]:
    cfg = POSTINGS[kind]
    results = execute_raw_sql(
        _select_postings(kind) + f" AND p.{cfg['id']} = :pid",
        {"pid": posting_id}
    )
    if not results:
        return None
    return _attach_skills(kind, results)[0]


def list_postings(
    kind: PostingKind,
    active_only: bool = True,
    employer_id: Optional[int] = None,
    search: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None
) -> Tuple[List[dict], int]:
    """
    Postings newest first, with filters and optional pagination.

    Returns:
        (postings on this page, total matching postings)
    """
    cfg = POSTINGS[kind]
    sql = _select_postings(kind)
    params: dict = {}

    if active_only:
        sql += " AND p.is_active = :active"
        params["active"] = True
    if employer_id is not None:
        sql += " AND p.employer_id = :eid"
        params["eid"] = employer_id
    if search:
        sql += " AND (LOWER(p.title) LIKE :search OR LOWER(p.description) LIKE :search)"
        params["search"] = f"%{search.lower()}%"
    if location:
        sql += " AND LOWER(p.location) LIKE :location"
        params["location"] = f"%{location.lower()}%"
    if job_type and kind == PostingKind.job:
        sql += " AND p.job_type = :job_type"
        params["job_type"] = job_type

    total = len(execute_raw_sql(sql, params))

    sql += f" ORDER BY p.created_at DESC, p.{cfg['id']} DESC"
    if page is not None and page_size is not None:
        sql += " LIMIT :limit OFFSET :offset"
        params["limit"] = page_size
        params["offset"] = (page - 1) * page_size

    return _attach_skills(kind, execute_raw_sql(sql, params)), total


def list_active_postings(kind: PostingKind) -> List[dict]:
    postings, _ = list_postings(kind, active_only=True)
    return postings


def _owned(db, kind: PostingKind, posting_id: int, employer_id: int) -> bool:
    cfg = POSTINGS[kind]
    row = db.execute(
        text(f"SELECT {cfg['id']} FROM {cfg['table']} WHERE {cfg['id']} = :pid AND employer_id = :eid"),
        {"pid": posting_id, "eid": employer_id}
    ).fetchone()
    return row is not None


def update_posting(kind: PostingKind, posting_id: int, employer_id: int, fields: dict) -> Optional[bool]:
    """
    Update the provided fields of an employer's posting.

    Returns:
        None if the posting is missing or owned by someone else,
        False if there was nothing to update, True otherwise
    """
    cfg = POSTINGS[kind]
    updates = []
    params = {"pid": posting_id}

    for field in cfg["fields"]:
        value = fields.get(field)
        if value is not None:
            updates.append(f"{field} = :{field}")
            params[field] = _plain(value)

    with get_db_session() as db:
        if not _owned(db, kind, posting_id, employer_id):
            return None
        if not updates:
            return False
        db.execute(
            text(f"UPDATE {cfg['table']} SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE {cfg['id']} = :pid"),
            params
        )
    return True


def set_posting_active(kind: PostingKind, posting_id: int, employer_id: int, is_active: bool) -> bool:
    cfg = POSTINGS[kind]
    with get_db_session() as db:
        result = db.execute(
            text(f"""
                UPDATE {cfg['table']} SET is_active = :active, updated_at = CURRENT_TIMESTAMP
                WHERE {cfg['id']} = :pid AND employer_id = :eid
            """),
            {"active": is_active, "pid": posting_id, "eid": employer_id}
        )
        return result.rowcount > 0


def delete_posting(kind: PostingKind, posting_id: int, employer_id: int) -> bool:
    """Delete an employer's posting. Cascades to its skills and applications."""
    cfg = POSTINGS[kind]
    with get_db_session() as db:
        result = db.execute(
            text(f"DELETE FROM {cfg['table']} WHERE {cfg['id']} = :pid AND employer_id = :eid"),
            {"pid": posting_id, "eid": employer_id}
        )
        return result.rowcount > 0


def count_active(kind: PostingKind) -> int:
    cfg = POSTINGS[kind]
    results = execute_raw_sql(
        f"SELECT COUNT(*) AS n FROM {cfg['table']} WHERE is_active = :active",
        {"active": True}
    )
    return results[0]["n"]


# ============================================================
# APPLICATIONS
# ============================================================

_SELECT_APPLICATIONS = """
    SELECT a.application_id, a.student_id, s.first_name, s.last_name, u.email AS student_email,
           a.job_id, a.internship_id,
           COALESCE(j.title, i.title) AS posting_title,
           COALESCE(ej.company_name, ei.company_name) AS company_name,
           a.status, a.cover_letter, a.additional_info, a.created_at AS applied_at, a.updated_at
    FROM applications a
    JOIN student_profiles s ON a.student_id = s.student_id
    JOIN users u ON s.user_id = u.user_id
    LEFT JOIN jobs j ON a.job_id = j.job_id
    LEFT JOIN employer_profiles ej ON j.employer_id = ej.employer_id
    LEFT JOIN internships i ON a.internship_id = i.internship_id
    LEFT JOIN employer_profiles ei ON i.employer_id = ei.employer_id
    WHERE 1 = 1
"""


def has_applied(kind: PostingKind, posting_id: int, student_id: int) -> bool:
    cfg = POSTINGS[kind]
    results = execute_raw_sql(
        f"SELECT application_id FROM applications WHERE student_id = :sid AND {cfg['id']} = :pid",
        {"sid": student_id, "pid": posting_id}
    )
    return bool(results)


def create_application(
    kind: PostingKind,
    posting_id: int,
    student_id: int,
    cover_letter: str,
    additional_info: Optional[str] = None
) -> int:
    cfg = POSTINGS[kind]
    with get_db_session() as db:
        result = db.execute(
            text(f"""
                INSERT INTO applications (student_id, {cfg['id']}, cover_letter, additional_info, status)
                VALUES (:sid, :pid, :cover, :info, 'PENDING')
                RETURNING application_id
            """),
            {"sid": student_id, "pid": posting_id, "cover": cover_letter, "info": additional_info}
        )
        application_id = result.fetchone()[0]

    logger.info("Student %s applied to %s %s", student_id, kind.value, posting_id)
    return application_id


def list_applications(
    student_id: Optional[int] = None,
    employer_id: Optional[int] = None,
    status: Optional[str] = None,
    kind: Optional[PostingKind] = None,
    posting_id: Optional[int] = None
) -> List[dict]:
    """Applications newest first, filtered by applicant, posting owner, status or posting."""
    sql = _SELECT_APPLICATIONS
    params: dict = {}

    if student_id is not None:
        sql += " AND a.student_id = :sid"
        params["sid"] = student_id
    if employer_id is not None:
        sql += " AND (j.employer_id = :eid OR i.employer_id = :eid)"
        params["eid"] = employer_id
    if status:
        sql += " AND a.status = :status"
        params["status"] = status
    if kind is not None and posting_id is not None:
        sql += f" AND a.{POSTINGS[kind]['id']} = :pid"
        params["pid"] = posting_id

    sql += " ORDER BY a.created_at DESC, a.application_id DESC"

    applications = execute_raw_sql(sql, params)
    for app in applications:
        app["student_name"] = f"{app.pop('first_name')} {app.pop('last_name')}".strip()
        if app["job_id"] is not None:
            app["posting_kind"], app["posting_id"] = PostingKind.job, app["job_id"]
        else:
            app["posting_kind"], app["posting_id"] = PostingKind.internship, app["internship_id"]
    return applications


def update_application_status(application_id: int, employer_id: int, status: str) -> bool:
    """Change an application's status. Only the employer owning the posting may do so."""
    with get_db_session() as db:
        owned = db.execute(
            text("""
                SELECT a.application_id FROM applications a
                LEFT JOIN jobs j ON a.job_id = j.job_id
                LEFT JOIN internships i ON a.internship_id = i.internship_id
                WHERE a.application_id = :aid AND (j.employer_id = :eid OR i.employer_id = :eid)
            """),
            {"aid": application_id, "eid": employer_id}
        ).fetchone()
        if not owned:
            return False

        db.execute(
            text("UPDATE applications SET status = :status, updated_at = CURRENT_TIMESTAMP WHERE application_id = :aid"),
            {"aid": application_id, "status": status}
        )

    logger.info("Application %s moved to %s by employer %s", application_id, status, employer_id)
    return True


def employer_stats(employer_id: int) -> dict:
    stats = {}
    for kind, label in ((PostingKind.job, "jobs"), (PostingKind.internship, "internships")):
        cfg = POSTINGS[kind]
        row = execute_raw_sql(f"""
            SELECT COUNT(*) AS total,
                   COALESCE(SUM(CASE WHEN is_active = :active THEN 1 ELSE 0 END), 0) AS active
            FROM {cfg['table']} WHERE employer_id = :eid
        """, {"eid": employer_id, "active": True})[0]
        stats[f"total_{label}"] = row["total"]
        stats[f"active_{label}"] = row["active"]

    applications = list_applications(employer_id=employer_id)
    stats["total_applications"] = len(applications)
    stats["pending_applications"] = sum(1 for a in applications if a["status"] == "PENDING")
    return stats
