"""
Relational tables for the marketplace.

Defined with SQLAlchemy Core so the same metadata creates the schema on
PostgreSQL (production) and SQLite (tests). Queries elsewhere stay raw SQL
through `text()`; these definitions only own the DDL.
"""

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Boolean, Float, DateTime,
    ForeignKey, UniqueConstraint, CheckConstraint, func, true
)

metadata = MetaData()


def _timestamps():
    return [
        Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
        Column("updated_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    ]


users = Table(
    "users", metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(20), nullable=False),
    Column("is_active", Boolean, nullable=False, server_default=true()),
    *_timestamps(),
    CheckConstraint("role IN ('STUDENT', 'EMPLOYER')", name="ck_users_role"),
)

student_profiles = Table(
    "student_profiles", metadata,
    Column("student_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("first_name", String(100), nullable=False, server_default=""),
    Column("last_name", String(100), nullable=False, server_default=""),
    Column("phone", String(50)),
    Column("university", String(200)),
    Column("major", String(200)),
    Column("year_of_study", Integer, nullable=False, server_default="1"),
    Column("gpa", Float),
    Column("bio", Text),
    *_timestamps(),
)

employer_profiles = Table(
    "employer_profiles", metadata,
    Column("employer_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("company_name", String(200), nullable=False, server_default=""),
    Column("description", Text),
    Column("industry", String(100)),
    Column("company_size", String(100)),
    Column("location", String(200)),
    Column("website", String(255)),
    Column("contact_name", String(200)),
    Column("contact_phone", String(50)),
    *_timestamps(),
)

skills = Table(
    "skills", metadata,
    Column("skill_id", Integer, primary_key=True, autoincrement=True),
    Column("skill_name", String(100), nullable=False, unique=True),
    Column("category", String(100), nullable=False, server_default="uncategorized"),
)

student_skills = Table(
    "student_skills", metadata,
    Column("student_id", Integer, ForeignKey("student_profiles.student_id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.skill_id", ondelete="CASCADE"), primary_key=True),
    Column("level", String(20), nullable=False, server_default="INTERMEDIATE"),
)

jobs = Table(
    "jobs", metadata,
    Column("job_id", Integer, primary_key=True, autoincrement=True),
    Column("employer_id", Integer, ForeignKey("employer_profiles.employer_id", ondelete="CASCADE"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("requirements", Text),
    Column("location", String(200)),
    Column("salary", String(100)),
    Column("job_type", String(20), nullable=False, server_default="FULL_TIME"),
    Column("level", String(20), nullable=False, server_default="ENTRY_LEVEL"),
    Column("deadline", DateTime),
    Column("is_active", Boolean, nullable=False, server_default=true()),
    *_timestamps(),
)

internships = Table(
    "internships", metadata,
    Column("internship_id", Integer, primary_key=True, autoincrement=True),
    Column("employer_id", Integer, ForeignKey("employer_profiles.employer_id", ondelete="CASCADE"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("requirements", Text),
    Column("location", String(200)),
    Column("compensation", String(100)),
    Column("duration", String(100)),
    Column("start_date", DateTime),
    Column("deadline", DateTime),
    Column("is_active", Boolean, nullable=False, server_default=true()),
    *_timestamps(),
)

job_skills = Table(
    "job_skills", metadata,
    Column("job_id", Integer, ForeignKey("jobs.job_id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.skill_id", ondelete="CASCADE"), primary_key=True),
    Column("required", Boolean, nullable=False, server_default=true()),
)

internship_skills = Table(
    "internship_skills", metadata,
    Column("internship_id", Integer, ForeignKey("internships.internship_id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.skill_id", ondelete="CASCADE"), primary_key=True),
    Column("required", Boolean, nullable=False, server_default=true()),
)

applications = Table(
    "applications", metadata,
    Column("application_id", Integer, primary_key=True, autoincrement=True),
    Column("student_id", Integer, ForeignKey("student_profiles.student_id", ondelete="CASCADE"), nullable=False),
    Column("job_id", Integer, ForeignKey("jobs.job_id", ondelete="CASCADE")),
    Column("internship_id", Integer, ForeignKey("internships.internship_id", ondelete="CASCADE")),
    Column("cover_letter", Text, nullable=False),
    Column("additional_info", Text),
    Column("status", String(30), nullable=False, server_default="PENDING"),
    *_timestamps(),
    UniqueConstraint("student_id", "job_id", name="uq_applications_student_job"),
    UniqueConstraint("student_id", "internship_id", name="uq_applications_student_internship"),
    CheckConstraint(
        "(job_id IS NULL) <> (internship_id IS NULL)",
        name="ck_applications_one_posting",
    ),
)
