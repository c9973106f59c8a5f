#!/usr/bin/env python3
"""
Demo Data Seed Script

Creates:
1. A small skill catalog
2. A student (student@example.com / password123) with three skills
3. An employer (employer@example.com / password123) with a job and an internship

PREREQUISITES:
- Database reachable (DATABASE_URL or POSTGRES_* settings)

Run: python scripts/seed_demo_data.py
"""
import sys
sys.path.insert(0, '.')

from datetime import datetime, timedelta

from sqlalchemy import text

from careers.core.auth import hash_password
from careers.db.database import get_db_session, init_schema
from careers.schemas.schemas import PostingKind
from careers.services import posting_service, profile_service

DEMO_PASSWORD = "password123"

SKILLS = [
    ("JavaScript", "Programming"),
    ("TypeScript", "Programming"),
    ("React", "Frontend"),
    ("Node.js", "Backend"),
    ("Python", "Programming"),
    ("SQL", "Database"),
    ("Git", "Tools"),
    ("Communication", "Soft Skills"),
]


def create_user(db, email: str, role: str) -> int:
    result = db.execute(
        text("INSERT INTO users (email, password_hash, role) VALUES (:email, :hash, :role) RETURNING user_id"),
        {"email": email, "hash": hash_password(DEMO_PASSWORD), "role": role}
    )
    return result.fetchone()[0]


def main():
    print("=" * 50)
    print("CAMPUS CAREERS - DEMO DATA")
    print("=" * 50)

    init_schema()

    with get_db_session() as db:
        result = db.execute(text("SELECT COUNT(*) FROM users WHERE email = 'student@example.com'"))
        if result.fetchone()[0] > 0:
            print("\n    Demo data already exists, skipping")
            return

        print("\n[1] Creating skills...")
        for name, category in SKILLS:
            profile_service.find_or_create_skill(db, name, category)

        print("[2] Creating student...")
        student_id = profile_service.create_student_profile(db, create_user(db, "student@example.com", "STUDENT"), {
            "first_name": "John",
            "last_name": "Doe",
            "phone": "+1234567890",
            "university": "Tech University",
            "major": "Computer Science",
            "year_of_study": 3,
        })

        print("[3] Creating employer...")
        employer_id = profile_service.create_employer_profile(db, create_user(db, "employer@example.com", "EMPLOYER"), {
            "company_name": "Tech Solutions Inc.",
            "industry": "Technology",
            "company_size": "50-200 employees",
            "website": "https://techsolutions.com",
        })

    profile_service.update_student_profile(student_id, {
        "gpa": 3.8,
        "bio": "Passionate computer science student with experience in web development.",
    })
    profile_service.update_employer_profile(employer_id, {
        "description": "Leading technology company specializing in web applications.",
        "location": "San Francisco, CA",
        "contact_name": "Jane Smith",
        "contact_phone": "+1987654321",
    })

    for skill_name, level in (("JavaScript", "ADVANCED"), ("TypeScript", "INTERMEDIATE"), ("React", "ADVANCED")):
        profile_service.add_student_skill(student_id, skill_name, level)

    print("[4] Creating postings...")
    job_id = posting_service.create_posting(
        PostingKind.job,
        employer_id,
        {
            "title": "Frontend Developer Intern",
            "description": "Join our team as a frontend developer intern and work on exciting web applications.",
            "requirements": "Strong knowledge of JavaScript, React, and modern web development practices.",
            "location": "San Francisco, CA",
            "salary": "$20-25/hour",
            "job_type": "PART_TIME",
            "level": "ENTRY_LEVEL",
            "deadline": datetime.now() + timedelta(days=30),
        },
        [
            {"skill_name": "JavaScript", "required": True},
            {"skill_name": "React", "required": True},
            {"skill_name": "TypeScript", "required": False},
        ]
    )
    internship_id = posting_service.create_posting(
        PostingKind.internship,
        employer_id,
        {
            "title": "Summer Software Development Internship",
            "description": "Full-time summer internship program for computer science students.",
            "requirements": "Currently enrolled in Computer Science or related field.",
            "location": "San Francisco, CA",
            "compensation": "$25/hour + benefits",
            "duration": "12 weeks",
        },
        [
            {"skill_name": "Python", "required": True},
            {"skill_name": "Git", "required": True},
            {"skill_name": "Communication", "required": False},
        ]
    )

    print(f"\n    Student ID: {student_id}, Employer ID: {employer_id}")
    print(f"    Job ID: {job_id}, Internship ID: {internship_id}")
    print(f"    Login with student@example.com or employer@example.com / {DEMO_PASSWORD}")
    print("\n" + "=" * 50)
    print("Seed complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
