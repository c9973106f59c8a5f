"""
CV Builder Service - CV documents in MongoDB.

One document per student in the `cvs` collection:
{
    "student_id": 7,
    "summary": "...", "experience": "...", "education": "...",
    "projects": "...", "certifications": "...", "languages": "...",
    "created_at": datetime, "updated_at": datetime
}

The preview merges the CV with profile data and skills from the
relational store.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo.collection import Collection

from careers.db.mongodb import get_collection, COLLECTIONS
from careers.services import profile_service

logger = logging.getLogger(__name__)

CV_SECTIONS = ["summary", "experience", "education", "projects", "certifications", "languages"]


def serialize_cv(doc: Optional[dict]) -> Optional[dict]:
    """Drop Mongo internals so the document fits CVResponse."""
    if doc is None:
        return None
    doc = dict(doc)
    doc.pop("_id", None)
    doc.pop("created_at", None)
    return doc


class CVService:
    """
    Handles CV storage.
    Each save replaces every section, the way the CV form submits them.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["cvs"])

    def get_by_student(self, student_id: int) -> Optional[dict]:
        return serialize_cv(self.collection.find_one({"student_id": student_id}))

    def save(self, student_id: int, sections: dict) -> dict:
        """
        Create or replace a student's CV.

        Args:
            student_id: student profile ID
            sections: any of CV_SECTIONS; missing sections are cleared

        Returns:
            The stored CV
        """
        now = datetime.now(timezone.utc)
        values = {section: sections.get(section) for section in CV_SECTIONS}
        self.collection.update_one(
            {"student_id": student_id},
            {
                "$set": {**values, "updated_at": now},
                "$setOnInsert": {"student_id": student_id, "created_at": now}
            },
            upsert=True
        )
        logger.info("Saved CV for student %s", student_id)
        return self.get_by_student(student_id)

    def delete(self, student_id: int) -> bool:
        result = self.collection.delete_one({"student_id": student_id})
        return result.deleted_count > 0

    def build_preview(self, student_id: int) -> Optional[dict]:
        """
        Everything the CV preview shows: profile, skills and CV sections.

        Returns:
            Preview dict, or None if the student profile does not exist
        """
        profile = profile_service.get_student_profile(student_id)
        if profile is None:
            return None

        cv = self.get_by_student(student_id)
        return {
            "has_cv": cv is not None,
            "full_name": f"{profile['first_name']} {profile['last_name']}".strip(),
            "email": profile["email"],
            "phone": profile["phone"],
            "university": profile["university"],
            "major": profile["major"],
            "bio": profile["bio"],
            "skills": profile["skills"],
            "cv": cv,
        }


def get_cv_service() -> CVService:
    """Get CV service instance."""
    return CVService()
