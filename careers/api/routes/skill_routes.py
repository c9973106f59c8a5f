"""
Skill Routes

GET /skills - Skill catalog, ordered by name
"""

from fastapi import APIRouter
from typing import List

from careers.services.profile_service import list_skill_catalog
from careers.schemas.schemas import SkillResponse

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.get("", response_model=List[SkillResponse])
async def list_skills():
    """Every skill known to the platform, from student profiles and postings."""
    return list_skill_catalog()
