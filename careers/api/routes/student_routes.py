"""
Student Routes

GET /students/profile - Get own profile with skills
PUT /students/profile - Update profile
GET /students/skills - Get skills
POST /students/skills - Add skill (or change its level)
DELETE /students/skills/{skill_id} - Remove skill
GET /students/applications - Get my applications
GET /students/dashboard - Counts and recent applications
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from careers.core.auth import get_current_student
from careers.services import posting_service, profile_service
from careers.schemas.schemas import (
    StudentUpdate, StudentResponse, SkillAdd, StudentSkillResponse,
    ApplicationResponse, StudentDashboardResponse, MessageResponse, PostingKind
)

router = APIRouter(prefix="/students", tags=["Students"])

RECENT_APPLICATIONS = 5


@router.get("/profile", response_model=StudentResponse)
async def get_profile(student: dict = Depends(get_current_student)):
    """Get current student's profile."""
    profile = profile_service.get_student_profile(student["student_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return StudentResponse(**profile)


@router.put("/profile", response_model=MessageResponse)
async def update_profile(data: StudentUpdate, student: dict = Depends(get_current_student)):
    """Update student profile. Only provided fields are updated."""
    if not profile_service.update_student_profile(student["student_id"], data.model_dump(exclude_none=True)):
        raise HTTPException(status_code=400, detail="No fields to update")

    return MessageResponse(message="Profile updated successfully")


@router.get("/skills", response_model=List[StudentSkillResponse])
async def get_skills(student: dict = Depends(get_current_student)):
    """Get student's skills with proficiency levels."""
    return profile_service.list_student_skills(student["student_id"])


@router.post("/skills", response_model=MessageResponse, status_code=201)
async def add_skill(skill: SkillAdd, student: dict = Depends(get_current_student)):
    """Add a skill to profile. Adding an existing skill updates its level."""
    profile_service.add_student_skill(student["student_id"], skill.skill_name, skill.level.value)
    return MessageResponse(message=f"Skill '{skill.skill_name.strip()}' added")


@router.delete("/skills/{skill_id}", response_model=MessageResponse)
async def remove_skill(skill_id: int, student: dict = Depends(get_current_student)):
    """Remove a skill from profile."""
    if not profile_service.remove_student_skill(student["student_id"], skill_id):
        raise HTTPException(status_code=404, detail="Skill not found in profile")

    return MessageResponse(message="Skill removed")


@router.get("/applications", response_model=List[ApplicationResponse])
async def get_my_applications(student: dict = Depends(get_current_student)):
    """Get all jobs and internships student has applied to, newest first."""
    return posting_service.list_applications(student_id=student["student_id"])


@router.get("/dashboard", response_model=StudentDashboardResponse)
async def get_dashboard(student: dict = Depends(get_current_student)):
    applications = posting_service.list_applications(student_id=student["student_id"])

    return StudentDashboardResponse(
        skills_count=len(profile_service.list_student_skills(student["student_id"])),
        total_applications=len(applications),
        recent_applications=applications[:RECENT_APPLICATIONS],
        active_jobs=posting_service.count_active(PostingKind.job),
        active_internships=posting_service.count_active(PostingKind.internship)
    )
