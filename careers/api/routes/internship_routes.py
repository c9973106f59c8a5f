"""
Internship Routes

Same surface as jobs:
POST /internships, GET /internships, GET|PUT|DELETE /internships/{internship_id},
PUT /internships/{internship_id}/active, POST /internships/{internship_id}/apply,
GET /internships/{internship_id}/match
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from careers.core.auth import get_current_student, get_current_employer
from careers.services import posting_service
from careers.services.matching_service import get_recommendation_service
from careers.schemas.schemas import (
    InternshipCreate, InternshipUpdate, InternshipResponse, InternshipListResponse, ActiveToggle,
    ApplicationCreate, MatchResponse, MessageResponse, PostingKind
)

router = APIRouter(prefix="/internships", tags=["Internships"])

KIND = PostingKind.internship


@router.post("", response_model=InternshipResponse, status_code=201)
async def create_internship(internship: InternshipCreate, employer: dict = Depends(get_current_employer)):
    internship_id = posting_service.create_posting(
        KIND,
        employer["employer_id"],
        internship.model_dump(exclude={"skills"}),
        [skill.model_dump() for skill in internship.skills]
    )
    return InternshipResponse(**posting_service.get_posting(KIND, internship_id))


@router.get("", response_model=InternshipListResponse)
async def list_internships(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    search: Optional[str] = Query(None, description="Search in title and description"),
    location: Optional[str] = Query(None)
):
    internships, total = posting_service.list_postings(
        KIND, search=search, location=location, page=page, page_size=page_size
    )
    return InternshipListResponse(
        internships=[InternshipResponse(**i) for i in internships],
        total=total, page=page, page_size=page_size
    )


@router.get("/{internship_id}", response_model=InternshipResponse)
async def get_internship(internship_id: int):
    internship = posting_service.get_posting(KIND, internship_id)
    if not internship:
        raise HTTPException(status_code=404, detail="Internship not found")
    return InternshipResponse(**internship)


@router.put("/{internship_id}", response_model=MessageResponse)
async def update_internship(
    internship_id: int, update: InternshipUpdate, employer: dict = Depends(get_current_employer)
):
    updated = posting_service.update_posting(
        KIND, internship_id, employer["employer_id"], update.model_dump(exclude_none=True)
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Internship not found or access denied")
    if not updated:
        raise HTTPException(status_code=400, detail="No fields to update")

    return MessageResponse(message="Internship updated successfully")


@router.put("/{internship_id}/active", response_model=MessageResponse)
async def set_internship_active(
    internship_id: int, toggle: ActiveToggle, employer: dict = Depends(get_current_employer)
):
    if not posting_service.set_posting_active(KIND, internship_id, employer["employer_id"], toggle.is_active):
        raise HTTPException(status_code=404, detail="Internship not found or access denied")

    state = "activated" if toggle.is_active else "deactivated"
    return MessageResponse(message=f"Internship {state} successfully")


@router.delete("/{internship_id}", response_model=MessageResponse)
async def delete_internship(internship_id: int, employer: dict = Depends(get_current_employer)):
    if not posting_service.delete_posting(KIND, internship_id, employer["employer_id"]):
        raise HTTPException(status_code=404, detail="Internship not found or access denied")

    return MessageResponse(message="Internship deleted successfully")


@router.post("/{internship_id}/apply", response_model=MessageResponse, status_code=201)
async def apply_to_internship(
    internship_id: int, application: ApplicationCreate, student: dict = Depends(get_current_student)
):
    """Apply to an internship. Students only, once per internship."""
    internship = posting_service.get_posting(KIND, internship_id)
    if not internship or not internship["is_active"]:
        raise HTTPException(status_code=404, detail="Internship not found or inactive")

    if posting_service.has_applied(KIND, internship_id, student["student_id"]):
        raise HTTPException(status_code=400, detail="Already applied to this internship")

    posting_service.create_application(
        KIND, internship_id, student["student_id"], application.cover_letter, application.additional_info
    )
    return MessageResponse(message="Application submitted successfully")


@router.get("/{internship_id}/match", response_model=MatchResponse)
async def match_internship(internship_id: int, student: dict = Depends(get_current_student)):
    match = get_recommendation_service().score_posting(student["student_id"], KIND, internship_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Internship not found")
    return MatchResponse(**match)
