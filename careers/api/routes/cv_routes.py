"""
CV Routes

GET /cv - Get own CV
PUT /cv - Create or replace CV sections
DELETE /cv - Delete CV
GET /cv/preview - CV merged with profile and skills
"""

from fastapi import APIRouter, HTTPException, Depends

from careers.core.auth import get_current_student
from careers.services.cv_service import get_cv_service
from careers.schemas.schemas import CVUpdate, CVResponse, CVPreviewResponse, MessageResponse

router = APIRouter(prefix="/cv", tags=["CV Builder"])


@router.get("", response_model=CVResponse)
async def get_cv(student: dict = Depends(get_current_student)):
    cv = get_cv_service().get_by_student(student["student_id"])
    if not cv:
        raise HTTPException(status_code=404, detail="CV not found")
    return cv


@router.put("", response_model=CVResponse)
async def save_cv(data: CVUpdate, student: dict = Depends(get_current_student)):
    """Create or replace the CV. Sections left out are cleared."""
    return get_cv_service().save(student["student_id"], data.model_dump())


@router.delete("", response_model=MessageResponse)
async def delete_cv(student: dict = Depends(get_current_student)):
    if not get_cv_service().delete(student["student_id"]):
        raise HTTPException(status_code=404, detail="CV not found")
    return MessageResponse(message="CV deleted")


@router.get("/preview", response_model=CVPreviewResponse)
async def preview_cv(student: dict = Depends(get_current_student)):
    """Everything the printable CV shows, in one response."""
    preview = get_cv_service().build_preview(student["student_id"])
    if preview is None:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return preview
