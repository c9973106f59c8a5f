"""
Job Routes

POST /jobs - Create job posting (employer only)
GET /jobs - List active jobs with filters
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (employer only)
PUT /jobs/{job_id}/active - Open or close a job (employer only)
DELETE /jobs/{job_id} - Delete job (employer only)
POST /jobs/{job_id}/apply - Apply to job (student only)
GET /jobs/{job_id}/match - Match score for the current student
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from careers.core.auth import get_current_student, get_current_employer
from careers.services import posting_service
from careers.services.matching_service import get_recommendation_service
from careers.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobListResponse, JobType, ActiveToggle,
    ApplicationCreate, MatchResponse, MessageResponse, PostingKind
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

KIND = PostingKind.job


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, employer: dict = Depends(get_current_employer)):
    """Create a new job posting. Only employers can create jobs."""
    job_id = posting_service.create_posting(
        KIND,
        employer["employer_id"],
        job.model_dump(exclude={"skills"}),
        [skill.model_dump() for skill in job.skills]
    )
    return JobResponse(**posting_service.get_posting(KIND, job_id))


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    search: Optional[str] = Query(None, description="Search in title and description"),
    location: Optional[str] = Query(None),
    job_type: Optional[JobType] = Query(None)
):
    """List active job postings with filters and pagination."""
    jobs, total = posting_service.list_postings(
        KIND,
        search=search,
        location=location,
        job_type=job_type.value if job_type else None,
        page=page,
        page_size=page_size
    )
    return JobListResponse(
        jobs=[JobResponse(**j) for j in jobs], total=total, page=page, page_size=page_size
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int):
    """Get details of a specific job."""
    job = posting_service.get_posting(KIND, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse(**job)


@router.put("/{job_id}", response_model=MessageResponse)
async def update_job(job_id: int, update: JobUpdate, employer: dict = Depends(get_current_employer)):
    """Update a job posting. Only the owning employer can update."""
    updated = posting_service.update_posting(
        KIND, job_id, employer["employer_id"], update.model_dump(exclude_none=True)
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Job not found or access denied")
    if not updated:
        raise HTTPException(status_code=400, detail="No fields to update")

    return MessageResponse(message="Job updated successfully")


@router.put("/{job_id}/active", response_model=MessageResponse)
async def set_job_active(job_id: int, toggle: ActiveToggle, employer: dict = Depends(get_current_employer)):
    """Open or close a job for applications."""
    if not posting_service.set_posting_active(KIND, job_id, employer["employer_id"], toggle.is_active):
        raise HTTPException(status_code=404, detail="Job not found or access denied")

    state = "activated" if toggle.is_active else "deactivated"
    return MessageResponse(message=f"Job {state} successfully")


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: int, employer: dict = Depends(get_current_employer)):
    """Delete a job posting. Cascades to applications."""
    if not posting_service.delete_posting(KIND, job_id, employer["employer_id"]):
        raise HTTPException(status_code=404, detail="Job not found or access denied")

    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=MessageResponse, status_code=201)
async def apply_to_job(job_id: int, application: ApplicationCreate, student: dict = Depends(get_current_student)):
    """Apply to a job. Students only. Cannot apply twice to same job."""
    job = posting_service.get_posting(KIND, job_id)
    if not job or not job["is_active"]:
        raise HTTPException(status_code=404, detail="Job not found or inactive")

    if posting_service.has_applied(KIND, job_id, student["student_id"]):
        raise HTTPException(status_code=400, detail="Already applied to this job")

    posting_service.create_application(
        KIND, job_id, student["student_id"], application.cover_letter, application.additional_info
    )
    return MessageResponse(message="Application submitted successfully")


@router.get("/{job_id}/match", response_model=MatchResponse)
async def match_job(job_id: int, student: dict = Depends(get_current_student)):
    """How well the current student's skills cover this job."""
    match = get_recommendation_service().score_posting(student["student_id"], KIND, job_id)
    if match is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return MatchResponse(**match)
