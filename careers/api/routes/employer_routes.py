"""
Employer Routes

GET /employers/profile - Get own company profile
PUT /employers/profile - Update profile
GET /employers/jobs - Get employer's jobs (active and closed)
GET /employers/internships - Get employer's internships
GET /employers/applications - Get applications received
PUT /employers/applications/{id}/status - Update application status
GET /employers/candidates - Search student profiles
GET /employers/dashboard - Hiring counts
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from careers.core.auth import get_current_employer
from careers.services import posting_service, profile_service
from careers.schemas.schemas import (
    EmployerUpdate, EmployerResponse, JobResponse, InternshipResponse, ApplicationResponse,
    ApplicationStatus, ApplicationStatusUpdate, CandidateResponse, EmployerDashboardResponse,
    MessageResponse, PostingKind
)

router = APIRouter(prefix="/employers", tags=["Employers"])


@router.get("/profile", response_model=EmployerResponse)
async def get_profile(employer: dict = Depends(get_current_employer)):
    """Get current employer's company profile."""
    profile = profile_service.get_employer_profile(employer["employer_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Employer profile not found")
    return EmployerResponse(**profile)


@router.put("/profile", response_model=MessageResponse)
async def update_profile(data: EmployerUpdate, employer: dict = Depends(get_current_employer)):
    """Update company profile."""
    if not profile_service.update_employer_profile(employer["employer_id"], data.model_dump(exclude_none=True)):
        raise HTTPException(status_code=400, detail="No fields to update")

    return MessageResponse(message="Profile updated successfully")


@router.get("/jobs", response_model=List[JobResponse])
async def get_my_jobs(employer: dict = Depends(get_current_employer)):
    """Get all jobs posted by this employer, including closed ones."""
    jobs, _ = posting_service.list_postings(
        PostingKind.job, active_only=False, employer_id=employer["employer_id"]
    )
    return jobs


@router.get("/internships", response_model=List[InternshipResponse])
async def get_my_internships(employer: dict = Depends(get_current_employer)):
    internships, _ = posting_service.list_postings(
        PostingKind.internship, active_only=False, employer_id=employer["employer_id"]
    )
    return internships


@router.get("/applications", response_model=List[ApplicationResponse])
async def get_applications(
    status: Optional[ApplicationStatus] = Query(None),
    job_id: Optional[int] = Query(None),
    internship_id: Optional[int] = Query(None),
    employer: dict = Depends(get_current_employer)
):
    """Get all applications for this employer's jobs and internships."""
    kind, posting_id = None, None
    if job_id is not None:
        kind, posting_id = PostingKind.job, job_id
    elif internship_id is not None:
        kind, posting_id = PostingKind.internship, internship_id

    return posting_service.list_applications(
        employer_id=employer["employer_id"],
        status=status.value if status else None,
        kind=kind,
        posting_id=posting_id
    )


@router.put("/applications/{application_id}/status", response_model=MessageResponse)
async def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    employer: dict = Depends(get_current_employer)
):
    """Update status of an application to one of this employer's postings."""
    if not posting_service.update_application_status(application_id, employer["employer_id"], update.status.value):
        raise HTTPException(status_code=404, detail="Application not found")

    return MessageResponse(message=f"Status updated to '{update.status.value}'")


@router.get("/candidates", response_model=List[CandidateResponse])
async def search_candidates(
    search: Optional[str] = Query(None, description="Match name, university or major"),
    employer: dict = Depends(get_current_employer)
):
    """Browse student profiles with their skills."""
    return profile_service.search_candidates(search)


@router.get("/dashboard", response_model=EmployerDashboardResponse)
async def get_dashboard(employer: dict = Depends(get_current_employer)):
    return EmployerDashboardResponse(**posting_service.employer_stats(employer["employer_id"]))
