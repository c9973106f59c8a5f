"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "STUDENT"
    employer = "EMPLOYER"


class ProficiencyLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class JobType(str, Enum):
    full_time = "FULL_TIME"
    part_time = "PART_TIME"
    contract = "CONTRACT"
    remote = "REMOTE"


class JobLevel(str, Enum):
    entry_level = "ENTRY_LEVEL"
    junior = "JUNIOR"
    mid_level = "MID_LEVEL"
    senior = "SENIOR"
    executive = "EXECUTIVE"


class ApplicationStatus(str, Enum):
    pending = "PENDING"
    reviewed = "REVIEWED"
    interview_scheduled = "INTERVIEW_SCHEDULED"
    accepted = "ACCEPTED"
    rejected = "REJECTED"


class PostingKind(str, Enum):
    job = "job"
    internship = "internship"


class MatchTier(str, Enum):
    high = "high"
    medium = "medium"
    other = "other"


def _upper(value):
    return value.upper() if isinstance(value, str) else value


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole
    # Student fields
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    year_of_study: Optional[int] = Field(None, ge=1, le=10)
    # Employer fields
    company_name: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    website: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        return _upper(v)

class RegisterResponse(BaseModel):
    message: str
    user_id: int

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

class UserResponse(BaseModel):
    user_id: int
    email: str
    role: str
    is_active: bool
    created_at: datetime


# ============================================================
# SKILL SCHEMAS
# ============================================================

class SkillResponse(BaseModel):
    skill_id: int
    skill_name: str
    category: str

class StudentSkillResponse(BaseModel):
    skill_id: int
    skill_name: str
    category: Optional[str] = None
    level: str

class SkillAdd(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)
    level: ProficiencyLevel = ProficiencyLevel.INTERMEDIATE

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return _upper(v)

class PostingSkill(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)
    required: bool = True

class PostingSkillResponse(BaseModel):
    skill_id: int
    skill_name: str
    required: bool


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    year_of_study: Optional[int] = Field(None, ge=1, le=10)
    gpa: Optional[float] = Field(None, ge=0, le=10)
    bio: Optional[str] = None

class StudentResponse(BaseModel):
    student_id: int
    user_id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    year_of_study: int
    gpa: Optional[float] = None
    bio: Optional[str] = None
    skills: List[StudentSkillResponse] = []
    created_at: datetime

class CandidateResponse(BaseModel):
    student_id: int
    full_name: str
    email: str
    university: Optional[str] = None
    major: Optional[str] = None
    year_of_study: int
    skills: List[StudentSkillResponse] = []


# ============================================================
# EMPLOYER SCHEMAS
# ============================================================

class EmployerUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None

class EmployerResponse(BaseModel):
    employer_id: int
    user_id: int
    email: str
    company_name: str
    description: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    created_at: datetime


# ============================================================
# JOB / INTERNSHIP SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    job_type: JobType = JobType.full_time
    level: JobLevel = JobLevel.entry_level
    deadline: Optional[datetime] = None
    skills: List[PostingSkill] = []

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[JobType] = None
    level: Optional[JobLevel] = None
    deadline: Optional[datetime] = None

class JobResponse(BaseModel):
    job_id: int
    employer_id: int
    company_name: str
    title: str
    description: str
    requirements: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    job_type: str
    level: str
    deadline: Optional[datetime] = None
    is_active: bool
    skills: List[PostingSkillResponse] = []
    application_count: int = 0
    created_at: datetime

class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    page: int
    page_size: int

class InternshipCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None
    location: Optional[str] = None
    compensation: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    skills: List[PostingSkill] = []

class InternshipUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    compensation: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None

class InternshipResponse(BaseModel):
    internship_id: int
    employer_id: int
    company_name: str
    title: str
    description: str
    requirements: Optional[str] = None
    location: Optional[str] = None
    compensation: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    is_active: bool
    skills: List[PostingSkillResponse] = []
    application_count: int = 0
    created_at: datetime

class InternshipListResponse(BaseModel):
    internships: List[InternshipResponse]
    total: int
    page: int
    page_size: int

class ActiveToggle(BaseModel):
    is_active: bool


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    cover_letter: str = Field(..., min_length=1)
    additional_info: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return _upper(v)

class ApplicationResponse(BaseModel):
    application_id: int
    student_id: int
    student_name: str
    student_email: str
    posting_kind: PostingKind
    posting_id: int
    posting_title: str
    company_name: str
    status: str
    cover_letter: str
    additional_info: Optional[str] = None
    applied_at: datetime
    updated_at: datetime


# ============================================================
# MATCHING / RECOMMENDATION SCHEMAS
# ============================================================

class MatchResponse(BaseModel):
    posting_kind: PostingKind
    posting_id: int
    match_score: float
    skill_matches: int
    total_skills: int
    tier: MatchTier

class RecommendationResponse(BaseModel):
    posting_kind: PostingKind
    posting_id: int
    title: str
    company_name: str
    location: Optional[str] = None
    skills: List[str] = []
    match_score: float
    skill_matches: int
    total_skills: int
    tier: MatchTier
    created_at: datetime

class TierCounts(BaseModel):
    high: int = 0
    medium: int = 0
    other: int = 0

class RecommendationListResponse(BaseModel):
    recommendations: List[RecommendationResponse]
    total: int
    tiers: TierCounts


# ============================================================
# CV SCHEMAS
# ============================================================

class CVUpdate(BaseModel):
    summary: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    projects: Optional[str] = None
    certifications: Optional[str] = None
    languages: Optional[str] = None

class CVResponse(BaseModel):
    student_id: int
    summary: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    projects: Optional[str] = None
    certifications: Optional[str] = None
    languages: Optional[str] = None
    updated_at: Optional[datetime] = None

class CVPreviewResponse(BaseModel):
    has_cv: bool
    full_name: str
    email: str
    phone: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    bio: Optional[str] = None
    skills: List[StudentSkillResponse] = []
    cv: Optional[CVResponse] = None


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class StudentDashboardResponse(BaseModel):
    skills_count: int
    total_applications: int
    recent_applications: List[ApplicationResponse]
    active_jobs: int
    active_internships: int

class EmployerDashboardResponse(BaseModel):
    total_jobs: int
    active_jobs: int
    total_internships: int
    active_internships: int
    total_applications: int
    pending_applications: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True