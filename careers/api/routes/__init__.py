"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from careers.api.routes.auth_routes import router as auth_router
from careers.api.routes.student_routes import router as student_router
from careers.api.routes.employer_routes import router as employer_router
from careers.api.routes.job_routes import router as job_router
from careers.api.routes.internship_routes import router as internship_router
from careers.api.routes.skill_routes import router as skill_router
from careers.api.routes.recommendation_routes import router as recommendation_router
from careers.api.routes.cv_routes import router as cv_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(employer_router)
api_router.include_router(job_router)
api_router.include_router(internship_router)
api_router.include_router(skill_router)
api_router.include_router(recommendation_router)
api_router.include_router(cv_router)
