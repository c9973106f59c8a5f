"""
Campus Careers - Main Application

FastAPI backend with:
- PostgreSQL for structured data
- MongoDB for CV documents
- Skill-based matching of students to jobs and internships
- JWT authentication

Run: uvicorn careers.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from careers.api.routes import api_router
from careers.core.config import get_settings
from careers.core.logging import setup_logging
from careers.db.database import init_schema, test_database_connection
from careers.db.mongodb import init_mongo_indexes, test_mongo_connection
from careers.services.matching_service import UnknownProficiencyLevel

logger = logging.getLogger(__name__)

settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title="Campus Careers",
    description="""
    A campus recruiting platform for students and employers.

    ## Features
    - **Authentication**: JWT-based auth for students and employers
    - **Students**: Profile and skill management, applications, CV builder
    - **Employers**: Job and internship postings, application review, candidate search
    - **Recommendations**: Postings ranked by weighted skill match

    ## Databases
    - PostgreSQL: Structured data (users, profiles, skills, postings, applications)
    - MongoDB: CV documents
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(UnknownProficiencyLevel)
async def unknown_level_handler(request: Request, exc: UnknownProficiencyLevel):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Configure logging, create tables and MongoDB indexes."""
    setup_logging()

    try:
        init_schema()
    except Exception as e:
        logger.error("Database schema initialization failed: %s", e)

    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Campus Careers", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_database_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
