"""
Recommendation Routes

GET /recommendations - Active jobs and internships ranked by skill match
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from careers.core.auth import get_current_student
from careers.services.matching_service import get_recommendation_service
from careers.schemas.schemas import PostingKind, RecommendationListResponse

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.get("", response_model=RecommendationListResponse)
async def get_recommendations(
    kind: Optional[PostingKind] = Query(None, description="Only jobs or only internships"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    student: dict = Depends(get_current_student)
):
    """
    Get recommendations for the current student.

    Every active posting is scored against the student's skills:
    - Each posting skill the student has adds its proficiency weight
      (BEGINNER 0.4, INTERMEDIATE 0.7, ADVANCED 0.9, EXPERT 1.0), boosted 1.2x if required
    - The sum is normalized against an EXPERT in every skill (0-100)

    Results are sorted by score; equal scores keep newest postings first.
    Tier counts cover all scored postings, not just the returned page.
    """
    service = get_recommendation_service()
    return service.generate_recommendations(student["student_id"], kind=kind, limit=limit)
