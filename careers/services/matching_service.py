"""
Skill Matching & Recommendation Service

PURPOSE:
Score how well a student's skills cover the skills a job or internship
asks for, then rank every open posting for that student.

HOW IT WORKS:
1. Load the student's skills (skill + proficiency level) from the profile store
2. Load active postings and their skill lists from the posting store
3. Score each posting with compute_match_score()
4. Rank by score (stable, so newest postings stay first among equal scores)
5. Bucket scores into display tiers (high / medium / other)

SCORING:
Each required skill the student has contributes level_weight * required boost.
The total is divided by what an EXPERT in every skill would get, so an
unmatched skill dilutes the score and a position with no skills scores 0.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Union

from careers.core.config import Settings, get_settings
from careers.schemas.schemas import MatchTier, PostingKind, ProficiencyLevel
from careers.services import posting_service, profile_service

logger = logging.getLogger(__name__)


# ============================================================
# WEIGHTS
# ============================================================

LEVEL_WEIGHTS: Dict[ProficiencyLevel, float] = {
    ProficiencyLevel.BEGINNER: 0.4,
    ProficiencyLevel.INTERMEDIATE: 0.7,
    ProficiencyLevel.ADVANCED: 0.9,
    ProficiencyLevel.EXPERT: 1.0,
}

# Unrecognised levels weigh the same as BEGINNER
FALLBACK_LEVEL_WEIGHT = LEVEL_WEIGHTS[ProficiencyLevel.BEGINNER]
MAX_LEVEL_WEIGHT = LEVEL_WEIGHTS[ProficiencyLevel.EXPERT]

REQUIRED_SKILL_BOOST = 1.2
OPTIONAL_SKILL_BOOST = 1.0

HIGH_MATCH_THRESHOLD = 70.0
MEDIUM_MATCH_THRESHOLD = 40.0

# Tie-break rank when postings share a created_at (sorted descending)
KIND_ORDER = {PostingKind.job: 1, PostingKind.internship: 0}


class UnknownProficiencyLevel(ValueError):
    """Raised in strict mode when a skill carries a level outside ProficiencyLevel."""

    def __init__(self, level: Any):
        self.level = level
        super().__init__(f"Unknown proficiency level: {level!r}")


# ============================================================
# INPUT / OUTPUT TYPES
# ============================================================

@dataclass(frozen=True)
class SkillProficiency:
    skill_id: Hashable
    level: Any


@dataclass(frozen=True)
class RequiredSkill:
    skill_id: Hashable
    required: bool = True


@dataclass(frozen=True)
class MatchResult:
    score: float
    skill_matches: int
    total_skills: int

    @property
    def tier(self) -> MatchTier:
        return match_tier(self.score)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "skillMatches": self.skill_matches,
            "totalSkills": self.total_skills,
        }


CandidateSkillInput = Union[SkillProficiency, Mapping[str, Any], Sequence[Any]]
RequiredSkillInput = Union[RequiredSkill, Mapping[str, Any], Sequence[Any]]


def _skill_id_of(entry: Mapping[str, Any]) -> Hashable:
    if "skillId" in entry:
        return entry["skillId"]
    return entry["skill_id"]


def _as_candidate_skill(entry: CandidateSkillInput) -> SkillProficiency:
    """Accept a SkillProficiency, a {skillId, level} mapping or a (skill_id, level) pair."""
    if isinstance(entry, SkillProficiency):
        return entry
    if isinstance(entry, Mapping):
        return SkillProficiency(_skill_id_of(entry), entry.get("level"))
    skill_id, level = entry
    return SkillProficiency(skill_id, level)


def _as_required_skill(entry: RequiredSkillInput) -> RequiredSkill:
    """Accept a RequiredSkill, a {skillId, required} mapping or a (skill_id, required) pair."""
    if isinstance(entry, RequiredSkill):
        return entry
    if isinstance(entry, Mapping):
        return RequiredSkill(_skill_id_of(entry), bool(entry.get("required", True)))
    skill_id, required = entry
    return RequiredSkill(skill_id, bool(required))


# ============================================================
# SCORER
# ============================================================

def parse_level(level: Any) -> Optional[ProficiencyLevel]:
    """Case-insensitive lookup; None when the value is not a known level."""
    if isinstance(level, ProficiencyLevel):
        return level
    if not isinstance(level, str):
        return None
    try:
        return ProficiencyLevel(level.upper())
    except ValueError:
        return None


def level_weight(level: Any, strict: bool = False) -> float:
    """
    Weight of a proficiency level.

    BEGINNER 0.4, INTERMEDIATE 0.7, ADVANCED 0.9, EXPERT 1.0.
    Anything else weighs 0.4, or raises UnknownProficiencyLevel when strict.
    """
    parsed = parse_level(level)
    if parsed is None:
        if strict:
            raise UnknownProficiencyLevel(level)
        return FALLBACK_LEVEL_WEIGHT
    return LEVEL_WEIGHTS[parsed]


def round_half_up(score: float) -> float:
    """Two decimals, halves rounded up (8.125 -> 8.13). Scores are never negative."""
    return math.floor(score * 100 + 0.5) / 100


def compute_match_score(
    candidate_skills: Iterable[CandidateSkillInput],
    required_skills: Iterable[RequiredSkillInput],
    strict: bool = False
) -> MatchResult:
    """
    Compute how well a candidate's skills cover a position's skills.

    Args:
        candidate_skills: the student's skills with proficiency levels
        required_skills: the posting's skills with required flags
        strict: reject unknown proficiency levels instead of weighting them as BEGINNER

    Returns:
        MatchResult with score in [0, 100] rounded to 2 decimals, the number
        of posting skills the candidate has, and the number of posting skills
    """
    required = [_as_required_skill(entry) for entry in required_skills]
    total_skills = len(required)

    if total_skills == 0:
        return MatchResult(score=0.0, skill_matches=0, total_skills=0)

    # First entry wins when a skill is listed twice
    candidate_by_id: Dict[Hashable, SkillProficiency] = {}
    for entry in candidate_skills:
        skill = _as_candidate_skill(entry)
        if strict:
            level_weight(skill.level, strict=True)
        candidate_by_id.setdefault(skill.skill_id, skill)

    skill_matches = 0
    contributions: List[float] = []

    for required_skill in required:
        candidate_skill = candidate_by_id.get(required_skill.skill_id)
        if candidate_skill is None:
            continue

        skill_matches += 1
        boost = REQUIRED_SKILL_BOOST if required_skill.required else OPTIONAL_SKILL_BOOST
        contributions.append(level_weight(candidate_skill.level) * boost)

    # fsum keeps the total independent of the order skills were listed in
    weighted_score = math.fsum(contributions)
    max_possible_score = total_skills * MAX_LEVEL_WEIGHT * REQUIRED_SKILL_BOOST
    score = min(100.0, (weighted_score / max_possible_score) * 100)

    return MatchResult(
        score=round_half_up(score),
        skill_matches=skill_matches,
        total_skills=total_skills
    )


def match_tier(score: float) -> MatchTier:
    """Display bucket: high >= 70, medium 40-69.99, other below 40."""
    if score >= HIGH_MATCH_THRESHOLD:
        return MatchTier.high
    if score >= MEDIUM_MATCH_THRESHOLD:
        return MatchTier.medium
    return MatchTier.other


def rank_by_score(
    items: Iterable[Any],
    score_of: Callable[[Any], float] = lambda item: item["match_score"]
) -> List[Any]:
    """Sort by descending score; items with equal scores keep their input order."""
    return sorted(items, key=score_of, reverse=True)


# ============================================================
# RECOMMENDATION SERVICE
# ============================================================

class RecommendationService:
    """
    Ranks open jobs and internships for a student.

    Process:
    1. Get the student's skills
    2. Get every active posting with its skills (newest first)
    3. Score, tier and rank them
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _required_skills(self, posting_skills: List[dict]) -> List[RequiredSkill]:
        # Postings have historically treated every listed skill as required
        if self.settings.matching_honor_optional_skills:
            return [RequiredSkill(s["skill_id"], bool(s["required"])) for s in posting_skills]
        return [RequiredSkill(s["skill_id"], True) for s in posting_skills]

    def score(self, candidate: List[CandidateSkillInput], posting_skills: List[dict]) -> MatchResult:
        return compute_match_score(
            candidate,
            self._required_skills(posting_skills),
            strict=self.settings.matching_strict_levels
        )

    def score_posting(self, student_id: int, kind: PostingKind, posting_id: int) -> Optional[dict]:
        """
        Score a single posting for a student.

        Returns:
            Dict with match fields, or None if the posting does not exist
        """
        posting = posting_service.get_posting(kind, posting_id)
        if posting is None:
            return None

        candidate = profile_service.get_candidate_skills(student_id)
        result = self.score(candidate, posting["skills"])

        return {
            "posting_kind": kind,
            "posting_id": posting_id,
            "match_score": result.score,
            "skill_matches": result.skill_matches,
            "total_skills": result.total_skills,
            "tier": result.tier,
        }

    def generate_recommendations(
        self,
        student_id: int,
        kind: Optional[PostingKind] = None,
        limit: Optional[int] = None
    ) -> dict:
        """
        Rank active postings for a student.

        Args:
            student_id: student profile ID
            kind: only jobs or only internships (default: both)
            limit: maximum number of recommendations returned

        Returns:
            Dict with ranked `recommendations`, `total` scored and per-tier counts
        """
        candidate = profile_service.get_candidate_skills(student_id)

        kinds = [kind] if kind else [PostingKind.job, PostingKind.internship]
        postings: List[dict] = []
        for posting_kind in kinds:
            postings.extend(posting_service.list_active_postings(posting_kind))

        # Newest first across both kinds, so ties in score favour recent postings.
        # Same timestamp: jobs before internships, then higher ID first.
        postings.sort(
            key=lambda p: (str(p["created_at"]), KIND_ORDER[p["posting_kind"]], p["posting_id"]),
            reverse=True
        )

        scored = []
        for posting in postings:
            result = self.score(candidate, posting["skills"])
            scored.append({
                "posting_kind": posting["posting_kind"],
                "posting_id": posting["posting_id"],
                "title": posting["title"],
                "company_name": posting["company_name"],
                "location": posting["location"],
                "skills": [s["skill_name"] for s in posting["skills"]],
                "match_score": result.score,
                "skill_matches": result.skill_matches,
                "total_skills": result.total_skills,
                "tier": result.tier,
                "created_at": posting["created_at"],
            })
        logger.debug("Scored %d postings for student %s", len(scored), student_id)

        ranked = rank_by_score(scored)

        tiers = {tier.value: 0 for tier in MatchTier}
        for rec in ranked:
            tiers[rec["tier"].value] += 1

        if limit is not None:
            ranked = ranked[:limit]

        logger.info(
            "Recommendations for student %s: %d postings (high=%d, medium=%d, other=%d)",
            student_id, len(scored), tiers["high"], tiers["medium"], tiers["other"]
        )

        return {"recommendations": ranked, "total": len(scored), "tiers": tiers}


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_recommendation_service() -> RecommendationService:
    """Get recommendation service instance."""
    return RecommendationService()
