"""
Candidate Search Service - Employer search filters → candidate ranking

Scoring runs in two phases:

Phase 1 - Required filters (gate, no points):
    Role type, employment type and working hours. When the employer picked
    any values for a category, the candidate must prefer at least one of
    them or is dropped before scoring. An empty category never excludes.

Phase 2 - Scored criteria (survivors only):
    | Criterion | Max | Rule                                              |
    |-----------|-----|---------------------------------------------------|
    | Skills    | 40  | case-insensitive substring match, either way      |
    | Location  | 10  | substring match against "city state country"      |
    | Salary    | 0   | overlap is reported in the breakdown, not scored  |

    Unfiltered criteria award full points, so a search with no skills and
    no location scores every surviving candidate 100.

Final score = round(100 * points / 50).
"""

import logging
from typing import Iterable, List, Tuple

from talentmatch.schemas.matching import (
    CandidateProfile,
    CandidateSearchBreakdown,
    CandidateSearchResult,
    CandidateSkillsBreakdown,
    CriterionResult,
    SalaryExpectation,
    SearchFilters,
)
from talentmatch.services.ranker import rank
from talentmatch.services.scoring import find_overlap, round_score

logger = logging.getLogger(__name__)

SKILLS_POINTS = 40
LOCATION_POINTS = 10

# Salary is reported but contributes nothing to the denominator
MAX_POINTS = SKILLS_POINTS + LOCATION_POINTS


def _wants_any(requested: List[str], preferred: List[str]) -> bool:
    return any(value in preferred for value in requested)


def passes_required_filters(filters: SearchFilters, candidate: CandidateProfile) -> bool:
    """Phase 1: True unless a non-empty required category has no overlap."""
    required = (
        (filters.role_types, candidate.preferred_role_types),
        (filters.employment_types, candidate.preferred_employment_types),
        (filters.working_hours, candidate.preferred_working_hours),
    )
    for requested, preferred in required:
        if requested and not _wants_any(requested, preferred):
            return False
    return True


# Breakdown wording: (matched, mismatched, no filter given)
ROLE_REASONS = (
    "Role type matches (required)",
    "Role type mismatch (required)",
    "No role filter specified",
)
EMPLOYMENT_REASONS = (
    "Employment type matches (required)",
    "Employment type mismatch (required)",
    "No employment filter specified",
)
HOURS_REASONS = (
    "Working hours match (required)",
    "Working hours mismatch (required)",
    "No hours filter specified",
)


def _required_result(
    requested: List[str],
    preferred: List[str],
    reasons: Tuple[str, str, str],
) -> CriterionResult:
    matched_reason, mismatch_reason, unset_reason = reasons
    if not requested:
        return CriterionResult(matched=True, reason=unset_reason)
    if _wants_any(requested, preferred):
        return CriterionResult(matched=True, reason=matched_reason)
    return CriterionResult(matched=False, reason=mismatch_reason)


def _salary_bounds(expectation: SalaryExpectation):
    lower = expectation.min or expectation.exact or 0
    upper = expectation.max or expectation.exact or 0
    return lower, upper


def score_candidate(filters: SearchFilters, candidate: CandidateProfile) -> CandidateSearchResult:
    """
    Phase 2: score a candidate that passed the required filters.

    Role, employment and hours are still evaluated so the breakdown explains
    why the candidate is listed, but they carry no points.

    Args:
        filters: Employer search filters
        candidate: Normalized candidate profile

    Returns:
        CandidateSearchResult with match_score 0-100, reasons and breakdown
    """
    points = 0.0
    reasons = []
    breakdown = CandidateSearchBreakdown()

    # Role type (required, no points)
    breakdown.role = _required_result(
        filters.role_types, candidate.preferred_role_types, ROLE_REASONS
    )
    if filters.role_types and breakdown.role.matched:
        reasons.append("Role type match")

    # Skills (40 points)
    if filters.skills:
        candidate_skills = [skill.lower() for skill in candidate.skills]
        requested = [skill.lower() for skill in filters.skills]
        matched = [skill for skill in requested if find_overlap(skill, candidate_skills) is not None]
        missing = [skill for skill in requested if skill not in matched]

        breakdown.skills = CandidateSkillsBreakdown(
            matched=len(matched),
            total=len(requested),
            matched_skills=matched,
            missing_skills=missing,
        )
        points += len(matched) / len(requested) * SKILLS_POINTS
        if matched:
            reasons.append(f"{len(matched)}/{len(requested)} skills match")
    else:
        points += SKILLS_POINTS

    # Location (10 points)
    if filters.location:
        candidate_location = candidate.address.location_text().lower()
        if find_overlap(filters.location.lower(), [candidate_location]) is not None:
            points += LOCATION_POINTS
            breakdown.location = CriterionResult(matched=True, reason="Location matches")
            reasons.append("Location match")
        else:
            breakdown.location = CriterionResult(matched=False, reason="Location mismatch")
    else:
        points += LOCATION_POINTS
        breakdown.location = CriterionResult(matched=True, reason="No location filter specified")

    # Employment type (required, no points)
    breakdown.employment = _required_result(
        filters.employment_types, candidate.preferred_employment_types, EMPLOYMENT_REASONS
    )
    if filters.employment_types and breakdown.employment.matched:
        reasons.append("Employment type match")

    # Working hours (required, no points)
    breakdown.hours = _required_result(
        filters.working_hours, candidate.preferred_working_hours, HOURS_REASONS
    )
    if filters.working_hours and breakdown.hours.matched:
        reasons.append("Working hours match")

    # Salary (informational only)
    expectation = candidate.salary_expectations
    if filters.salary_min > 0 and filters.salary_max > 0 and expectation is not None:
        lower, upper = _salary_bounds(expectation)
        if lower <= filters.salary_max and upper >= filters.salary_min:
            breakdown.salary = CriterionResult(matched=True, reason="Salary expectations overlap")
            reasons.append("Salary expectations match")
        else:
            breakdown.salary = CriterionResult(matched=False, reason="Salary expectations don't overlap")

    return CandidateSearchResult(
        candidate=candidate,
        match_score=round_score(100 * points / MAX_POINTS),
        match_reasons=reasons,
        breakdown=breakdown,
    )


def search_candidates(
    filters: SearchFilters,
    candidates: Iterable[CandidateProfile],
    min_score: int = 1,
) -> List[CandidateSearchResult]:
    """
    Gate, score and rank a candidate pool for one employer search.

    Args:
        filters: Employer search filters
        candidates: Normalized candidate profiles
        min_score: Results scoring below this are dropped (1 = any match)

    Returns:
        Results sorted by match_score, highest first
    """
    if filters.keywords:
        logger.debug("Keyword filter supplied; keywords are not used for scoring")

    results = []
    excluded = 0
    for candidate in candidates:
        if not passes_required_filters(filters, candidate):
            excluded += 1
            continue
        results.append(score_candidate(filters, candidate))

    ranked = rank(results, min_score, key=_match_score)
    logger.info(
        f"Candidate search: {len(results)} scored, {excluded} excluded by required filters, "
        f"{len(ranked)} returned"
    )
    return ranked


def _match_score(result: CandidateSearchResult) -> int:
    return result.match_score
