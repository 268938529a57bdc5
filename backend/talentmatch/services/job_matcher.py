"""
Job Matching Service - Candidate → Job compatibility scoring

This module scores how well one job listing fits one candidate's stated
preferences. It is a deterministic weighted-rule scorer: no embeddings, no
learned weights, no state.

Match Score Composition (weights sum to 100):
    - Role Type (25): listing role type in candidate's preferred role types
    - Employment Type (15): listing employment type in preferred types
    - Location Type (15): listing location in preferred location types
    - Working Hours (10): listing hours in preferred working hours
    - Skills (20): share of listing skills (required + optional) the
      candidate has; skipped when the listing names no skills
    - Salary (10): listing midpoint within 10% of an exact expectation, or
      inside an expected range; no partial credit
    - Languages (5, cap): 1.5 points per speak/read/write ability both
      required and claimed

Score Range: integer 0-100, rounded once over the summed contributions.

Note:
    The location criterion compares the listing's location string against
    the candidate's *location type* preferences ("Remote", "Office",
    "Hybrid"). The two come from different vocabularies, so this rarely
    matches; the comparison is kept literal because existing thresholds
    were tuned against it.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from talentmatch.schemas.matching import (
    CandidateProfile,
    CriterionResult,
    JobListing,
    JobMatch,
    JobMatchBreakdown,
    JobSkillsBreakdown,
    LanguagePair,
    LanguagesBreakdown,
    SalaryBreakdown,
    SalaryExpectation,
)
from talentmatch.services.ranker import rank
from talentmatch.services.scoring import round_score

logger = logging.getLogger(__name__)

WEIGHTS = {
    "role": 25,
    "employment": 15,
    "location": 15,
    "hours": 10,
    "skills": 20,
    "salary": 10,
    "languages": 5,
}

# Exact expectation matches when |midpoint - exact| / exact <= 10%
SALARY_TOLERANCE = 0.10

LANGUAGE_POINTS_PER_ABILITY = 1.5


def match_preference(value: Optional[str], preferred: List[str]) -> bool:
    """Binary membership check; a missing listing value never matches."""
    return value is not None and value in preferred


def match_skills(job_skills: List[str], candidate_skills: List[str]) -> Tuple[List[str], List[str]]:
    """
    Split listing skills into those the candidate has and those missing.

    Matching is exact and case-sensitive.

    Returns:
        Tuple of (matched, missing), both in listing order
    """
    owned = set(candidate_skills)
    matched = [skill for skill in job_skills if skill in owned]
    missing = [skill for skill in job_skills if skill not in owned]
    return matched, missing


def match_salary(
    job_midpoint: Optional[float],
    expectation: Optional[SalaryExpectation],
) -> Tuple[bool, Optional[str]]:
    """
    Check a listing's salary midpoint against a candidate expectation.

    Args:
        job_midpoint: (salary_min + salary_max) / 2, None if either is unset
        expectation: Candidate salary expectation (exact or range)

    Returns:
        Tuple of (matched, reason string or None)
    """
    if job_midpoint is None or expectation is None:
        return False, None

    if expectation.type == "exact" and expectation.exact:
        difference = abs(job_midpoint - expectation.exact) / expectation.exact
        if difference <= SALARY_TOLERANCE:
            return True, "Salary matches your expectations"
    elif expectation.type == "range" and expectation.min and expectation.max:
        if expectation.min <= job_midpoint <= expectation.max:
            return True, "Salary is within your expected range"

    return False, None


def match_languages(listing: JobListing, candidate: CandidateProfile) -> Tuple[int, List[LanguagePair]]:
    """
    Count abilities required by the listing that the candidate also claims.

    Returns:
        Tuple of (matched ability count, per-language required/provided pairs)
    """
    matches = 0
    pairs = []

    for requirement in listing.languages:
        claim = candidate.find_language(requirement.language)
        required = requirement.abilities()
        provided = claim.abilities() if claim else []
        matches += len(set(required) & set(provided))
        pairs.append(LanguagePair(language=requirement.language, required=required, provided=provided))

    return matches, pairs


# Breakdown wording per criterion: (matched, not matched)
PREFERENCE_REASONS = {
    "role": ("Preferred role includes", "Preferred roles do not include"),
    "employment": ("Preferred employment includes", "Preferred employment types do not include"),
    "location": ("Preferred locations include", "Preferred locations do not include"),
    "hours": ("Preferred hours include", "Preferred hours do not include"),
}


def _preference_result(criterion: str, matched: bool, value: Optional[str]) -> CriterionResult:
    matched_text, unmatched_text = PREFERENCE_REASONS[criterion]
    prefix = matched_text if matched else unmatched_text
    return CriterionResult(matched=matched, reason=f"{prefix} {value}")


def score_job_match(candidate: CandidateProfile, listing: JobListing) -> JobMatch:
    """
    Calculate the candidate → job match score, reasons and breakdown.

    Algorithm:
        1-4. Binary preference checks (role, employment, location, hours)
        5. Skills: |matched| / |required ∪ optional| * 20
        6. Salary: full 10 points or nothing
        7. Languages: min(5, matched abilities * 1.5)

    Args:
        candidate: Normalized candidate profile
        listing: Normalized job listing

    Returns:
        JobMatch with integer score 0-100 and one reason per contributing
        criterion, in criterion order

    Example:
        >>> match = score_job_match(candidate, listing)
        >>> match.score
        50
        >>> match.match_reasons
        ['Role type matches your preference: Engineer', ...]
    """
    score = 0.0
    reasons = []

    # 1-4. Preference membership
    role_matched = match_preference(listing.role_type, candidate.preferred_role_types)
    if role_matched:
        score += WEIGHTS["role"]
        reasons.append(f"Role type matches your preference: {listing.role_type}")

    employment_matched = match_preference(listing.employment_type, candidate.preferred_employment_types)
    if employment_matched:
        score += WEIGHTS["employment"]
        reasons.append(f"Employment type matches your preference: {listing.employment_type}")

    location_matched = match_preference(listing.location, candidate.preferred_location_types)
    if location_matched:
        score += WEIGHTS["location"]
        reasons.append(f"Location type matches your preference: {listing.location}")

    hours_matched = match_preference(listing.working_hours, candidate.preferred_working_hours)
    if hours_matched:
        score += WEIGHTS["hours"]
        reasons.append(f"Working hours match your preference: {listing.working_hours}")

    # 5. Skills (skipped entirely when the listing names none)
    job_skills = listing.all_skills()
    matched_skills, missing_skills = match_skills(job_skills, candidate.skills)
    if job_skills:
        score += len(matched_skills) / len(job_skills) * WEIGHTS["skills"]
        if matched_skills:
            reasons.append(f"You have {len(matched_skills)} out of {len(job_skills)} required skills")

    # 6. Salary
    job_midpoint = listing.salary_midpoint
    salary_matched, salary_reason = match_salary(job_midpoint, candidate.salary_expectations)
    if salary_matched:
        score += WEIGHTS["salary"]
        reasons.append(salary_reason)

    # 7. Languages
    language_matches, language_pairs = match_languages(listing, candidate)
    if language_matches > 0:
        score += min(WEIGHTS["languages"], language_matches * LANGUAGE_POINTS_PER_ABILITY)
        reasons.append("Language requirements match your skills")

    breakdown = JobMatchBreakdown(
        weights=dict(WEIGHTS),
        role=_preference_result("role", role_matched, listing.role_type),
        employment=_preference_result("employment", employment_matched, listing.employment_type),
        location=_preference_result("location", location_matched, listing.location),
        hours=_preference_result("hours", hours_matched, listing.working_hours),
        skills=JobSkillsBreakdown(
            matched_count=len(matched_skills),
            total_count=len(job_skills),
            matched=matched_skills,
            missing=missing_skills,
        ),
        salary=SalaryBreakdown(
            matched=salary_matched,
            job_average=job_midpoint,
            candidate=candidate.salary_expectations,
            reason="Salary aligned" if salary_matched else "Salary not aligned or expectations not set",
        ),
        languages=LanguagesBreakdown(matched_pairs=language_matches, pairs=language_pairs),
    )

    return JobMatch(
        job=listing,
        score=round_score(score),
        match_reasons=reasons,
        breakdown=breakdown,
    )


def describe_match(match: JobMatch) -> str:
    """Render a multi-line breakdown of a match for log output."""
    b = match.breakdown
    mark = {True: "✓", False: "✗"}
    lines = [
        f"--- Match breakdown for: {match.job.title} ({match.score}%) ---",
        f"Reasons: {', '.join(match.match_reasons) or 'None'}",
        f"Skills: {b.skills.matched_count}/{b.skills.total_count} "
        f"matched [{', '.join(b.skills.matched) or 'None'}] "
        f"missing [{', '.join(b.skills.missing) or 'None'}]",
    ]
    if b.salary.job_average is not None:
        lines.append(f"Salary: job average {b.salary.job_average:,.0f}, matched: {b.salary.matched}")
    for name in ("role", "employment", "location", "hours"):
        criterion = getattr(b, name)
        lines.append(f"{name.title()}: {mark[criterion.matched]} {criterion.reason}")
    lines.append(f"Languages: {b.languages.matched_pairs} abilities matched")
    return "\n".join(lines)


def match_jobs(
    candidate: CandidateProfile,
    listings: Iterable[JobListing],
    min_score: int = 90,
    debug: bool = False,
) -> List[JobMatch]:
    """
    Score every listing for a candidate and keep the strong matches.

    Args:
        candidate: Normalized candidate profile
        listings: Normalized active listings
        min_score: Lowest score returned (inclusive)
        debug: Log every breakdown at INFO instead of DEBUG

    Returns:
        Matches scoring at least min_score, highest first
    """
    matches = [score_job_match(candidate, listing) for listing in listings]

    for match in matches:
        if debug:
            logger.info(describe_match(match))
        elif match.score < min_score and logger.isEnabledFor(logging.DEBUG):
            logger.debug(describe_match(match))

    ranked = rank(matches, min_score)
    logger.info(
        f"Candidate {candidate.id}: {len(matches)} listings scored, "
        f"{sum(1 for m in matches if m.score > 0)} non-zero, {len(ranked)} at or above {min_score}"
    )
    return ranked
