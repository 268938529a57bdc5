"""
Candidate → Jobs matching endpoint

    POST /match-jobs   {"candidateId": "..."}

Scores every active job posting against one candidate and returns the
strong matches (score >= JOB_MATCH_MIN_SCORE, default 90), highest first.
Pass ``?debug=true`` to log the full breakdown of every listing.
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from talentmatch.config import get_settings
from talentmatch.dependencies import get_record_store
from talentmatch.exceptions import (
    CandidateNotFoundError,
    MatchingAPIError,
    RecordFetchError,
)
from talentmatch.middleware.metrics import record_match_batch
from talentmatch.schemas import MatchJobsRequest, MatchJobsResponse
from talentmatch.services.job_matcher import match_jobs
from talentmatch.services.normalizer import parse_candidate_profile, parse_job_listing
from talentmatch.services.repository import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


@router.post("", response_model=MatchJobsResponse)
async def match_jobs_for_candidate(
    request: Optional[MatchJobsRequest] = Body(None),
    debug: bool = Query(False),
    store: RecordStore = Depends(get_record_store),
):
    if request is None or not request.candidate_id:
        raise MatchingAPIError(400, "Candidate ID is required")

    candidate_id = request.candidate_id
    logger.info(f"Fetching candidate profile for ID: {candidate_id}")
    try:
        raw_profile = await store.get_candidate_profile(candidate_id)
    except CandidateNotFoundError as e:
        raise MatchingAPIError(404, "Candidate profile not found", e.details)

    try:
        raw_postings = await store.list_active_job_postings()
    except RecordFetchError as e:
        raise MatchingAPIError(500, "Failed to fetch job postings", e.details)

    try:
        return await _score_postings(store, raw_profile, raw_postings, debug)
    except Exception as e:
        logger.exception(f"Job matching failed for candidate {candidate_id}")
        raise MatchingAPIError(500, "Internal server error", str(e))


async def _score_postings(store: RecordStore, raw_profile, raw_postings, debug: bool) -> MatchJobsResponse:
    # Company names are cosmetic; a failed lookup falls back to the posting's own
    try:
        company_names = await store.get_company_names(p.get("employer_id") for p in raw_postings)
    except RecordFetchError as e:
        logger.warning(f"Failed to merge employer names: {e.details}")
        company_names = {}

    candidate = parse_candidate_profile(raw_profile)
    listings = [parse_job_listing(posting, company_names) for posting in raw_postings]
    logger.info(f"Number of active jobs: {len(listings)}")

    start_time = time.perf_counter()
    matches = match_jobs(candidate, listings, min_score=settings.job_match_min_score, debug=debug)
    record_match_batch("job_match", len(listings), len(matches), time.perf_counter() - start_time)

    return MatchJobsResponse(
        matches=matches,
        total_jobs=len(listings),
        matched_jobs=len(matches),
    )
