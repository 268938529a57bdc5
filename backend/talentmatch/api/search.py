"""
Employer candidate search endpoint

    POST /search-candidates   {"filters": {...}}

Searches the pool of discoverable, open-for-work candidates. Role type,
employment type and working hours act as required filters; skills and
location are scored. Every candidate with a non-zero score is returned,
highest first.
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Body, Depends

from talentmatch.config import get_settings
from talentmatch.dependencies import get_record_store
from talentmatch.exceptions import MatchingAPIError, RecordFetchError
from talentmatch.middleware.metrics import record_match_batch
from talentmatch.schemas import SearchCandidatesRequest, SearchCandidatesResponse
from talentmatch.services.candidate_search import search_candidates
from talentmatch.services.normalizer import parse_candidate_profile
from talentmatch.services.repository import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


@router.post("", response_model=SearchCandidatesResponse)
async def search_candidate_pool(
    request: Optional[SearchCandidatesRequest] = Body(None),
    store: RecordStore = Depends(get_record_store),
):
    if request is None or request.filters is None:
        raise MatchingAPIError(400, "Filters are required")

    try:
        raw_candidates = await store.list_searchable_candidates()
    except RecordFetchError as e:
        raise MatchingAPIError(500, "Failed to fetch candidates", e.details)

    if not raw_candidates:
        return SearchCandidatesResponse(results=[])

    try:
        candidates = [parse_candidate_profile(raw) for raw in raw_candidates]

        start_time = time.perf_counter()
        results = search_candidates(
            request.filters,
            candidates,
            min_score=settings.candidate_search_min_score,
        )
        record_match_batch("candidate_search", len(candidates), len(results), time.perf_counter() - start_time)
    except Exception as e:
        logger.exception("Error in candidate search")
        raise MatchingAPIError(500, "Internal server error", str(e))

    return SearchCandidatesResponse(results=results)
