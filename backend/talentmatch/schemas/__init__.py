from talentmatch.schemas.matching import (
    CandidateProfile,
    CandidateSearchResult,
    JobListing,
    JobMatch,
    MatchJobsRequest,
    MatchJobsResponse,
    SearchCandidatesRequest,
    SearchCandidatesResponse,
    SearchFilters,
)

__all__ = [
    "CandidateProfile",
    "CandidateSearchResult",
    "JobListing",
    "JobMatch",
    "MatchJobsRequest",
    "MatchJobsResponse",
    "SearchCandidatesRequest",
    "SearchCandidatesResponse",
    "SearchFilters",
]
