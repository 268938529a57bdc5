"""Shared fixtures for matching tests."""

import os

import pytest

# Keep the app's engine off the working directory during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from factories import make_candidate  # noqa: E402
from talentmatch.schemas.matching import CandidateProfile  # noqa: E402


@pytest.fixture
def engineer_candidate() -> CandidateProfile:
    """Candidate preferring permanent engineering work, expecting 45k."""
    return make_candidate(
        preferred_role_types=["Engineer"],
        preferred_employment_types=["Permanent"],
        preferred_location_types=["Remote"],
        preferred_working_hours=["Part-time"],
        salary_expectations={"type": "exact", "exact": 45000},
        skills=["Python", "SQL"],
    )
