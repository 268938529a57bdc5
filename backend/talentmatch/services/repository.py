"""
Record Store - read-only queries feeding the matching flows

The scorers never touch the database. Entry points fetch raw rows through
this store (one AsyncSession per request) and hand plain dicts to the
normalizer. Database failures are wrapped in RecordFetchError with the
driver message as ``details``; there are no retries here.
"""

import logging
from typing import Any, Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from talentmatch.exceptions import CandidateNotFoundError, RecordFetchError
from talentmatch.models import CandidateProfileRecord, EmployerProfileRecord, JobPostingRecord

logger = logging.getLogger(__name__)


def row_to_dict(record) -> Dict[str, Any]:
    """Convert an ORM instance to a plain column → value dict."""
    return {column.name: getattr(record, column.name) for column in record.__table__.columns}


class RecordStore:
    """
    Async lookups for candidate profiles, job postings and employers.

    Attributes:
        session: Request-scoped AsyncSession (owned by the caller)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_candidate_profile(self, candidate_id: str) -> Dict[str, Any]:
        """
        Fetch one candidate profile row.

        Raises:
            CandidateNotFoundError: No profile with this id
            RecordFetchError: The query failed
        """
        try:
            result = await self.session.execute(
                select(CandidateProfileRecord).where(CandidateProfileRecord.id == candidate_id)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Candidate profile lookup failed for {candidate_id}: {e}")
            raise CandidateNotFoundError("Candidate profile lookup failed", details=str(e)) from e

        if record is None:
            raise CandidateNotFoundError(
                "Candidate profile not found",
                details=f"No candidate profile with id {candidate_id}",
            )
        return row_to_dict(record)

    async def list_active_job_postings(self) -> List[Dict[str, Any]]:
        """Fetch all postings with status "active", newest first."""
        try:
            result = await self.session.execute(
                select(JobPostingRecord)
                .where(JobPostingRecord.status == "active")
                .order_by(JobPostingRecord.created_at.desc())
            )
            return [row_to_dict(record) for record in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching job postings: {e}")
            raise RecordFetchError("Failed to fetch job postings", details=str(e)) from e

    async def get_company_names(self, employer_ids: Iterable[str]) -> Dict[str, str]:
        """Map employer ids to company names; unknown ids are omitted."""
        ids = sorted({employer_id for employer_id in employer_ids if employer_id})
        if not ids:
            return {}
        try:
            result = await self.session.execute(
                select(EmployerProfileRecord.id, EmployerProfileRecord.company_name)
                .where(EmployerProfileRecord.id.in_(ids))
            )
            return {row[0]: row[1] for row in result.all()}
        except SQLAlchemyError as e:
            logger.error(f"Error fetching employer profiles: {e}")
            raise RecordFetchError("Failed to fetch employer profiles", details=str(e)) from e

    async def list_searchable_candidates(self) -> List[Dict[str, Any]]:
        """Fetch candidates that are both discoverable and open for work."""
        try:
            result = await self.session.execute(
                select(CandidateProfileRecord).where(
                    CandidateProfileRecord.discoverable.is_(True),
                    CandidateProfileRecord.open_for_work.is_(True),
                )
            )
            return [row_to_dict(record) for record in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching candidates: {e}")
            raise RecordFetchError("Failed to fetch candidates", details=str(e)) from e
