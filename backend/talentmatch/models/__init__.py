from talentmatch.models.candidate_profile import CandidateProfileRecord
from talentmatch.models.job_posting import EmployerProfileRecord, JobPostingRecord

__all__ = [
    "CandidateProfileRecord",
    "EmployerProfileRecord",
    "JobPostingRecord",
]
