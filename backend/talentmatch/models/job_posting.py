"""
Job Posting Model - SQLAlchemy ORM models for employer job listings

Postings are written by the employer posting wizard. Depending on which
version of the wizard created a row, the matching fields live either in the
flat columns or inside the nested ``job_details`` JSON object, and the JSON
columns may hold native arrays or JSON-encoded strings. Rows are therefore
always passed through the normalizer before scoring.

Status Flow:
    draft → active → closed
"""

from sqlalchemy import Column, String, Integer, DateTime, JSON
from sqlalchemy.sql import func
from talentmatch.database import Base
import uuid


class EmployerProfileRecord(Base):
    """Employer account; only the company name is used for matching."""

    __tablename__ = "employer_profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    company_name = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())


class JobPostingRecord(Base):
    """
    Job posting entity.

    Attributes:
        id: UUID primary key
        employer_id: Owning employer (company name is merged from there)
        title/job_title: Legacy title columns (job_details.title wins)
        role_type, employment_type, working_hours, location: Single values
        salary_min/max: Salary band (nullable)
        skills: Required skills (JSON list or JSON-encoded string)
        optional_skills: Nice-to-have skills
        languages: [{language, speak, read, write}] requirements
        job_details: Nested wizard payload (camelCase keys)
        status: Lifecycle stage (indexed), only "active" postings are matched
    """

    __tablename__ = "job_postings"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    employer_id = Column(String, nullable=True, index=True)
    title = Column(String(500), nullable=True)
    job_title = Column(String(500), nullable=True)
    company_name = Column(String(500), nullable=True)
    role_type = Column(String(200), nullable=True)
    employment_type = Column(String(100), nullable=True)
    working_hours = Column(String(100), nullable=True)
    location = Column(String(500), nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    skills = Column(JSON, nullable=True)
    optional_skills = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    job_details = Column(JSON, nullable=True)
    recruitment_process = Column(JSON, nullable=True)
    status = Column(String(20), nullable=False, default="draft", index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
