"""
Candidate Profile Model - Candidate preferences, skills and visibility

JSON columns may contain native structures or JSON-encoded strings
(older rows were written as text), so readers must normalize them.

Search visibility:
    Only profiles with discoverable=True and open_for_work=True are
    returned to employer searches.
"""

from sqlalchemy import Boolean, Column, String, Text, JSON, DateTime
from sqlalchemy.sql import func
from talentmatch.database import Base


class CandidateProfileRecord(Base):
    """
    Candidate profile used by both matching flows.

    Attributes:
        preferred_*: Preference lists (role, employment, location type, hours)
        salary_expectations: {type: "exact", exact} or {type: "range", min, max}
        skills: Free-form skill names
        languages: [{language, speak, read, write}] proficiency claims
        address: {street, city, state, postalCode, country}
        experience/education/certifications: History lists (not scored)
    """

    __tablename__ = "candidate_profiles"

    id = Column(String, primary_key=True)
    full_name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    address = Column(JSON, nullable=True)
    date_of_birth = Column(String(20), nullable=True)
    gender = Column(String(50), nullable=True)
    nationality = Column(String(100), nullable=True)
    right_to_work = Column(JSON, nullable=True)
    professional_summary = Column(Text, nullable=True)
    preferred_role_types = Column(JSON, nullable=True)
    preferred_employment_types = Column(JSON, nullable=True)
    preferred_location_types = Column(JSON, nullable=True)
    preferred_working_hours = Column(JSON, nullable=True)
    salary_expectations = Column(JSON, nullable=True)
    skills = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    experience = Column(JSON, nullable=True)
    education = Column(JSON, nullable=True)
    certifications = Column(JSON, nullable=True)
    open_for_work = Column(Boolean, nullable=False, default=False, index=True)
    discoverable = Column(Boolean, nullable=False, default=False, index=True)
    show_email_in_search = Column(Boolean, nullable=False, default=False)
    show_phone_in_search = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
