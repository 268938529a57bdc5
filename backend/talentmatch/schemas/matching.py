"""
Matching schemas - value types shared by the scorers, ranker and API.

Records coming from storage are loosely typed, so every field validator here
is lenient: anything that is not of the expected shape degrades to the
field's default instead of raising. Candidate and listing records keep
unknown keys (``extra="allow"``) so the full stored record can be echoed
back to callers alongside its score.

Wire format:
    - CandidateProfile / JobListing use the stored snake_case column names
    - Request/response envelopes, filters and breakdowns use camelCase
"""

import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Number = Union[int, float]

ABILITIES = ("speak", "read", "write")


def coerce_text(value: Any) -> Optional[str]:
    """Return value as a string, or None for null and container values."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def coerce_number(value: Any) -> Optional[Number]:
    """Return value as a finite int/float, or None when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def coerce_string_list(value: Any) -> List[str]:
    """Keep only the string items of a list; anything else becomes []."""
    if not isinstance(value, (list, tuple, set)):
        return []
    return [item for item in value if isinstance(item, str)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Record types ====================


class LanguageSkill(BaseModel):
    """A language proficiency claim (candidate) or requirement (listing)."""

    model_config = ConfigDict(extra="allow")

    language: str = ""
    speak: bool = False
    read: bool = False
    write: bool = False

    @field_validator("language", mode="before")
    @classmethod
    def _language(cls, value: Any) -> str:
        return coerce_text(value) or ""

    @field_validator("speak", "read", "write", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return bool(value)

    def abilities(self) -> List[str]:
        return [name for name in ABILITIES if getattr(self, name)]


class SalaryExpectation(BaseModel):
    """
    Candidate salary expectation, a tagged union on ``type``:

        {"type": "exact", "exact": 45000}
        {"type": "range", "min": 40000, "max": 50000}
    """

    model_config = ConfigDict(extra="allow")

    type: str = ""
    exact: Optional[Number] = None
    min: Optional[Number] = None
    max: Optional[Number] = None

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> str:
        return coerce_text(value) or ""

    @field_validator("exact", "min", "max", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Optional[Number]:
        return coerce_number(value)


class Address(CamelModel):
    model_config = ConfigDict(extra="allow")

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    @field_validator("street", "city", "state", "postal_code", "country", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value) or ""

    def location_text(self) -> str:
        return f"{self.city} {self.state} {self.country}"


class CandidateProfile(BaseModel):
    """Candidate profile as seen by the scorers."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    preferred_role_types: List[str] = Field(default_factory=list)
    preferred_employment_types: List[str] = Field(default_factory=list)
    preferred_location_types: List[str] = Field(default_factory=list)
    preferred_working_hours: List[str] = Field(default_factory=list)
    salary_expectations: Optional[SalaryExpectation] = None
    skills: List[str] = Field(default_factory=list)
    languages: List[LanguageSkill] = Field(default_factory=list)
    professional_summary: Optional[str] = None
    address: Address = Field(default_factory=Address)

    @field_validator("id", "professional_summary", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return coerce_text(value)

    @field_validator(
        "preferred_role_types",
        "preferred_employment_types",
        "preferred_location_types",
        "preferred_working_hours",
        "skills",
        mode="before",
    )
    @classmethod
    def _string_list(cls, value: Any) -> List[str]:
        return coerce_string_list(value)

    @field_validator("salary_expectations", mode="before")
    @classmethod
    def _salary(cls, value: Any) -> Any:
        if isinstance(value, SalaryExpectation):
            return value
        # {} is kept: candidate search reads it as a 0-0 range
        return value if isinstance(value, dict) else None

    @field_validator("languages", mode="before")
    @classmethod
    def _languages(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, LanguageSkill))]

    @field_validator("address", mode="before")
    @classmethod
    def _address(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, Address)) else {}

    def find_language(self, language: str) -> Optional[LanguageSkill]:
        for entry in self.languages:
            if entry.language == language:
                return entry
        return None


class JobListing(BaseModel):
    """Job listing as seen by the scorers (salary is always a band)."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    company_name: Optional[str] = None
    role_type: Optional[str] = None
    employment_type: Optional[str] = None
    working_hours: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[Number] = None
    salary_max: Optional[Number] = None
    skills: List[str] = Field(default_factory=list)
    optional_skills: List[str] = Field(default_factory=list)
    languages: List[LanguageSkill] = Field(default_factory=list)

    @field_validator(
        "id",
        "title",
        "company_name",
        "role_type",
        "employment_type",
        "working_hours",
        "location",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return coerce_text(value)

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> Optional[Number]:
        return coerce_number(value)

    @field_validator("skills", "optional_skills", mode="before")
    @classmethod
    def _string_list(cls, value: Any) -> List[str]:
        return coerce_string_list(value)

    @field_validator("languages", mode="before")
    @classmethod
    def _languages(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, LanguageSkill))]

    @property
    def salary_midpoint(self) -> Optional[float]:
        if self.salary_min is None or self.salary_max is None:
            return None
        return (self.salary_min + self.salary_max) / 2

    def all_skills(self) -> List[str]:
        """Required then optional skills, duplicates removed."""
        return list(dict.fromkeys(self.skills + self.optional_skills))


class SearchFilters(CamelModel):
    """Employer candidate-search query."""

    role_types: List[str] = Field(default_factory=list)
    employment_types: List[str] = Field(default_factory=list)
    working_hours: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    location: str = ""
    salary_min: Number = 0
    salary_max: Number = 0
    # Accepted for compatibility with existing clients, not used in scoring
    keywords: str = ""

    @field_validator("role_types", "employment_types", "working_hours", "skills", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("location", "keywords", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def _null_amount(cls, value: Any) -> Any:
        return 0 if value is None else value


# ==================== Candidate -> job results ====================


class CriterionResult(CamelModel):
    matched: bool = False
    reason: str = ""


class JobSkillsBreakdown(CamelModel):
    matched_count: int = 0
    total_count: int = 0
    matched: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


class SalaryBreakdown(CamelModel):
    matched: bool = False
    job_average: Optional[float] = None
    candidate: Optional[SalaryExpectation] = None
    reason: str = ""


class LanguagePair(CamelModel):
    language: str
    required: List[str] = Field(default_factory=list)
    provided: List[str] = Field(default_factory=list)


class LanguagesBreakdown(CamelModel):
    matched_pairs: int = 0
    pairs: List[LanguagePair] = Field(default_factory=list)


class JobMatchBreakdown(CamelModel):
    weights: Dict[str, int]
    role: CriterionResult
    employment: CriterionResult
    location: CriterionResult
    hours: CriterionResult
    skills: JobSkillsBreakdown
    salary: SalaryBreakdown
    languages: LanguagesBreakdown


class JobMatch(CamelModel):
    """One scored listing for a candidate."""

    job: JobListing
    score: int
    match_reasons: List[str] = Field(default_factory=list)
    breakdown: JobMatchBreakdown


# ==================== Job -> candidate results ====================


class CandidateSkillsBreakdown(CamelModel):
    matched: int = 0
    total: int = 0
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)


class CandidateSearchBreakdown(CamelModel):
    role: CriterionResult = Field(default_factory=CriterionResult)
    skills: CandidateSkillsBreakdown = Field(default_factory=CandidateSkillsBreakdown)
    location: CriterionResult = Field(default_factory=CriterionResult)
    employment: CriterionResult = Field(default_factory=CriterionResult)
    hours: CriterionResult = Field(default_factory=CriterionResult)
    salary: CriterionResult = Field(default_factory=CriterionResult)


class CandidateSearchResult(CamelModel):
    """One scored candidate for an employer search."""

    candidate: CandidateProfile
    match_score: int
    match_reasons: List[str] = Field(default_factory=list)
    breakdown: CandidateSearchBreakdown


# ==================== Request / response envelopes ====================


class MatchJobsRequest(CamelModel):
    candidate_id: Optional[str] = None


class MatchJobsResponse(CamelModel):
    matches: List[JobMatch]
    total_jobs: int
    matched_jobs: int


class SearchCandidatesRequest(CamelModel):
    filters: Optional[SearchFilters] = None


class SearchCandidatesResponse(CamelModel):
    results: List[CandidateSearchResult]
