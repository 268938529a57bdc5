"""
Record Normalizer - Canonical shapes for loosely-typed stored records

Candidate and job rows come out of storage with their JSON columns in one of
three states: already-parsed native structures, JSON-encoded strings (rows
written by older clients), or missing entirely. Scoring code must never have
to care, so every record goes through ``normalize_record`` with a table of
expected field shapes before it reaches a scorer.

Rules (per field in the shape table):
    - str        → json.loads; decode failure (including NaN/Infinity
                   constants and overly deep nesting) → default
    - native     → deep-copied when it has the expected shape
    - None/absent → default
    - wrong shape (after decoding) → default

Fields not in the table are passed through unchanged. The input mapping is
never mutated.

Usage:
    canonical = normalize_record(row, CANDIDATE_PROFILE_FIELDS)
    profile = parse_candidate_profile(row)
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from talentmatch.schemas.matching import CandidateProfile, JobListing

logger = logging.getLogger(__name__)

UNTITLED_POSITION = "Untitled Position"
UNKNOWN_COMPANY = "Company Not Specified"


class FieldKind(Enum):
    """Container shape expected for a JSON field."""

    STRING_LIST = "string_list"
    OBJECT = "object"
    OBJECT_LIST = "object_list"


@dataclass(frozen=True)
class FieldShape:
    """One entry of a shape table: field name, expected kind and default."""

    name: str
    kind: FieldKind
    default_factory: Optional[Callable[[], Any]] = field(default=None)

    def default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return {} if self.kind is FieldKind.OBJECT else []


def string_list(name: str) -> FieldShape:
    return FieldShape(name, FieldKind.STRING_LIST)


def json_object(name: str, default_factory: Optional[Callable[[], Any]] = None) -> FieldShape:
    return FieldShape(name, FieldKind.OBJECT, default_factory)


def object_list(name: str) -> FieldShape:
    return FieldShape(name, FieldKind.OBJECT_LIST)


CANDIDATE_PROFILE_FIELDS: List[FieldShape] = [
    json_object("address"),
    json_object("right_to_work"),
    string_list("preferred_role_types"),
    string_list("preferred_employment_types"),
    string_list("preferred_location_types"),
    string_list("preferred_working_hours"),
    json_object("salary_expectations"),
    string_list("skills"),
    object_list("languages"),
    object_list("experience"),
    object_list("education"),
    object_list("certifications"),
]

JOB_POSTING_FIELDS: List[FieldShape] = [
    json_object("job_details"),
    json_object("recruitment_process"),
    string_list("skills"),
    string_list("optional_skills"),
    object_list("languages"),
]

# Nested job_details payload written by the posting wizard (camelCase keys)
JOB_DETAILS_FIELDS: List[FieldShape] = [
    json_object("salary"),
    string_list("skills"),
    string_list("optionalSkills"),
    object_list("languages"),
]


def _coerce_shape(value: Any, shape: FieldShape) -> Any:
    """Copy value if it matches the shape, otherwise return the default."""
    if shape.kind is FieldKind.OBJECT:
        if isinstance(value, Mapping):
            return copy.deepcopy(dict(value))
        return shape.default()

    if not isinstance(value, (list, tuple)):
        return shape.default()

    if shape.kind is FieldKind.STRING_LIST:
        return [item for item in value if isinstance(item, str)]
    return [copy.deepcopy(dict(item)) for item in value if isinstance(item, Mapping)]


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON and cannot be rendered back to callers
    raise ValueError(f"Non-finite JSON constant {name}")


def normalize_field(value: Any, shape: FieldShape) -> Any:
    """Normalize a single field value against its expected shape."""
    if value is None:
        return shape.default()

    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value, parse_constant=_reject_constant)
        except (ValueError, TypeError, RecursionError):
            logger.debug(f"Unparseable JSON in field '{shape.name}', using default")
            return shape.default()
        if value is None:
            return shape.default()

    return _coerce_shape(value, shape)


def normalize_record(
    record: Optional[Mapping[str, Any]],
    shapes: Sequence[FieldShape],
) -> Dict[str, Any]:
    """
    Produce a canonical copy of a raw record.

    Args:
        record: Raw key/value mapping (e.g. a database row); None is
            treated as an empty record
        shapes: Field-shape table describing the JSON fields to normalize

    Returns:
        New dict with every shape field populated and all other fields
        passed through unchanged
    """
    canonical: Dict[str, Any] = dict(record or {})
    for shape in shapes:
        canonical[shape.name] = normalize_field(canonical.get(shape.name), shape)
    return canonical


def _first_present(*values: Any) -> Any:
    """Return the first truthy value (mirrors the stored-record fallbacks)."""
    for value in values:
        if value:
            return value
    return None


def canonical_candidate_profile(record: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return normalize_record(record, CANDIDATE_PROFILE_FIELDS)


def canonical_job_posting(
    record: Optional[Mapping[str, Any]],
    company_names: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Flatten a job posting row into canonical listing fields.

    Values in the nested ``job_details`` object win over the flat columns,
    since that is where the current posting wizard stores them. The company
    name is taken from the employer lookup when available.

    Args:
        record: Raw job_postings row
        company_names: Optional employer_id → company_name lookup

    Returns:
        Canonical dict ready for JobListing validation
    """
    job = normalize_record(record, JOB_POSTING_FIELDS)
    details = normalize_record(job["job_details"], JOB_DETAILS_FIELDS)
    salary = details["salary"]
    company_names = company_names or {}

    job.update(
        title=_first_present(details.get("title"), job.get("title"), job.get("job_title"))
        or UNTITLED_POSITION,
        company_name=_first_present(
            company_names.get(job.get("employer_id")) if job.get("employer_id") else None,
            job.get("company_name"),
            job.get("company"),
        )
        or UNKNOWN_COMPANY,
        role_type=_first_present(details.get("roleType"), job.get("role_type")),
        employment_type=_first_present(details.get("employmentType"), job.get("employment_type")),
        location=_first_present(details.get("location"), job.get("location")),
        working_hours=_first_present(details.get("workingHours"), job.get("working_hours")),
        salary_min=_first_present(salary.get("min"), job.get("salary_min")),
        salary_max=_first_present(salary.get("max"), job.get("salary_max")),
        skills=_detail_or_column(job, details, "skills", "skills"),
        optional_skills=_detail_or_column(job, details, "optionalSkills", "optional_skills"),
        languages=_detail_or_column(job, details, "languages", "languages"),
    )
    return job


def _detail_or_column(job: Dict[str, Any], details: Dict[str, Any], key: str, column: str) -> Any:
    # A list stored in job_details wins even when empty
    if job["job_details"].get(key) is not None:
        return details[key]
    return job[column]


def parse_candidate_profile(record: Optional[Mapping[str, Any]]) -> CandidateProfile:
    return CandidateProfile.model_validate(canonical_candidate_profile(record))


def parse_job_listing(
    record: Optional[Mapping[str, Any]],
    company_names: Optional[Mapping[str, str]] = None,
) -> JobListing:
    return JobListing.model_validate(canonical_job_posting(record, company_names))
