"""
Tests for candidate → job match scoring.

Run with: pytest backend/tests/test_job_matcher.py -v
"""
import pytest

from factories import make_candidate, make_listing
from talentmatch.schemas.matching import CandidateProfile, JobListing, SalaryExpectation
from talentmatch.services.job_matcher import (
    WEIGHTS,
    describe_match,
    match_jobs,
    match_salary,
    match_skills,
    score_job_match,
)


class TestWeights:
    """The weight table is a product rule; guard it."""

    def test_weights_sum_to_100(self):
        assert sum(WEIGHTS.values()) == 100

    def test_weight_values(self):
        assert WEIGHTS == {
            "role": 25,
            "employment": 15,
            "location": 15,
            "hours": 10,
            "skills": 20,
            "salary": 10,
            "languages": 5,
        }


class TestPreferenceCriteria:
    """Tests for the binary membership criteria."""

    def test_preferences_and_salary_scenario(self, engineer_candidate):
        """Role + employment + salary match, hours and skills do not."""
        listing = make_listing(
            role_type="Engineer",
            employment_type="Permanent",
            working_hours="Full-time",
            salary_min=40000,
            salary_max=50000,
        )

        match = score_job_match(engineer_candidate, listing)

        assert match.score == 50
        assert match.match_reasons == [
            "Role type matches your preference: Engineer",
            "Employment type matches your preference: Permanent",
            "Salary matches your expectations",
        ]

    def test_location_compares_listing_location_with_location_types(self):
        """Listing location is checked against the location-type preferences."""
        candidate = make_candidate(preferred_location_types=["Remote"])

        remote = score_job_match(candidate, make_listing(location="Remote"))
        london = score_job_match(candidate, make_listing(location="London"))

        assert remote.score == 15
        assert remote.match_reasons == ["Location type matches your preference: Remote"]
        assert london.score == 0

    def test_working_hours_match(self):
        candidate = make_candidate(preferred_working_hours=["Full-time", "Flexible"])
        match = score_job_match(candidate, make_listing(working_hours="Flexible"))

        assert match.score == 10
        assert match.match_reasons == ["Working hours match your preference: Flexible"]

    def test_missing_listing_value_never_matches(self):
        candidate = make_candidate(preferred_role_types=["Engineer"])
        match = score_job_match(candidate, make_listing(role_type=None))

        assert match.score == 0
        assert match.match_reasons == []

    def test_breakdown_reasons(self, engineer_candidate):
        listing = make_listing(role_type="Engineer", working_hours="Full-time")
        breakdown = score_job_match(engineer_candidate, listing).breakdown

        assert breakdown.role.matched is True
        assert breakdown.role.reason == "Preferred role includes Engineer"
        assert breakdown.hours.matched is False
        assert breakdown.hours.reason == "Preferred hours do not include Full-time"
        assert breakdown.location.reason == "Preferred locations do not include London"
        assert breakdown.weights == WEIGHTS


class TestSkillsMatching:
    """Tests for proportional skills scoring."""

    def test_two_of_three_skills(self):
        """2/3 of 20 points, rounded once over the total."""
        candidate = make_candidate(skills=["Python", "SQL"])
        listing = make_listing(role_type=None, skills=["Python", "SQL", "Docker"])

        match = score_job_match(candidate, listing)

        assert match.score == 13
        assert match.match_reasons == ["You have 2 out of 3 required skills"]
        assert match.breakdown.skills.matched == ["Python", "SQL"]
        assert match.breakdown.skills.missing == ["Docker"]

    def test_rounding_happens_on_the_total(self):
        """25 + 13.33 rounds to 38, not 25 + 13."""
        candidate = make_candidate(preferred_role_types=["Engineer"], skills=["Python", "SQL"])
        listing = make_listing(skills=["Python", "SQL", "Docker"])

        assert score_job_match(candidate, listing).score == 38

    def test_optional_skills_count_towards_total(self):
        candidate = make_candidate(skills=["Python"])
        listing = make_listing(role_type=None, skills=["Python"], optional_skills=["Docker"])

        match = score_job_match(candidate, listing)

        assert match.score == 10
        assert match.breakdown.skills.total_count == 2

    def test_skill_listed_twice_counts_once(self):
        candidate = make_candidate(skills=["Python"])
        listing = make_listing(role_type=None, skills=["Python"], optional_skills=["Python"])

        assert score_job_match(candidate, listing).score == 20

    def test_skills_are_case_sensitive(self):
        candidate = make_candidate(skills=["python"])
        listing = make_listing(role_type=None, skills=["Python"])

        match = score_job_match(candidate, listing)

        assert match.score == 0
        assert match.match_reasons == []

    def test_listing_without_skills_contributes_nothing(self):
        """No skills on the listing is not a free 20 points."""
        candidate = make_candidate(skills=["Python"])
        match = score_job_match(candidate, make_listing(role_type=None))

        assert match.score == 0
        assert match.breakdown.skills.total_count == 0

    def test_match_skills_preserves_listing_order(self):
        matched, missing = match_skills(["Go", "SQL", "Python"], ["Python", "Go"])
        assert matched == ["Go", "Python"]
        assert missing == ["SQL"]

    def test_adding_a_matching_skill_never_lowers_score(self):
        listing = make_listing(skills=["Python", "SQL", "Docker"], optional_skills=["AWS"])
        before = score_job_match(make_candidate(skills=["Python"]), listing).score
        after = score_job_match(make_candidate(skills=["Python", "Docker"]), listing).score

        assert after >= before


class TestSalaryMatching:
    """Tests for salary matching logic."""

    def test_exact_within_ten_percent(self):
        matched, reason = match_salary(45000, SalaryExpectation(type="exact", exact=47000))
        assert matched is True
        assert reason == "Salary matches your expectations"

    def test_exact_at_ten_percent_boundary(self):
        matched, _ = match_salary(55000, SalaryExpectation(type="exact", exact=50000))
        assert matched is True

    def test_exact_outside_ten_percent(self):
        matched, reason = match_salary(56000, SalaryExpectation(type="exact", exact=50000))
        assert matched is False
        assert reason is None

    def test_range_contains_midpoint(self):
        matched, reason = match_salary(50000, SalaryExpectation(type="range", min=40000, max=50000))
        assert matched is True
        assert reason == "Salary is within your expected range"

    def test_range_excludes_midpoint(self):
        matched, _ = match_salary(52000, SalaryExpectation(type="range", min=40000, max=50000))
        assert matched is False

    def test_no_expectation(self):
        assert match_salary(45000, None) == (False, None)

    def test_no_job_salary(self):
        assert match_salary(None, SalaryExpectation(type="exact", exact=45000)) == (False, None)

    def test_zero_exact_expectation_never_matches(self):
        assert match_salary(0, SalaryExpectation(type="exact", exact=0)) == (False, None)

    def test_incomplete_range_never_matches(self):
        assert match_salary(45000, SalaryExpectation(type="range", min=40000)) == (False, None)

    def test_low_listing_salary_scores_zero(self):
        """Listing 30-35k against an exact 50k expectation."""
        candidate = make_candidate(salary_expectations={"type": "exact", "exact": 50000})
        listing = make_listing(role_type=None, salary_min=30000, salary_max=35000)

        match = score_job_match(candidate, listing)

        assert match.score == 0
        assert match.match_reasons == []
        assert match.breakdown.salary.job_average == 32500
        assert match.breakdown.salary.reason == "Salary not aligned or expectations not set"

    def test_missing_listing_salary_reports_no_average(self, engineer_candidate):
        breakdown = score_job_match(engineer_candidate, make_listing()).breakdown
        assert breakdown.salary.job_average is None
        assert breakdown.salary.matched is False


class TestLanguageMatching:
    """Tests for language requirement scoring."""

    def test_partial_ability_overlap(self):
        candidate = make_candidate(
            languages=[{"language": "French", "speak": True, "read": True, "write": False}]
        )
        listing = make_listing(
            role_type=None,
            languages=[{"language": "French", "speak": True, "read": False, "write": True}],
        )

        match = score_job_match(candidate, listing)

        # 1 ability * 1.5 = 1.5, rounded half up
        assert match.score == 2
        assert match.match_reasons == ["Language requirements match your skills"]
        pair = match.breakdown.languages.pairs[0]
        assert pair.required == ["speak", "write"]
        assert pair.provided == ["speak", "read"]

    def test_half_points_round_up(self):
        """3 abilities = 4.5 points, which rounds to 5."""
        abilities = {"speak": True, "read": True, "write": True}
        candidate = make_candidate(languages=[{"language": "English", **abilities}])
        listing = make_listing(role_type=None, languages=[{"language": "English", **abilities}])

        assert score_job_match(candidate, listing).score == 5

    def test_language_points_are_capped(self):
        abilities = {"speak": True, "read": True, "write": True}
        languages = [{"language": "English", **abilities}, {"language": "German", **abilities}]
        candidate = make_candidate(languages=languages)
        listing = make_listing(role_type=None, languages=languages)

        match = score_job_match(candidate, listing)

        assert match.score == 5
        assert match.breakdown.languages.matched_pairs == 6

    def test_unknown_language_matches_nothing(self):
        candidate = make_candidate(languages=[{"language": "Spanish", "speak": True}])
        listing = make_listing(role_type=None, languages=[{"language": "French", "speak": True}])

        match = score_job_match(candidate, listing)

        assert match.score == 0
        assert match.breakdown.languages.pairs[0].provided == []


class TestScoreProperties:
    """Bounds, determinism and defaulting."""

    @pytest.fixture
    def perfect_pair(self):
        abilities = {"speak": True, "read": True, "write": True}
        languages = [{"language": "English", **abilities}, {"language": "French", **abilities}]
        candidate = make_candidate(
            preferred_role_types=["Engineer"],
            preferred_employment_types=["Permanent"],
            preferred_location_types=["London"],
            preferred_working_hours=["Full-time"],
            salary_expectations={"type": "range", "min": 40000, "max": 60000},
            skills=["Python", "SQL"],
            languages=languages,
        )
        listing = make_listing(
            skills=["Python"],
            optional_skills=["SQL"],
            salary_min=45000,
            salary_max=55000,
            languages=languages,
        )
        return candidate, listing

    def test_perfect_match_scores_100(self, perfect_pair):
        candidate, listing = perfect_pair
        match = score_job_match(candidate, listing)

        assert match.score == 100
        assert len(match.match_reasons) == 7

    def test_scoring_is_deterministic(self, perfect_pair):
        candidate, listing = perfect_pair
        assert score_job_match(candidate, listing) == score_job_match(candidate, listing)

    def test_empty_records_score_zero(self):
        """Records missing every optional field score without raising."""
        match = score_job_match(CandidateProfile(), JobListing())

        assert match.score == 0
        assert match.match_reasons == []
        assert isinstance(match.score, int)

    def test_describe_match_mentions_title_and_score(self, engineer_candidate):
        match = score_job_match(engineer_candidate, make_listing(title="Data Engineer"))
        text = describe_match(match)

        assert "Data Engineer" in text
        assert f"({match.score}%)" in text


class TestMatchJobs:
    """Tests for batch scoring + threshold."""

    def test_only_matches_at_threshold_are_returned(self, engineer_candidate):
        strong = make_listing(
            id="strong",
            location="Remote",
            working_hours="Part-time",
            skills=["Python", "SQL"],
            salary_min=40000,
            salary_max=50000,
        )
        weak = make_listing(id="weak", salary_min=40000, salary_max=50000)

        matches = match_jobs(engineer_candidate, [weak, strong], min_score=90)

        assert [m.job.id for m in matches] == ["strong"]
        assert matches[0].score == 95

    def test_lower_threshold_sorts_descending(self, engineer_candidate):
        listings = [
            make_listing(id="a", role_type=None),
            make_listing(id="b", salary_min=40000, salary_max=50000),
            make_listing(id="c"),
        ]

        matches = match_jobs(engineer_candidate, listings, min_score=1)

        assert [m.job.id for m in matches] == ["b", "c", "a"]
        assert [m.score for m in matches] == [50, 40, 15]

    def test_zero_scores_are_dropped_at_threshold_one(self):
        candidate = make_candidate()
        assert match_jobs(candidate, [make_listing()], min_score=1) == []

    def test_debug_logs_every_breakdown(self, engineer_candidate, caplog):
        listings = [make_listing(id="a"), make_listing(id="b")]

        with caplog.at_level("INFO", logger="talentmatch.services.job_matcher"):
            match_jobs(engineer_candidate, listings, debug=True)

        breakdowns = [r for r in caplog.records if "Match breakdown" in r.getMessage()]
        assert len(breakdowns) == 2
