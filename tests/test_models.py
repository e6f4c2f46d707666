"""Tests for the JobListing model and the canonical field list."""

import pytest
from pydantic import ValidationError

from joblistings.models import REQUIRED_FIELDS, JobListing, PartialRecord, RowOutcome


def _listing(**overrides):
    data = {
        "company": "Acme",
        "jobTitle": "Engineer",
        "location": "",
        "appStatus": "Applied",
        "url": "",
        "notes": "",
        "dateSubmitted": "2024-01-01T00:00:00Z",
        "dateLastModified": "2024-01-01T00:00:00Z",
        "extraFields": {},
    }
    data.update(overrides)
    return JobListing.model_validate(data)


class TestRequiredFields:
    """The column list is read off the model."""

    def test_canonical_order(self) -> None:
        assert REQUIRED_FIELDS == (
            "company",
            "jobTitle",
            "location",
            "appStatus",
            "url",
            "notes",
            "dateSubmitted",
            "dateLastModified",
        )

    def test_partial_record_keys_match(self) -> None:
        """PartialRecord must declare exactly the model's columns plus extraFields."""
        assert set(PartialRecord.__annotations__) == {*REQUIRED_FIELDS, "extraFields"}


class TestJobListing:
    """Per-field rules."""

    def test_valid(self) -> None:
        listing = _listing()
        assert listing.company == "Acme"
        assert listing.job_title == "Engineer"

    def test_snake_case_names_accepted(self) -> None:
        listing = JobListing(
            company="Acme",
            job_title="Engineer",
            location="",
            app_status="Applied",
            url="",
            notes="",
            date_submitted="2024-01-01T00:00:00Z",
            date_last_modified="2024-01-01T00:00:00Z",
            extra_fields={},
        )
        assert listing == _listing()

    @pytest.mark.parametrize("field", ["company", "jobTitle", "appStatus"])
    def test_empty_required_text_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            _listing(**{field: ""})

    @pytest.mark.parametrize("field", ["location", "notes", "url"])
    def test_empty_optional_text_allowed(self, field: str) -> None:
        assert _listing(**{field: ""})

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-01T00:00:00Z",
            "2024-01-01T00:00:00.000Z",
            "2024-12-31T23:59:59.123456789Z",
        ],
    )
    def test_datetime_accepted(self, value: str) -> None:
        assert _listing(dateSubmitted=value).date_submitted == value

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-01",
            "2024-01-01T00:00:00",
            "2024-01-01T00:00:00+00:00",
            "2024-13-01T00:00:00Z",
            "2024-01-01T24:00:00Z",
            "01/02/2024",
            "2024-02-31T00:00:00Z",
            "2023-02-29T12:00:00.000Z",
            "",
        ],
    )
    def test_datetime_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            _listing(dateLastModified=value)

    def test_leap_day_accepted(self) -> None:
        assert _listing(dateSubmitted="2024-02-29T12:00:00Z").date_submitted == "2024-02-29T12:00:00Z"

    def test_url_kept_verbatim(self) -> None:
        """AnyUrl would append a slash; the listing keeps what the user typed."""
        assert _listing(url="https://acme.example").url == "https://acme.example"

    def test_bad_url_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _listing(url="not-a-url")

    def test_number_not_coerced_to_text(self) -> None:
        with pytest.raises(ValidationError):
            _listing(company=42)

    def test_extra_fields_keep_scalar_types(self) -> None:
        listing = _listing(extraFields={"salary": 120000, "remote": True, "score": 7.5, "src": "x"})
        assert listing.extra_fields["remote"] is True
        assert listing.extra_fields["salary"] == 120000
        assert isinstance(listing.extra_fields["salary"], int)

    def test_extra_fields_reject_nested(self) -> None:
        with pytest.raises(ValidationError):
            _listing(extraFields={"tags": ["a", "b"]})

    def test_frozen(self) -> None:
        listing = _listing()
        with pytest.raises(ValidationError):
            listing.company = "Other"

    def test_dump_uses_column_names(self) -> None:
        dumped = _listing().model_dump(by_alias=True)
        assert list(dumped) == [*REQUIRED_FIELDS, "extraFields"]


class TestRowOutcome:
    def test_ok(self) -> None:
        assert RowOutcome(row_number=2, listing=_listing()).ok
        assert not RowOutcome(row_number=3, error="company: too short").ok
