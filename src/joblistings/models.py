# src/joblistings/models.py
"""
Typed shapes for job listings read out of a spreadsheet.

- `RawCell` is what a single cell can hold once it comes out of the Sheets API.
- `JobListing` is the validated record the rest of the app works with.
- `PartialRecord` is the in-between dict built from one row before validation.

The canonical column list (`REQUIRED_FIELDS`) is read off `JobListing` itself,
so adding a field to the model is the only place a new column gets declared.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Dict, Optional, TypedDict, Union

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

# One spreadsheet cell. bool comes first so True never turns into 1.
RawCell = Union[StrictBool, StrictInt, StrictFloat, StrictStr]

# UTC only, "Z" suffix, any number of fractional digits: 2024-01-01T00:00:00.000Z
ISO_DATETIME_PATTERN = (
    r"^[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])"
    r"T([01][0-9]|2[0-3]):[0-5][0-9]:[0-5][0-9](\.[0-9]+)?Z$"
)

NonEmptyText = Annotated[StrictStr, Field(min_length=1)]


def _real_calendar_date(value: str) -> str:
    # the pattern allows 2024-02-31; strptime does not
    datetime.strptime(value[:19], "%Y-%m-%dT%H:%M:%S")
    return value


DateTimeText = Annotated[StrictStr, Field(pattern=ISO_DATETIME_PATTERN), AfterValidator(_real_calendar_date)]

_URL = TypeAdapter(AnyUrl)


class JobListing(BaseModel):
    """
    A single job application the user is tracking.

    Attribute names are snake_case; the aliases are the column headers used in
    the sheet (and the keys used when dumping with `by_alias=True`).
    Field order here is the canonical column order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    company: NonEmptyText
    job_title: NonEmptyText = Field(alias="jobTitle")
    # free text, may be empty
    location: StrictStr
    app_status: NonEmptyText = Field(alias="appStatus")
    # "" when the user has no link for the posting
    url: StrictStr
    notes: StrictStr
    date_submitted: DateTimeText = Field(alias="dateSubmitted")
    date_last_modified: DateTimeText = Field(alias="dateLastModified")

    # every column that is not one of the fields above, keyed by header text
    extra_fields: Dict[str, RawCell] = Field(alias="extraFields")

    @field_validator("url")
    @classmethod
    def _url_or_empty(cls, value: str) -> str:
        if not value:
            return value
        try:
            _URL.validate_python(value)
        except ValidationError:
            raise ValueError(f"not a valid URL: {value!r}") from None
        # keep exactly what the user typed; AnyUrl would normalise it
        return value


REQUIRED_FIELDS: tuple[str, ...] = tuple(
    info.alias or name
    for name, info in JobListing.model_fields.items()
    if name != "extra_fields"
)
REQUIRED_FIELD_SET = frozenset(REQUIRED_FIELDS)


class PartialRecord(TypedDict, total=False):
    """
    One data row keyed by column header, before validation.

    Required keys are only present when the cell held text; `extraFields`
    is always present (possibly empty).
    """

    company: str
    jobTitle: str
    location: str
    appStatus: str
    url: str
    notes: str
    dateSubmitted: str
    dateLastModified: str
    extraFields: Dict[str, RawCell]


@dataclass(frozen=True)
class RowOutcome:
    """What happened to one data row: either a listing or the reason it was dropped."""

    # 1-based sheet row number; the header is row 1
    row_number: int
    listing: Optional[JobListing] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.listing is not None
