# src/joblistings/pipeline/normalize.py
"""
Turn one spreadsheet row into a validated JobListing.

Two steps, kept separate so each can be tested on its own:
- `build_record` sorts cells into required fields vs. extra fields by header.
- `validate_record` runs the full JobListing schema and reports the outcome.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import ValidationError

from joblistings.models import REQUIRED_FIELD_SET, JobListing, PartialRecord, RawCell, RowOutcome
from joblistings.pipeline.headers import HeaderMap


def build_record(row: Sequence[RawCell], header_map: HeaderMap) -> PartialRecord:
    """
    Map each cell of `row` to its column name.

    - Required column + text cell -> set on the record.
    - Required column + number/boolean cell -> left unset (validation drops the row).
    - Any other column -> `extraFields[header]`, whatever the cell type.

    A row shorter than the header just leaves the trailing columns unset.
    Cells beyond the last header have no name and are filed under "".
    """
    record: PartialRecord = {"extraFields": {}}
    for index, cell in enumerate(row):
        key = header_map.get(index, "")

        if key in REQUIRED_FIELD_SET:
            if not isinstance(cell, str):
                continue
            record[key] = cell  # type: ignore[literal-required]
        else:
            record["extraFields"][key] = cell
    return record


def _summarize(err: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or '<record>'}: {e['msg']}"
        for e in err.errors()
    )


def validate_record(record: PartialRecord, row_number: int) -> RowOutcome:
    """Validate a built record; never raises, the failure is carried in the outcome."""
    try:
        listing = JobListing.model_validate(record)
    except ValidationError as e:
        return RowOutcome(row_number=row_number, error=_summarize(e))
    return RowOutcome(row_number=row_number, listing=listing)
