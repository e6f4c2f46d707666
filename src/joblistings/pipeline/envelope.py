# src/joblistings/pipeline/envelope.py
"""
First gate: is this payload a Sheets "values" response at all?

The Sheets API answers `spreadsheets.values.get` with
`{"range": "...", "majorDimension": "ROWS", "values": [[...], ...]}`.
We only insist on `values`; `range` and `majorDimension` are checked
when present and everything else is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from joblistings.logging_setup import get_logger
from joblistings.models import RawCell

logger = get_logger(__name__)

RawRow = Annotated[List[RawCell], Field(min_length=1)]


class SheetValuesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    range: Optional[StrictStr] = None
    # column-major responses would put a column where we expect a row
    major_dimension: Literal["ROWS"] = Field(default="ROWS", alias="majorDimension")
    # header row + at least one data row
    values: Annotated[List[RawRow], Field(min_length=2)]


@dataclass(frozen=True)
class SplitTable:
    """A validated table split into its header row and its data rows."""

    fields: Tuple[RawCell, ...]
    rows: Tuple[Tuple[RawCell, ...], ...]


def split_envelope(api_data: object) -> Optional[SplitTable]:
    """
    Validate the outer shape of `api_data` and split off the header row.

    Returns None (never raises) when the payload is not a mapping, has no
    `values`, has fewer than two rows, has an empty row, or holds anything
    other than text/number/boolean in a cell.
    """
    try:
        response = SheetValuesResponse.model_validate(api_data)
    except ValidationError as e:
        logger.debug("envelope_rejected", error_count=e.error_count(), first_error=e.errors()[0]["msg"])
        return None

    header, *rows = response.values
    return SplitTable(fields=tuple(header), rows=tuple(tuple(row) for row in rows))
