# src/joblistings/pipeline/parse.py
"""
Entry point: raw Sheets API payload in, list of JobListing out.

    envelope -> header row -> per-row record -> per-row validation -> filter

A broken envelope or header row yields an empty list. A broken data row only
loses that row. Nothing in here raises for bad input.
"""

from __future__ import annotations

from typing import List

from joblistings.logging_setup import get_logger
from joblistings.models import JobListing, RowOutcome
from joblistings.pipeline.envelope import split_envelope
from joblistings.pipeline.filter import count_dropped, keep_parsed
from joblistings.pipeline.headers import resolve_headers
from joblistings.pipeline.normalize import build_record, validate_record

logger = get_logger(__name__)

# sheet row numbers are 1-based and row 1 is the header
FIRST_DATA_ROW = 2


def parse_job_listing_rows(api_data: object) -> List[RowOutcome]:
    """
    Per-row outcomes for every data row, or [] if the table itself is unusable.
    Useful for showing the user which rows were skipped and why.
    """
    table = split_envelope(api_data)
    if table is None:
        return []

    header_map = resolve_headers(table.fields)
    if header_map is None:
        return []

    outcomes = [
        validate_record(build_record(row, header_map), row_number)
        for row_number, row in enumerate(table.rows, start=FIRST_DATA_ROW)
    ]
    for o in outcomes:
        if not o.ok:
            logger.debug("row_dropped", row=o.row_number, reason=o.error)
    logger.debug("rows_parsed", total=len(outcomes), dropped=count_dropped(outcomes))
    return outcomes


def parse_job_listings(api_data: object) -> List[JobListing]:
    """
    Takes any kind of Sheets API data and parses out as many job listings as it can.

    Always returns a list, even if nothing could be parsed.
    """
    return keep_parsed(parse_job_listing_rows(api_data))
