# src/joblistings/io/export.py
"""Render parsed listings for display: JSON-ready dicts or a pandas DataFrame."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from joblistings.models import REQUIRED_FIELDS, JobListing


def listings_to_json(listings: Sequence[JobListing]) -> List[dict]:
    # camelCase keys, same names as the sheet headers
    return [listing.model_dump(by_alias=True) for listing in listings]


def listings_to_frame(listings: Sequence[JobListing]) -> pd.DataFrame:
    """
    One row per listing, one column per header.

    Required columns come first in canonical order, then extra columns sorted
    by name. A listing without a value for some extra column gets NaN there.
    """
    extra_columns = sorted({key for listing in listings for key in listing.extra_fields})
    records = []
    for listing in listings:
        row = listing.model_dump(by_alias=True, exclude={"extra_fields"})
        row.update(listing.extra_fields)
        records.append(row)
    return pd.DataFrame.from_records(records, columns=[*REQUIRED_FIELDS, *extra_columns])
