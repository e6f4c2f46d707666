# src/joblistings/pipeline/filter.py
from typing import Iterable, List

from joblistings.models import JobListing, RowOutcome


def keep_parsed(outcomes: Iterable[RowOutcome]) -> List[JobListing]:
    """
    Keep only rows that produced a listing, in their original order.
    Failed rows are dropped without a trace; that is the whole policy.
    """
    out: List[JobListing] = []
    for o in outcomes:
        if o.listing is None:
            continue
        out.append(o.listing)
    return out


def count_dropped(outcomes: Iterable[RowOutcome]) -> int:
    return sum(1 for o in outcomes if not o.ok)
