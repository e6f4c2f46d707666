# src/joblistings/pipeline/headers.py
"""
Turn the header row into a column-index -> field-name lookup.

The header row is load-bearing for every data row, so any problem here
(non-text header, duplicate name, missing required column) rejects the
whole table. Names are matched exactly: "Company" is not "company".
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process, utils

from joblistings.logging_setup import get_logger
from joblistings.models import REQUIRED_FIELDS, RawCell

logger = get_logger(__name__)

HeaderMap = Mapping[int, str]


def resolve_headers(fields: Sequence[RawCell]) -> Optional[HeaderMap]:
    """
    Validate the header row and map each column index to its header text.

    Headers that are not required fields are kept as-is; they become
    `extraFields` keys later. Returns None when the table cannot be read.
    """
    if not all(isinstance(f, str) for f in fields):
        logger.debug("headers_rejected", reason="non-text header cell")
        return None
    if len(fields) < len(REQUIRED_FIELDS):
        logger.debug("headers_rejected", reason="too few columns", columns=len(fields))
        return None
    if len(set(fields)) != len(fields):
        logger.debug("headers_rejected", reason="duplicate column names")
        return None
    missing = [name for name in REQUIRED_FIELDS if name not in fields]
    if missing:
        logger.debug("headers_rejected", reason="missing required columns", missing=missing)
        return None

    return dict(enumerate(fields))


@dataclass(frozen=True)
class HeaderReport:
    """Human-oriented summary of what is wrong (or fine) with a header row."""

    missing: Tuple[str, ...] = ()
    duplicates: Tuple[str, ...] = ()
    extras: Tuple[str, ...] = ()
    # column indices (0-based) whose header cell is not text
    non_text: Tuple[int, ...] = ()
    # missing required name -> closest header actually present
    suggestions: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not (self.missing or self.duplicates or self.non_text)


def _closest_header(name: str, candidates: list[str], score_cutoff: int) -> Optional[str]:
    if not candidates:
        return None
    best = process.extractOne(
        name,
        candidates,
        scorer=fuzz.WRatio,
        processor=utils.default_process,  # case/punctuation-insensitive
        score_cutoff=score_cutoff,
    )
    if not best:
        return None
    matched, _score, _idx = best
    return matched


def describe_headers(fields: Sequence[RawCell], score_cutoff: int = 80) -> HeaderReport:
    """
    Explain a header row: which required columns are missing, which names
    repeat, which columns are extras, and for each missing column the
    existing header it was probably meant to be ("Job Title" for "jobTitle").

    Diagnostic only; `resolve_headers` alone decides whether a table parses.
    """
    non_text = tuple(i for i, f in enumerate(fields) if not isinstance(f, str))
    names = [f for f in fields if isinstance(f, str)]

    counts = Counter(names)
    duplicates = tuple(sorted(name for name, n in counts.items() if n > 1))
    missing = tuple(name for name in REQUIRED_FIELDS if name not in counts)
    extras = tuple(name for name in counts if name not in REQUIRED_FIELDS)

    suggestions: Dict[str, str] = {}
    for name in missing:
        match = _closest_header(name, list(extras), score_cutoff)
        if match is not None:
            suggestions[name] = match

    return HeaderReport(
        missing=missing,
        duplicates=duplicates,
        extras=extras,
        non_text=non_text,
        suggestions=suggestions,
    )
