"""Pytest configuration and shared fixtures."""

from typing import Any, Callable, List

import pytest

HEADER = [
    "company",
    "jobTitle",
    "location",
    "appStatus",
    "url",
    "notes",
    "dateSubmitted",
    "dateLastModified",
    "source",
]

ACME_ROW = [
    "Acme",
    "Engineer",
    "Remote",
    "Applied",
    "https://acme.example/job",
    "",
    "2024-01-01T00:00:00.000Z",
    "2024-01-02T00:00:00.000Z",
    "LinkedIn",
]

GLOBEX_ROW = [
    "Globex",
    "Data Analyst",
    "Springfield",
    "Interviewing",
    "",
    "Second round on Friday",
    "2024-02-10T09:30:00Z",
    "2024-02-12T17:45:10.5Z",
    "Referral",
]


def payload(*rows: List[Any], **extra: Any) -> dict:
    """Wrap rows the way the Sheets values endpoint does."""
    return {"range": "Jobs!A1:I100", "majorDimension": "ROWS", "values": [list(r) for r in rows], **extra}


@pytest.fixture
def header() -> List[str]:
    return list(HEADER)


@pytest.fixture
def acme_row() -> List[Any]:
    return list(ACME_ROW)


@pytest.fixture
def globex_row() -> List[Any]:
    return list(GLOBEX_ROW)


@pytest.fixture
def make_payload() -> Callable[..., dict]:
    return payload


ENV_VARS = (
    "SHEETS_SPREADSHEET_ID",
    "SHEETS_RANGE",
    "SHEETS_API_KEY",
    "SHEETS_SERVICE_ACCOUNT_FILE",
    "SHEETS_TIMEOUT",
    "JOBLISTINGS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env / shell settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
