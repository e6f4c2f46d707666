# src/joblistings/io/sheets.py
"""
Fetch raw cell values from Google Sheets.

Two ways in, both returning the Sheets API "values" shape
(`{"range": ..., "majorDimension": "ROWS", "values": [[...], ...]}`):
- `fetch_sheet_values`: plain HTTPS GET with an API key (public/shared sheets).
- `read_values_with_gspread`: service-account access for private sheets.

Nothing here interprets the rows; hand the result to `parse_job_listings`.
Transport problems raise SheetsFetchError so they never look like bad data.
"""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote

import gspread
import httpx
from google.auth.exceptions import GoogleAuthError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from joblistings.config import DEFAULT_RANGE, DEFAULT_TIMEOUT, Settings
from joblistings.errors import SheetsFetchError
from joblistings.logging_setup import get_logger

logger = get_logger(__name__)

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"


def values_url(spreadsheet_id: str, sheet_range: str) -> str:
    return f"{SHEETS_API_URL}/{quote(spreadsheet_id, safe='')}/values/{quote(sheet_range, safe='')}"


def _default_headers() -> Dict[str, str]:
    return {"User-Agent": "joblistings/0.1"}


def _is_transient(exc: BaseException) -> bool:
    # network hiccups and server-side errors; a 4xx will not fix itself
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


@retry(
    wait=wait_exponential(min=1, max=16),
    stop=stop_after_attempt(5),
    retry=retry_if_exception(_is_transient),
    reraise=True,
)
def _get_json(client: httpx.Client, url: str, params: Dict[str, str]) -> object:
    resp = client.get(url, params=params)
    resp.raise_for_status()  # raises httpx.HTTPStatusError for 4xx/5xx
    return resp.json()


def fetch_sheet_values(
    spreadsheet_id: str,
    sheet_range: str = DEFAULT_RANGE,
    *,
    api_key: str = "",
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> object:
    """
    GET the values of `sheet_range` (an A1 range or a tab name) and return the
    decoded JSON untouched.

    Pass `client` to reuse a connection pool (or a mocked transport in tests);
    otherwise a short-lived client is created.
    """
    url = values_url(spreadsheet_id, sheet_range)
    params = {"majorDimension": "ROWS"}
    if api_key:
        params["key"] = api_key

    try:
        if client is None:
            with httpx.Client(timeout=timeout, headers=_default_headers()) as own_client:
                return _get_json(own_client, url, params)
        return _get_json(client, url, params)
    except httpx.HTTPStatusError as e:
        raise SheetsFetchError(
            f"Sheets API returned {e.response.status_code} for range {sheet_range!r}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise SheetsFetchError(f"Could not reach the Sheets API: {e}") from e
    except ValueError as e:
        raise SheetsFetchError(f"Sheets API response for range {sheet_range!r} is not JSON") from e


def read_values_with_gspread(spreadsheet_id: str, worksheet: str, credentials_file: str) -> dict:
    """Read a whole worksheet through a service account, in the same shape as the API."""
    try:
        gc = gspread.service_account(filename=credentials_file)
        sh = gc.open_by_key(spreadsheet_id)
        ws = sh.worksheet(worksheet)  # exact title
        values = ws.get_values()
    except gspread.WorksheetNotFound as e:
        raise SheetsFetchError(f"Worksheet {worksheet!r} not found.") from e
    except gspread.exceptions.APIError as e:
        raise SheetsFetchError(
            f"Sheets API refused the service account: {e}", status_code=e.response.status_code
        ) from e
    # missing/unreadable key file, malformed key JSON, bad credentials, unknown spreadsheet
    except (OSError, ValueError, gspread.exceptions.GSpreadException, GoogleAuthError) as e:
        raise SheetsFetchError(f"Service account read failed: {e}") from e
    return {"range": ws.title, "majorDimension": "ROWS", "values": values}


def load_sheet_values(settings: Settings) -> object:
    """
    Fetch with the API key first; if the sheet turns out to be private (401/403)
    and a service account file is configured, retry through gspread.
    """
    try:
        return fetch_sheet_values(
            settings.spreadsheet_id,
            settings.sheet_range,
            api_key=settings.api_key,
            timeout=settings.timeout,
        )
    except SheetsFetchError as e:
        if e.status_code in (401, 403) and settings.service_account_file:
            logger.info("falling_back_to_service_account", status=e.status_code)
            return read_values_with_gspread(
                settings.spreadsheet_id,
                settings.sheet_range.split("!", 1)[0],  # "Jobs!A1:Z" -> tab "Jobs"
                settings.service_account_file,
            )
        raise
