from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Protocol

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build


logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class SheetFetchError(RuntimeError):
    pass


class RowFetcher(Protocol):
    def fetch_rows(self, sheet_id: str, range_spec: str) -> List[List[str]]:
        """Ordered rows of ``range_spec``; row 0 is the header row."""
        ...


class GoogleSheetsClient:
    """Read-only Sheets v4 client authenticated with a service-account file.

    The API service is built on first use, once per thread, since the
    underlying HTTP transport is not thread-safe. Pass ``service`` to use a
    prebuilt one instead.
    """

    def __init__(self, credentials_path: str, *, service: Optional[Any] = None):
        self.credentials_path = credentials_path
        self._service = service
        self._local = threading.local()

    def _sheets(self) -> Any:
        if self._service is not None:
            return self._service
        service = getattr(self._local, "service", None)
        if service is None:
            creds = Credentials.from_service_account_file(self.credentials_path, scopes=SCOPES)
            service = build("sheets", "v4", credentials=creds, cache_discovery=False)
            self._local.service = service
        return service

    def fetch_rows(self, sheet_id: str, range_spec: str) -> List[List[str]]:
        try:
            response = (
                self._sheets()
                .spreadsheets()
                .values()
                .get(spreadsheetId=sheet_id, range=range_spec)
                .execute()
            )
        except Exception as exc:
            logger.error("Error fetching sheet data from %s (%s): %s", sheet_id, range_spec, exc)
            raise SheetFetchError(f"Failed to fetch data from Google Sheets: {exc}") from exc
        rows = response.get("values") or []
        logger.info("Fetched %d rows from %s (%s)", len(rows), sheet_id, range_spec)
        return rows
