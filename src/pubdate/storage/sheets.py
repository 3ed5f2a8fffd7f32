"""Google Sheets workbook over the Sheets v4 API with a service account."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from pubdate.core.exceptions import ConfigurationError, StorageError
from pubdate.core.models import ResolutionRecord
from pubdate.storage.base import INDEX_HEADERS, IndexRow, SheetRow

if TYPE_CHECKING:
    from pubdate.config import PubdateSettings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_credentials(settings: "PubdateSettings") -> service_account.Credentials:
    """Service account credentials from a JSON file or from email + private key."""
    if settings.google_service_account_file:
        return service_account.Credentials.from_service_account_file(
            settings.google_service_account_file, scopes=SCOPES
        )

    if settings.google_service_account_email and settings.private_key:
        info = {
            "type": "service_account",
            "client_email": settings.google_service_account_email,
            "private_key": settings.private_key,
            "token_uri": TOKEN_URI,
        }
        try:
            return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
        except ValueError as e:
            raise ConfigurationError(f"Invalid service account key: {e}") from e

    raise ConfigurationError(
        "Google service account credentials are not configured",
        {"settings": ["google_service_account_file", "google_service_account_email", "google_private_key"]},
    )


def quote_sheet(title: str) -> str:
    """A1-notation sheet reference."""
    return "'" + title.replace("'", "''") + "'"


def _cell(row: list[Any], index: int | None) -> str | None:
    if index is None or index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class _SheetsBackend:
    """Runs blocking Sheets API requests off the event loop."""

    def __init__(self, service: Any, spreadsheet_id: str) -> None:
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    async def execute(self, request: Any, action: str) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(request.execute) or {}
        except HttpError as e:
            raise StorageError(
                f"Google Sheets {action} failed: {e}",
                {"spreadsheet_id": self.spreadsheet_id, "status": getattr(e.resp, "status", None)},
            ) from e
        except GoogleAuthError as e:
            raise ConfigurationError(f"Google authentication failed: {e}") from e

    async def get_values(self, range_: str) -> list[list[Any]]:
        request = self.service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=range_,
        )
        data = await self.execute(request, f"read of {range_}")
        return data.get("values", [])

    async def update_values(self, range_: str, values: list[list[Any]]) -> None:
        request = self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=range_,
            valueInputOption="RAW",
            body={"values": values},
        )
        await self.execute(request, f"write of {range_}")

    async def append_values(self, range_: str, values: list[list[Any]]) -> None:
        request = self.service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=range_,
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": values},
        )
        await self.execute(request, f"append to {range_}")


class GoogleSheetsWorkSheet:
    """Work sheet: column A holds the ISBN, column B the publication date."""

    def __init__(self, backend: _SheetsBackend, title: str) -> None:
        self._backend = backend
        self.title = title

    async def list_rows(self) -> list[SheetRow]:
        values = await self._backend.get_values(f"{quote_sheet(self.title)}!A:B")
        # First row is the header
        return [
            SheetRow(
                row_position=i + 2,
                identifier_cell=_cell(row, 0),
                value_cell=_cell(row, 1),
            )
            for i, row in enumerate(values[1:])
        ]

    async def set_value(self, row_position: int, value: str) -> None:
        await self._backend.update_values(
            f"{quote_sheet(self.title)}!B{row_position}", [[value]]
        )


class GoogleSheetsIndexStore:
    """
    Index sheet with the columns of INDEX_HEADERS, located by header name.

    Reads and appends both go through the same column map, taken from the
    first row (matched case-insensitively). A sheet whose first row names
    neither ISBN nor Fecha is treated as headerless, in the standard layout.
    """

    def __init__(
        self,
        backend: _SheetsBackend,
        title: str,
        header: list[str] | None = None,
    ) -> None:
        self._backend = backend
        self.title = title
        self._columns: list[int | None] | None = None
        self._has_header = False
        if header is not None:
            self._use_header(header)

    def _use_header(self, first_row: list[Any]) -> None:
        header = [str(h).strip().casefold() for h in first_row]
        columns = [
            header.index(name.casefold()) if name.casefold() in header else None
            for name in INDEX_HEADERS
        ]
        self._has_header = columns[0] is not None or columns[1] is not None
        self._columns = columns if self._has_header else list(range(len(INDEX_HEADERS)))

    async def _column_map(self) -> list[int | None]:
        if self._columns is None:
            values = await self._backend.get_values(f"{quote_sheet(self.title)}!1:1")
            self._use_header(values[0] if values else [])
        return self._columns or list(range(len(INDEX_HEADERS)))

    async def append_record(self, record: ResolutionRecord) -> None:
        columns = await self._column_map()
        width = max(c for c in columns if c is not None) + 1
        row = [""] * width
        for column, value in zip(columns, record.to_row()):
            if column is not None:
                row[column] = value
        await self._backend.append_values(f"{quote_sheet(self.title)}!A:Z", [row])

    async def list_records(self) -> list[IndexRow]:
        values = await self._backend.get_values(f"{quote_sheet(self.title)}!A:Z")
        if not values:
            return []

        self._use_header(values[0])
        columns = await self._column_map()
        rows = values[1:] if self._has_header else values

        return [
            IndexRow(
                identifier=_cell(row, columns[0]),
                value=_cell(row, columns[1]),
                source=_cell(row, columns[2]),
                resolved_at=_cell(row, columns[3]),
            )
            for row in rows
        ]


class GoogleSheetsWorkbook:
    """
    A Google Sheets spreadsheet.

    Usage:
        workbook = GoogleSheetsWorkbook.from_settings(settings, spreadsheet_id)
        await workbook.load_info()
        sheet = await workbook.worksheet("Kobo")
        index = await workbook.index_store("indice")
    """

    def __init__(self, spreadsheet_id: str, service: Any) -> None:
        if not spreadsheet_id:
            raise ConfigurationError("A spreadsheet id is required (spreadsheet_id)")
        self.spreadsheet_id = spreadsheet_id
        self._backend = _SheetsBackend(service, spreadsheet_id)
        self._title: str = ""
        self._sheet_titles: set[str] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "PubdateSettings",
        spreadsheet_id: str | None = None,
    ) -> "GoogleSheetsWorkbook":
        spreadsheet_id = spreadsheet_id or settings.default_spreadsheet_id
        if not spreadsheet_id:
            raise ConfigurationError("A spreadsheet id is required (spreadsheet_id)")
        credentials = build_credentials(settings)
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return cls(spreadsheet_id, service)

    @property
    def title(self) -> str:
        return self._title

    async def load_info(self) -> set[str]:
        """Fetch the spreadsheet title; returns its sheet names."""
        request = self._backend.service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields="properties.title,sheets.properties.title",
        )
        data = await self._backend.execute(request, "metadata read")
        self._title = data.get("properties", {}).get("title", "")
        self._sheet_titles = {
            sheet.get("properties", {}).get("title", "") for sheet in data.get("sheets", [])
        }
        logger.info(f"Connected to Google Sheets: {self._title}")
        return self._sheet_titles

    async def _titles(self) -> set[str]:
        if self._sheet_titles is None:
            return await self.load_info()
        return self._sheet_titles

    async def worksheet(self, title: str) -> GoogleSheetsWorkSheet:
        if title not in await self._titles():
            raise ConfigurationError(f'Sheet "{title}" not found', {"sheet": title})
        return GoogleSheetsWorkSheet(self._backend, title)

    async def index_store(self, title: str) -> GoogleSheetsIndexStore:
        """The index sheet, created with its header row when missing."""
        titles = await self._titles()
        if title not in titles:
            request = self._backend.service.spreadsheets().batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"requests": [{"addSheet": {"properties": {"title": title}}}]},
            )
            await self._backend.execute(request, f"creation of sheet {title}")
            await self._backend.update_values(f"{quote_sheet(title)}!A1:D1", [INDEX_HEADERS])
            titles.add(title)
            logger.info(f'Sheet "{title}" created')
            return GoogleSheetsIndexStore(self._backend, title, header=INDEX_HEADERS)
        logger.info(f'Using existing sheet "{title}"')
        return GoogleSheetsIndexStore(self._backend, title)
