from unittest import mock

import pytest

from analytics import sheets
from analytics.sheets import SCOPES, GoogleSheetsClient, SheetFetchError


def fake_service(values=None, error=None):
    service = mock.MagicMock()
    request = service.spreadsheets.return_value.values.return_value.get.return_value
    if error is not None:
        request.execute.side_effect = error
    else:
        request.execute.return_value = {} if values is None else {"range": "Sheet1!A1:E4", "values": values}
    return service


def test_fetch_rows_returns_values():
    rows = [["Year", "Program"], ["2023", "CS"]]
    service = fake_service(rows)
    client = GoogleSheetsClient("unused.json", service=service)

    assert client.fetch_rows("sheet-123", "Sheet1!A:E") == rows
    service.spreadsheets.return_value.values.return_value.get.assert_called_once_with(
        spreadsheetId="sheet-123", range="Sheet1!A:E"
    )


def test_fetch_rows_without_values_is_empty():
    client = GoogleSheetsClient("unused.json", service=fake_service())
    assert client.fetch_rows("sheet-123", "Sheet1!A:E") == []


def test_fetch_failure_is_wrapped_and_chained():
    cause = RuntimeError("The caller does not have permission")
    client = GoogleSheetsClient("unused.json", service=fake_service(error=cause))

    with pytest.raises(SheetFetchError) as err:
        client.fetch_rows("sheet-123", "Sheet1!A:E")
    assert str(err.value) == "Failed to fetch data from Google Sheets: The caller does not have permission"
    assert err.value.__cause__ is cause


def test_service_is_built_lazily_once(monkeypatch):
    creds = object()
    from_file = mock.Mock(return_value=creds)
    build = mock.Mock(return_value=fake_service([["Year"]]))
    monkeypatch.setattr(sheets.Credentials, "from_service_account_file", from_file)
    monkeypatch.setattr(sheets, "build", build)

    client = GoogleSheetsClient("/etc/secrets/credentials.json")
    build.assert_not_called()

    client.fetch_rows("a", "Sheet1!A:E")
    client.fetch_rows("b", "Sheet1!A:E")
    from_file.assert_called_once_with("/etc/secrets/credentials.json", scopes=SCOPES)
    build.assert_called_once_with("sheets", "v4", credentials=creds, cache_discovery=False)


def test_missing_credentials_surface_as_fetch_error(monkeypatch):
    monkeypatch.setattr(
        sheets.Credentials, "from_service_account_file", mock.Mock(side_effect=FileNotFoundError("credentials.json"))
    )
    client = GoogleSheetsClient("credentials.json")
    with pytest.raises(SheetFetchError, match="credentials.json"):
        client.fetch_rows("a", "Sheet1!A:E")
