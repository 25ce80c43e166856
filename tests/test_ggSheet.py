import json

import httplib2
import pytest
from googleapiclient.errors import HttpError

from shared.ggSheet import (
    SheetFetchError,
    a1_range,
    column_letter,
    get_spreadsheet_meta,
    read_values,
)
from apps.timeline.api.helpers.ggSheet import pick_target_sheet

from conftest import FakeSheetsService


@pytest.mark.parametrize(
    "index, expected",
    [(0, "A"), (3, "D"), (25, "Z"), (26, "AA"), (51, "AZ"), (701, "ZZ"), (702, "AAA")],
)
def test_column_letter(index, expected):
    assert column_letter(index) == expected


def test_a1_range_quotes_sheet_title():
    assert a1_range("Project Timeline", 5000, 52) == "'Project Timeline'!A1:AZ5000"
    assert a1_range("Bob's", 1, 3) == "'Bob''s'!A1:C1"


def test_read_values_returns_rows():
    service = FakeSheetsService({}, [["SKU", "Price"], ["ABC", "10.00"]])

    assert read_values(service, "id", "A1:B2") == [["SKU", "Price"], ["ABC", "10.00"]]
    assert service.calls == [("values", "id", "A1:B2")]


def test_transport_errors_are_wrapped():
    service = FakeSheetsService({}, [], error=OSError("connection reset"))

    with pytest.raises(SheetFetchError, match="connection reset"):
        get_spreadsheet_meta(service, "id")


def test_pick_target_sheet_exact_title():
    meta = {
        "sheets": [
            {"properties": {"title": "project timeline"}},
            {"properties": {"title": "Project Timeline"}},
        ]
    }

    assert pick_target_sheet(meta, "Project Timeline")["title"] == "Project Timeline"


def test_pick_target_sheet_first_as_fallback():
    meta = {"sheets": [{"properties": {"title": "A"}}, {"properties": {"title": "B"}}]}

    assert pick_target_sheet(meta, "Project Timeline")["title"] == "A"


def test_pick_target_sheet_no_sheets():
    with pytest.raises(SheetFetchError):
        pick_target_sheet({"sheets": []}, "Project Timeline")


def test_google_api_error_reason_becomes_message():
    content = json.dumps({"error": {"code": 403, "message": "The caller does not have permission"}})
    error = HttpError(httplib2.Response({"status": 403, "reason": "Forbidden"}), content.encode("utf-8"))
    service = FakeSheetsService({}, [], error=error)

    with pytest.raises(SheetFetchError, match="The caller does not have permission"):
        read_values(service, "id", "A1:B2")


def test_httplib2_errors_are_wrapped():
    service = FakeSheetsService({}, [], error=httplib2.ServerNotFoundError("Unable to find the server"))

    with pytest.raises(SheetFetchError, match="Unable to find the server"):
        get_spreadsheet_meta(service, "id")
