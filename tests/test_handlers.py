"""Tests for the Lambda handlers."""
import json
from datetime import date, timedelta
from unittest.mock import MagicMock, patch

import pytest
import responses

from src.handlers.entries import handler as entries_handler
from src.handlers.prediction import handler as prediction_handler
from src.handlers.sync import handler as sync_handler
from src.services.entry_store import EntryStore
from src.services.exceptions import EntryFeedError
from src.utils.clients.entry_feed import EntryFeedClient

FEED_URL = "https://feed.example.com/exec"

@pytest.fixture
def mock_dynamo(sample_rows):
    dynamo = MagicMock()
    dynamo.query_items.return_value = list(sample_rows)
    return dynamo

@pytest.fixture
def patched_dynamo(mock_dynamo):
    with patch("src.handlers.entries.get_dynamo", return_value=mock_dynamo), \
         patch("src.handlers.prediction.get_dynamo", return_value=mock_dynamo), \
         patch("src.handlers.sync.get_dynamo", return_value=mock_dynamo):
        yield mock_dynamo

def _body(response):
    return json.loads(response["body"])

def test_fetch_returns_newest_first(patched_dynamo, lambda_context):
    """Test fetch lists entries newest first with a fingerprint."""
    event = {"queryStringParameters": {"action": "fetch"}}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 200
    body = _body(response)
    assert [e["date"] for e in body["entries"]] == ["2024-01-29", "2024-01-01"]
    assert body["count"] == 2
    assert len(body["fingerprint"]) == 64

def test_save_new_entry(patched_dynamo, lambda_context):
    """Test saving a new date adds and persists it."""
    event = {"body": json.dumps({
        "action": "save",
        "entry": {"date": "2024-02-26", "bleedingIntensity": 4, "notes": "Day one"}
    })}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["message"] == "Entry added"
    assert body["entry"]["bleedingIntensity"] == 4
    patched_dynamo.put_item.assert_called_once()

def test_save_existing_entry_from_query_string(patched_dynamo, lambda_context):
    """Test legacy query string saves replace the existing entry."""
    event = {"queryStringParameters": {
        "action": "save", "date": "2024-01-01", "krvaceni": "2", "nalady": "7"
    }}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["message"] == "Entry updated"
    assert body["entry"]["mood"] == 3
    assert body["entry"]["notes"] == ""

def test_save_invalid_date(patched_dynamo, lambda_context):
    """Test an invalid date is a 400 with its error kind."""
    event = {"body": json.dumps({"action": "save", "date": "2024-02-30"})}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 400
    assert _body(response)["error"] == "invalid_date"
    patched_dynamo.put_item.assert_not_called()

def test_save_future_date(patched_dynamo, lambda_context):
    """Test entries for future dates are refused."""
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    event = {"body": json.dumps({"action": "save", "date": tomorrow})}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 400
    assert _body(response)["error"] == "future_date"

def test_save_strict_validation(patched_dynamo, lambda_context, monkeypatch):
    """Test STRICT_VALIDATION rejects out-of-range values."""
    monkeypatch.setenv("STRICT_VALIDATION", "true")
    event = {"body": json.dumps({"action": "save", "date": "2024-02-01", "mood": 9})}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 400
    assert _body(response)["error"] == "out_of_range_value"

def test_fetch_strict_keeps_out_of_range_rows(patched_dynamo, sample_rows, lambda_context, monkeypatch):
    """Test stored rows outside the domain are listed clamped under strict mode."""
    monkeypatch.setenv("STRICT_VALIDATION", "true")
    patched_dynamo.query_items.return_value = [
        {**sample_rows[0], "bleedingIntensity": 9},
        sample_rows[1],
    ]
    response = entries_handler({"queryStringParameters": {"action": "fetch"}}, lambda_context)

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["count"] == 2
    assert body["entries"][1]["date"] == "2024-01-01"
    assert body["entries"][1]["bleedingIntensity"] == 5

def test_save_strict_replaces_out_of_range_row(patched_dynamo, sample_rows, lambda_context, monkeypatch):
    """Test a valid save over a stored out-of-range row counts as an update."""
    monkeypatch.setenv("STRICT_VALIDATION", "true")
    patched_dynamo.query_items.return_value = [{**sample_rows[0], "bleedingIntensity": 9}]
    event = {"body": json.dumps({"action": "save", "date": "2024-01-01", "bleedingIntensity": 2})}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 200
    assert _body(response)["message"] == "Entry updated"

def test_delete_entry(patched_dynamo, lambda_context):
    """Test deleting an existing date."""
    event = {"queryStringParameters": {"action": "delete", "date": "2024-01-01"}}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 200
    patched_dynamo.delete_item.assert_called_once_with({"PK": "ENTRIES", "SK": "ENTRY#2024-01-01"})

def test_delete_missing_entry(patched_dynamo, lambda_context):
    """Test deleting an unknown date is a 404."""
    event = {"queryStringParameters": {"action": "delete", "date": "2023-01-01"}}
    response = entries_handler(event, lambda_context)

    assert response["statusCode"] == 404
    assert _body(response)["error"] == "not_found"

def test_delete_requires_date(patched_dynamo, lambda_context):
    """Test delete without a date is a 400."""
    response = entries_handler({"queryStringParameters": {"action": "delete"}}, lambda_context)
    assert response["statusCode"] == 400

def test_unknown_action(patched_dynamo, lambda_context):
    """Test unknown actions are rejected."""
    response = entries_handler({"queryStringParameters": {"action": "explode"}}, lambda_context)
    assert response["statusCode"] == 400
    assert _body(response)["error"] == "Unknown action parameter"

def test_invalid_json_body(patched_dynamo, lambda_context):
    """Test malformed bodies are a 400."""
    response = entries_handler({"body": "{not json"}, lambda_context)
    assert response["statusCode"] == 400

def test_entries_handler_internal_error(patched_dynamo, lambda_context):
    """Test unexpected failures become a 500."""
    patched_dynamo.query_items.side_effect = RuntimeError("table gone")
    response = entries_handler({"queryStringParameters": {"action": "fetch"}}, lambda_context)
    assert response["statusCode"] == 500

def test_prediction(patched_dynamo, lambda_context):
    """Test the prediction handler returns the result and message."""
    event = {"queryStringParameters": {"today": "2024-02-26"}}
    response = prediction_handler(event, lambda_context)

    assert response["statusCode"] == 200
    body = _body(response)
    assert body["prediction"]["status"] == "due_today"
    assert body["prediction"]["predicted_start"] == "2024-02-26"
    assert body["prediction"]["average_cycle"] == 28
    assert body["message"].startswith("Today! (2024-02-26)")

def test_prediction_no_data(patched_dynamo, lambda_context):
    """Test an empty table is a normal response with no data."""
    patched_dynamo.query_items.return_value = []
    response = prediction_handler({}, lambda_context)

    assert response["statusCode"] == 200
    assert _body(response)["prediction"]["status"] == "no_data"

def test_prediction_invalid_today(patched_dynamo, lambda_context):
    """Test an invalid reference date is rejected."""
    response = prediction_handler({"queryStringParameters": {"today": "26/02/2024"}}, lambda_context)
    assert response["statusCode"] == 400

@pytest.fixture
def mock_feed():
    feed = MagicMock()
    with patch("src.handlers.sync.get_entry_feed", return_value=feed):
        yield feed

def test_sync_unchanged(patched_dynamo, mock_feed, sample_rows, lambda_context):
    """Test an identical feed writes nothing."""
    mock_feed.fetch_store.return_value = EntryStore.from_items(sample_rows)
    result = sync_handler({}, lambda_context)

    assert result == {"changed": False, "written": 0, "deleted": 0}
    patched_dynamo.put_item.assert_not_called()

def test_sync_applies_differences(patched_dynamo, mock_feed, sample_rows, lambda_context):
    """Test changed and new rows are written and missing rows deleted."""
    mock_feed.fetch_store.return_value = EntryStore.from_items([
        sample_rows[0],
        {"date": "2024-02-26", "krvaceni": "3"},
    ])
    result = sync_handler({}, lambda_context)

    assert result == {"changed": True, "written": 1, "deleted": 1}
    assert patched_dynamo.put_item.call_args.args[0]["SK"] == "ENTRY#2024-02-26"
    patched_dynamo.delete_item.assert_called_once_with({"PK": "ENTRIES", "SK": "ENTRY#2024-01-29"})

def test_sync_feed_unavailable(patched_dynamo, mock_feed, lambda_context):
    """Test feed failures are reported without touching the table."""
    mock_feed.fetch_store.side_effect = EntryFeedError("Request timeout")
    result = sync_handler({}, lambda_context)

    assert result["changed"] is False
    assert result["error"] == "Request timeout"
    patched_dynamo.query_items.assert_not_called()

@pytest.fixture
def feed_client():
    """Real feed client served by the responses mock."""
    client = EntryFeedClient(url=FEED_URL, timeout=2.0)
    with patch("src.handlers.sync.get_entry_feed", return_value=client):
        yield client

@responses.activate
def test_sync_non_list_payload_keeps_table(patched_dynamo, feed_client, lambda_context):
    """Test an error object from the feed never empties the table."""
    responses.add(responses.GET, FEED_URL, json={"error": "quota exceeded"}, status=200)
    result = sync_handler({}, lambda_context)

    assert result["changed"] is False
    assert "not a list" in result["error"]
    patched_dynamo.delete_item.assert_not_called()
    patched_dynamo.put_item.assert_not_called()

@responses.activate
def test_sync_strict_mode_clamps_feed_rows(patched_dynamo, feed_client, sample_rows, lambda_context, monkeypatch):
    """Test out-of-range feed rows are clamped and written, not deleted."""
    monkeypatch.setenv("STRICT_VALIDATION", "true")
    feed_rows = [
        {**{k: v for k, v in row.items() if k not in ("PK", "SK")}, "bleedingIntensity": 9}
        for row in sample_rows
    ]
    responses.add(responses.GET, FEED_URL, json=feed_rows, status=200)
    result = sync_handler({}, lambda_context)

    assert result == {"changed": True, "written": 2, "deleted": 0}
    patched_dynamo.delete_item.assert_not_called()
    written = [c.args[0]["bleedingIntensity"] for c in patched_dynamo.put_item.call_args_list]
    assert written == [5, 5]
