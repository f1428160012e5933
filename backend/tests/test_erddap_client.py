"""Tests for the ERDDAP insert client."""

from unittest.mock import MagicMock

import pytest
import requests

from erddap_feeder.erddap.client import ErddapClient, ErddapSubmissionError

BASE_URL = "https://erddap.example.org/erddap/tabledap/ais_weather"
QUERY = [("time", "2023-06-15T12:00:00Z"), ("mmsi", "316001234"), ("author", "key")]


def make_client(status_code: int = 200, body=None, error: Exception | None = None):
    response = MagicMock()
    response.status_code = status_code
    response.text = "error body"
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body

    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response

    return ErddapClient(BASE_URL, timeout_s=5, session=session), session


def test_insert_url():
    client, _ = make_client()
    assert client.insert_url == BASE_URL + ".insert"


def test_successful_submission():
    body = {
        "status": "success",
        "nRowsReceived": 1,
        "stringTimestamp": "2023-06-15T12:00:01.123Z",
        "numericTimestamp": 1.686830401123e9,
    }
    client, session = make_client(body=body)

    result = client.submit(QUERY)

    session.get.assert_called_once_with(BASE_URL + ".insert", params=QUERY, timeout=5)
    assert result.status == "success"
    assert result.nRowsReceived == 1


def test_success_with_unexpected_body():
    client, _ = make_client(body=ValueError("not json"))
    assert client.submit(QUERY) is None


def test_not_found():
    client, _ = make_client(status_code=404)

    with pytest.raises(ErddapSubmissionError) as exc_info:
        client.submit(QUERY)

    assert exc_info.value.status_code == 404
    assert "URL not found" in str(exc_info.value)


def test_other_status():
    client, _ = make_client(status_code=500)

    with pytest.raises(ErddapSubmissionError) as exc_info:
        client.submit(QUERY)

    assert exc_info.value.status_code == 500


def test_network_error():
    client, _ = make_client(error=requests.ConnectionError("refused"))

    with pytest.raises(ErddapSubmissionError) as exc_info:
        client.submit(QUERY)

    assert exc_info.value.status_code is None
    assert "refused" in str(exc_info.value)


def test_zero_timeout_waits_forever():
    client = ErddapClient(BASE_URL, timeout_s=0, session=MagicMock())
    assert client.timeout_s is None


def test_each_submission_uses_its_own_session(monkeypatch):
    response = MagicMock(status_code=200)
    response.json.side_effect = ValueError("not json")
    sessions = []

    def new_session():
        session = MagicMock()
        session.__enter__.return_value = session
        session.get.return_value = response
        sessions.append(session)
        return session

    monkeypatch.setattr(requests, "Session", new_session)
    client = ErddapClient(BASE_URL, timeout_s=5)

    client.submit(QUERY)
    client.submit(QUERY)

    assert len(sessions) == 2
    for session in sessions:
        session.get.assert_called_once_with(BASE_URL + ".insert", params=QUERY, timeout=5)
        session.__exit__.assert_called_once()


def test_close_without_session_is_noop():
    client = ErddapClient(BASE_URL)
    client.close()
    assert client.session is None
