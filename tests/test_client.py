"""Tests for the SofaScore HTTP client, with a stubbed requests session."""

import threading

import pytest
import requests

from bettificator.core.client import HEADERS, SofaClient
from bettificator.core.config import Config
from bettificator.core.errors import ParseFailure


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("{}" if payload is not None else "")

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response or FakeResponse(payload={})
        self.error = error
        self.urls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.urls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def _client(response=None, error=None):
    sessions = []

    def factory():
        s = FakeSession(response, error)
        sessions.append(s)
        return s

    return SofaClient(Config(request_timeout=5.0), session_factory=factory), sessions


class TestBuildUrl:
    @pytest.mark.parametrize(
        "endpoint,expected",
        [
            ("scheduled-events/2020-01-05", "https://www.sofascore.com/api/v1/sport/football/scheduled-events/2020-01-05"),
            ("/scheduled-events/2020-01-05", "https://www.sofascore.com/api/v1/sport/football/scheduled-events/2020-01-05"),
            ("search/teams?q=a&page=0", "https://www.sofascore.com/api/v1/search/teams?q=a&page=0"),
            ("team/42", "https://www.sofascore.com/api/v1/team/42"),
            ("https://example.org/x.json", "https://example.org/x.json"),
        ],
    )
    def test_routes(self, endpoint, expected):
        client, _ = _client()
        assert client.build_api_url(endpoint) == expected


class TestFetchData:
    def test_returns_decoded_json(self):
        client, sessions = _client(FakeResponse(payload={"events": [1, 2]}))
        assert client.fetch_data("scheduled-events/2020-01-05") == {"events": [1, 2]}
        assert sessions[0].urls[0][1] == 5.0
        assert sessions[0].headers["User-Agent"] == HEADERS["User-Agent"]

    def test_not_found_is_empty_page(self):
        client, _ = _client(FakeResponse(status_code=404))
        assert client.fetch_data("scheduled-events/1990-01-01") == {}

    def test_server_error(self):
        client, _ = _client(FakeResponse(status_code=503, payload={}))
        with pytest.raises(ParseFailure, match="HTTP 503") as exc:
            client.fetch_data("scheduled-events/2020-01-05", key="2020-01-05")
        assert exc.value.key == "2020-01-05"

    def test_invalid_json(self):
        client, _ = _client(FakeResponse(status_code=200, text="<html>"))
        with pytest.raises(ParseFailure, match="invalid JSON"):
            client.fetch_data("scheduled-events/2020-01-05")

    def test_cloudflare_challenge(self):
        client, _ = _client(FakeResponse(status_code=403, text="Attention Required! | Cloudflare"))
        with pytest.raises(ParseFailure, match="cloudflare"):
            client.fetch_data("scheduled-events/2020-01-05")

    def test_network_error(self):
        client, _ = _client(error=requests.ConnectionError("connection refused"))
        with pytest.raises(ParseFailure, match="connection refused") as exc:
            client.fetch_data("scheduled-events/2020-01-05", key="K")
        assert isinstance(exc.value.__cause__, requests.ConnectionError)


class TestSessions:
    def test_one_session_per_thread(self):
        client, sessions = _client()
        client.fetch_data("a")
        client.fetch_data("b")
        t = threading.Thread(target=client.fetch_data, args=("c",))
        t.start()
        t.join()
        assert len(sessions) == 2

    def test_close_closes_every_session(self):
        client, sessions = _client()
        client.fetch_data("a")
        t = threading.Thread(target=client.fetch_data, args=("b",))
        t.start()
        t.join()
        client.close()
        assert all(s.closed for s in sessions)
        client.fetch_data("c")
        assert len(sessions) == 3
