import io
import json
import urllib.error

import pytest

from anchor_client import AnchorClient, ApiError


def _client(responses):
    """Client whose transport replays `responses`; Exceptions are raised."""
    sleeps = []
    client = AnchorClient("http://test", sleep=sleeps.append)
    calls = []

    def fake_request(method, path, payload=None, params=None):
        calls.append((method, path, payload, params))
        item = responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    client._request = fake_request
    return client, calls, sleeps


def test_success_needs_one_call():
    client, calls, sleeps = _client([(200, {"result": "correct"})])
    assert client.guess("t3_a", "bed") == {"result": "correct"}
    assert calls == [("POST", "/guess", {"postId": "t3_a", "guess": "bed"}, None)]
    assert sleeps == []


def test_transient_errors_are_retried_with_backoff():
    client, calls, sleeps = _client([
        (503, {"message": "Storage unavailable"}),
        (429, {"message": "slow down"}),
        (200, {"postId": "t3_new"}),
    ])
    assert client.create("bed", ["bedroom"]) == {"postId": "t3_new"}
    assert len(calls) == 3
    assert sleeps == [0.5, 1.0]


def test_gives_up_after_three_attempts():
    client, calls, sleeps = _client([(500, {}), (502, {}), (503, {"message": "down"})])
    with pytest.raises(ApiError) as exc:
        client.leaderboard()
    assert exc.value.status == 503
    assert len(calls) == 3
    assert sleeps == [0.5, 1.0]


def test_validation_errors_are_not_retried():
    body = {"status": "error", "errorKind": "DuplicateWord", "message": "Duplicate word: bedroom"}
    client, calls, sleeps = _client([(400, body)])
    with pytest.raises(ApiError) as exc:
        client.create("bed", ["bedroom", "bedroom"])
    assert exc.value.status == 400
    assert exc.value.body["errorKind"] == "DuplicateWord"
    assert str(exc.value) == "Duplicate word: bedroom"
    assert len(calls) == 1
    assert sleeps == []


def test_network_errors_are_retried():
    client, calls, sleeps = _client([
        urllib.error.URLError("connection refused"),
        (200, {"hasChallenge": True}),
    ])
    assert client.init("t3_a") == {"hasChallenge": True}
    assert calls[0] == ("GET", "/init", None, {"postId": "t3_a"})
    assert sleeps == [0.5]


def test_request_sends_token_and_parses_http_errors(monkeypatch):
    seen = {}

    def fake_urlopen(req, timeout):
        seen["url"] = req.full_url
        seen["auth"] = req.get_header("Authorization")
        raise urllib.error.HTTPError(
            req.full_url, 403, "Forbidden", {},
            io.BytesIO(json.dumps({"errorKind": "NotYetSolved"}).encode("utf-8")))

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    client = AnchorClient("http://test/", token="tok", sleep=lambda s: None)
    status, body = client._request("GET", "/results", params={"postId": "t3_a"})
    assert status == 403
    assert body == {"errorKind": "NotYetSolved"}
    assert seen["url"] == "http://test/api/anchor/results?postId=t3_a"
    assert seen["auth"] == "Bearer tok"
