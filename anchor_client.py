"""
Anchor Word API Client
======================

Thin urllib client for the /api/anchor routes.

Transient failures (network errors, HTTP 5xx and 429) are retried up to
three attempts with 0.5s / 1s backoff between them. Anything else, e.g. a
400 validation error, is returned straight away.
"""

import json
import time
import urllib.error
import urllib.parse
import urllib.request

DEFAULT_SERVER = "http://127.0.0.1:8080"
MAX_ATTEMPTS = 3
BASE_DELAY = 0.5


class ApiError(Exception):
    """Request failed after all retries (or was never retryable)."""

    def __init__(self, status, body):
        message = body.get('message') if isinstance(body, dict) else None
        super().__init__(message or f"HTTP {status}")
        self.status = status
        self.body = body


def is_transient(status):
    return status == 429 or 500 <= status < 600


class AnchorClient:
    def __init__(self, server=DEFAULT_SERVER, token=None, sleep=time.sleep, timeout=30):
        self.server = server.rstrip('/')
        self.token = token
        self.sleep = sleep
        self.timeout = timeout

    def _request(self, method, path, payload=None, params=None):
        """One HTTP round trip. Returns (status, parsed JSON body)."""
        url = f"{self.server}/api/anchor{path}"
        if params:
            url += '?' + urllib.parse.urlencode({k: v for k, v in params.items() if v is not None})
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.status, json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            raw = e.read().decode("utf-8")
            try:
                body = json.loads(raw)
            except ValueError:
                body = {"message": raw or f"HTTP {e.code}"}
            return e.code, body

    def call(self, method, path, payload=None, params=None):
        """Request with retry. Returns the body on 2xx, raises ApiError otherwise."""
        for attempt in range(MAX_ATTEMPTS):
            try:
                status, body = self._request(method, path, payload, params)
            except urllib.error.URLError as e:
                if attempt == MAX_ATTEMPTS - 1:
                    raise ApiError(0, {"message": str(e.reason)}) from e
            else:
                if status < 400:
                    return body
                if not is_transient(status) or attempt == MAX_ATTEMPTS - 1:
                    raise ApiError(status, body)
            self.sleep(BASE_DELAY * (2 ** attempt))
        raise AssertionError("unreachable")

    # --- Endpoints ---

    def init(self, post_id):
        return self.call("GET", "/init", params={"postId": post_id})

    def create(self, anchor, words, subreddit=None):
        payload = {"anchor": anchor, "words": words}
        if subreddit:
            payload["subreddit"] = subreddit
        return self.call("POST", "/create", payload)

    def guess(self, post_id, guess):
        return self.call("POST", "/guess", {"postId": post_id, "guess": guess})

    def results(self, post_id):
        return self.call("GET", "/results", params={"postId": post_id})

    def leaderboard(self, limit=None):
        return self.call("GET", "/leaderboard", params={"limit": limit})

    def find_another(self, post_id, subreddit=None):
        return self.call("POST", "/find-another", {"postId": post_id, "subreddit": subreddit})
