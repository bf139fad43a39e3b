"""Shared pytest fixtures: an in-memory stand-in for requests.Session."""

import json

import pytest
import requests


class FakeResponse:
    def __init__(self, url: str, text: str, status_code: int = 200):
        self.url = url
        self.text = text
        self.status_code = status_code

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"{self.status_code} Client Error for url: {self.url}", response=self
            )


class FakeSession:
    """Serves canned bodies by URL; anything else is a 404."""

    def __init__(self, routes: dict[str, str]):
        self.routes = routes
        self.requested: list[str] = []
        self.headers: dict[str, str] = {}
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True

    def get(self, url: str, timeout=None):
        self.requested.append(url)
        if url in self.routes:
            return FakeResponse(url, self.routes[url])
        return FakeResponse(url, "Not Found", 404)


@pytest.fixture
def fake_session():
    """Factory: fake_session({url: body}) -> FakeSession."""
    return FakeSession
