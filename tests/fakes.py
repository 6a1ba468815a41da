import json

import aiohttp

from rate_fetcher import RateFetcher


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self.status = status
        self._body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientError(f"HTTP {self.status}")

    async def read(self) -> bytes:
        return self._body


class FakeSession:
    """Stands in for aiohttp.ClientSession, answering every GET the same way."""

    def __init__(self, payload=None, body: bytes | None = None, status: int = 200, error=None):
        if body is None:
            body = json.dumps(payload).encode()
        self._body = body
        self._status = status
        self._error = error
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self._error is not None:
            raise self._error
        return FakeResponse(self._body, self._status)


class StubFetcher(RateFetcher):
    def __init__(self, rate=None, error=None):
        self.rate = rate
        self.error = error
        self.calls = []

    async def fetch_rate(self, source, target):
        self.calls.append((source, target))
        if self.error is not None:
            raise self.error
        return self.rate
