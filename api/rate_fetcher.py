import asyncio
import json
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Callable

import aiohttp

from errors import (
    ConversionError,
    UpstreamInvalidCurrency,
    UpstreamMalformedResponse,
    UpstreamUnauthorized,
    UpstreamUnclassified,
    UpstreamUnreachable,
)

logger = logging.getLogger(__name__)

EventHook = Callable[[str, dict[str, Any]], None]


class RateFetcher(ABC):
    @abstractmethod
    async def fetch_rate(self, source: str, target: str) -> float | None:
        """Return the source->target rate, or None when the provider has no quote."""


def map_upstream_error(code: int, info: str) -> ConversionError:
    """Translate a provider error code into the matching ConversionError."""
    if code == 101:
        return UpstreamUnauthorized()
    if code == 201:
        return UpstreamInvalidCurrency("source")
    if code == 202:
        return UpstreamInvalidCurrency("target")
    return UpstreamUnclassified(code, info)


class ExchangeRateApiFetcher(RateFetcher):
    """
    Fetch live rates from a currencylayer-style ``/live`` endpoint.

    Args:
        base_url: Endpoint URL, without query string.
        access_key: Provider access key, sent as the ``access_key`` parameter.
        session: Shared aiohttp session. A short-lived one is opened per call
            when omitted.
        timeout: Total seconds allowed for the outbound call.
        on_event: Optional callback receiving ``(event_name, fields)`` for
            every request, response and failure.
    """

    def __init__(
        self,
        base_url: str,
        access_key: str,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 10.0,
        on_event: EventHook | None = None,
    ):
        self._base_url = base_url
        self._access_key = access_key
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._on_event = on_event

    @staticmethod
    def quote_key(source: str, target: str) -> str:
        return (source + target).upper()

    async def fetch_rate(self, source: str, target: str) -> float | None:
        currencies = [target]
        params = {
            "access_key": self._access_key,
            "source": source,
            "currencies": ",".join(currencies),
        }
        logger.info(
            "Sending API request to %s (source=%s, currencies=%s)",
            self._base_url, source, params["currencies"],
        )
        self._emit("rate_request", url=self._base_url, source=source, currencies=currencies)

        status, body = await self._get(params)
        logger.info("Received API response: status=%s", status)
        self._emit("rate_response", status=status, size=len(body))

        root = self._parse(body)

        if root.get("success") is not True:
            raise self._upstream_error(root)

        quotes = root.get("quotes")
        rate = quotes.get(self.quote_key(source, target)) if isinstance(quotes, dict) else None
        if not _is_rate(rate):
            logger.warning("Exchange rate not found for %s -> %s", source, target)
            return None
        return float(rate)

    async def _get(self, params: dict[str, str]) -> tuple[int, bytes]:
        try:
            if self._session is not None:
                return await self._request(self._session, params)
            async with aiohttp.ClientSession() as session:
                return await self._request(session, params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.exception("Exception while fetching exchange rate")
            self._emit("rate_error", kind="unreachable", detail=repr(exc))
            raise UpstreamUnreachable() from exc

    async def _request(self, session, params: dict[str, str]) -> tuple[int, bytes]:
        async with session.get(self._base_url, params=params, timeout=self._timeout) as resp:
            resp.raise_for_status()
            return resp.status, await resp.read()

    def _parse(self, body: bytes) -> dict[str, Any]:
        try:
            root = json.loads(body)
        except (ValueError, RecursionError) as exc:
            logger.exception("Error parsing JSON response")
            self._emit("rate_error", kind="malformed", detail=str(exc))
            raise UpstreamMalformedResponse() from exc
        if not isinstance(root, dict):
            logger.error("Expected a JSON object, got %s", type(root).__name__)
            self._emit("rate_error", kind="malformed", detail=type(root).__name__)
            raise UpstreamMalformedResponse()
        return root

    def _upstream_error(self, root: dict[str, Any]) -> ConversionError:
        error = root.get("error")
        if not isinstance(error, dict):
            error = {}
        try:
            code = int(error.get("code", 0))
        except (TypeError, ValueError, OverflowError):
            code = 0
        info = str(error.get("info") or "")

        logger.error("API responded with error: %s %s", code, info)
        self._emit("rate_error", kind="upstream", code=code, info=info)
        return map_upstream_error(code, info)

    def _emit(self, event: str, **fields: Any) -> None:
        if self._on_event is not None:
            self._on_event(event, fields)


def _is_rate(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
