# =============================================================================
# core/api_client.py  -  openFDA HTTP client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues GET requests against https://api.fda.gov/<path> and returns the
#   decoded JSON.  It is the ONLY place in the project that talks to the
#   network and the ONLY place that raises (see core/errors.py).
#
# CONTRACT:
#   await client.get("/drug/enforcement.json", {"search": ..., "limit": 5})
#     -> {"meta": {"results": {"skip", "limit", "total"}}, "results": [...]}
#
#   Before sending:
#     - limit defaults to 10 and is capped at 100
#     - api_key is added when one is configured
#     - parameters whose value is None are dropped
#
# RESPONSE HANDLING:
#     200            decoded JSON
#     404            empty result (openFDA's way of saying "no matches")
#     429            RateLimitError       (no retry)
#     other 4xx      BadRequestError      (no retry, carries openFDA message)
#     5xx            ServerError          (retried)
#     timeout/conn   NetworkError         (retried)
#
# RETRIES:
#   Up to Settings.max_retries attempts with a linear backoff between them
#   (backoff_s * 1, backoff_s * 2, ...).  After the last attempt the last
#   error is raised.  Nothing is cached and no quota is enforced here;
#   usage_info() only REPORTS the limits that apply.
#
# OWNERSHIP:
#   One client per process, created at startup and handed to whoever needs
#   it.  The client keeps no per-call state, so concurrent tool calls can
#   share it.
# =============================================================================

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping

import httpx

from core.config import Settings
from core.errors import (
    BadRequestError,
    FDAAPIError,
    NetworkError,
    RateLimitError,
    ServerError,
)
from core.models import RateLimits, UsageInfo

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

USER_AGENT = "openfda-mcp-tools/1.0"

# Published openFDA quotas
_LIMITS_WITH_KEY = RateLimits(requests_per_minute=240, requests_per_day=120_000)
_LIMITS_WITHOUT_KEY = RateLimits(requests_per_minute=240, requests_per_day=1_000)


def empty_response(skip: int = 0, limit: int = DEFAULT_LIMIT) -> dict[str, Any]:
    """The payload returned for a 404 (no matching records)."""
    return {
        "meta": {"results": {"skip": skip, "limit": limit, "total": 0}},
        "results": [],
    }


def _upstream_message(response: httpx.Response) -> str | None:
    """Pull openFDA's {"error": {"message": ...}} out of an error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message")
    return None


class OpenFDAClient:
    """Async openFDA client with bounded retries and typed failures."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.settings = settings or Settings()
        self._sleep = sleep
        self._http = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_s,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            transport=transport,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.settings.api_key)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "OpenFDAClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Request parameters
    # -------------------------------------------------------------------------
    def build_params(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """Resolve limit, inject the API key, and drop None values."""
        resolved = {key: value for key, value in params.items() if value is not None}

        limit = resolved.get("limit")
        resolved["limit"] = min(int(limit), MAX_LIMIT) if limit else DEFAULT_LIMIT

        if self.has_api_key:
            resolved["api_key"] = self.settings.api_key
        return resolved

    # -------------------------------------------------------------------------
    # GET with retries
    # -------------------------------------------------------------------------
    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """GET `path` and return decoded JSON, retrying transient failures."""
        request_params = self.build_params(params or {})
        attempts = self.settings.max_retries
        last_error: FDAAPIError | None = None

        for attempt in range(1, attempts + 1):
            try:
                return await self._get_once(path, request_params, attempt)
            except FDAAPIError as exc:
                if not exc.transient:
                    raise
                last_error = exc
                if attempt < attempts:
                    delay = self.settings.backoff_s * attempt
                    logger.warning(
                        "openFDA %s attempt %d/%d failed (%s); retrying in %.1fs",
                        path, attempt, attempts, exc, delay,
                    )
                    await self._sleep(delay)

        logger.error("openFDA %s failed after %d attempts: %s", path, attempts, last_error)
        raise last_error

    async def _get_once(self, path: str, params: dict[str, Any], attempt: int) -> dict[str, Any]:
        loggable = {key: value for key, value in params.items() if key != "api_key"}
        logger.debug("openFDA GET %s attempt %d params=%s", path, attempt, loggable)

        try:
            response = await self._http.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"Request to FDA API timed out after {self.settings.timeout_s:g}s"
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError("Network error: Unable to connect to FDA API") from exc

        status = response.status_code
        if status == 404:
            logger.debug("No results found for query: %s", params.get("search", "N/A"))
            return empty_response(params.get("skip", 0), params["limit"])
        if status >= 400:
            raise self._error_for(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise ServerError("FDA API returned a response that is not JSON", status) from exc

        logger.debug("Found %d results", len(data.get("results") or []))
        return data

    def _error_for(self, response: httpx.Response) -> FDAAPIError:
        status = response.status_code
        message = _upstream_message(response)

        if status == 429:
            hint = (
                "API key rate limits apply"
                if self.has_api_key
                else "Consider using an API key for higher limits"
            )
            return RateLimitError(f"Rate limit exceeded. {hint}", status)
        if status == 400:
            return BadRequestError(f"Bad Request: {message or 'Invalid search parameters'}", status)
        if status == 503:
            return ServerError("FDA API service temporarily unavailable", status)
        if status >= 500:
            return ServerError("FDA API server error. Please try again later", status)
        return BadRequestError(
            f"FDA API error ({status}): {message or response.reason_phrase}", status
        )

    # -------------------------------------------------------------------------
    # Usage reporting
    # -------------------------------------------------------------------------
    def usage_info(self) -> UsageInfo:
        """Quota figures that apply to this client (informational only)."""
        if self.has_api_key:
            return UsageInfo(
                has_api_key=True,
                rate_limits=_LIMITS_WITH_KEY,
                recommendations="API key configured - higher rate limits available",
            )
        return UsageInfo(
            has_api_key=False,
            rate_limits=_LIMITS_WITHOUT_KEY,
            recommendations="Consider setting FDA_API_KEY environment variable for higher rate limits",
        )
