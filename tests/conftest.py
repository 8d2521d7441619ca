import asyncio

import pytest

from core.api_client import empty_response
from core.models import RateLimits, UsageInfo


class FakeClient:
    """Stands in for OpenFDAClient: records calls, replays canned payloads."""

    def __init__(self, payload=None, error=None):
        self.payload = payload if payload is not None else empty_response()
        self.error = error
        self.calls = []

    async def get(self, path, params=None):
        self.calls.append((path, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.payload

    def usage_info(self):
        return UsageInfo(
            has_api_key=False,
            rate_limits=RateLimits(requests_per_minute=240, requests_per_day=1_000),
            recommendations="Consider setting FDA_API_KEY environment variable for higher rate limits",
        )


def page(results, total=None):
    """An openFDA-shaped response body."""
    return {
        "meta": {"results": {"skip": 0, "limit": 10, "total": len(results) if total is None else total}},
        "results": results,
    }


@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def fake_client():
    return FakeClient()
