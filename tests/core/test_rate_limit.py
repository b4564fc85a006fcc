"""
Tests for client addressing and the in-memory rate limit fallback.
"""

from unittest.mock import patch

import pytest
from starlette.requests import Request

from app.core import rate_limit
from app.core.config import settings
from app.core.rate_limit import RateLimitExceeded, client_ip, enforce_rate_limit


def make_request(peer: str = "1.2.3.4", forwarded: str | None = None) -> Request:
    headers = []
    if forwarded is not None:
        headers.append((b"x-forwarded-for", forwarded.encode()))
    return Request(
        {"type": "http", "method": "POST", "path": "/", "headers": headers, "client": (peer, 50000)}
    )


@pytest.fixture(autouse=True)
def clean_memory_store():
    rate_limit._memory_store.clear()
    rate_limit._memory_expiry.clear()
    rate_limit._last_prune = 0.0
    yield
    rate_limit._memory_store.clear()
    rate_limit._memory_expiry.clear()


class TestClientIp:
    def test_forwarded_header_ignored_without_trusted_proxy(self):
        assert client_ip(make_request("1.2.3.4", "9.9.9.9")) == "1.2.3.4"

    def test_forwarded_header_used_behind_trusted_proxy(self):
        with patch.object(settings, "trusted_proxies", "10.0.0.1"):
            request = make_request("10.0.0.1", "6.6.6.6, 9.9.9.9")

            assert client_ip(request) == "9.9.9.9"

    def test_trusted_hops_skipped(self):
        with patch.object(settings, "trusted_proxies", "10.0.0.1,10.0.0.2"):
            request = make_request("10.0.0.1", "9.9.9.9, 10.0.0.2")

            assert client_ip(request) == "9.9.9.9"

    def test_untrusted_peer_keeps_own_address(self):
        with patch.object(settings, "trusted_proxies", "10.0.0.1"):
            assert client_ip(make_request("1.2.3.4", "9.9.9.9")) == "1.2.3.4"


class TestEnforceRateLimit:
    @pytest.mark.asyncio
    async def test_spoofed_forwarded_for_does_not_reset_budget(self):
        blocked = 0
        for i in range(50):
            request = make_request("1.2.3.4", f"203.0.113.{i}")
            try:
                await enforce_rate_limit(request, "contacts:submit", 10, 600)
            except RateLimitExceeded:
                blocked += 1

        assert blocked == 40

    @pytest.mark.asyncio
    async def test_exceeded_is_429(self):
        request = make_request()
        await enforce_rate_limit(request, "admin:login", 1, 60)

        with pytest.raises(RateLimitExceeded) as exc_info:
            await enforce_rate_limit(request, "admin:login", 1, 60)

        assert exc_info.value.status_code == 429
        assert exc_info.value.headers == {"Retry-After": "60"}


class TestMemoryPruning:
    def test_expired_keys_are_dropped(self):
        with patch.object(rate_limit.time, "time", return_value=1000.0):
            assert rate_limit._check_rate_limit_memory("old", 5, 60)

        with patch.object(rate_limit.time, "time", return_value=2000.0):
            assert rate_limit._check_rate_limit_memory("new", 5, 60)

        assert "old" not in rate_limit._memory_store
        assert "old" not in rate_limit._memory_expiry
        assert "new" in rate_limit._memory_store
