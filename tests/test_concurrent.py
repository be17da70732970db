"""Tests that the server handles multiple concurrent connections correctly.

The app is async (FastAPI + asyncpg pool + redis.asyncio). These tests assert
that many simultaneous requests succeed and that uniqueness holds under load.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /health requests all succeed."""
        concurrency = 50
        tasks = [client.get("/health") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            assert r.json()["status"] == "OK"

    async def test_concurrent_shorten_requests(self, client):
        """Concurrent POST /shorten with different URLs; all succeed and short codes are unique."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/shorten", json={"originalUrl": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        short_codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 201, f"Request {i}: status {r.status_code}"
            short_codes.append(r.json()["shortCode"])

        assert len(set(short_codes)) == concurrency

    async def test_concurrent_same_custom_name(self, client, store):
        """Only one of several simultaneous claims on a custom name wins."""
        concurrency = 10
        tasks = [
            client.post(
                "/shorten",
                json={"originalUrl": f"https://example.com/claim_{i}", "customName": "contested"},
            )
            for i in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses == [201] + [400] * (concurrency - 1)

        winner = next(r for r in responses if r.status_code == 201)
        record = await store.find_by_code("contested")
        assert winner.json()["shortCode"] == "contested"
        assert record.original_url.startswith("https://example.com/claim_")

    async def test_concurrent_redirects(self, client, service):
        """Concurrent GET /{code} requests all redirect to the same target."""
        create = await client.post(
            "/shorten",
            json={"originalUrl": "https://example.com/popular", "customName": "popular"},
        )
        assert create.status_code == 201

        concurrency = 40
        tasks = [client.get("/popular", follow_redirects=False) for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks)
        await service.redirects.wait_for_pending()

        for r in responses:
            assert r.status_code == 301
            assert r.headers["location"] == "https://example.com/popular"
