"""
Notes App Backend — Health Endpoint Tests
===========================================
"""

import pytest

from notes_app import __version__


@pytest.mark.asyncio
async def test_health_with_empty_store(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["store"] == "readable"
    assert body["note_count"] == 0
    assert body["version"] == __version__


@pytest.mark.asyncio
async def test_health_counts_notes(test_client, seeded_store):
    response = await test_client.get("/health")
    assert response.json()["note_count"] == 3


@pytest.mark.asyncio
async def test_health_with_corrupt_store(test_client, store_path):
    store_path.write_text("{", encoding="utf-8")

    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "unhealthy"
    assert response.json()["store"] == "unreadable"
    assert response.json()["note_count"] is None
