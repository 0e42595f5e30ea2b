"""Audit event browsing and request plumbing"""

import logging

import pytest
from httpx import AsyncClient

from factories import create_admin, headers_for

URL = "/api/v1/audit-events"


@pytest.mark.integration
class TestAuditEvents:
    async def test_super_admin_sees_events(self, client: AsyncClient, session) -> None:
        root = await create_admin(session, "root@example.com", super_admin=True)
        body = {"customId": "LOC-1", "name": "Main", "description": "HQ"}
        await client.post("/api/v1/locations", json=body, headers=headers_for(root))
        await client.post("/api/v1/locations", json={**body, "customId": "LOC-2"}, headers=headers_for(root))

        resp = await client.get(URL, headers=headers_for(root))
        assert resp.status_code == 200
        events = resp.json()
        assert [e["eventCode"] for e in events] == ["NEW_LOCATION_ADDED", "NEW_LOCATION_ADDED"]
        assert events[0]["userId"] == str(root.id)
        assert events[0]["destination"] == "PARTICIPANT_DATASTORE"

    async def test_filters(self, client: AsyncClient, session) -> None:
        root = await create_admin(session, "root@example.com", super_admin=True)
        await client.post("/api/v1/locations", json={"customId": "LOC-1", "name": "Main", "description": "HQ"},
                          headers=headers_for(root))

        resp = await client.get(URL, params={"eventCode": "LOCATION_EDITED"}, headers=headers_for(root))
        assert resp.json() == []
        resp = await client.get(URL, params={"userId": str(root.id), "limit": 1}, headers=headers_for(root))
        assert len(resp.json()) == 1

    async def test_regular_admin_denied(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.get(URL, headers=headers_for(admin))
        assert resp.status_code == 403
        assert resp.json()["error_code"] == "AUDIT_ACCESS_DENIED"


@pytest.mark.integration
class TestHealth:
    async def test_health(self, client: AsyncClient, db) -> None:
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    async def test_request_log_carries_correlation_id(self, client: AsyncClient, db, caplog) -> None:
        caplog.set_level(logging.INFO, logger="app.main")
        await client.get("/api/v1/health", headers={"correlationId": "trace-42"})

        records = [r for r in caplog.records if r.name == "app.main"]
        assert records
        assert records[-1].request_id == "trace-42"
