"""Location management endpoints"""

import uuid

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.modules.admins.models import Permission
from app.modules.audit.models import AuditEvent
from app.modules.locations.models import Location, LocationStatus
from app.modules.participants.models import EnrollmentStatus
from app.platform.adapters.audit_sink_http import HttpAuditSink
from app.platform.provider_registry import ProviderRegistry
from factories import (
    create_admin,
    create_app,
    create_location,
    create_site,
    create_study,
    enroll,
    headers_for,
)

URL = "/api/v1/locations"
BODY = {"customId": "LOC-100", "name": "North clinic", "description": "Second floor"}


async def audit_codes(session) -> list[str]:
    res = await session.execute(select(AuditEvent.event_code).order_by(AuditEvent.occurred))
    return list(res.scalars().all())


@pytest.mark.integration
class TestAddLocation:
    async def test_created(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.post(URL, json=BODY, headers=headers_for(admin))

        assert resp.status_code == 201
        data = resp.json()
        assert data["code"] == 201
        assert data["message"] == "New location added successfully"
        location_id = uuid.UUID(data["locationId"])

        obj = await session.get(Location, location_id)
        assert obj.custom_id == "LOC-100"
        assert obj.status == LocationStatus.ACTIVE
        assert obj.is_default is False
        assert obj.created_by == admin.id
        assert await audit_codes(session) == ["NEW_LOCATION_ADDED"]

    async def test_audit_record_carries_request_context(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        await client.post(URL, json=BODY, headers=headers_for(admin, correlationId="trace-77"))

        row = (await session.execute(select(AuditEvent))).scalar_one()
        assert row.correlation_id == "trace-77"
        assert row.user_id == str(admin.id)
        assert row.source == "PARTICIPANT_MANAGER"
        assert row.description == "New location added (location ID - LOC-100)."

    async def test_duplicate_custom_id(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        await create_location(session, "LOC-100")
        resp = await client.post(URL, json=BODY, headers=headers_for(admin))

        assert resp.status_code == 400
        assert resp.json()["error_code"] == "CUSTOM_ID_EXISTS"
        assert await audit_codes(session) == []

    async def test_requires_edit_permission(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session, manage_locations=Permission.READ_VIEW)
        resp = await client.post(URL, json=BODY, headers=headers_for(admin))

        assert resp.status_code == 403
        assert resp.json()["error_code"] == "LOCATION_ACCESS_DENIED"

    async def test_super_admin_without_permission_denied(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session, super_admin=True, manage_locations=Permission.NO_PERMISSION)
        resp = await client.post(URL, json=BODY, headers=headers_for(admin))
        assert resp.status_code == 403

    async def test_unknown_user(self, client: AsyncClient, session) -> None:
        resp = await client.post(URL, json=BODY, headers={"userId": str(uuid.uuid4())})
        assert resp.status_code == 401
        assert resp.json()["error_code"] == "USER_NOT_FOUND"

    async def test_missing_user_header(self, client: AsyncClient, db) -> None:
        resp = await client.post(URL, json=BODY)
        assert resp.status_code == 401

    async def test_validation_errors(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.post(URL, json={"customId": "", "name": "x"}, headers=headers_for(admin))

        assert resp.status_code == 400
        data = resp.json()
        assert data["error_code"] == "BAD_REQUEST"
        paths = {v["path"] for v in data["violations"]}
        assert "customId" in paths
        assert "description" in paths

    async def test_invalid_source_header(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.post(URL, json=BODY, headers=headers_for(admin, source="NOT_A_COMPONENT"))
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "INVALID_SOURCE_NAME"


@pytest.mark.integration
class TestUpdateLocation:
    async def test_edit_details(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session)
        resp = await client.put(f"{URL}/{loc.id}", json={"name": "Renamed"}, headers=headers_for(admin))

        assert resp.status_code == 200
        assert resp.json()["message"] == "Location updated successfully"
        await session.refresh(loc)
        assert loc.name == "Renamed"
        assert loc.description == "Downtown clinic"
        assert loc.updated_by == admin.id
        assert await audit_codes(session) == ["LOCATION_EDITED"]

    async def test_decommission(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session)
        resp = await client.put(f"{URL}/{loc.id}", json={"status": 0}, headers=headers_for(admin))

        assert resp.status_code == 200
        assert resp.json()["message"] == "Location decommissioned successfully"
        await session.refresh(loc)
        assert loc.status == LocationStatus.INACTIVE
        assert await audit_codes(session) == ["LOCATION_DECOMMISSIONED"]

    async def test_reactivate(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session, status=LocationStatus.INACTIVE)
        resp = await client.put(f"{URL}/{loc.id}", json={"status": 1}, headers=headers_for(admin))

        assert resp.status_code == 200
        assert resp.json()["message"] == "Location reactivated successfully"
        await session.refresh(loc)
        assert loc.status == LocationStatus.ACTIVE
        assert await audit_codes(session) == ["LOCATION_ACTIVATED"]

    async def test_cannot_reactivate_active(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session)
        resp = await client.put(f"{URL}/{loc.id}", json={"status": 1}, headers=headers_for(admin))
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "CANNOT_REACTIVATE"

    async def test_already_decommissioned(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session, status=LocationStatus.INACTIVE)
        resp = await client.put(f"{URL}/{loc.id}", json={"status": 0}, headers=headers_for(admin))
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "ALREADY_DECOMMISSIONED"

    async def test_default_location_is_read_only(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session, is_default=True)
        resp = await client.put(f"{URL}/{loc.id}", json={"name": "x"}, headers=headers_for(admin))
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "DEFAULT_SITE_MODIFY_DENIED"

    async def test_location_in_use(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session)
        study = await create_study(session, await create_app(session))
        site = await create_site(session, loc, study)
        await enroll(session, study, site=site, participant_id="P-1")

        resp = await client.put(f"{URL}/{loc.id}", json={"status": 0}, headers=headers_for(admin))
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "CANNOT_DECOMMISSION_LOCATION_IN_USE"
        await session.refresh(loc)
        assert loc.status == LocationStatus.ACTIVE

    async def test_withdrawn_participants_do_not_block(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session)
        study = await create_study(session, await create_app(session))
        site = await create_site(session, loc, study)
        await enroll(session, study, site=site, participant_id="P-1", status=EnrollmentStatus.WITHDRAWN)

        resp = await client.put(f"{URL}/{loc.id}", json={"status": 0}, headers=headers_for(admin))
        assert resp.status_code == 200

    async def test_not_found(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.put(f"{URL}/{uuid.uuid4()}", json={"name": "x"}, headers=headers_for(admin))
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "LOCATION_NOT_FOUND"


@pytest.mark.integration
class TestGetLocations:
    async def test_list_with_studies(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session, manage_locations=Permission.READ_VIEW)
        loc = await create_location(session, "LOC-A")
        await create_location(session, "LOC-B", status=LocationStatus.INACTIVE)
        study = await create_study(session, await create_app(session), name="Sleep study")
        await create_site(session, loc, study)

        resp = await client.get(URL, headers=headers_for(admin))
        assert resp.status_code == 200
        locations = {l["customId"]: l for l in resp.json()["locations"]}
        assert set(locations) == {"LOC-A", "LOC-B"}
        assert locations["LOC-A"]["studies"] == ["Sleep study"]
        assert locations["LOC-B"]["studies"] == []

    async def test_filter_by_status(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        await create_location(session, "LOC-A")
        await create_location(session, "LOC-B", status=LocationStatus.INACTIVE)

        resp = await client.get(URL, params={"status": 0}, headers=headers_for(admin))
        assert [l["customId"] for l in resp.json()["locations"]] == ["LOC-B"]

    async def test_get_one(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        loc = await create_location(session, "LOC-A")
        resp = await client.get(f"{URL}/{loc.id}", headers=headers_for(admin))

        assert resp.status_code == 200
        [item] = resp.json()["locations"]
        assert item["locationId"] == str(loc.id)
        assert item["isDefault"] is False

    async def test_get_one_missing(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.get(f"{URL}/{uuid.uuid4()}", headers=headers_for(admin))
        assert resp.status_code == 404

    async def test_no_permission(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session, manage_locations=Permission.NO_PERMISSION)
        resp = await client.get(URL, headers=headers_for(admin))
        assert resp.status_code == 403


@pytest.mark.integration
class TestLocationIds:
    async def test_put_with_foreign_id_format(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.put(f"{URL}/not-a-uuid", json={"name": "x"}, headers=headers_for(admin))
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "LOCATION_NOT_FOUND"

    async def test_get_with_foreign_id_format(self, client: AsyncClient, session) -> None:
        admin = await create_admin(session)
        resp = await client.get(f"{URL}/LOC-100", headers=headers_for(admin))
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "LOCATION_NOT_FOUND"


class RecordingSink:
    def __init__(self):
        self.events: list[dict] = []

    async def publish(self, event: dict) -> None:
        self.events.append(event)


@pytest.mark.integration
class TestAuditSinkDelivery:
    async def test_event_published_after_commit(self, client: AsyncClient, session) -> None:
        sink = RecordingSink()
        ProviderRegistry._audit_sink = sink
        admin = await create_admin(session)

        resp = await client.post(URL, json=BODY, headers=headers_for(admin))

        assert resp.status_code == 201
        assert [e["eventCode"] for e in sink.events] == ["NEW_LOCATION_ADDED"]
        assert sink.events[0]["userId"] == str(admin.id)

    async def test_failed_rollback_publishes_nothing(self, client: AsyncClient, session) -> None:
        sink = RecordingSink()
        ProviderRegistry._audit_sink = sink
        admin = await create_admin(session)
        await create_location(session, "LOC-100")

        resp = await client.post(URL, json=BODY, headers=headers_for(admin))

        assert resp.status_code == 400
        assert sink.events == []

    async def test_sink_outage_does_not_fail_request(self, client: AsyncClient, session) -> None:
        ProviderRegistry._audit_sink = HttpAuditSink(
            url="http://audit.local/events", transport=httpx.MockTransport(lambda r: httpx.Response(503))
        )
        admin = await create_admin(session)

        resp = await client.post(URL, json=BODY, headers=headers_for(admin))

        assert resp.status_code == 201
        obj = await session.get(Location, uuid.UUID(resp.json()["locationId"]))
        assert obj.custom_id == "LOC-100"
        assert await audit_codes(session) == ["NEW_LOCATION_ADDED"]
