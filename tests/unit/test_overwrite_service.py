"""Unit tests for OverwriteService."""

import pytest

from chatrest.application.services import OverwriteService
from chatrest.domain.exceptions import ValidationError

from tests.conftest import CHANNEL_ID, ROLE_ID


@pytest.fixture
def service(dispatcher, cache, context) -> OverwriteService:
    return OverwriteService(dispatcher, cache, context)


def test_create_uses_override_mode(service, channel, role) -> None:
    action = service.create_overwrite(channel, role)

    assert action.is_override
    assert action.role is role


def test_create_rejects_existing_overwrite(service, channel, role, existing_overwrite) -> None:
    with pytest.raises(ValidationError, match="already exists"):
        service.create_overwrite(channel, role)


@pytest.mark.asyncio
async def test_upsert_keeps_unset_fields(service, channel, role, dispatcher, existing_overwrite) -> None:
    """Upsert only changes what the caller set."""
    result = await service.upsert_overwrite(channel, role).set_deny(16).execute()

    assert dispatcher.bodies == [{"type": "role", "allow": 4, "deny": 16}]
    assert (result.allow, result.deny) == (4, 16)


@pytest.mark.asyncio
async def test_edit_replaces_whole_overwrite(service, channel, dispatcher, existing_overwrite) -> None:
    await service.edit_overwrite(channel, existing_overwrite).set_allow(1).execute()

    assert dispatcher.bodies == [{"type": "role", "allow": 1, "deny": 0}]


@pytest.mark.asyncio
async def test_delete_sends_no_body(service, channel, dispatcher, existing_overwrite) -> None:
    action = service.delete_overwrite(channel, existing_overwrite).reason("cleanup")

    assert await action.execute() is None

    request = dispatcher.requests[0]
    assert request.method == "DELETE"
    assert request.path == f"/channels/{CHANNEL_ID}/permissions/{ROLE_ID}"
    assert request.body is None
    assert request.headers["X-Audit-Log-Reason"] == "cleanup"
