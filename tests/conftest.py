"""Pytest fixtures for chatrest tests."""

from __future__ import annotations

import asyncio

import pytest

from chatrest.application.actions import PermissionOverwriteAction
from chatrest.application.dto.request import Request, Response
from chatrest.domain.entities import Channel, Member, PermissionOverwrite, Role
from chatrest.domain.value_objects import ChannelType, Permission

GUILD_ID = 100
CHANNEL_ID = 200
ROLE_ID = 300
MEMBER_ID = 400


# --- Fakes ---


class FakeDispatcher:
    """In-memory dispatcher that records requests instead of sending them."""

    def __init__(self) -> None:
        self.requests: list[Request] = []
        self.response = Response(status=204)
        self.error: BaseException | None = None
        self.delay: float = 0.0

    async def execute(self, request: Request) -> Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def bodies(self) -> list[dict | None]:
        return [r.body for r in self.requests]


class FakeOverwriteCache:
    """In-memory overwrite cache keyed by (channel_id, subject_id)."""

    def __init__(self) -> None:
        self._store: dict[tuple[int, int], PermissionOverwrite] = {}
        self.lookups = 0

    def lookup(self, channel_id: int, subject_id: int) -> PermissionOverwrite | None:
        self.lookups += 1
        return self._store.get((channel_id, subject_id))

    def add(self, overwrite: PermissionOverwrite) -> None:
        """Helper to seed the cache for tests."""
        self._store[(overwrite.channel_id, overwrite.subject_id)] = overwrite


class FakeAuthorizationContext:
    """Authorization context granting a configurable permission set."""

    def __init__(self, permissions: set[Permission] | None = None, access: bool = True) -> None:
        self.permissions = (
            set(permissions)
            if permissions is not None
            else {Permission.VIEW_CHANNEL, Permission.CONNECT, Permission.MANAGE_PERMISSIONS}
        )
        self.access = access
        self.queries: list[tuple[str, int]] = []

    def has_permission(self, channel: Channel, permission: Permission) -> bool:
        self.queries.append((permission.name, channel.id))
        return permission in self.permissions

    def has_access(self, channel: Channel) -> bool:
        self.queries.append(("access", channel.id))
        return self.access


# --- Fixtures ---


@pytest.fixture
def channel() -> Channel:
    return Channel(id=CHANNEL_ID, guild_id=GUILD_ID, name="general", type=ChannelType.TEXT)


@pytest.fixture
def voice_channel() -> Channel:
    return Channel(id=CHANNEL_ID + 1, guild_id=GUILD_ID, name="lounge", type=ChannelType.VOICE)


@pytest.fixture
def role() -> Role:
    return Role(id=ROLE_ID, guild_id=GUILD_ID, name="moderators")


@pytest.fixture
def member() -> Member:
    return Member(id=MEMBER_ID, guild_id=GUILD_ID, role_ids=frozenset({ROLE_ID}))


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def cache() -> FakeOverwriteCache:
    return FakeOverwriteCache()


@pytest.fixture
def context() -> FakeAuthorizationContext:
    return FakeAuthorizationContext()


@pytest.fixture
def role_action(dispatcher, channel, role, cache, context) -> PermissionOverwriteAction:
    """Create-mode action for a role subject."""
    return PermissionOverwriteAction.for_holder(
        dispatcher, channel, role, cache=cache, context=context
    )


@pytest.fixture
def existing_overwrite(cache) -> PermissionOverwrite:
    """Cached role overwrite with allow=4, deny=2."""
    overwrite = PermissionOverwrite(
        channel_id=CHANNEL_ID, subject_id=ROLE_ID, is_role=True, allow=4, deny=2
    )
    cache.add(overwrite)
    return overwrite
