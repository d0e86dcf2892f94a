"""Unit tests for the authorization gate and its use before sends."""

import pytest

from chatrest.application.authorization import (
    AuthorizationGate,
    manage_permissions_gate,
    require_access,
    require_permission,
)
from chatrest.domain.exceptions import (
    InsufficientPermission,
    MissingAccess,
    RequestCancelled,
)
from chatrest.domain.value_objects import Permission

from tests.conftest import FakeAuthorizationContext


def test_gate_evaluates_in_order_and_short_circuits() -> None:
    """Checks after the first False are not evaluated."""
    calls: list[str] = []

    def first() -> bool:
        calls.append("first")
        return False

    def second() -> bool:
        calls.append("second")
        return True

    gate = AuthorizationGate([first, second])

    assert gate.evaluate() is False
    assert calls == ["first"]


def test_gate_composition_is_and() -> None:
    """then and & append checks without mutating the original gate."""
    base = AuthorizationGate([lambda: True])
    extended = base.then(lambda: False)
    combined = base & AuthorizationGate([lambda: True])

    assert len(base) == 1
    assert base.evaluate() is True
    assert extended.evaluate() is False
    assert len(combined) == 2 and combined.evaluate() is True
    assert AuthorizationGate().evaluate() is True


def test_missing_view_and_manage_raises_missing_access(channel) -> None:
    """Lacking both view and manage reports the view failure first."""
    context = FakeAuthorizationContext(permissions=set())
    gate = manage_permissions_gate(context, channel)

    with pytest.raises(MissingAccess) as exc_info:
        gate.evaluate()

    assert not isinstance(exc_info.value, InsufficientPermission)
    assert exc_info.value.permission is Permission.VIEW_CHANNEL
    assert exc_info.value.channel is channel
    assert context.queries == [("VIEW_CHANNEL", channel.id)]


def test_missing_access_reports_connect(voice_channel) -> None:
    """A visible but unreachable channel fails on CONNECT."""
    context = FakeAuthorizationContext(
        permissions={Permission.VIEW_CHANNEL, Permission.MANAGE_PERMISSIONS}, access=False
    )

    with pytest.raises(MissingAccess) as exc_info:
        manage_permissions_gate(context, voice_channel).evaluate()

    assert exc_info.value.permission is Permission.CONNECT


def test_missing_manage_raises_insufficient_permission(channel) -> None:
    """Visible and reachable but not manageable is a distinct error."""
    context = FakeAuthorizationContext(permissions={Permission.VIEW_CHANNEL})

    with pytest.raises(InsufficientPermission) as exc_info:
        manage_permissions_gate(context, channel).evaluate()

    assert not isinstance(exc_info.value, MissingAccess)
    assert exc_info.value.permission is Permission.MANAGE_ROLES


def test_require_helpers_pass(channel) -> None:
    """Helpers return True when the context grants the capability."""
    context = FakeAuthorizationContext()
    assert require_permission(context, channel, Permission.VIEW_CHANNEL)() is True
    assert require_access(context, channel)() is True


@pytest.mark.asyncio
async def test_gate_failure_sends_nothing(role_action, dispatcher, context) -> None:
    """Authorization errors settle the send without calling the dispatcher."""
    context.permissions = {Permission.VIEW_CHANNEL}
    role_action.set_allow(8)

    with pytest.raises(InsufficientPermission):
        await role_action.execute()

    assert dispatcher.requests == []
    assert not role_action.allow_set


@pytest.mark.asyncio
async def test_gate_reads_state_at_send_time(role_action, dispatcher, context) -> None:
    """Permissions revoked after construction are seen by the next send."""
    context.permissions = set()
    with pytest.raises(MissingAccess):
        await role_action.execute()

    context.permissions = {
        Permission.VIEW_CHANNEL,
        Permission.CONNECT,
        Permission.MANAGE_PERMISSIONS,
    }
    await role_action.execute()
    assert len(dispatcher.requests) == 1


@pytest.mark.asyncio
async def test_caller_check_false_cancels(role_action, dispatcher) -> None:
    """A caller check returning False cancels without sending."""
    role_action.set_check(lambda: False)

    with pytest.raises(RequestCancelled):
        await role_action.execute()

    assert dispatcher.requests == []


@pytest.mark.asyncio
async def test_caller_check_runs_after_builtin_checks(role_action, context) -> None:
    """Built-in checks fail first; the caller check is not reached."""
    reached: list[bool] = []
    context.permissions = set()
    role_action.set_check(lambda: reached.append(True) or True)

    with pytest.raises(MissingAccess):
        await role_action.execute()

    assert reached == []


@pytest.mark.asyncio
async def test_set_gate_replaces_builtin_checks(role_action, dispatcher, context) -> None:
    """A replaced gate skips the built-in checks entirely."""
    context.permissions = set()
    role_action.set_gate(AuthorizationGate())

    await role_action.execute()

    assert len(dispatcher.requests) == 1
    assert context.queries == []

    role_action.set_gate(None)
    with pytest.raises(MissingAccess):
        await role_action.execute()
