"""Authorization gate - ordered pre-send checks."""

from collections.abc import Callable, Iterable

from chatrest.application.ports import AuthorizationContext
from chatrest.domain.entities import Channel
from chatrest.domain.exceptions import InsufficientPermission, MissingAccess
from chatrest.domain.value_objects import Permission

# A check raises to fail with a specific error, or returns False to cancel.
Check = Callable[[], bool]


class AuthorizationGate:
    """Chain of checks evaluated in order right before a request is sent.

    Gates are immutable; ``then`` and ``&`` return a new gate. Evaluation
    stops at the first check that raises or returns False.
    """

    def __init__(self, checks: Iterable[Check] = ()) -> None:
        self._checks: tuple[Check, ...] = tuple(checks)

    @property
    def checks(self) -> tuple[Check, ...]:
        return self._checks

    def then(self, check: Check) -> "AuthorizationGate":
        """Gate that additionally requires ``check`` after the current ones."""
        return AuthorizationGate((*self._checks, check))

    def __and__(self, other: "AuthorizationGate | Check") -> "AuthorizationGate":
        if isinstance(other, AuthorizationGate):
            return AuthorizationGate((*self._checks, *other.checks))
        return self.then(other)

    def evaluate(self) -> bool:
        """Run every check; False means the request must not be sent."""
        for check in self._checks:
            if not check():
                return False
        return True

    def __len__(self) -> int:
        return len(self._checks)


def require_permission(
    context: AuthorizationContext,
    channel: Channel,
    permission: Permission,
    error: type[MissingAccess] | type[InsufficientPermission] = InsufficientPermission,
) -> Check:
    """Check that raises ``error`` unless the actor holds ``permission`` in ``channel``."""

    def _check() -> bool:
        if not context.has_permission(channel, permission):
            raise error(channel, permission)
        return True

    return _check


def require_access(context: AuthorizationContext, channel: Channel) -> Check:
    """Check that raises MissingAccess unless the actor can reach ``channel``."""

    def _check() -> bool:
        if not context.has_access(channel):
            raise MissingAccess(channel, Permission.CONNECT)
        return True

    return _check


def manage_permissions_gate(context: AuthorizationContext, channel: Channel) -> AuthorizationGate:
    """View, then access, then manage-permissions, in that order."""
    return AuthorizationGate(
        [
            require_permission(context, channel, Permission.VIEW_CHANNEL, MissingAccess),
            require_access(context, channel),
            require_permission(context, channel, Permission.MANAGE_PERMISSIONS),
        ]
    )
