"""Permission overwrite action - create or edit one channel overwrite."""

import logging
from typing import Any, Self

from chatrest.application.actions.rest_action import AuditableRestAction
from chatrest.application.authorization import AuthorizationGate, manage_permissions_gate
from chatrest.application.dto.request import Request, Response
from chatrest.application.ports import AuthorizationContext, Dispatcher, OverwriteCache
from chatrest.application.translators import OverwriteTranslator
from chatrest.domain.entities import (
    Channel,
    Member,
    PermissionHolder,
    PermissionOverwrite,
    Role,
)
from chatrest.domain.exceptions import ValidationError
from chatrest.domain.value_objects import (
    OverwriteType,
    Permission,
    Route,
    Routes,
    check_raw,
    inherited,
)

logger = logging.getLogger(__name__)


class PermissionOverwriteAction(AuditableRestAction[PermissionOverwrite]):
    """Accumulates allow/deny edits for one subject and sends them as a full overwrite.

    The remote endpoint replaces both masks on every call. A field the caller
    did not set in the current edit cycle is filled in from
    ``get_current_allow`` / ``get_current_deny``: ``0`` in override mode
    (the default), the cached remote value in patch mode
    (``set_override(False)``).

    ``allow`` and ``deny`` stay disjoint: setting one mask clears its bits
    from the other.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        channel: Channel,
        subject_id: int,
        is_role: bool,
        *,
        cache: OverwriteCache,
        context: AuthorizationContext,
        holder: PermissionHolder | None = None,
        route: Route = Routes.CREATE_PERM_OVERRIDE,
    ) -> None:
        super().__init__(dispatcher, route.compile(channel.id, subject_id))
        self._channel = channel
        self._subject_id = subject_id
        self._is_role = is_role
        self._holder = holder
        self._cache = cache
        self._context = context
        self._translator = OverwriteTranslator(channel.id, subject_id, is_role)
        self._is_override = True
        # None means "not set this cycle"
        self._allow: int | None = None
        self._deny: int | None = None

    @classmethod
    def for_holder(
        cls,
        dispatcher: Dispatcher,
        channel: Channel,
        holder: PermissionHolder,
        *,
        cache: OverwriteCache,
        context: AuthorizationContext,
    ) -> "PermissionOverwriteAction":
        """Action creating (or replacing) the overwrite of ``holder`` in ``channel``."""
        if holder.guild_id != channel.guild_id:
            raise ValidationError("Permission holder must belong to the channel's guild")
        return cls(
            dispatcher,
            channel,
            holder.id,
            isinstance(holder, Role),
            cache=cache,
            context=context,
            holder=holder,
        )

    @classmethod
    def for_overwrite(
        cls,
        dispatcher: Dispatcher,
        channel: Channel,
        overwrite: PermissionOverwrite,
        *,
        cache: OverwriteCache,
        context: AuthorizationContext,
        holder: PermissionHolder | None = None,
    ) -> "PermissionOverwriteAction":
        """Action editing an existing overwrite."""
        if overwrite.channel_id != channel.id:
            raise ValidationError("Overwrite does not belong to the given channel")
        return cls(
            dispatcher,
            channel,
            overwrite.subject_id,
            overwrite.is_role,
            cache=cache,
            context=context,
            holder=holder,
            route=Routes.MODIFY_PERM_OVERRIDE,
        )

    # --- subject ---

    @property
    def channel(self) -> Channel:
        return self._channel

    @property
    def subject_id(self) -> int:
        return self._subject_id

    @property
    def holder(self) -> PermissionHolder | None:
        return self._holder

    @property
    def role(self) -> Role | None:
        return self._holder if isinstance(self._holder, Role) else None

    @property
    def member(self) -> Member | None:
        return self._holder if isinstance(self._holder, Member) else None

    @property
    def is_role(self) -> bool:
        return self._is_role

    @property
    def is_member(self) -> bool:
        return not self._is_role

    # --- mode ---

    @property
    def is_override(self) -> bool:
        return self._is_override

    def set_override(self, override: bool) -> Self:
        """True replaces unset fields with 0, False keeps their cached remote value."""
        self._is_override = override
        return self

    # --- masks ---

    @property
    def allow_set(self) -> bool:
        return self._allow is not None

    @property
    def deny_set(self) -> bool:
        return self._deny is not None

    @property
    def allow(self) -> int:
        if self._allow is not None:
            return self._allow
        # A pending deny wins over the cached allow.
        return self.get_current_allow() & ~(self._deny or 0)

    @property
    def deny(self) -> int:
        if self._deny is not None:
            return self._deny
        return self.get_current_deny() & ~(self._allow or 0)

    @property
    def inherited(self) -> int:
        return inherited(self.allow, self.deny)

    @property
    def allowed(self) -> set[Permission]:
        return Permission.from_raw(self.allow)

    @property
    def denied(self) -> set[Permission]:
        return Permission.from_raw(self.deny)

    def get_current_allow(self) -> int:
        current = self._current()
        return current.allow if current is not None else 0

    def get_current_deny(self) -> int:
        current = self._current()
        return current.deny if current is not None else 0

    def _current(self) -> PermissionOverwrite | None:
        if self._is_override:
            return None
        return self._cache.lookup(self._channel.id, self._subject_id)

    def set_allow(self, bits: int) -> Self:
        """Allow exactly ``bits``; those bits are removed from deny."""
        bits = check_raw(bits, "Granted permissions value")
        self._store(allow=bits, deny=self.deny & ~bits)
        return self

    def set_deny(self, bits: int) -> Self:
        """Deny exactly ``bits``; those bits are removed from allow."""
        bits = check_raw(bits, "Denied permissions value")
        self._store(allow=self.allow & ~bits, deny=bits)
        return self

    def set_permissions(self, allow_bits: int, deny_bits: int) -> Self:
        """``set_allow`` then ``set_deny``; a bit in both ends up denied."""
        check_raw(allow_bits, "Granted permissions value")
        check_raw(deny_bits, "Denied permissions value")
        return self.set_allow(allow_bits).set_deny(deny_bits)

    def grant(self, *permissions: Permission) -> Self:
        """Add permissions to the current allow mask."""
        return self.set_allow(self.allow | Permission.to_raw(permissions))

    def forbid(self, *permissions: Permission) -> Self:
        """Add permissions to the current deny mask."""
        return self.set_deny(self.deny | Permission.to_raw(permissions))

    def clear(self, *permissions: Permission) -> Self:
        """Make permissions inherited again."""
        raw = Permission.to_raw(permissions)
        self._store(allow=self.allow & ~raw, deny=self.deny & ~raw)
        return self

    def reset_allow(self) -> Self:
        """Discard the pending allow edit.

        Allow reverts to its current value; those bits are removed from a
        pending deny.
        """
        self._allow = None
        if self._deny is not None:
            self._deny &= ~self.get_current_allow()
        return self

    def reset_deny(self) -> Self:
        """Discard the pending deny edit; the restored bits leave a pending allow."""
        self._deny = None
        if self._allow is not None:
            self._allow &= ~self.get_current_deny()
        return self

    def _store(self, allow: int, deny: int) -> None:
        # Both masks are written together so they can never overlap.
        self._allow = allow
        self._deny = deny

    # --- sending ---

    def build_body(self) -> dict[str, Any]:
        """Payload the next send would carry."""
        allow, deny = self.allow, self.deny
        if allow & deny:
            raise ValidationError("Allow and deny permissions may not overlap")
        return {
            "type": str(OverwriteType.ROLE if self._is_role else OverwriteType.MEMBER),
            "allow": allow,
            "deny": deny,
        }

    def _default_gate(self) -> AuthorizationGate:
        return manage_permissions_gate(self._context, self._channel)

    def _build_body(self) -> dict[str, Any]:
        return self.build_body()

    def _handle_success(self, response: Response, request: Request) -> PermissionOverwrite:
        return self._translator.translate(response, request)

    def _reset(self) -> None:
        super()._reset()
        self._allow = None
        self._deny = None
