"""Authorization context computed from cached guild state of the acting member."""

from collections.abc import Iterable, Mapping

from chatrest.domain.entities import Channel, Guild, Member, Role
from chatrest.domain.value_objects import ALL_PERMISSIONS, Permission
from chatrest.infrastructure.cache import InMemoryOverwriteCache


class SelfMemberContext:
    """Answers permission queries for the client's own member in one guild."""

    def __init__(
        self,
        guild: Guild,
        member: Member,
        roles: Iterable[Role],
        overwrites: InMemoryOverwriteCache,
    ) -> None:
        self._guild = guild
        self._member = member
        self._roles: dict[int, Role] = {r.id: r for r in roles}
        self._overwrites = overwrites

    @property
    def roles(self) -> Mapping[int, Role]:
        return self._roles

    def update_member(self, member: Member) -> None:
        self._member = member

    def update_role(self, role: Role) -> None:
        self._roles[role.id] = role

    def remove_role(self, role_id: int) -> None:
        self._roles.pop(role_id, None)

    def guild_permissions(self) -> int:
        """Guild-level permissions: @everyone plus every assigned role."""
        if self._member.id == self._guild.owner_id:
            return ALL_PERMISSIONS
        everyone = self._roles.get(self._guild.everyone_role_id)
        raw = everyone.permissions if everyone else 0
        for role_id in self._member.role_ids:
            role = self._roles.get(role_id)
            if role is not None:
                raw |= role.permissions
        if raw & Permission.ADMINISTRATOR:
            return ALL_PERMISSIONS
        return raw

    def channel_permissions(self, channel: Channel) -> int:
        """Guild permissions with the channel's overwrites applied."""
        raw = self.guild_permissions()
        if raw == ALL_PERMISSIONS:
            return raw

        # Order: @everyone, then all member roles combined, then the member itself.
        everyone = self._overwrites.lookup(channel.id, self._guild.everyone_role_id)
        if everyone is not None:
            raw = (raw & ~everyone.deny) | everyone.allow

        allow = deny = 0
        for role_id in self._member.role_ids:
            overwrite = self._overwrites.lookup(channel.id, role_id)
            if overwrite is not None:
                allow |= overwrite.allow
                deny |= overwrite.deny
        raw = (raw & ~deny) | allow

        own = self._overwrites.lookup(channel.id, self._member.id)
        if own is not None:
            raw = (raw & ~own.deny) | own.allow
        return raw

    def has_permission(self, channel: Channel, permission: Permission) -> bool:
        return (self.channel_permissions(channel) & permission) == permission

    def has_access(self, channel: Channel) -> bool:
        if not self.has_permission(channel, Permission.VIEW_CHANNEL):
            return False
        if channel.type.is_audio:
            return self.has_permission(channel, Permission.CONNECT)
        return True
