"""Unit tests for SelfMemberContext permission resolution."""

from chatrest.domain.entities import Channel, Guild, Member, PermissionOverwrite, Role
from chatrest.domain.value_objects import ALL_PERMISSIONS, ChannelType, Permission
from chatrest.infrastructure.authorization import SelfMemberContext
from chatrest.infrastructure.cache import InMemoryOverwriteCache

GUILD = Guild(id=1, owner_id=999)
TEXT = Channel(id=10, guild_id=1, type=ChannelType.TEXT)
VOICE = Channel(id=11, guild_id=1, type=ChannelType.VOICE)

EVERYONE = Role(id=1, guild_id=1, name="@everyone", permissions=int(Permission.VIEW_CHANNEL | Permission.CONNECT))
MODS = Role(id=2, guild_id=1, name="mods", permissions=int(Permission.MANAGE_ROLES))
ADMINS = Role(id=3, guild_id=1, name="admins", permissions=int(Permission.ADMINISTRATOR))


def _context(member: Member, *overwrites: PermissionOverwrite) -> SelfMemberContext:
    cache = InMemoryOverwriteCache()
    by_channel: dict[int, list[PermissionOverwrite]] = {}
    for overwrite in overwrites:
        by_channel.setdefault(overwrite.channel_id, []).append(overwrite)
    for channel_id, items in by_channel.items():
        cache.replace(channel_id, items)
    return SelfMemberContext(GUILD, member, [EVERYONE, MODS, ADMINS], cache)


def test_guild_permissions_combine_roles() -> None:
    context = _context(Member(id=5, guild_id=1, role_ids=frozenset({2})))

    assert context.guild_permissions() == int(
        Permission.VIEW_CHANNEL | Permission.CONNECT | Permission.MANAGE_ROLES
    )
    assert context.has_permission(TEXT, Permission.MANAGE_PERMISSIONS)
    assert context.has_access(VOICE)


def test_owner_and_administrator_have_everything() -> None:
    owner = _context(Member(id=999, guild_id=1))
    admin = _context(
        Member(id=5, guild_id=1, role_ids=frozenset({3})),
        PermissionOverwrite(channel_id=10, subject_id=3, is_role=True, deny=int(Permission.VIEW_CHANNEL)),
    )

    assert owner.channel_permissions(TEXT) == ALL_PERMISSIONS
    assert admin.channel_permissions(TEXT) == ALL_PERMISSIONS


def test_overwrite_precedence() -> None:
    """@everyone, then roles, then the member overwrite."""
    member = Member(id=5, guild_id=1, role_ids=frozenset({2}))
    context = _context(
        member,
        PermissionOverwrite(channel_id=10, subject_id=1, is_role=True, deny=int(Permission.VIEW_CHANNEL)),
        PermissionOverwrite(channel_id=10, subject_id=2, is_role=True, allow=int(Permission.VIEW_CHANNEL)),
        PermissionOverwrite(channel_id=10, subject_id=5, is_role=False, deny=int(Permission.MANAGE_ROLES)),
    )

    assert context.has_permission(TEXT, Permission.VIEW_CHANNEL)
    assert not context.has_permission(TEXT, Permission.MANAGE_PERMISSIONS)


def test_everyone_deny_hides_channel() -> None:
    context = _context(
        Member(id=5, guild_id=1),
        PermissionOverwrite(channel_id=10, subject_id=1, is_role=True, deny=int(Permission.VIEW_CHANNEL)),
    )

    assert not context.has_access(TEXT)


def test_voice_access_requires_connect() -> None:
    context = _context(
        Member(id=5, guild_id=1),
        PermissionOverwrite(channel_id=11, subject_id=5, is_role=False, deny=int(Permission.CONNECT)),
    )

    assert context.has_permission(VOICE, Permission.VIEW_CHANNEL)
    assert not context.has_access(VOICE)
    assert context.has_access(TEXT)


def test_role_updates_are_seen_immediately() -> None:
    context = _context(Member(id=5, guild_id=1, role_ids=frozenset({2})))

    context.update_role(Role(id=2, guild_id=1, name="mods", permissions=0))
    assert not context.has_permission(TEXT, Permission.MANAGE_ROLES)

    context.update_role(MODS)
    context.update_member(Member(id=5, guild_id=1))
    assert not context.has_permission(TEXT, Permission.MANAGE_ROLES)
