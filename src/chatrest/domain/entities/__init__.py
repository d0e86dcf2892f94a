"""Domain entities."""

from chatrest.domain.entities.channel import Channel
from chatrest.domain.entities.guild import Guild
from chatrest.domain.entities.member import Member
from chatrest.domain.entities.permission_overwrite import PermissionOverwrite
from chatrest.domain.entities.role import Role

PermissionHolder = Role | Member

__all__ = [
    "Channel",
    "Guild",
    "Member",
    "PermissionHolder",
    "PermissionOverwrite",
    "Role",
]
