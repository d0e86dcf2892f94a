"""Permission bits and the raw bitmask algebra built on them."""

from collections.abc import Iterable
from enum import IntFlag
from functools import reduce
from operator import or_

from chatrest.domain.exceptions import ValidationError


class Permission(IntFlag):
    """Single permission bits of the chat platform."""

    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_CHANNEL = 1 << 4
    MANAGE_SERVER = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    PRIORITY_SPEAKER = 1 << 8
    STREAM = 1 << 9
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    READ_MESSAGE_HISTORY = 1 << 16
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    VIEW_GUILD_INSIGHTS = 1 << 19
    CONNECT = 1 << 20
    SPEAK = 1 << 21
    MUTE_MEMBERS = 1 << 22
    DEAFEN_MEMBERS = 1 << 23
    MOVE_MEMBERS = 1 << 24
    USE_VOICE_ACTIVATION = 1 << 25
    CHANGE_NICKNAME = 1 << 26
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    MANAGE_EXPRESSIONS = 1 << 30
    USE_APPLICATION_COMMANDS = 1 << 31
    REQUEST_TO_SPEAK = 1 << 32
    MANAGE_EVENTS = 1 << 33
    MANAGE_THREADS = 1 << 34
    CREATE_PUBLIC_THREADS = 1 << 35
    CREATE_PRIVATE_THREADS = 1 << 36
    USE_EXTERNAL_STICKERS = 1 << 37
    SEND_MESSAGES_IN_THREADS = 1 << 38
    USE_EMBEDDED_ACTIVITIES = 1 << 39
    MODERATE_MEMBERS = 1 << 40
    USE_SOUNDBOARD = 1 << 42
    CREATE_EXPRESSIONS = 1 << 43
    USE_EXTERNAL_SOUNDS = 1 << 45
    SEND_VOICE_MESSAGES = 1 << 46

    # In a channel overwrite the MANAGE_ROLES bit reads as "manage permissions".
    MANAGE_PERMISSIONS = 1 << 28

    @classmethod
    def from_raw(cls, bits: int) -> set["Permission"]:
        """Return the set of permissions enabled in a raw bitmask."""
        return {p for p in cls if bits & p.value}

    @classmethod
    def to_raw(cls, permissions: Iterable["Permission"]) -> int:
        """Combine permissions into a raw bitmask."""
        return reduce(or_, (int(p) for p in permissions), 0)


ALL_PERMISSIONS: int = Permission.to_raw(Permission)


def check_raw(bits: int, name: str) -> int:
    """Validate a raw bitmask for use as an allow or deny value."""
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise ValidationError(f"{name} must be an integer bitmask")
    if bits < 0:
        raise ValidationError(f"{name} may not be negative")
    if bits > ALL_PERMISSIONS:
        raise ValidationError(
            f"{name} may not be greater than a full permission set ({ALL_PERMISSIONS})"
        )
    return int(bits)


def inherited(allow: int, deny: int) -> int:
    """Bits neither allowed nor denied, restricted to the valid range."""
    return ALL_PERMISSIONS & ~allow & ~deny
