"""Channel kinds."""

from enum import IntEnum


class ChannelType(IntEnum):
    """Guild channel types as numbered by the platform."""

    TEXT = 0
    VOICE = 2
    CATEGORY = 4
    NEWS = 5
    STAGE = 13
    FORUM = 15

    @property
    def is_audio(self) -> bool:
        """Voice-like channels require CONNECT to be accessible."""
        return self in (ChannelType.VOICE, ChannelType.STAGE)
