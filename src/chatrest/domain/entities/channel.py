"""Channel entity - scope of permission overwrites."""

from dataclasses import dataclass

from chatrest.domain.value_objects import ChannelType


@dataclass(frozen=True)
class Channel:
    """Guild channel."""

    id: int
    guild_id: int
    name: str = ""
    type: ChannelType = ChannelType.TEXT
