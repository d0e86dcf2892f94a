"""Role entity - guild-wide permission holder."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Role:
    """Role with its guild-level permission bitmask."""

    id: int
    guild_id: int
    name: str = ""
    permissions: int = 0
    position: int = 0

    @property
    def is_public(self) -> bool:
        """True for the @everyone role."""
        return self.id == self.guild_id
