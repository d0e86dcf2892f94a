"""Guild entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Guild:
    """Guild - owner bypasses every permission check."""

    id: int
    owner_id: int

    @property
    def everyone_role_id(self) -> int:
        """The @everyone role shares the guild's id."""
        return self.id
