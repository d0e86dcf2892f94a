"""Member entity - user within a guild."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Member:
    """Guild member and the roles assigned to it."""

    id: int
    guild_id: int
    role_ids: frozenset[int] = field(default_factory=frozenset)
    nickname: str | None = None
