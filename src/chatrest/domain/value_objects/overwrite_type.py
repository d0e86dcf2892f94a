"""Permission overwrite subject kinds."""

from enum import StrEnum


class OverwriteType(StrEnum):
    """Subject an overwrite applies to, as named on the wire."""

    ROLE = "role"
    MEMBER = "member"

    @classmethod
    def from_wire(cls, value: str | int) -> "OverwriteType":
        """Accept both the string form and the numeric gateway form (0 = role, 1 = member)."""
        if isinstance(value, int):
            return cls.ROLE if value == 0 else cls.MEMBER
        return cls(value)
