"""Permission overwrite entity - per-channel allow/deny for a role or member."""

from dataclasses import dataclass

from chatrest.domain.exceptions import ValidationError
from chatrest.domain.value_objects import OverwriteType, Permission, check_raw, inherited


@dataclass(frozen=True)
class PermissionOverwrite:
    """Allow and deny bitmasks of one subject in one channel.

    ``allow`` and ``deny`` never share a bit. Bits in neither set are
    inherited from the subject's guild-level permissions.
    """

    channel_id: int
    subject_id: int
    is_role: bool
    allow: int = 0
    deny: int = 0

    def __post_init__(self) -> None:
        check_raw(self.allow, "Allowed permissions value")
        check_raw(self.deny, "Denied permissions value")
        if self.allow & self.deny:
            raise ValidationError("Allow and deny permissions may not overlap")

    @property
    def is_member(self) -> bool:
        return not self.is_role

    @property
    def type(self) -> OverwriteType:
        return OverwriteType.ROLE if self.is_role else OverwriteType.MEMBER

    @property
    def inherited(self) -> int:
        return inherited(self.allow, self.deny)

    @property
    def allowed(self) -> set[Permission]:
        return Permission.from_raw(self.allow)

    @property
    def denied(self) -> set[Permission]:
        return Permission.from_raw(self.deny)

    @property
    def inherited_set(self) -> set[Permission]:
        return Permission.from_raw(self.inherited)

    @classmethod
    def from_payload(cls, channel_id: int, data: dict) -> "PermissionOverwrite":
        """Build from a wire overwrite object ({"id", "type", "allow", "deny"})."""
        return cls(
            channel_id=channel_id,
            subject_id=int(data["id"]),
            is_role=OverwriteType.from_wire(data["type"]) is OverwriteType.ROLE,
            allow=int(data.get("allow", 0)),
            deny=int(data.get("deny", 0)),
        )
