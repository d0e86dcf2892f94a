"""Authorization context port - what the acting user may do."""

from typing import Protocol

from chatrest.domain.entities import Channel
from chatrest.domain.value_objects import Permission


class AuthorizationContext(Protocol):
    """Port for read-only permission queries against cached state."""

    def has_permission(self, channel: Channel, permission: Permission) -> bool: ...

    def has_access(self, channel: Channel) -> bool: ...
