"""Domain exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chatrest.domain.entities import Channel
    from chatrest.domain.value_objects import Permission


class ChatRestError(Exception):
    """Base exception for chatrest."""

    pass


class ValidationError(ChatRestError):
    """Caller supplied an invalid value; raised before any network activity."""

    pass


class MissingAccess(ChatRestError):
    """Actor cannot see or reach the channel."""

    def __init__(self, channel: Channel, permission: Permission) -> None:
        self.channel = channel
        self.permission = permission
        super().__init__(
            f"Cannot access channel {channel.id} without permission {permission.name}"
        )


class InsufficientPermission(ChatRestError):
    """Actor can see the channel but lacks the permission needed to change it."""

    def __init__(self, channel: Channel, permission: Permission) -> None:
        self.channel = channel
        self.permission = permission
        super().__init__(
            f"Missing permission {permission.name} in channel {channel.id}"
        )


class RequestCancelled(ChatRestError):
    """A pre-send check returned False; nothing was sent."""

    pass


class RequestTimeout(ChatRestError):
    """The request did not settle before its timeout or deadline."""

    pass


class DispatchError(ChatRestError):
    """Transport-level failure reported by a dispatcher."""

    pass


class HTTPException(DispatchError):
    """Remote API answered with a non-success status."""

    def __init__(self, status: int, body: Any = None) -> None:
        self.status = status
        self.body = body
        self.code = 0
        message = ""
        if isinstance(body, dict):
            self.code = int(body.get("code", 0) or 0)
            message = str(body.get("message", ""))
        elif body:
            message = str(body)
        self.text = message
        super().__init__(f"{status} (error code: {self.code}): {message}".rstrip(": "))


class RateLimited(HTTPException):
    """Rate limit retries were exhausted."""

    def __init__(self, retry_after: float, body: Any = None) -> None:
        self.retry_after = retry_after
        super().__init__(429, body)
