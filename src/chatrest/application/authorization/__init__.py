"""Pre-send authorization."""

from chatrest.application.authorization.gate import (
    AuthorizationGate,
    Check,
    manage_permissions_gate,
    require_access,
    require_permission,
)

__all__ = [
    "AuthorizationGate",
    "Check",
    "manage_permissions_gate",
    "require_access",
    "require_permission",
]
