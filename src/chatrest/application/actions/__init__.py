"""REST actions."""

from chatrest.application.actions.delete_overwrite_action import DeleteOverwriteAction
from chatrest.application.actions.permission_overwrite_action import PermissionOverwriteAction
from chatrest.application.actions.rest_action import (
    ActionState,
    AuditableRestAction,
    RestAction,
)

__all__ = [
    "ActionState",
    "AuditableRestAction",
    "DeleteOverwriteAction",
    "PermissionOverwriteAction",
    "RestAction",
]
