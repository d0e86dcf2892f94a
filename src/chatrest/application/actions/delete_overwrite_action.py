"""Delete overwrite action."""

from chatrest.application.actions.rest_action import AuditableRestAction
from chatrest.application.authorization import AuthorizationGate, manage_permissions_gate
from chatrest.application.dto.request import Request, Response
from chatrest.application.ports import AuthorizationContext, Dispatcher
from chatrest.domain.entities import Channel, PermissionOverwrite
from chatrest.domain.exceptions import ValidationError
from chatrest.domain.value_objects import Routes


class DeleteOverwriteAction(AuditableRestAction[None]):
    """Removes one overwrite; the subject falls back to its guild permissions."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        channel: Channel,
        overwrite: PermissionOverwrite,
        *,
        context: AuthorizationContext,
    ) -> None:
        if overwrite.channel_id != channel.id:
            raise ValidationError("Overwrite does not belong to the given channel")
        super().__init__(
            dispatcher, Routes.DELETE_PERM_OVERRIDE.compile(channel.id, overwrite.subject_id)
        )
        self._channel = channel
        self._overwrite = overwrite
        self._context = context

    @property
    def overwrite(self) -> PermissionOverwrite:
        return self._overwrite

    def _default_gate(self) -> AuthorizationGate:
        return manage_permissions_gate(self._context, self._channel)

    def _handle_success(self, response: Response, request: Request) -> None:
        return None
