"""Overwrite service - entry points for permission overwrite actions."""

from chatrest.application.actions import DeleteOverwriteAction, PermissionOverwriteAction
from chatrest.application.ports import AuthorizationContext, Dispatcher, OverwriteCache
from chatrest.domain.entities import Channel, PermissionHolder, PermissionOverwrite
from chatrest.domain.exceptions import ValidationError


class OverwriteService:
    """Builds overwrite actions bound to a dispatcher, cache and actor context."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        cache: OverwriteCache,
        context: AuthorizationContext,
    ) -> None:
        self._dispatcher = dispatcher
        self._cache = cache
        self._context = context

    def create_overwrite(
        self, channel: Channel, holder: PermissionHolder
    ) -> PermissionOverwriteAction:
        """New overwrite for ``holder``; masks left unset are sent as 0."""
        if self._cache.lookup(channel.id, holder.id) is not None:
            raise ValidationError(
                f"Overwrite for {holder.id} already exists in channel {channel.id}"
            )
        return PermissionOverwriteAction.for_holder(
            self._dispatcher, channel, holder, cache=self._cache, context=self._context
        )

    def upsert_overwrite(
        self, channel: Channel, holder: PermissionHolder
    ) -> PermissionOverwriteAction:
        """Create or update; masks left unset keep their current remote value."""
        return PermissionOverwriteAction.for_holder(
            self._dispatcher, channel, holder, cache=self._cache, context=self._context
        ).set_override(False)

    def edit_overwrite(
        self,
        channel: Channel,
        overwrite: PermissionOverwrite,
        holder: PermissionHolder | None = None,
    ) -> PermissionOverwriteAction:
        """Replace an existing overwrite."""
        return PermissionOverwriteAction.for_overwrite(
            self._dispatcher,
            channel,
            overwrite,
            cache=self._cache,
            context=self._context,
            holder=holder,
        )

    def delete_overwrite(
        self, channel: Channel, overwrite: PermissionOverwrite
    ) -> DeleteOverwriteAction:
        return DeleteOverwriteAction(
            self._dispatcher, channel, overwrite, context=self._context
        )
