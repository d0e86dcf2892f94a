"""Translate a successful overwrite edit into a PermissionOverwrite."""

import logging

from chatrest.application.dto.request import Request, Response
from chatrest.domain.entities import PermissionOverwrite

logger = logging.getLogger(__name__)


class OverwriteTranslator:
    """Builds the result of an overwrite edit from the body that was sent.

    The edit endpoint answers with an empty body, so the request body is the
    only record of what the server applied. That body was validated before
    dispatch, so translating it does not fail once the edit has been
    applied remotely. The subject kind comes from the action, not from the
    body.

    The translated entity is handed to the caller only. The channel cache is
    filled by the gateway's channel update events, and writing it here as
    well would race with them.
    """

    def __init__(self, channel_id: int, subject_id: int, is_role: bool) -> None:
        self._channel_id = channel_id
        self._subject_id = subject_id
        self._is_role = is_role

    def translate(self, response: Response, request: Request) -> PermissionOverwrite:
        body = request.body
        overwrite = PermissionOverwrite(
            channel_id=self._channel_id,
            subject_id=self._subject_id,
            is_role=self._is_role,
            allow=int(body["allow"]),
            deny=int(body["deny"]),
        )
        logger.debug(
            "Overwrite for %s in channel %s applied (status %s): allow=%s deny=%s",
            self._subject_id,
            self._channel_id,
            response.status,
            overwrite.allow,
            overwrite.deny,
        )
        return overwrite

    __call__ = translate
