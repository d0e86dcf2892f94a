"""Client entry point and composition root."""

import logging

from chatrest import __version__
from chatrest.application.services import OverwriteService
from chatrest.config import Settings, get_settings
from chatrest.domain.entities import Guild, Member, Role
from chatrest.infrastructure.authorization import SelfMemberContext
from chatrest.infrastructure.cache import InMemoryOverwriteCache
from chatrest.infrastructure.http import HttpxDispatcher

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Root logging setup for applications embedding the client."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class ChatClient:
    """Holds the shared dispatcher and cache of one bot session."""

    def __init__(self, settings: Settings, dispatcher: HttpxDispatcher) -> None:
        self.settings = settings
        self.dispatcher = dispatcher
        self.overwrite_cache = InMemoryOverwriteCache()

    def overwrites(
        self, guild: Guild, self_member: Member, roles: list[Role]
    ) -> OverwriteService:
        """Overwrite actions performed as ``self_member`` in ``guild``."""
        context = SelfMemberContext(guild, self_member, roles, self.overwrite_cache)
        return OverwriteService(self.dispatcher, self.overwrite_cache, context)

    async def aclose(self) -> None:
        await self.dispatcher.aclose()

    async def __aenter__(self) -> "ChatClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_client(settings: Settings | None = None) -> ChatClient:
    """Composition root - build a client with all dependencies."""
    settings = settings or get_settings()
    dispatcher = HttpxDispatcher(
        settings.api_url,
        settings.token,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
    logger.debug("Client created for %s (%s)", settings.api_url, settings.environment)
    return ChatClient(settings, dispatcher)


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    print(f"chatrest v{__version__}")
