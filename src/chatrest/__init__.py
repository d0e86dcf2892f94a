"""chatrest - asynchronous request-execution core for a chat-platform API client."""

__version__ = "0.1.0"
