"""Authorization contexts."""

from chatrest.infrastructure.authorization.self_member_context import SelfMemberContext

__all__ = ["SelfMemberContext"]
