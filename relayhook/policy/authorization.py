from __future__ import annotations

import logging

from relayhook.core.state import Keyspace
from relayhook.errors.errors import Unauthorized
from relayhook.types.aliases import Principal

logger = logging.getLogger(__name__)


class AuthorizationRegistry:
    """
    Flat ACL over principals (no roles, no expiry).
    Unknown principals are not authorized. Membership only changes through
    set_authorization by an already authorized caller, plus the one-time
    bootstrap of the owner.
    """

    def __init__(self, keyspace: Keyspace) -> None:
        self._keyspace = keyspace

    def bootstrap(self, owner: Principal) -> None:
        if not owner:
            raise ValueError("owner must be a non-empty principal")
        self._keyspace.put(owner, True)
        logger.info(f"Bootstrap principal authorized: {owner}")

    def is_authorized(self, principal: Principal) -> bool:
        return bool(self._keyspace.get(principal, False))

    def require(self, caller: Principal, operation: str) -> None:
        if not self.is_authorized(caller):
            logger.warning(
                "unauthorized_call",
                extra={"event": "unauthorized_call", "caller": caller, "operation": operation},
            )
            raise Unauthorized(caller, operation=operation, component="AuthorizationRegistry")

    def set_authorization(self, caller: Principal, target: Principal, value: bool) -> None:
        self.require(caller, "set_authorization")
        if not target:
            raise ValueError("target must be a non-empty principal")
        self._keyspace.put(target, bool(value))
        logger.info(f"Authorization for {target} set to {bool(value)} by {caller}")

    def principals(self) -> list[Principal]:
        """Currently authorized principals, sorted."""
        return [p for p, flag in self._keyspace.items() if flag]
