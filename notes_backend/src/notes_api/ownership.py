"""
Ownership gate for notes requests.

Every notes operation names an owner (``user`` in the path or body). The
operation may only run when that owner is exactly the username carried by
the caller's verified token.
"""

import enum
import logging
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DENIAL_MESSAGE = "You're not authorized to make this request"


class Decision(enum.Enum):
    AUTHORIZED = "authorized"
    DENIED = "denied"


class NotAuthorized(Exception):
    """Raised when the caller does not own the requested resource."""

    def __init__(self, caller: str, target: str):
        super().__init__(DENIAL_MESSAGE)
        self.caller = caller
        self.target = target


# PUBLIC_INTERFACE
def check(caller: str, target: str) -> Decision:
    """Exact, case-sensitive comparison of caller identity and resource owner."""
    if isinstance(caller, str) and isinstance(target, str) and caller == target:
        return Decision.AUTHORIZED
    return Decision.DENIED


# PUBLIC_INTERFACE
def authorize(caller: str, target: str) -> None:
    """Raises NotAuthorized unless `caller` owns `target`."""
    if check(caller, target) is Decision.DENIED:
        logger.warning("Denied request by %r for resources of %r", caller, target)
        raise NotAuthorized(caller, target)


# PUBLIC_INTERFACE
def guard(caller: str, target: str, operation: Callable[[], T]) -> T:
    """
    Runs `operation` exactly once if `caller` owns `target`.

    On denial the operation is never called and NotAuthorized is raised.
    """
    authorize(caller, target)
    return operation()
