"""
Access decision engine.

Answers one question per request: may this actor perform this operation on a
resource owned by ``target_owner_id``? Admins always may. Everybody else may
only act on their own records, and may only list when the query names them
as owner.

Existence of the target is NOT part of the decision: callers resolve the
resource (and raise NotFoundError) before asking.
"""

import logging
from typing import Optional

from music_commerce.access.schemas import AccessRequest, Actor, Decision, Operation, Reason
from music_commerce.errors import UnauthorizedError

logger = logging.getLogger(__name__)

PRIVILEGED = Decision(allowed=True, reason=Reason.PRIVILEGED)
SELF = Decision(allowed=True, reason=Reason.SELF)
DENIED_NOT_OWNER = Decision(allowed=False, reason=Reason.DENIED_NOT_OWNER)
DENIED_MISSING_FILTER = Decision(allowed=False, reason=Reason.DENIED_MISSING_FILTER)


def decide(actor: Actor, operation: Operation, target_owner_id: Optional[str]) -> Decision:
    """
    Decide whether ``actor`` may perform ``operation``.

    Args:
        actor: Authenticated caller
        operation: Operation being attempted
        target_owner_id: Owner of the target resource; for LIST the owner
            named by the query filter, or None when the query names nobody

    Returns:
        Decision with its reason code
    """
    if actor.is_privileged:
        return PRIVILEGED

    if target_owner_id is None:
        if operation is Operation.LIST:
            return DENIED_MISSING_FILTER
        return DENIED_NOT_OWNER

    # ids may arrive as str from queries and as other scalars from storage
    if str(target_owner_id) == str(actor.id):
        return SELF
    return DENIED_NOT_OWNER


def evaluate(request: AccessRequest) -> Decision:
    """Decide an AccessRequest value"""
    return decide(request.actor, request.operation, request.target_owner_id)


def enforce(request: AccessRequest, message: str) -> Decision:
    """
    Decide and raise UnauthorizedError on denial.

    The reason code travels on the exception (and in the logs) while the
    caller-facing message stays generic.
    """
    decision = evaluate(request)
    logger.debug(
        f"{request.operation.value} by {request.actor.id} ({request.actor.role.value}) "
        f"on owner {request.target_owner_id}: {decision.reason.value}"
    )
    if not decision.allowed:
        logger.info(
            f"Denied {request.operation.value} for actor {request.actor.id}: {decision.reason.value}"
        )
        raise UnauthorizedError(message, reason=decision.reason)
    return decision
