# =====================================================
# FILE: contract_access/core/dependencies.py
# Request-scoped dependencies
# =====================================================

import logging

from fastapi import HTTPException, Request, status

from contract_access.schemas.snapshots import ActorSnapshot

logger = logging.getLogger(__name__)


async def get_current_actor(request: Request) -> ActorSnapshot:
    """
    Actor placed on request.state.actor by the host's authentication layer.

    No credentials are checked here; a request without an actor is
    rejected as unauthenticated.
    """
    actor = getattr(request.state, "actor", None)

    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )

    if not isinstance(actor, ActorSnapshot):
        actor = ActorSnapshot.model_validate(actor)

    return actor
