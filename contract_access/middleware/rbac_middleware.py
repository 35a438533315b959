# =====================================================
# FILE: contract_access/middleware/rbac_middleware.py
# Role-Based Access Control Dependencies
# =====================================================

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status

from contract_access.core.dependencies import get_current_actor
from contract_access.core.permissions import Permission
from contract_access.core.roles import AnyRole, RoleTier, includes, parse_role
from contract_access.schemas.snapshots import ActorSnapshot
from contract_access.services.access_service import actor_permissions

logger = logging.getLogger(__name__)


class RBACDependency:
    """
    Dependency class for RBAC checks in FastAPI
    Usage: Depends(RBACDependency(Permission.CONTRACT_CREATE))

    Passes when the actor holds any of the listed permissions. A
    company_id query parameter adds the actor's role in that company.
    """
    def __init__(self, *permissions: Permission):
        self.permissions = permissions

    async def __call__(
        self,
        company_id: Optional[int] = None,
        current_actor: ActorSnapshot = Depends(get_current_actor)
    ) -> ActorSnapshot:
        granted = actor_permissions(current_actor, company_id)

        if not any(perm in granted for perm in self.permissions):
            logger.warning(
                f"Access denied for user {current_actor.id}. "
                f"Required: {[p.value for p in self.permissions]}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied. Required: {[p.value for p in self.permissions]}"
            )

        return current_actor


def require_role(minimum_role: AnyRole):
    """
    Dependency factory requiring a global role at or above minimum_role
    Usage: Depends(require_role("EDITOR"))
    """
    required = parse_role(minimum_role, RoleTier.GLOBAL)

    async def check_role(
        current_actor: ActorSnapshot = Depends(get_current_actor)
    ) -> ActorSnapshot:
        if not includes(current_actor.global_role, required, RoleTier.GLOBAL):
            logger.warning(
                f"Role {current_actor.global_role.value} of user {current_actor.id} "
                f"is below {required.value}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role required: {required.value}"
            )
        return current_actor

    return check_role
