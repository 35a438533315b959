# =====================================================
# FILE: contract_access/api/api_v1/access/router.py
# Access Decision API Routes
# =====================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from contract_access.api.api_v1.access.schemas import (
    ConditionEvaluationRequest,
    ConditionEvaluationResponse,
    PermissionsResponse,
    TransitionsResponse,
    VisibilityResponse,
)
from contract_access.core.database import get_db
from contract_access.core.dependencies import get_current_actor
from contract_access.core.exceptions import AuthorizationError, InvalidRoleError
from contract_access.core.permissions import Permission, effective_permissions, role_priority
from contract_access.core.roles import RoleTier
from contract_access.middleware.rbac_middleware import RBACDependency
from contract_access.schemas.snapshots import ActorSnapshot, ContractSnapshot, NextAction
from contract_access.services.access_service import (
    check_contract_access_or_raise,
    resolve_company_role,
)
from contract_access.services.condition_service import evaluate_conditions
from contract_access.services.snapshot_service import SnapshotService
from contract_access.services.transition_service import allowed_transitions, next_action
from contract_access.services.visibility_service import ALL_DEPARTMENTS, visible_departments

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/access", tags=["access"])


# =====================================================
# Helper Functions
# =====================================================

def load_accessible_contract(
    db: Session,
    contract_id: int,
    actor: ActorSnapshot
) -> ContractSnapshot:
    """Load a contract snapshot, 404 if missing and 403 if not accessible"""
    try:
        contract = SnapshotService(db).load_contract(contract_id)
    except InvalidRoleError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    if not contract:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contract not found"
        )

    try:
        check_contract_access_or_raise(actor, contract)
    except AuthorizationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return contract


# =====================================================
# API Endpoints
# =====================================================

@router.get("/permissions", response_model=PermissionsResponse)
async def get_permissions(
    company_id: Optional[int] = None,
    current_actor: ActorSnapshot = Depends(get_current_actor)
):
    """Effective permissions of the current actor, optionally inside a company"""
    company_role = resolve_company_role(current_actor, company_id)
    permissions = effective_permissions(current_actor.global_role, company_role)

    return PermissionsResponse(
        user_id=current_actor.id,
        global_role=current_actor.global_role.value,
        company_id=company_id,
        company_role=company_role.value if company_role else None,
        priority=role_priority(current_actor.global_role, RoleTier.GLOBAL),
        permissions=sorted(p.value for p in permissions),
    )


@router.get("/visible-departments", response_model=VisibilityResponse)
async def get_visible_departments(
    current_actor: ActorSnapshot = Depends(get_current_actor)
):
    """Departments the current actor may list users and resources from"""
    visibility = visible_departments(current_actor.department, current_actor.global_role)

    if visibility == ALL_DEPARTMENTS:
        return VisibilityResponse(all_departments=True)
    return VisibilityResponse(all_departments=False, departments=sorted(visibility))


@router.get("/contracts/{contract_id}/next-action", response_model=NextAction)
async def get_next_action(
    contract_id: int,
    db: Session = Depends(get_db),
    current_actor: ActorSnapshot = Depends(get_current_actor)
):
    """Next workflow step the current actor can take on a contract"""
    contract = load_accessible_contract(db, contract_id, current_actor)
    return next_action(contract, current_actor)


@router.get("/contracts/{contract_id}/transitions", response_model=TransitionsResponse)
async def get_allowed_transitions(
    contract_id: int,
    db: Session = Depends(get_db),
    current_actor: ActorSnapshot = Depends(get_current_actor)
):
    """Statuses a contract may legally move to from its current status"""
    contract = load_accessible_contract(db, contract_id, current_actor)

    return TransitionsResponse(
        contract_id=contract.id,
        status=contract.status,
        allowed_statuses=[s.value for s in allowed_transitions(contract.status)],
    )


@router.post("/conditions/evaluate", response_model=ConditionEvaluationResponse)
async def evaluate_workflow_conditions(
    payload: ConditionEvaluationRequest,
    current_actor: ActorSnapshot = Depends(RBACDependency(Permission.TEMPLATE_VIEW))
):
    """Evaluate workflow step conditions against a record"""
    result = evaluate_conditions(payload.conditions, payload.record)
    logger.debug(f"Condition check by user {current_actor.id}: {result}")
    return ConditionEvaluationResponse(result=result)
