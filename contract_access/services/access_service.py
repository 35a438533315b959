# =====================================================
# FILE: contract_access/services/access_service.py
# Company Role Resolution and Contract Access Checks
# =====================================================

import logging
from typing import Optional

from contract_access.core.exceptions import AuthorizationError
from contract_access.core.permissions import (
    Permission,
    PermissionSet,
    effective_permissions,
)
from contract_access.core.roles import (
    AnyRole,
    CompanyRole,
    GlobalRole,
    RoleTier,
    includes,
    parse_role,
)
from contract_access.schemas.snapshots import (
    ActorSnapshot,
    ContractSnapshot,
    EntityId,
)

logger = logging.getLogger(__name__)

# Global and company tiers share this floor for "may edit" decisions
EDITOR_TOKEN = "EDITOR"


def resolve_company_role(
    actor: ActorSnapshot,
    company_id: Optional[EntityId],
    company_owner_id: Optional[EntityId] = None
) -> Optional[CompanyRole]:
    """
    Actor's role in a company: OWNER for the company's creator, otherwise
    the membership role, otherwise None.
    """
    if company_id is None:
        return None
    if company_owner_id is not None and company_owner_id == actor.id:
        return CompanyRole.OWNER
    membership = actor.membership_for(company_id)
    if membership:
        return membership.company_role
    return None


def actor_permissions(
    actor: ActorSnapshot,
    company_id: Optional[EntityId] = None,
    company_owner_id: Optional[EntityId] = None
) -> PermissionSet:
    company_role = resolve_company_role(actor, company_id, company_owner_id)
    return effective_permissions(actor.global_role, company_role)


def effective_role_includes(
    actor: ActorSnapshot,
    contract: ContractSnapshot,
    required_role: AnyRole = EDITOR_TOKEN
) -> bool:
    """
    True if the actor's global role or their role in the contract's company
    reaches required_role. The two are a union: a lesser company role
    never hides a higher global role.
    """
    if includes(actor.global_role, parse_role(required_role, RoleTier.GLOBAL), RoleTier.GLOBAL):
        return True

    company_role = resolve_company_role(actor, contract.company_id, contract.company_owner_id)
    if company_role is None:
        return False
    return includes(company_role, parse_role(required_role, RoleTier.COMPANY), RoleTier.COMPANY)


def is_contract_owner(actor: ActorSnapshot, contract: ContractSnapshot) -> bool:
    return contract.created_by_id == actor.id


def is_assigned_party(actor: ActorSnapshot, contract: ContractSnapshot) -> bool:
    """True if the actor has an approval or signature row on the contract, in any status"""
    return (
        any(approval.approver_id == actor.id for approval in contract.approvals)
        or any(request.user_id == actor.id for request in contract.signature_requests)
    )


def can_access_contract(actor: ActorSnapshot, contract: ContractSnapshot) -> bool:
    """
    Owner, company creator or member, assigned approver or signer, a global
    editor or a view-all role may access a contract.
    """
    if is_contract_owner(actor, contract):
        return True
    if Permission.CONTRACT_VIEW_ALL in effective_permissions(actor.global_role):
        return True
    if includes(actor.global_role, GlobalRole.EDITOR, RoleTier.GLOBAL):
        return True
    if is_assigned_party(actor, contract):
        return True
    return resolve_company_role(actor, contract.company_id, contract.company_owner_id) is not None


def check_contract_access_or_raise(actor: ActorSnapshot, contract: ContractSnapshot) -> None:
    if not can_access_contract(actor, contract):
        logger.warning(f"Contract access denied for user {actor.id} on contract {contract.id}")
        raise AuthorizationError("Contract access denied")
