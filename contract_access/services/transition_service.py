# =====================================================
# FILE: contract_access/services/transition_service.py
# Contract Workflow Transitions and Next Action Resolution
# =====================================================

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from contract_access.schemas.snapshots import (
    ActorSnapshot,
    ApprovalSnapshot,
    ApprovalStatus,
    ContractAction,
    ContractSnapshot,
    ContractStatus,
    EntityId,
    NextAction,
    SignatureRequestSnapshot,
    SignatureStatus,
)
from contract_access.services.access_service import (
    effective_role_includes,
    is_contract_owner,
)

logger = logging.getLogger(__name__)

NO_ACTION = NextAction(action=None, label=None)

# Valid status transitions. Status changes themselves are applied by the
# caller; this table only says which ones are legal.
STATUS_TRANSITIONS: Dict[ContractStatus, Tuple[ContractStatus, ...]] = {
    ContractStatus.DRAFT: (ContractStatus.IN_REVIEW,),
    ContractStatus.IN_REVIEW: (
        ContractStatus.APPROVED,
        ContractStatus.REVISION_REQUESTED,
        ContractStatus.REJECTED,
    ),
    ContractStatus.REVISION_REQUESTED: (ContractStatus.DRAFT, ContractStatus.IN_REVIEW),
    ContractStatus.REJECTED: (),
    ContractStatus.APPROVED: (ContractStatus.SENT_FOR_SIGNATURE,),
    ContractStatus.SENT_FOR_SIGNATURE: (ContractStatus.SIGNED,),
    ContractStatus.SIGNED: (ContractStatus.ACTIVE, ContractStatus.ARCHIVED),
    ContractStatus.ACTIVE: (ContractStatus.ARCHIVED,),
    ContractStatus.ARCHIVED: (),
}

ACTIONABLE_SIGNATURE_STATUSES = (SignatureStatus.PENDING, SignatureStatus.SENT)


def parse_status(status) -> Optional[ContractStatus]:
    if isinstance(status, ContractStatus):
        return status
    if not isinstance(status, str):
        return None
    try:
        return ContractStatus(status.strip().upper())
    except ValueError:
        return None


def allowed_transitions(current_status) -> Tuple[ContractStatus, ...]:
    status = parse_status(current_status)
    if status is None:
        return ()
    return STATUS_TRANSITIONS[status]


def validate_status_transition(current_status, new_status) -> bool:
    """Check if status transition is valid"""
    target = parse_status(new_status)
    return target is not None and target in allowed_transitions(current_status)


# =====================================================
# Record selection
# =====================================================

def pending_approval_for(
    contract: ContractSnapshot,
    actor_id: EntityId
) -> Optional[ApprovalSnapshot]:
    """Earliest PENDING approval assigned to actor_id"""
    pending = [
        approval for approval in contract.approvals
        if approval.approver_id == actor_id and approval.status == ApprovalStatus.PENDING
    ]
    if not pending:
        return None
    # Undated rows keep their load order, after dated ones
    return min(pending, key=lambda a: (a.created_at is None, _as_utc(a.created_at)))


def _as_utc(value: Optional[datetime]) -> datetime:
    """Comparable instant; naive timestamps are read as UTC"""
    if value is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def actionable_signature_for(
    contract: ContractSnapshot,
    actor_id: EntityId
) -> Optional[SignatureRequestSnapshot]:
    """Lowest-order PENDING or SENT signature request of actor_id"""
    open_requests = [
        request for request in contract.signature_requests
        if request.user_id == actor_id and request.status in ACTIONABLE_SIGNATURE_STATUSES
    ]
    if not open_requests:
        return None
    return min(open_requests, key=lambda r: r.order)


# =====================================================
# Next action decision table
# =====================================================

Guard = Callable[[ContractSnapshot, ActorSnapshot], bool]


class TransitionRule(NamedTuple):
    action: ContractAction
    label: str
    guard: Guard


def _owner_or_editor(contract: ContractSnapshot, actor: ActorSnapshot) -> bool:
    return is_contract_owner(actor, contract) or effective_role_includes(actor, contract, "EDITOR")


def _has_pending_approval(contract: ContractSnapshot, actor: ActorSnapshot) -> bool:
    return pending_approval_for(contract, actor.id) is not None


def _has_open_signature(contract: ContractSnapshot, actor: ActorSnapshot) -> bool:
    return actionable_signature_for(contract, actor.id) is not None


# One row per status that offers an action; every other status offers none
NEXT_ACTION_RULES: Dict[ContractStatus, TransitionRule] = {
    ContractStatus.DRAFT: TransitionRule(
        ContractAction.REQUEST_APPROVAL, "Start approval flow", _owner_or_editor
    ),
    ContractStatus.IN_REVIEW: TransitionRule(
        ContractAction.APPROVE_CONTRACT, "Approve contract", _has_pending_approval
    ),
    ContractStatus.APPROVED: TransitionRule(
        ContractAction.SEND_FOR_SIGNATURE, "Send for signature", _owner_or_editor
    ),
    ContractStatus.SENT_FOR_SIGNATURE: TransitionRule(
        ContractAction.SIGN_DOCUMENT, "Sign contract", _has_open_signature
    ),
    ContractStatus.SIGNED: TransitionRule(
        ContractAction.ACTIVATE_CONTRACT, "Activate contract", _owner_or_editor
    ),
}


def next_action(contract: ContractSnapshot, actor: ActorSnapshot) -> NextAction:
    """
    The single workflow step the actor can take on contract right now.

    Returns NO_ACTION when the status has no rule or the rule's guard
    does not hold for this actor.
    """
    status = parse_status(contract.status)
    rule = NEXT_ACTION_RULES.get(status) if status is not None else None

    if rule is None or not rule.guard(contract, actor):
        logger.debug(
            f"No action for user {actor.id} on contract {contract.id} "
            f"(status {contract.status})"
        )
        return NO_ACTION

    logger.debug(f"Next action for user {actor.id} on contract {contract.id}: {rule.action.value}")
    return NextAction(action=rule.action, label=rule.label)
