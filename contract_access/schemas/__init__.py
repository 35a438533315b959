# =====================================================
# FILE: contract_access/schemas/__init__.py
# =====================================================

from contract_access.schemas.snapshots import (
    ActorSnapshot,
    ApprovalSnapshot,
    ApprovalStatus,
    CompanyMembershipSnapshot,
    Condition,
    ConditionOperator,
    ContractAction,
    ContractSnapshot,
    ContractStatus,
    NextAction,
    SignatureRequestSnapshot,
    SignatureStatus,
)

__all__ = [
    # Actors
    "ActorSnapshot",
    "CompanyMembershipSnapshot",

    # Contracts
    "ContractSnapshot",
    "ContractStatus",
    "ContractAction",
    "ApprovalSnapshot",
    "ApprovalStatus",
    "SignatureRequestSnapshot",
    "SignatureStatus",
    "NextAction",

    # Conditions
    "Condition",
    "ConditionOperator",
]
