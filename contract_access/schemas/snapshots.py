"""
Snapshot Schemas
File: contract_access/schemas/snapshots.py
Description: Read-only views of actors and contracts supplied by the caller
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, validator

from contract_access.core.roles import CompanyRole, DepartmentRole, GlobalRole

EntityId = Union[int, str]


# =====================================================
# STATUS ENUMS
# =====================================================

class ContractStatus(str, Enum):
    DRAFT = "DRAFT"
    IN_REVIEW = "IN_REVIEW"
    REVISION_REQUESTED = "REVISION_REQUESTED"
    REJECTED = "REJECTED"
    APPROVED = "APPROVED"
    SENT_FOR_SIGNATURE = "SENT_FOR_SIGNATURE"
    SIGNED = "SIGNED"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REVISION_REQUESTED = "REVISION_REQUESTED"


class SignatureStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    SIGNED = "SIGNED"
    DECLINED = "DECLINED"


class ContractAction(str, Enum):
    REQUEST_APPROVAL = "REQUEST_APPROVAL"
    APPROVE_CONTRACT = "APPROVE_CONTRACT"
    SEND_FOR_SIGNATURE = "SEND_FOR_SIGNATURE"
    SIGN_DOCUMENT = "SIGN_DOCUMENT"
    ACTIVATE_CONTRACT = "ACTIVATE_CONTRACT"


class ConditionOperator(str, Enum):
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    CONTAINS = "CONTAINS"


# =====================================================
# ACTOR SNAPSHOTS
# =====================================================

class CompanyMembershipSnapshot(BaseModel):
    """Actor's role inside one company"""
    company_id: EntityId
    company_role: CompanyRole

    class Config:
        frozen = True
        from_attributes = True


class ActorSnapshot(BaseModel):
    """The acting user, as loaded for a single decision"""
    id: EntityId
    global_role: GlobalRole
    department: Optional[str] = None
    department_role: Optional[DepartmentRole] = None
    company_memberships: List[CompanyMembershipSnapshot] = Field(default_factory=list)

    @validator("company_memberships", pre=True)
    def default_memberships(cls, v):
        return v or []

    def membership_for(self, company_id: Optional[EntityId]) -> Optional[CompanyMembershipSnapshot]:
        if company_id is None:
            return None
        for membership in self.company_memberships:
            if membership.company_id == company_id:
                return membership
        return None

    class Config:
        frozen = True
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 7,
                "global_role": "EDITOR",
                "department": "Satın Alma",
                "department_role": "MANAGER",
                "company_memberships": [
                    {"company_id": 3, "company_role": "ADMIN"}
                ]
            }
        }


# =====================================================
# CONTRACT SNAPSHOTS
# =====================================================

class ApprovalSnapshot(BaseModel):
    id: Optional[EntityId] = None
    approver_id: EntityId
    status: ApprovalStatus
    created_at: Optional[datetime] = None

    class Config:
        frozen = True
        from_attributes = True


class SignatureRequestSnapshot(BaseModel):
    id: Optional[EntityId] = None
    user_id: EntityId
    status: SignatureStatus
    order: int = 0

    class Config:
        frozen = True
        from_attributes = True


class ContractSnapshot(BaseModel):
    """Contract with its approvals and signature requests, read in one pass"""
    id: EntityId
    # Kept as text so unknown statuses resolve to "no action" instead of failing
    status: str
    created_by_id: EntityId
    company_id: Optional[EntityId] = None
    company_owner_id: Optional[EntityId] = None
    approvals: List[ApprovalSnapshot] = Field(default_factory=list)
    signature_requests: List[SignatureRequestSnapshot] = Field(default_factory=list)

    @validator("status", pre=True)
    def normalize_status(cls, v):
        if isinstance(v, Enum):
            return v.value
        return v

    @validator("approvals", "signature_requests", pre=True)
    def missing_relations_are_empty(cls, v):
        return v or []

    class Config:
        frozen = True
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 42,
                "status": "IN_REVIEW",
                "created_by_id": 7,
                "company_id": 3,
                "approvals": [
                    {"approver_id": 9, "status": "PENDING", "created_at": "2025-01-10T09:00:00"}
                ],
                "signature_requests": []
            }
        }


# =====================================================
# CONDITIONS
# =====================================================

class Condition(BaseModel):
    """Single field/operator/value predicate of a workflow gate"""
    field: str
    # Free text: unknown operators must reach the evaluator and fail closed
    operator: str
    value: Any = None

    class Config:
        frozen = True


class NextAction(BaseModel):
    """Single workflow step offered to an actor, or none"""
    action: Optional[ContractAction] = None
    label: Optional[str] = None

    class Config:
        frozen = True
