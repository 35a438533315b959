# =====================================================
# FILE: contract_access/services/snapshot_service.py
# Read-only loading of actor and contract snapshots
# =====================================================

from typing import Dict, Optional
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_access.core.roles import CompanyRole, RoleTier, parse_role
from contract_access.schemas.snapshots import (
    ActorSnapshot,
    ApprovalSnapshot,
    CompanyMembershipSnapshot,
    ContractSnapshot,
    EntityId,
    SignatureRequestSnapshot,
)

logger = logging.getLogger(__name__)


class SnapshotService:
    """
    Builds the snapshots the access core decides on.

    Every query is a read; nothing here writes to the store.
    """

    def __init__(self, db: Session):
        self.db = db

    def load_actor(self, user_id: EntityId) -> Optional[ActorSnapshot]:
        try:
            user = self.db.execute(text("""
                SELECT id, user_role, department, department_role
                FROM users
                WHERE id = :user_id
            """), {"user_id": user_id}).first()

            if not user:
                return None

            roles: Dict[EntityId, CompanyRole] = {}

            member_rows = self.db.execute(text("""
                SELECT company_id, role
                FROM company_users
                WHERE user_id = :user_id
            """), {"user_id": user_id}).fetchall()
            for row in member_rows:
                roles[row.company_id] = parse_role(row.role, RoleTier.COMPANY)

            # Creating a company makes the user its owner, with or without a row
            owned_rows = self.db.execute(text("""
                SELECT id FROM companies WHERE created_by = :user_id
            """), {"user_id": user_id}).fetchall()
            for row in owned_rows:
                roles[row.id] = CompanyRole.OWNER

        except SQLAlchemyError as e:
            logger.error(f"Error loading actor {user_id}: {e}")
            raise

        department_role = None
        if user.department_role:
            department_role = parse_role(user.department_role, RoleTier.DEPARTMENT)

        return ActorSnapshot(
            id=user.id,
            global_role=parse_role(user.user_role, RoleTier.GLOBAL),
            department=user.department,
            department_role=department_role,
            company_memberships=[
                CompanyMembershipSnapshot(company_id=company_id, company_role=role)
                for company_id, role in sorted(roles.items(), key=lambda item: str(item[0]))
            ],
        )

    def load_contract(self, contract_id: EntityId) -> Optional[ContractSnapshot]:
        try:
            contract = self.db.execute(text("""
                SELECT c.id, c.status, c.created_by, c.company_id,
                       co.created_by AS company_owner_id
                FROM contracts c
                LEFT JOIN companies co ON co.id = c.company_id
                WHERE c.id = :contract_id
            """), {"contract_id": contract_id}).first()

            if not contract:
                return None

            approval_rows = self.db.execute(text("""
                SELECT id, approver_id, status, created_at
                FROM contract_approvals
                WHERE contract_id = :contract_id
                ORDER BY created_at, id
            """), {"contract_id": contract_id}).fetchall()

            signature_rows = self.db.execute(text("""
                SELECT id, user_id, status, signing_order
                FROM contract_signatures
                WHERE contract_id = :contract_id
                ORDER BY signing_order, id
            """), {"contract_id": contract_id}).fetchall()

        except SQLAlchemyError as e:
            logger.error(f"Error loading contract {contract_id}: {e}")
            raise

        return ContractSnapshot(
            id=contract.id,
            status=contract.status,
            created_by_id=contract.created_by,
            company_id=contract.company_id,
            company_owner_id=contract.company_owner_id,
            approvals=[
                ApprovalSnapshot(
                    id=row.id,
                    approver_id=row.approver_id,
                    status=row.status,
                    created_at=row.created_at,
                )
                for row in approval_rows
            ],
            signature_requests=[
                SignatureRequestSnapshot(
                    id=row.id,
                    user_id=row.user_id,
                    status=row.status,
                    order=row.signing_order or 0,
                )
                for row in signature_rows
            ],
        )
