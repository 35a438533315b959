"""
Access API Pydantic Schemas
File: contract_access/api/api_v1/access/schemas.py
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from contract_access.schemas.snapshots import Condition


class PermissionsResponse(BaseModel):
    """Effective permissions of the current actor"""
    user_id: Any
    global_role: str
    company_id: Optional[int] = None
    company_role: Optional[str] = None
    priority: int
    permissions: List[str] = []


class VisibilityResponse(BaseModel):
    all_departments: bool
    departments: List[str] = []


class TransitionsResponse(BaseModel):
    contract_id: Any
    status: str
    allowed_statuses: List[str] = []


class ConditionEvaluationRequest(BaseModel):
    conditions: List[Condition] = Field(default=[], description="AND-combined predicates")
    record: Dict[str, Any] = Field(default={}, description="Flat record the predicates read")

    class Config:
        json_schema_extra = {
            "example": {
                "conditions": [
                    {"field": "value", "operator": "GREATER_THAN", "value": 100000},
                    {"field": "type", "operator": "EQUALS", "value": "NDA"}
                ],
                "record": {"value": "250000", "type": "NDA"}
            }
        }


class ConditionEvaluationResponse(BaseModel):
    result: bool
