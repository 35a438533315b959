# =====================================================
# FILE: contract_access/services/visibility_service.py
# Department Visibility Filter
# =====================================================

import logging
from typing import FrozenSet, Iterable, Optional, Union

from sqlalchemy import true
from sqlalchemy.sql.elements import ColumnElement

from contract_access.core.config import settings
from contract_access.core.roles import AnyRole, GlobalRole, RoleTier, parse_role

logger = logging.getLogger(__name__)

ALL_DEPARTMENTS = "ALL"

Visibility = Union[str, FrozenSet[str]]


def visible_departments(
    actor_department: Optional[str],
    actor_global_role: AnyRole,
    head_office_department: Optional[str] = None,
    always_visible_departments: Optional[Iterable[str]] = None
) -> Visibility:
    """
    Departments whose users and resources the actor may enumerate.

    Returns ALL_DEPARTMENTS for global admins and head office members,
    otherwise the actor's own department plus the always-visible ones.
    The head office label and always-visible list default to settings.
    """
    if head_office_department is None:
        head_office_department = settings.HEAD_OFFICE_DEPARTMENT
    if always_visible_departments is None:
        always_visible_departments = settings.ALWAYS_VISIBLE_DEPARTMENTS

    role = parse_role(actor_global_role, RoleTier.GLOBAL)
    if role == GlobalRole.ADMIN:
        return ALL_DEPARTMENTS

    department = actor_department.strip() if actor_department else None
    if department and department == head_office_department:
        return ALL_DEPARTMENTS

    departments = set(always_visible_departments)
    if department:
        departments.add(department)
    else:
        logger.debug("Actor has no department, limiting to always-visible departments")

    return frozenset(departments)


def can_view_department(visibility: Visibility, department: Optional[str]) -> bool:
    if visibility == ALL_DEPARTMENTS:
        return True
    return department is not None and department in visibility


def department_filter(column: ColumnElement, visibility: Visibility) -> ColumnElement:
    """
    SQLAlchemy criterion restricting column to the visible departments.

    Usage: query.filter(department_filter(User.department, visibility))
    """
    if visibility == ALL_DEPARTMENTS:
        return true()
    return column.in_(sorted(visibility))
