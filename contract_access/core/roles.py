# =====================================================
# FILE: contract_access/core/roles.py
# Role Hierarchy Definitions (global, company, department)
# =====================================================

from enum import Enum
from typing import Dict, Tuple, Type, Union

from contract_access.core.exceptions import InvalidRoleError


class RoleTier(str, Enum):
    GLOBAL = "global"
    COMPANY = "company"
    DEPARTMENT = "department"


class GlobalRole(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


class CompanyRole(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


class DepartmentRole(str, Enum):
    HEAD = "HEAD"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"


AnyRole = Union[GlobalRole, CompanyRole, DepartmentRole, str]

TIER_ROLES: Dict[RoleTier, Type[Enum]] = {
    RoleTier.GLOBAL: GlobalRole,
    RoleTier.COMPANY: CompanyRole,
    RoleTier.DEPARTMENT: DepartmentRole,
}

# Lowest rank first
ROLE_ORDER: Dict[RoleTier, Tuple[Enum, ...]] = {
    RoleTier.GLOBAL: (GlobalRole.VIEWER, GlobalRole.EDITOR, GlobalRole.ADMIN),
    RoleTier.COMPANY: (
        CompanyRole.VIEWER,
        CompanyRole.EDITOR,
        CompanyRole.ADMIN,
        CompanyRole.OWNER,
    ),
    RoleTier.DEPARTMENT: (
        DepartmentRole.MEMBER,
        DepartmentRole.MANAGER,
        DepartmentRole.HEAD,
    ),
}

# Every role holds the permissions of the roles it includes
ROLE_HIERARCHY: Dict[GlobalRole, Tuple[GlobalRole, ...]] = {
    GlobalRole.ADMIN: (GlobalRole.ADMIN, GlobalRole.EDITOR, GlobalRole.VIEWER),
    GlobalRole.EDITOR: (GlobalRole.EDITOR, GlobalRole.VIEWER),
    GlobalRole.VIEWER: (GlobalRole.VIEWER,),
}


def parse_role(role: AnyRole, tier: RoleTier = RoleTier.GLOBAL) -> Enum:
    """Return the enum member for role within tier, or raise InvalidRoleError"""
    tier = RoleTier(tier)
    role_enum = TIER_ROLES[tier]

    if isinstance(role, role_enum):
        return role
    # A member of another tier never matches, even when the token is shared
    if isinstance(role, Enum):
        raise InvalidRoleError(role.value, tier.value)
    if not isinstance(role, str):
        raise InvalidRoleError(role, tier.value)

    try:
        return role_enum(role.strip().upper())
    except ValueError:
        raise InvalidRoleError(role, tier.value) from None


def rank(role: AnyRole, tier: RoleTier = RoleTier.GLOBAL) -> int:
    """Rank of role within its tier, 1 being the lowest"""
    tier = RoleTier(tier)
    return ROLE_ORDER[tier].index(parse_role(role, tier)) + 1


def includes(
    candidate_role: AnyRole,
    required_role: AnyRole,
    tier: RoleTier = RoleTier.GLOBAL
) -> bool:
    """True if candidate_role holds every capability of required_role"""
    return rank(candidate_role, tier) >= rank(required_role, tier)


def included_roles(role: AnyRole, tier: RoleTier = RoleTier.GLOBAL) -> Tuple[Enum, ...]:
    """Roles whose capabilities are held by role (itself included)"""
    tier = RoleTier(tier)
    parsed = parse_role(role, tier)
    if tier == RoleTier.GLOBAL:
        return ROLE_HIERARCHY[parsed]
    order = ROLE_ORDER[tier]
    return tuple(reversed(order[:order.index(parsed) + 1]))
