# =====================================================
# FILE: contract_access/core/permissions.py
# Role-Based Access Control Permission Definitions
# =====================================================

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Set

from contract_access.core.roles import (
    AnyRole,
    CompanyRole,
    DepartmentRole,
    GlobalRole,
    RoleTier,
    included_roles,
    parse_role,
)


class Permission(str, Enum):
    # User Management
    USER_VIEW = "user.view"
    USER_CREATE = "user.create"
    USER_UPDATE = "user.update"
    USER_DELETE = "user.delete"
    USER_ROLES_MANAGE = "user.roles.manage"

    # Company Management
    COMPANY_VIEW = "company.view"
    COMPANY_CREATE = "company.create"
    COMPANY_UPDATE = "company.update"
    COMPANY_DELETE = "company.delete"
    COMPANY_SETTINGS_MANAGE = "company.settings.manage"
    COMPANY_MEMBERS_MANAGE = "company.members.manage"
    COMPANY_INVITES_MANAGE = "company.invites.manage"

    # Contract Permissions
    CONTRACT_VIEW = "contract.view"
    CONTRACT_CREATE = "contract.create"
    CONTRACT_UPDATE = "contract.update"
    CONTRACT_DELETE = "contract.delete"
    CONTRACT_APPROVE = "contract.approve"
    CONTRACT_SIGN = "contract.sign"
    CONTRACT_ARCHIVE = "contract.archive"
    CONTRACT_VIEW_ALL = "contract.view.all"

    # Templates
    TEMPLATE_VIEW = "template.view"
    TEMPLATE_CREATE = "template.create"
    TEMPLATE_UPDATE = "template.update"
    TEMPLATE_DELETE = "template.delete"
    TEMPLATE_PUBLISH = "template.publish"

    # Attachments
    ATTACHMENT_VIEW = "attachment.view"
    ATTACHMENT_UPLOAD = "attachment.upload"
    ATTACHMENT_DELETE = "attachment.delete"

    # Notifications
    NOTIFICATION_VIEW = "notification.view"
    NOTIFICATION_MANAGE = "notification.manage"
    NOTIFICATION_SEND = "notification.send"

    # Reports
    REPORT_VIEW = "report.view"
    REPORT_GENERATE = "report.generate"
    ANALYTICS_VIEW = "analytics.view"

    # System Administration
    SYSTEM_ADMIN = "system.admin"
    SYSTEM_SETTINGS = "system.settings"
    SYSTEM_LOGS = "system.logs"


PermissionSet = FrozenSet[Permission]


# Capabilities introduced at each global rank. A role's effective set is the
# union over every rank it includes (see roles.ROLE_HIERARCHY).
GLOBAL_ROLE_PERMISSIONS: Dict[GlobalRole, Set[Permission]] = {
    GlobalRole.VIEWER: {
        Permission.CONTRACT_VIEW,
        Permission.TEMPLATE_VIEW,
        Permission.ATTACHMENT_VIEW,
        Permission.NOTIFICATION_VIEW,
    },

    GlobalRole.EDITOR: {
        Permission.USER_VIEW,
        Permission.COMPANY_VIEW,
        Permission.CONTRACT_CREATE, Permission.CONTRACT_UPDATE,
        Permission.CONTRACT_ARCHIVE,
        Permission.TEMPLATE_CREATE, Permission.TEMPLATE_UPDATE,
        Permission.TEMPLATE_DELETE,
        Permission.ATTACHMENT_UPLOAD, Permission.ATTACHMENT_DELETE,
        Permission.REPORT_VIEW, Permission.ANALYTICS_VIEW,
    },

    GlobalRole.ADMIN: {
        Permission.USER_CREATE, Permission.USER_UPDATE,
        Permission.USER_DELETE, Permission.USER_ROLES_MANAGE,
        Permission.COMPANY_CREATE, Permission.COMPANY_UPDATE,
        Permission.COMPANY_DELETE, Permission.COMPANY_SETTINGS_MANAGE,
        Permission.COMPANY_MEMBERS_MANAGE, Permission.COMPANY_INVITES_MANAGE,
        Permission.CONTRACT_DELETE, Permission.CONTRACT_APPROVE,
        Permission.CONTRACT_SIGN, Permission.CONTRACT_VIEW_ALL,
        Permission.TEMPLATE_PUBLISH,
        Permission.NOTIFICATION_MANAGE, Permission.NOTIFICATION_SEND,
        Permission.REPORT_GENERATE,
        Permission.SYSTEM_ADMIN, Permission.SYSTEM_SETTINGS,
        Permission.SYSTEM_LOGS,
    },
}

# Capabilities introduced at each company rank, scoped to that company
COMPANY_ROLE_PERMISSIONS: Dict[CompanyRole, Set[Permission]] = {
    CompanyRole.VIEWER: {
        Permission.CONTRACT_VIEW,
        Permission.TEMPLATE_VIEW,
        Permission.ATTACHMENT_VIEW,
    },

    CompanyRole.EDITOR: {
        Permission.CONTRACT_CREATE, Permission.CONTRACT_UPDATE,
        Permission.TEMPLATE_CREATE, Permission.TEMPLATE_UPDATE,
        Permission.ATTACHMENT_UPLOAD,
    },

    CompanyRole.ADMIN: {
        Permission.COMPANY_VIEW,
        Permission.COMPANY_MEMBERS_MANAGE,
        Permission.CONTRACT_APPROVE, Permission.CONTRACT_SIGN,
        Permission.CONTRACT_ARCHIVE,
        Permission.TEMPLATE_DELETE,
        Permission.REPORT_VIEW, Permission.ANALYTICS_VIEW,
    },

    CompanyRole.OWNER: {
        Permission.COMPANY_UPDATE, Permission.COMPANY_DELETE,
        Permission.COMPANY_SETTINGS_MANAGE, Permission.COMPANY_INVITES_MANAGE,
        Permission.CONTRACT_DELETE,
        Permission.TEMPLATE_PUBLISH,
        Permission.REPORT_GENERATE,
    },
}

ROLE_PRIORITIES: Dict[RoleTier, Dict[Enum, int]] = {
    RoleTier.GLOBAL: {
        GlobalRole.ADMIN: 100,
        GlobalRole.EDITOR: 80,
        GlobalRole.VIEWER: 20,
    },
    RoleTier.COMPANY: {
        CompanyRole.OWNER: 100,
        CompanyRole.ADMIN: 80,
        CompanyRole.EDITOR: 60,
        CompanyRole.VIEWER: 20,
    },
    RoleTier.DEPARTMENT: {
        DepartmentRole.HEAD: 100,
        DepartmentRole.MANAGER: 80,
        DepartmentRole.MEMBER: 40,
    },
}

# Permission groups required by common operations
PERMISSION_CONTEXTS: Dict[str, Dict[str, FrozenSet[Permission]]] = {
    "contract": {
        "create": frozenset({Permission.CONTRACT_CREATE}),
        "view": frozenset({Permission.CONTRACT_VIEW}),
        "update": frozenset({Permission.CONTRACT_UPDATE}),
        "delete": frozenset({Permission.CONTRACT_DELETE}),
        "approve": frozenset({Permission.CONTRACT_APPROVE}),
        "sign": frozenset({Permission.CONTRACT_SIGN}),
    },
    "company": {
        "manage": frozenset({Permission.COMPANY_SETTINGS_MANAGE}),
        "invite_users": frozenset({Permission.COMPANY_INVITES_MANAGE}),
        "manage_members": frozenset({Permission.COMPANY_MEMBERS_MANAGE}),
    },
    "template": {
        "create": frozenset({Permission.TEMPLATE_CREATE}),
        "edit": frozenset({Permission.TEMPLATE_UPDATE}),
        "publish": frozenset({Permission.TEMPLATE_PUBLISH}),
    },
    "admin": {
        "user_management": frozenset({Permission.USER_ROLES_MANAGE}),
        "system_settings": frozenset({Permission.SYSTEM_SETTINGS}),
    },
}


def get_permissions_for_role(
    role: AnyRole,
    tier: RoleTier = RoleTier.GLOBAL
) -> PermissionSet:
    """Get all permissions held by a single role, including lower ranks"""
    tier = RoleTier(tier)
    if tier == RoleTier.GLOBAL:
        table = GLOBAL_ROLE_PERMISSIONS
    elif tier == RoleTier.COMPANY:
        table = COMPANY_ROLE_PERMISSIONS
    else:
        # Department roles rank people, they grant no capabilities
        parse_role(role, tier)
        return frozenset()

    permissions: Set[Permission] = set()
    for included in included_roles(role, tier):
        permissions.update(table[included])
    return frozenset(permissions)


def effective_permissions(
    global_role: AnyRole,
    company_role: Optional[AnyRole] = None
) -> PermissionSet:
    """
    Effective permission set for an actor.

    The company role only adds company-scoped capabilities; it never
    removes anything granted by the global role.
    """
    permissions = set(get_permissions_for_role(global_role, RoleTier.GLOBAL))
    if company_role is not None:
        permissions.update(get_permissions_for_role(company_role, RoleTier.COMPANY))
    return frozenset(permissions)


def role_priority(role: AnyRole, tier: RoleTier = RoleTier.GLOBAL) -> int:
    """Priority score of role, higher outranks lower within a tier"""
    tier = RoleTier(tier)
    return ROLE_PRIORITIES[tier][parse_role(role, tier)]


def has_permission(
    global_role: AnyRole,
    company_role: Optional[AnyRole],
    permission: Permission
) -> bool:
    """Check if the role pair grants a specific permission"""
    return Permission(permission) in effective_permissions(global_role, company_role)


def has_all_permissions(
    global_role: AnyRole,
    company_role: Optional[AnyRole],
    permissions: Iterable[Permission]
) -> bool:
    granted = effective_permissions(global_role, company_role)
    return all(Permission(p) in granted for p in permissions)


def has_any_permission(
    global_role: AnyRole,
    company_role: Optional[AnyRole],
    permissions: Iterable[Permission]
) -> bool:
    granted = effective_permissions(global_role, company_role)
    return any(Permission(p) in granted for p in permissions)


def can_manage_role(
    manager_role: AnyRole,
    target_role: AnyRole,
    tier: RoleTier = RoleTier.GLOBAL
) -> bool:
    """A role can only manage roles strictly below it"""
    return role_priority(manager_role, tier) > role_priority(target_role, tier)
