# =====================================================
# FILE: contract_access/core/exceptions.py
# Access Core Exceptions
# =====================================================

from typing import Any, Optional


class AccessCoreError(Exception):
    """Base class for errors raised by the access core"""


class InvalidRoleError(AccessCoreError, ValueError):
    """Raised when a role token is not part of the requested tier"""

    def __init__(self, role: Any, tier: Optional[str] = None):
        self.role = role
        self.tier = tier
        if tier:
            message = f"Invalid {tier} role: {role!r}"
        else:
            message = f"Invalid role: {role!r}"
        super().__init__(message)


class AuthorizationError(AccessCoreError):
    """Raised when an actor is not allowed to perform an operation"""

    def __init__(
        self,
        message: str,
        status_code: int = 403,
        code: str = "INSUFFICIENT_PERMISSIONS"
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)
