"""
Operation outcomes for the gmao application.

Lifecycle, cost and generation operations report expected rejections
(illegal transition, insufficient stock, plan not due) as a falsy Outcome
carrying a human readable reason instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from core.common.error_codes import CommonAPIErrorCodes, MaintenanceErrorCodes
from core.common.exceptions import OperationNotAllowedException, ValidationException

# Codes surfaced as 400 validation errors; everything else is an operation
# the current state does not allow.
VALIDATION_CODES = {
    CommonAPIErrorCodes.VALIDATION_ERROR,
    MaintenanceErrorCodes.MISSING_MILEAGE,
    MaintenanceErrorCodes.MISSING_REASON,
    MaintenanceErrorCodes.INSUFFICIENT_STOCK,
    MaintenanceErrorCodes.INVALID_QUANTITY,
    MaintenanceErrorCodes.INVALID_PLAN,
}


@dataclass
class Outcome:
    ok: bool
    value: Any = None
    reason: str = ""
    code: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __bool__(self):
        return self.ok

    @classmethod
    def success(cls, value=None, **details):
        return cls(ok=True, value=value, details=details)

    @classmethod
    def failure(cls, reason, code=CommonAPIErrorCodes.OPERATION_NOT_ALLOWED, **details):
        return cls(ok=False, reason=reason, code=code, details=details)

    def raise_for_failure(self):
        """Raise the matching API exception when the outcome is a failure."""
        if self.ok:
            return self.value
        if self.code in VALIDATION_CODES:
            raise ValidationException(detail=self.reason, code=self.code)
        raise OperationNotAllowedException(detail=self.reason, code=self.code)
