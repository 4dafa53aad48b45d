"""
Error codes for the gmao application.

These codes are carried by exceptions and by failed operation outcomes so
that callers can branch on a stable identifier instead of a message.
"""


class CommonAPIErrorCodes:
    INTERNAL_SERVER_ERROR = "internal_server_error"
    VALIDATION_ERROR = "validation_error"
    BUSINESS_LOGIC_ERROR = "business_logic_error"
    OPERATION_NOT_ALLOWED = "operation_not_allowed"
    DATABASE_ERROR = "database_error"


class MaintenanceErrorCodes:
    INVALID_TRANSITION = "invalid_transition"
    TERMINAL_WORK_ORDER = "terminal_work_order"
    MISSING_MILEAGE = "missing_mileage"
    MISSING_REASON = "missing_reason"
    INSUFFICIENT_STOCK = "insufficient_stock"
    INVALID_QUANTITY = "invalid_quantity"
    PLAN_INACTIVE = "plan_inactive"
    PLAN_NOT_DUE = "plan_not_due"
    OPEN_WORK_ORDER_EXISTS = "open_work_order_exists"
    ALREADY_GENERATED = "already_generated"
    INVALID_PLAN = "invalid_plan"
    COST_INCONSISTENCY = "cost_inconsistency"
