"""
Maintenance models package for core.common.
"""

from core.common.models.maintenance.plan import (
    CALENDAR_FREQUENCIES,
    COUNTER_FREQUENCIES,
    FrequencyType,
    MaintenancePriority,
    MaintenancePlan,
    MaintenancePlanTask,
)
from core.common.models.maintenance.maintenance_log import (
    MaintenanceLogStatus,
    MaintenanceLog,
)
from core.common.models.maintenance.work_order import (
    EXECUTING_STATUSES,
    OPEN_STATUSES,
    TERMINAL_STATUSES,
    WorkOrderStatus,
    WorkType,
    WorkOrder,
    WorkOrderPart,
)
from core.common.models.maintenance.work_order_history import (
    WorkOrderAction,
    WorkOrderHistory,
    WorkOrderComment,
)

__all__ = [
    "CALENDAR_FREQUENCIES",
    "COUNTER_FREQUENCIES",
    "EXECUTING_STATUSES",
    "FrequencyType",
    "MaintenanceLog",
    "MaintenanceLogStatus",
    "MaintenancePlan",
    "MaintenancePlanTask",
    "MaintenancePriority",
    "OPEN_STATUSES",
    "TERMINAL_STATUSES",
    "WorkOrder",
    "WorkOrderAction",
    "WorkOrderComment",
    "WorkOrderHistory",
    "WorkOrderPart",
    "WorkOrderStatus",
    "WorkType",
]
