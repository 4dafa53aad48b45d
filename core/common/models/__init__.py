"""
Models package for core.common.
"""

from core.common.models.base import (
    ObjectHistoryTracker,
    UUIDPrimaryKey,
    AbstractSiteModel,
)
from core.common.models.site import Site
from core.common.models.asset import AssetKind, AssetStatus, Asset
from core.common.models.inventory import Part, StockMovementType, StockMovement
from core.common.models.maintenance import (
    CALENDAR_FREQUENCIES,
    COUNTER_FREQUENCIES,
    EXECUTING_STATUSES,
    OPEN_STATUSES,
    TERMINAL_STATUSES,
    FrequencyType,
    MaintenanceLog,
    MaintenanceLogStatus,
    MaintenancePlan,
    MaintenancePlanTask,
    MaintenancePriority,
    WorkOrder,
    WorkOrderAction,
    WorkOrderComment,
    WorkOrderHistory,
    WorkOrderPart,
    WorkOrderStatus,
    WorkType,
)
from core.common.models.notification import Notification

__all__ = [
    "AbstractSiteModel",
    "Asset",
    "AssetKind",
    "AssetStatus",
    "CALENDAR_FREQUENCIES",
    "COUNTER_FREQUENCIES",
    "EXECUTING_STATUSES",
    "FrequencyType",
    "MaintenanceLog",
    "MaintenanceLogStatus",
    "MaintenancePlan",
    "MaintenancePlanTask",
    "MaintenancePriority",
    "Notification",
    "OPEN_STATUSES",
    "ObjectHistoryTracker",
    "Part",
    "Site",
    "StockMovement",
    "StockMovementType",
    "TERMINAL_STATUSES",
    "UUIDPrimaryKey",
    "WorkOrder",
    "WorkOrderAction",
    "WorkOrderComment",
    "WorkOrderHistory",
    "WorkOrderPart",
    "WorkOrderStatus",
    "WorkType",
]
