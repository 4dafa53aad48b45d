"""
Notification events, priorities, and channels for the gmao notification system.

This module defines the core enums and constants used throughout the notification system
to ensure type safety and prevent typos in event names.
"""

from enum import Enum, IntEnum
from typing import List


class NotificationPriority(IntEnum):
    """Priority levels for notifications. Lower numbers indicate higher priority."""
    CRITICAL = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4


class NotificationChannel(Enum):
    """Available notification channels."""
    APP = "app"


class NotificationEvents(Enum):
    """Enum for notification event names to prevent typos and ensure consistency."""

    # High priority events
    MAINTENANCE_OVERDUE = "maintenance_overdue"
    WORK_ORDER_LONG_RUNNING = "work_order_long_running"

    # Medium priority events
    MAINTENANCE_DUE = "maintenance_due"
    WORK_ORDER_GENERATED = "work_order_generated"
    WORK_ORDER_ASSIGNED = "work_order_assigned"
    WORK_ORDER_COMPLETED = "work_order_completed"
    WORK_ORDER_CANCELLED = "work_order_cancelled"
    PART_LOW_STOCK = "part_low_stock"


class NotificationEvent:
    """
    Notification event metadata: priority level and supported channels.
    """

    def __init__(
        self,
        name: str,
        priority: NotificationPriority,
        supported_channels: List[NotificationChannel],
        title: str = "",
    ):
        self.name = name
        self.priority = priority
        self.supported_channels = supported_channels
        self.title = title

    def supports_channel(self, channel: NotificationChannel) -> bool:
        return channel in self.supported_channels


def _app_event(event: NotificationEvents, priority: NotificationPriority, title: str) -> NotificationEvent:
    return NotificationEvent(
        name=event.value,
        priority=priority,
        supported_channels=[NotificationChannel.APP],
        title=title,
    )


# Event registry - maps enum keys to event objects for easy lookup
NOTIFICATION_EVENTS = {
    NotificationEvents.MAINTENANCE_OVERDUE: _app_event(
        NotificationEvents.MAINTENANCE_OVERDUE,
        NotificationPriority.HIGH,
        "Preventive maintenance overdue",
    ),
    NotificationEvents.WORK_ORDER_LONG_RUNNING: _app_event(
        NotificationEvents.WORK_ORDER_LONG_RUNNING,
        NotificationPriority.HIGH,
        "Work order in progress for too long",
    ),
    NotificationEvents.MAINTENANCE_DUE: _app_event(
        NotificationEvents.MAINTENANCE_DUE,
        NotificationPriority.MEDIUM,
        "Preventive maintenance due soon",
    ),
    NotificationEvents.WORK_ORDER_GENERATED: _app_event(
        NotificationEvents.WORK_ORDER_GENERATED,
        NotificationPriority.MEDIUM,
        "Preventive work order generated",
    ),
    NotificationEvents.WORK_ORDER_ASSIGNED: _app_event(
        NotificationEvents.WORK_ORDER_ASSIGNED,
        NotificationPriority.MEDIUM,
        "Work order assigned",
    ),
    NotificationEvents.WORK_ORDER_COMPLETED: _app_event(
        NotificationEvents.WORK_ORDER_COMPLETED,
        NotificationPriority.MEDIUM,
        "Work order completed",
    ),
    NotificationEvents.WORK_ORDER_CANCELLED: _app_event(
        NotificationEvents.WORK_ORDER_CANCELLED,
        NotificationPriority.MEDIUM,
        "Work order cancelled",
    ),
    NotificationEvents.PART_LOW_STOCK: _app_event(
        NotificationEvents.PART_LOW_STOCK,
        NotificationPriority.MEDIUM,
        "Part stock low",
    ),
}


def get_event(event_name: NotificationEvents) -> NotificationEvent:
    """
    Get a notification event by its enum key.

    Raises:
        KeyError: If event is not found in registry
    """
    return NOTIFICATION_EVENTS[event_name]


def get_events_by_priority(priority: NotificationPriority) -> List[NotificationEvent]:
    """Get all events with a specific priority level."""
    return [event for event in NOTIFICATION_EVENTS.values() if event.priority == priority]
