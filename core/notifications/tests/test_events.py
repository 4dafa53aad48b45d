"""
Unit tests for notification events, priorities, and channels.
"""

import unittest

from core.notifications.events import (
    NOTIFICATION_EVENTS,
    NotificationChannel,
    NotificationEvents,
    NotificationPriority,
    get_event,
    get_events_by_priority,
)


class TestNotificationPriority(unittest.TestCase):
    def test_priority_ordering(self):
        """Test that priorities can be compared correctly."""
        self.assertTrue(NotificationPriority.CRITICAL < NotificationPriority.HIGH)
        self.assertTrue(NotificationPriority.HIGH < NotificationPriority.MEDIUM)
        self.assertTrue(NotificationPriority.MEDIUM < NotificationPriority.LOW)


class TestNotificationRegistry(unittest.TestCase):
    def test_every_event_is_registered(self):
        for event_name in NotificationEvents:
            self.assertIn(event_name, NOTIFICATION_EVENTS)

    def test_event_names_fit_the_notification_column(self):
        for event in NOTIFICATION_EVENTS.values():
            self.assertLessEqual(len(event.name), 50)
            self.assertTrue(event.title)

    def test_get_event(self):
        event = get_event(NotificationEvents.MAINTENANCE_OVERDUE)

        self.assertEqual(event.name, "maintenance_overdue")
        self.assertEqual(event.priority, NotificationPriority.HIGH)
        self.assertTrue(event.supports_channel(NotificationChannel.APP))

    def test_get_events_by_priority(self):
        names = {event.name for event in get_events_by_priority(NotificationPriority.HIGH)}

        self.assertEqual(names, {"maintenance_overdue", "work_order_long_running"})


if __name__ == "__main__":
    unittest.main()
