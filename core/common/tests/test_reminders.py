"""
Tests for maintenance reminders.
"""

import datetime

from django.test import TestCase

from core.common.includes import reminders, work_orders
from core.common.models import FrequencyType, MaintenancePriority, Notification
from core.common.tests.utils import (
    create_asset,
    create_plan,
    create_site,
    create_user,
    create_vehicle,
    create_work_order,
    make_clock,
)


class ReminderTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.asset = create_asset(self.site, name="Boiler")
        self.manager = create_user()
        self.technician = create_user()
        self.clock = make_clock()

    def test_overdue_plan_is_reported_and_notified(self):
        plan = create_plan(
            self.site,
            self.asset,
            start_date=datetime.date(2025, 3, 5),
            created_by=self.manager,
            assigned_to=self.technician,
        )

        with self.captureOnCommitCallbacks(execute=True):
            summary = reminders.send_reminders(self.site, clock=self.clock)

        self.assertEqual(len(summary.overdue_plans), 1)
        self.assertEqual(summary.overdue_plans[0]["plan_code"], plan.code)
        self.assertEqual(summary.overdue_plans[0]["days_overdue"], 5)
        self.assertEqual(summary.notifications_sent, 2)
        self.assertEqual(
            Notification.objects.filter(event="maintenance_overdue", reference_id=str(plan.pk)).count(),
            2,
        )

    def test_due_soon_plan_is_notified_once(self):
        create_plan(self.site, self.asset, start_date=datetime.date(2025, 3, 14), created_by=self.manager)

        with self.captureOnCommitCallbacks(execute=True):
            first = reminders.send_reminders(self.site, clock=self.clock)
        with self.captureOnCommitCallbacks(execute=True):
            second = reminders.send_reminders(self.site, clock=self.clock)

        self.assertEqual(len(first.due_soon_plans), 1)
        self.assertEqual(first.notifications_sent, 1)
        self.assertEqual(len(second.due_soon_plans), 1)
        self.assertEqual(second.notifications_sent, 0)
        self.assertEqual(Notification.objects.filter(event="maintenance_due").count(), 1)

    def test_mileage_plan_coming_due(self):
        vehicle = create_vehicle(self.site, counter=10000)
        create_plan(
            self.site,
            vehicle,
            frequency_type=FrequencyType.MILEAGE,
            mileage_interval=5000,
            created_by=self.manager,
        )

        summary = reminders.send_reminders(self.site, clock=make_clock(counters={vehicle.pk: 14700}))

        self.assertEqual(len(summary.due_soon_plans), 1)
        self.assertEqual(summary.due_soon_plans[0]["counter_until_due"], 300)

    def test_long_running_work_order(self):
        work_order = create_work_order(self.site, self.asset, requested_by=self.manager)
        work_orders.start(work_order, self.technician, clock=make_clock(datetime.date(2025, 3, 1)))

        with self.captureOnCommitCallbacks(execute=True):
            summary = reminders.send_reminders(self.site, clock=self.clock, long_running_days=7)

        self.assertEqual(len(summary.long_running), 1)
        self.assertEqual(summary.long_running[0]["days_running"], 9)
        self.assertTrue(
            Notification.objects.filter(event="work_order_long_running", recipient=self.technician).exists()
        )

    def test_recent_work_order_is_not_long_running(self):
        work_order = create_work_order(self.site, self.asset)
        work_orders.start(work_order, self.technician, clock=make_clock(datetime.date(2025, 3, 8)))

        summary = reminders.send_reminders(self.site, clock=self.clock, long_running_days=7)

        self.assertEqual(summary.long_running, [])

    def test_urgent_unassigned_work_orders(self):
        create_work_order(self.site, self.asset, title="Leak", priority=MaintenancePriority.HIGH)
        create_work_order(self.site, self.asset, title="Paint", priority=MaintenancePriority.LOW)
        create_work_order(
            self.site,
            self.asset,
            title="Assigned leak",
            priority=MaintenancePriority.CRITICAL,
            assigned_to=self.technician,
        )

        summary = reminders.send_reminders(self.site, clock=self.clock)

        self.assertEqual([item["title"] for item in summary.unassigned_urgent], ["Leak"])

    def test_summary_is_logged(self):
        create_plan(self.site, self.asset, start_date=datetime.date(2025, 3, 5))

        with self.assertLogs("gmao", level="INFO") as logs:
            reminders.send_reminders(self.site, clock=self.clock)

        self.assertTrue(
            any(f"BATCH: maintenance_reminders site={self.site.code}" in line for line in logs.output)
        )

    def test_inactive_plans_are_ignored(self):
        plan = create_plan(self.site, self.asset, start_date=datetime.date(2025, 3, 1))
        plan.is_active = False
        plan.save()

        summary = reminders.send_reminders(self.site, clock=self.clock)

        self.assertEqual(summary.overdue_plans, [])
        self.assertEqual(summary.as_dict()["notifications_sent"], 0)
