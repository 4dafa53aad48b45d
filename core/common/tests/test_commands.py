"""
Tests for the maintenance management commands.
"""

import datetime
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from core.common.models import MaintenanceLog, WorkOrder
from core.common.tests.utils import create_asset, create_plan, create_site


class GeneratePreventiveWorkOrdersCommandTest(TestCase):
    def setUp(self):
        self.site = create_site(code="PLANT1")
        self.asset = create_asset(self.site)
        self.plan = create_plan(
            self.site, self.asset, name="Filter check", start_date=datetime.date(2025, 3, 10)
        )

    def call(self, *args):
        out = StringIO()
        call_command("generate_preventive_work_orders", *args, stdout=out)
        return out.getvalue()

    def test_generates_due_work_orders(self):
        output = self.call("--date", "2025-03-10")

        work_order = WorkOrder.objects.get()
        self.assertIn(work_order.code, output)
        self.assertIn("Work orders generated: 1", output)
        self.assertTrue(MaintenanceLog.objects.filter(work_order=work_order).exists())

    def test_dry_run_writes_nothing(self):
        output = self.call("--date", "2025-03-10", "--dry-run")

        self.assertIn("DRY-RUN", output)
        self.assertIn(f"Would generate: [{self.plan.code}] Filter check", output)
        self.assertFalse(WorkOrder.objects.exists())

    def test_date_before_window_generates_nothing(self):
        output = self.call("--date", "2025-02-01")

        self.assertIn("No due preventive maintenance found", output)
        self.assertFalse(WorkOrder.objects.exists())

    def test_site_filter(self):
        other_site = create_site(code="PLANT2")
        create_plan(other_site, create_asset(other_site), start_date=datetime.date(2025, 3, 10))

        self.call("--site", "PLANT2", "--date", "2025-03-10")

        self.assertEqual(WorkOrder.objects.get().site, other_site)

    def test_unknown_site(self):
        with self.assertRaises(CommandError):
            self.call("--site", "NOPE")

    def test_invalid_date(self):
        with self.assertRaises(CommandError):
            self.call("--date", "10/03/2025")


class SendMaintenanceRemindersCommandTest(TestCase):
    def test_reports_overdue_plans(self):
        site = create_site(code="DEPOT")
        asset = create_asset(site)
        plan = create_plan(site, asset, start_date=datetime.date(2020, 1, 1))

        out = StringIO()
        call_command("send_maintenance_reminders", "--site", "DEPOT", "--long-running-days", "3", stdout=out)

        output = out.getvalue()
        self.assertIn("overdue plan(s)", output)
        self.assertIn(plan.code, output)
