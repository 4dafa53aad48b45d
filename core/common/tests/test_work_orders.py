"""
Tests for the work order lifecycle.
"""

import datetime
from decimal import Decimal

from django.test import TestCase

from core.common.error_codes import MaintenanceErrorCodes
from core.common.exceptions import OperationNotAllowedException, ValidationException
from core.common.includes import generation, work_orders
from core.common.models import (
    AssetStatus,
    MaintenanceLog,
    MaintenanceLogStatus,
    MaintenancePriority,
    Notification,
    WorkOrderAction,
    WorkOrderComment,
    WorkOrderStatus,
)
from core.common.tests.utils import (
    create_asset,
    create_plan,
    create_site,
    create_user,
    create_vehicle,
    create_work_order,
    make_clock,
)


class WorkOrderCreationTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.asset = create_asset(self.site)
        self.requester = create_user()

    def test_create_pending_work_order(self):
        work_order = create_work_order(self.site, self.asset, requested_by=self.requester)

        self.assertEqual(work_order.status, WorkOrderStatus.PENDING)
        self.assertEqual(work_order.code, "WO-2025-0001")
        self.assertEqual(work_order.total_cost, Decimal("0.00"))
        history = work_order.history.get()
        self.assertEqual(history.action, WorkOrderAction.CREATED)
        self.assertEqual(history.user, self.requester)

    def test_create_with_technician_is_assigned(self):
        technician = create_user()

        with self.captureOnCommitCallbacks(execute=True):
            work_order = create_work_order(self.site, self.asset, assigned_to=technician)

        self.assertEqual(work_order.status, WorkOrderStatus.ASSIGNED)
        self.assertTrue(Notification.objects.filter(recipient=technician).exists())

    def test_critical_work_order_puts_asset_under_maintenance(self):
        create_work_order(self.site, self.asset, priority=MaintenancePriority.CRITICAL)

        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.UNDER_MAINTENANCE)

    def test_codes_are_sequential(self):
        create_work_order(self.site, self.asset)
        second = create_work_order(self.site, self.asset)

        self.assertEqual(second.code, "WO-2025-0002")

    def test_is_overdue_only_while_open(self):
        past = make_clock().now() - datetime.timedelta(days=1)
        work_order = create_work_order(self.site, self.asset, scheduled_end=past)
        self.assertTrue(work_order.is_overdue)

        work_orders.cancel(work_order, self.requester, "No longer needed")
        work_order.refresh_from_db()
        self.assertFalse(work_order.is_overdue)

    def test_asset_of_another_site_is_rejected(self):
        outcome = work_orders.create(site=create_site(), asset=self.asset, title="Wrong site")

        self.assertFalse(outcome)


class WorkOrderTransitionTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.asset = create_asset(self.site)
        self.requester = create_user()
        self.technician = create_user(first_name="Ada", last_name="Lovelace")
        self.clock = make_clock()
        self.work_order = create_work_order(self.site, self.asset, requested_by=self.requester)

    def test_approve_pending(self):
        outcome = work_orders.approve(self.work_order, self.requester, clock=self.clock)

        self.assertTrue(outcome)
        self.assertEqual(self.work_order.status, WorkOrderStatus.APPROVED)
        self.assertEqual(self.work_order.approved_by, self.requester)
        self.assertEqual(self.work_order.approved_at, self.clock.now())

    def test_approve_twice_is_rejected(self):
        work_orders.approve(self.work_order, self.requester, clock=self.clock)

        outcome = work_orders.approve(self.work_order, self.requester, clock=self.clock)

        self.assertFalse(outcome)
        self.assertEqual(outcome.code, MaintenanceErrorCodes.INVALID_TRANSITION)
        self.assertIn("approved", outcome.reason)

    def test_start_sets_actual_start_and_asset_status(self):
        outcome = work_orders.start(self.work_order, self.technician, clock=self.clock)

        self.assertTrue(outcome)
        self.assertEqual(self.work_order.status, WorkOrderStatus.IN_PROGRESS)
        self.assertEqual(self.work_order.actual_start, self.clock.now())
        self.assertEqual(self.work_order.assigned_to, self.technician)
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.UNDER_MAINTENANCE)

    def test_pause_and_resume(self):
        work_orders.start(self.work_order, self.technician, clock=self.clock)

        work_orders.pause(self.work_order, self.technician, reason="Waiting for parts")
        self.assertEqual(self.work_order.status, WorkOrderStatus.ON_HOLD)
        self.assertIn("[Paused] Waiting for parts", self.work_order.technician_notes)

        work_orders.resume(self.work_order, self.technician)
        self.assertEqual(self.work_order.status, WorkOrderStatus.IN_PROGRESS)

    def test_start_from_on_hold_is_rejected(self):
        work_orders.start(self.work_order, self.technician, clock=self.clock)
        work_orders.pause(self.work_order, self.technician)

        self.assertFalse(work_orders.start(self.work_order, self.technician, clock=self.clock))

    def test_pause_pending_is_rejected(self):
        outcome = work_orders.pause(self.work_order, self.technician)

        self.assertFalse(outcome)
        self.assertEqual(self.work_order.status, WorkOrderStatus.PENDING)

    def test_complete_computes_duration_and_labor_cost(self):
        work_orders.start(self.work_order, self.technician, clock=self.clock)
        self.clock.advance(minutes=90, seconds=30)

        outcome = work_orders.complete(
            self.work_order,
            self.technician,
            report={"work_performed": "Replaced filter", "root_cause": "Clogged"},
            clock=self.clock,
        )

        self.assertTrue(outcome)
        work_order = self.work_order
        self.assertEqual(work_order.status, WorkOrderStatus.COMPLETED)
        self.assertEqual(work_order.actual_duration, 90)
        self.assertEqual(work_order.labor_cost, Decimal("750.00"))
        self.assertEqual(work_order.total_cost, work_order.labor_cost + work_order.parts_cost)
        self.assertEqual(work_order.work_performed, "Replaced filter")
        self.assertEqual(work_order.completed_by, self.technician)
        self.assertEqual(work_order.duration_formatted, "1h 30min")
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.OPERATIONAL)

    def test_complete_pending_is_rejected(self):
        outcome = work_orders.complete(self.work_order, self.technician, clock=self.clock)

        self.assertFalse(outcome)
        with self.assertRaises(OperationNotAllowedException):
            outcome.raise_for_failure()

    def test_cancel_requires_reason(self):
        outcome = work_orders.cancel(self.work_order, self.requester, "  ", clock=self.clock)

        self.assertFalse(outcome)
        self.assertEqual(outcome.code, MaintenanceErrorCodes.MISSING_REASON)
        with self.assertRaises(ValidationException):
            outcome.raise_for_failure()

    def test_cancel_in_progress_releases_asset(self):
        work_orders.start(self.work_order, self.technician, clock=self.clock)

        outcome = work_orders.cancel(self.work_order, self.requester, "Duplicate request", clock=self.clock)

        self.assertTrue(outcome)
        self.assertEqual(self.work_order.status, WorkOrderStatus.CANCELLED)
        self.assertEqual(self.work_order.cancellation_reason, "Duplicate request")
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.OPERATIONAL)

    def test_terminal_work_orders_accept_no_transition(self):
        work_orders.cancel(self.work_order, self.requester, "Not needed", clock=self.clock)

        self.assertFalse(work_orders.approve(self.work_order, self.requester, clock=self.clock))
        self.assertFalse(work_orders.start(self.work_order, self.technician, clock=self.clock))
        self.assertFalse(work_orders.cancel(self.work_order, self.requester, "Again", clock=self.clock))
        self.assertFalse(work_orders.assign(self.work_order, self.technician, self.requester))

    def test_every_transition_writes_one_history_row(self):
        work_orders.approve(self.work_order, self.requester, clock=self.clock)
        work_orders.assign(self.work_order, self.technician, self.requester)
        work_orders.start(self.work_order, self.technician, clock=self.clock)
        work_orders.pause(self.work_order, self.technician)
        work_orders.resume(self.work_order, self.technician)
        work_orders.complete(self.work_order, self.technician, clock=self.clock)

        self.assertEqual(
            list(self.work_order.history.values_list("action", flat=True)),
            [
                WorkOrderAction.CREATED,
                WorkOrderAction.APPROVED,
                WorkOrderAction.ASSIGNED,
                WorkOrderAction.STARTED,
                WorkOrderAction.PAUSED,
                WorkOrderAction.RESUMED,
                WorkOrderAction.COMPLETED,
            ],
        )

    def test_assign_records_names(self):
        outcome = work_orders.assign(self.work_order, self.technician, self.requester)

        self.assertTrue(outcome)
        self.assertEqual(self.work_order.status, WorkOrderStatus.ASSIGNED)
        entry = self.work_order.history.get(action=WorkOrderAction.ASSIGNED)
        self.assertEqual(entry.old_value, "Unassigned")
        self.assertEqual(entry.new_value, "Ada Lovelace")

    def test_add_comment(self):
        outcome = work_orders.add_comment(self.work_order, self.technician, "Noise from bearing", is_internal=True)

        self.assertTrue(outcome)
        self.assertTrue(WorkOrderComment.objects.filter(work_order=self.work_order, is_internal=True).exists())
        self.assertTrue(self.work_order.history.filter(action=WorkOrderAction.COMMENT_ADDED).exists())

    def test_empty_comment_is_rejected(self):
        self.assertFalse(work_orders.add_comment(self.work_order, self.technician, ""))


class VehicleWorkOrderTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.vehicle = create_vehicle(self.site, counter=42000)
        self.technician = create_user()
        self.clock = make_clock()
        self.work_order = create_work_order(self.site, self.vehicle)
        work_orders.start(self.work_order, self.technician, clock=self.clock)

    def test_completion_requires_mileage(self):
        outcome = work_orders.complete(self.work_order, self.technician, clock=self.clock)

        self.assertFalse(outcome)
        self.assertEqual(outcome.code, MaintenanceErrorCodes.MISSING_MILEAGE)
        self.assertEqual(self.work_order.status, WorkOrderStatus.IN_PROGRESS)

    def test_completion_updates_vehicle_counter(self):
        outcome = work_orders.complete(
            self.work_order,
            self.technician,
            report={"mileage_at_intervention": 42350},
            clock=self.clock,
        )

        self.assertTrue(outcome)
        self.assertEqual(self.work_order.mileage_at_intervention, 42350)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.counter, 42350)

    def test_lower_mileage_does_not_rewind_counter(self):
        work_orders.complete(
            self.work_order,
            self.technician,
            report={"mileage_at_intervention": 41000},
            clock=self.clock,
        )

        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.counter, 42000)


class PreventiveWorkOrderClosureTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.asset = create_asset(self.site)
        self.technician = create_user()
        self.clock = make_clock()
        plan = create_plan(self.site, self.asset, start_date=datetime.date(2025, 3, 10))
        self.work_order = generation.generate(plan, clock=self.clock).value

    def test_completion_closes_generation_log(self):
        work_orders.start(self.work_order, self.technician, clock=self.clock)
        work_orders.complete(self.work_order, self.technician, clock=self.clock)

        log = MaintenanceLog.objects.get(work_order=self.work_order)
        self.assertEqual(log.status, MaintenanceLogStatus.COMPLETED)
        self.assertEqual(log.executed_date, self.clock.today())

    def test_cancellation_skips_generation_log(self):
        work_orders.cancel(self.work_order, self.technician, "Asset sold", clock=self.clock)

        log = MaintenanceLog.objects.get(work_order=self.work_order)
        self.assertEqual(log.status, MaintenanceLogStatus.SKIPPED)
        self.assertIn("Asset sold", log.notes)
