"""
Tests for work order parts and costs.
"""

from decimal import Decimal

from django.test import TestCase, override_settings

from core.common.error_codes import MaintenanceErrorCodes
from core.common.exceptions import ConsistencyViolationException
from core.common.includes import costs, work_orders
from core.common.models import (
    Notification,
    StockMovement,
    StockMovementType,
    WorkOrderAction,
    WorkOrderPart,
)
from core.common.tests.utils import (
    create_asset,
    create_part,
    create_site,
    create_user,
    create_work_order,
    make_clock,
)


class LaborCostTest(TestCase):
    def test_labor_cost_is_rounded_to_cents(self):
        self.assertEqual(costs.compute_labor_cost(90), Decimal("750.00"))
        self.assertEqual(costs.compute_labor_cost(7), Decimal("58.33"))
        self.assertEqual(costs.compute_labor_cost(None), Decimal("0.00"))

    @override_settings(MAINTENANCE_HOURLY_RATE=Decimal("45.50"))
    def test_labor_cost_uses_configured_rate(self):
        self.assertEqual(costs.compute_labor_cost(60), Decimal("45.50"))


class PartsTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.asset = create_asset(self.site)
        self.user = create_user()
        self.part = create_part(self.site, quantity_in_stock=10, unit_price=Decimal("25.00"), minimum_stock=2)
        self.work_order = create_work_order(self.site, self.asset, requested_by=self.user)

    def test_add_part_decrements_stock_and_updates_costs(self):
        outcome = costs.add_part(self.work_order, self.part, 3, user=self.user)

        self.assertTrue(outcome)
        line = outcome.value
        self.assertEqual(line.total_price, Decimal("75.00"))
        self.assertEqual(self.part.quantity_in_stock, 7)
        self.assertEqual(self.work_order.parts_cost, Decimal("75.00"))
        self.assertEqual(self.work_order.total_cost, Decimal("75.00"))

        movement = StockMovement.objects.get(part=self.part)
        self.assertEqual(movement.movement_type, StockMovementType.OUT)
        self.assertEqual(movement.quantity, -3)
        self.assertEqual((movement.quantity_before, movement.quantity_after), (10, 7))
        self.assertEqual(movement.work_order, self.work_order)
        self.assertTrue(self.work_order.history.filter(action=WorkOrderAction.PART_ADDED).exists())

    def test_insufficient_stock_is_rejected(self):
        outcome = costs.add_part(self.work_order, self.part, 11, user=self.user)

        self.assertFalse(outcome)
        self.assertEqual(outcome.code, MaintenanceErrorCodes.INSUFFICIENT_STOCK)
        self.assertEqual(outcome.details["available"], 10)
        self.part.refresh_from_db()
        self.assertEqual(self.part.quantity_in_stock, 10)
        self.assertFalse(WorkOrderPart.objects.exists())

    def test_quantity_must_be_positive(self):
        outcome = costs.add_part(self.work_order, self.part, 0, user=self.user)

        self.assertFalse(outcome)
        self.assertEqual(outcome.code, MaintenanceErrorCodes.INVALID_QUANTITY)

    def test_part_of_another_site_is_rejected(self):
        other_part = create_part(create_site())

        self.assertFalse(costs.add_part(self.work_order, other_part, 1, user=self.user))

    def test_terminal_work_order_rejects_parts(self):
        work_orders.cancel(self.work_order, self.user, "Not needed", clock=make_clock())

        outcome = costs.add_part(self.work_order, self.part, 1, user=self.user)

        self.assertFalse(outcome)
        self.assertEqual(outcome.code, MaintenanceErrorCodes.TERMINAL_WORK_ORDER)

    def test_remove_part_restocks_and_recomputes(self):
        first = costs.add_part(self.work_order, self.part, 3, user=self.user).value
        costs.add_part(self.work_order, self.part, 1, user=self.user)

        outcome = costs.remove_part(first, user=self.user)

        self.assertTrue(outcome)
        self.part.refresh_from_db()
        self.assertEqual(self.part.quantity_in_stock, 9)
        self.assertEqual(self.work_order.parts_cost, Decimal("25.00"))
        self.assertEqual(self.work_order.total_cost, Decimal("25.00"))
        restock = StockMovement.objects.get(movement_type=StockMovementType.IN)
        self.assertEqual(restock.quantity, 3)
        self.assertTrue(self.work_order.history.filter(action=WorkOrderAction.PART_REMOVED).exists())

    def test_line_price_is_frozen_at_attach_time(self):
        costs.add_part(self.work_order, self.part, 2, user=self.user)
        self.part.unit_price = Decimal("40.00")
        self.part.save()

        costs.add_part(self.work_order, self.part, 1, user=self.user)

        self.assertEqual(self.work_order.parts_cost, Decimal("90.00"))

    def test_low_stock_notifies(self):
        with self.captureOnCommitCallbacks(execute=True):
            costs.add_part(self.work_order, self.part, 8, user=self.user)

        self.assertTrue(self.part.is_low_stock)
        self.assertTrue(Notification.objects.filter(recipient=self.user, event="part_low_stock").exists())

    def test_completion_keeps_parts_in_total(self):
        clock = make_clock()
        costs.add_part(self.work_order, self.part, 2, user=self.user)
        work_orders.start(self.work_order, self.user, clock=clock)
        clock.advance(minutes=30)

        work_orders.complete(self.work_order, self.user, clock=clock)

        self.assertEqual(self.work_order.labor_cost, Decimal("250.00"))
        self.assertEqual(self.work_order.parts_cost, Decimal("50.00"))
        self.assertEqual(self.work_order.total_cost, Decimal("300.00"))

    def test_drifted_totals_raise(self):
        self.work_order.total_cost = Decimal("1.00")

        with self.assertRaises(ConsistencyViolationException):
            costs.check_totals(self.work_order)
