"""
Tests for asset availability and asset model helpers.
"""

import datetime
from unittest.mock import patch

from django.test import TestCase

from core.common.code_generator import CodeGenerator
from core.common.includes import availability, work_orders
from core.common.models import Asset, AssetStatus, MaintenancePriority, WorkOrder
from core.common.tests.utils import (
    create_asset,
    create_site,
    create_user,
    create_vehicle,
    create_work_order,
    make_clock,
)


class AvailabilityTest(TestCase):
    def setUp(self):
        self.site = create_site()
        self.asset = create_asset(self.site)
        self.technician = create_user()
        self.clock = make_clock()

    def test_asset_stays_under_maintenance_while_another_order_runs(self):
        first = create_work_order(self.site, self.asset)
        second = create_work_order(self.site, self.asset)
        work_orders.start(first, self.technician, clock=self.clock)
        work_orders.start(second, self.technician, clock=self.clock)

        work_orders.complete(first, self.technician, clock=self.clock)
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.UNDER_MAINTENANCE)

        work_orders.complete(second, self.technician, clock=self.clock)
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.OPERATIONAL)

    def test_on_hold_order_keeps_asset_under_maintenance(self):
        first = create_work_order(self.site, self.asset)
        second = create_work_order(self.site, self.asset)
        work_orders.start(first, self.technician, clock=self.clock)
        work_orders.start(second, self.technician, clock=self.clock)
        work_orders.pause(second, self.technician)

        work_orders.cancel(first, self.technician, "Duplicate", clock=self.clock)

        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.UNDER_MAINTENANCE)

    def test_cancelling_pending_order_leaves_status_alone(self):
        self.asset.set_status(AssetStatus.OUT_OF_SERVICE)
        work_order = create_work_order(self.site, self.asset)

        work_orders.cancel(work_order, self.technician, "Not needed", clock=self.clock)

        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.OUT_OF_SERVICE)

    def test_cancelling_pending_critical_order_releases_asset(self):
        work_order = create_work_order(self.site, self.asset, priority=MaintenancePriority.CRITICAL)
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.UNDER_MAINTENANCE)

        work_orders.cancel(work_order, self.technician, "Raised by mistake", clock=self.clock)

        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.OPERATIONAL)

    def test_cancelling_critical_order_keeps_asset_held_by_running_order(self):
        running = create_work_order(self.site, self.asset)
        work_orders.start(running, self.technician, clock=self.clock)
        critical = create_work_order(self.site, self.asset, priority=MaintenancePriority.CRITICAL)

        work_orders.cancel(critical, self.technician, "Duplicate", clock=self.clock)

        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.UNDER_MAINTENANCE)

    def test_status_changes_lock_the_asset_row(self):
        with patch.object(Asset.objects, "select_for_update", wraps=Asset.objects.select_for_update) as lock:
            availability.set_under_maintenance(self.asset)
            availability.set_operational(self.asset)

        self.assertEqual(lock.call_count, 2)

    def test_release_reads_the_stored_status(self):
        Asset.objects.filter(pk=self.asset.pk).update(status=AssetStatus.UNDER_MAINTENANCE)

        self.assertTrue(availability.set_operational(self.asset))
        self.assertEqual(self.asset.status, AssetStatus.OPERATIONAL)
        self.asset.refresh_from_db()
        self.assertEqual(self.asset.status, AssetStatus.OPERATIONAL)

    def test_set_operational_ignores_releasing_order(self):
        work_order = create_work_order(self.site, self.asset)
        work_orders.start(work_order, self.technician, clock=self.clock)
        work_order = WorkOrder.objects.get(pk=work_order.pk)
        self.asset.refresh_from_db()

        self.assertTrue(availability.set_operational(self.asset, releasing=work_order))
        self.assertFalse(availability.set_operational(self.asset, releasing=work_order))


class AssetModelTest(TestCase):
    def setUp(self):
        self.site = create_site()

    def test_counter_only_moves_forward(self):
        vehicle = create_vehicle(self.site, counter=5000)

        self.assertTrue(vehicle.update_counter(5200))
        self.assertFalse(vehicle.update_counter(5100))
        self.assertFalse(vehicle.update_counter(None))
        vehicle.refresh_from_db()
        self.assertEqual(vehicle.get_counter(), 5200)

    def test_unknown_status_is_rejected(self):
        asset = create_asset(self.site)

        with self.assertRaises(ValueError):
            asset.set_status("BROKEN")

    def test_availability_flags(self):
        asset = create_asset(self.site)
        self.assertTrue(asset.is_available)
        self.assertFalse(asset.is_vehicle)

        asset.set_status(AssetStatus.UNDER_MAINTENANCE)
        self.assertFalse(asset.is_available)


class CodeGeneratorTest(TestCase):
    def test_format_code(self):
        self.assertEqual(CodeGenerator.format_code("WO", 2025, 7), "WO-2025-0007")

    def test_sequence_restarts_each_year(self):
        site = create_site()
        asset = create_asset(site)
        create_work_order(site, asset, clock=make_clock())
        create_work_order(site, asset, clock=make_clock())

        next_year = create_work_order(site, asset, clock=make_clock(datetime.date(2026, 1, 5)))

        self.assertEqual(next_year.code, "WO-2026-0001")
