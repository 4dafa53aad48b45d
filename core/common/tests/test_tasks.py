"""
Tests for the maintenance celery tasks.
"""

import datetime
import uuid
from unittest.mock import patch

from django.core.cache import cache
from django.test import TestCase

from core.common.tasks import maintenance as tasks
from core.common.tests.utils import create_asset, create_plan, create_site


class PreventiveGenerationTaskTest(TestCase):
    def setUp(self):
        cache.clear()
        self.site = create_site()
        create_plan(self.site, create_asset(self.site), start_date=datetime.date(2020, 1, 1))

    def test_runs_batch_for_site_and_releases_lock(self):
        with patch.object(tasks.generation, "run_batch") as run_batch:
            tasks.generate_preventive_work_orders_for_site(self.site.id)

        run_batch.assert_called_once_with(self.site)
        self.assertIsNone(cache.get(tasks.generation_lock_key(self.site.id)))

    def test_overlapping_run_is_skipped(self):
        cache.add(tasks.generation_lock_key(self.site.id), "locked", 60)

        with patch.object(tasks.generation, "run_batch") as run_batch:
            tasks.generate_preventive_work_orders_for_site(self.site.id)

        run_batch.assert_not_called()

    def test_unknown_site_is_logged(self):
        with self.assertLogs("gmao", level="ERROR") as logs:
            tasks.generate_preventive_work_orders_for_site(uuid.uuid4())

        self.assertIn("not found", logs.output[0])

    def test_batch_error_is_logged_and_lock_released(self):
        with patch.object(tasks.generation, "run_batch", side_effect=RuntimeError("boom")):
            with self.assertLogs("gmao", level="ERROR"):
                tasks.generate_preventive_work_orders_for_site(self.site.id)

        self.assertIsNone(cache.get(tasks.generation_lock_key(self.site.id)))

    def test_spawn_fans_out_per_active_site(self):
        inactive = create_site(is_active=False)

        with patch.object(tasks.generate_preventive_work_orders_for_site, "delay") as delay:
            tasks.spawn_generate_preventive_work_orders()

        delay.assert_called_once_with(self.site.id)
        self.assertNotIn(((inactive.id,),), delay.call_args_list)


class ReminderTaskTest(TestCase):
    def setUp(self):
        self.site = create_site()

    def test_sends_reminders_for_site(self):
        with patch.object(tasks.reminders, "send_reminders") as send_reminders:
            tasks.send_maintenance_reminders_for_site(self.site.id)

        send_reminders.assert_called_once_with(self.site)

    def test_spawn_fans_out(self):
        with patch.object(tasks.send_maintenance_reminders_for_site, "delay") as delay:
            tasks.spawn_send_maintenance_reminders()

        delay.assert_called_once_with(self.site.id)
