"""
Django management command to send maintenance reminders.
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.common.includes import reminders
from core.common.models import Site


class Command(BaseCommand):
    help = "Send reminders for overdue and upcoming maintenance and long running work orders"

    def add_arguments(self, parser):
        parser.add_argument(
            "--site",
            type=str,
            help="Code of a specific site to process (optional)",
        )
        parser.add_argument(
            "--long-running-days",
            type=int,
            default=settings.MAINTENANCE_LONG_RUNNING_DAYS,
            help="Days after which an in-progress work order is reported",
        )

    def handle(self, *args, **options):
        site_code = options.get("site")
        if site_code:
            try:
                sites = [Site.objects.get(code=site_code)]
            except Site.DoesNotExist:
                raise CommandError(f"Site {site_code} not found")
        else:
            sites = list(Site.objects.filter(is_active=True))

        self.stdout.write(self.style.SUCCESS(f"Checking maintenance reminders at {timezone.now()}"))

        total_sent = 0
        for site in sites:
            self.stdout.write(f"\nProcessing site: {site}")
            summary = reminders.send_reminders(site, long_running_days=options["long_running_days"])
            total_sent += summary.notifications_sent

            if summary.overdue_plans:
                self.stdout.write(self.style.WARNING(f"  {len(summary.overdue_plans)} overdue plan(s):"))
                for item in summary.overdue_plans:
                    self.stdout.write(
                        f"    - [{item['plan_code']}] {item['plan_name']} "
                        f"({item['asset_name']}): {item['days_overdue']} day(s) overdue"
                    )
            if summary.due_soon_plans:
                self.stdout.write(f"  {len(summary.due_soon_plans)} plan(s) coming due:")
                for item in summary.due_soon_plans:
                    self.stdout.write(f"    - [{item['plan_code']}] {item['plan_name']} ({item['asset_name']})")
            if summary.long_running:
                self.stdout.write(
                    self.style.WARNING(f"  {len(summary.long_running)} work order(s) in progress too long:")
                )
                for item in summary.long_running:
                    self.stdout.write(
                        f"    - {item['work_order_code']}: {item['title']} ({item['days_running']} days)"
                    )
            if summary.unassigned_urgent:
                self.stdout.write(
                    self.style.ERROR(f"  {len(summary.unassigned_urgent)} urgent work order(s) not assigned:")
                )
                for item in summary.unassigned_urgent:
                    self.stdout.write(f"    - {item['work_order_code']}: {item['title']} ({item['priority']})")

        self.stdout.write(f"\n{'=' * 50}")
        self.stdout.write(self.style.SUCCESS(f"Reminders sent: {total_sent}"))
