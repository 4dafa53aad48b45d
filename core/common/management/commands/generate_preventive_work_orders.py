"""
Django management command to generate the due preventive work orders.
"""

import datetime
import logging

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.common.includes import generation
from core.common.includes.clock import FixedClock
from core.common.models import Site

logger = logging.getLogger("gmao")


class Command(BaseCommand):
    help = "Generate preventive work orders for every plan that is due"

    def add_arguments(self, parser):
        parser.add_argument(
            "--site",
            type=str,
            help="Code of a specific site to process (optional)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the work orders that would be generated without creating them",
        )
        parser.add_argument(
            "--date",
            type=str,
            help="Reference date (YYYY-MM-DD), today by default",
        )

    def get_sites(self, site_code):
        if site_code:
            try:
                return [Site.objects.get(code=site_code)]
            except Site.DoesNotExist:
                raise CommandError(f"Site {site_code} not found")
        return list(Site.objects.filter(is_active=True))

    def get_clock(self, raw_date):
        if not raw_date:
            return None
        try:
            return FixedClock(datetime.date.fromisoformat(raw_date))
        except ValueError:
            raise CommandError(f"Invalid date {raw_date}, expected YYYY-MM-DD")

    def handle(self, *args, **options):
        dry_run = options.get("dry_run", False)
        clock = self.get_clock(options.get("date"))
        sites = self.get_sites(options.get("site"))

        self.stdout.write(
            self.style.SUCCESS(f"Starting preventive work order generation at {timezone.now()}")
        )
        if dry_run:
            self.stdout.write(self.style.WARNING("Running in DRY-RUN mode - no changes will be made"))

        analysed = generated = skipped = errors = 0

        for site in sites:
            self.stdout.write(f"\nProcessing site: {site}")
            summary = generation.run_batch(site, clock=clock, dry_run=dry_run)

            analysed += summary.analysed
            generated += len(summary.generated)
            skipped += len(summary.skipped)
            errors += len(summary.errors)

            for item in summary.generated:
                if dry_run:
                    self.stdout.write(
                        self.style.WARNING(f"  Would generate: [{item['plan_code']}] {item['plan_name']}")
                    )
                else:
                    self.stdout.write(
                        self.style.SUCCESS(
                            f"  {item['work_order_code']} generated from [{item['plan_code']}] "
                            f"{item['plan_name']} ({item['asset_name']})"
                        )
                    )
            for item in summary.errors:
                self.stdout.write(self.style.ERROR(f"  [{item['plan_code']}] {item['error']}"))
            if not summary.generated and not summary.errors:
                self.stdout.write("  No due preventive maintenance found")

        self.stdout.write(f"\n{'=' * 50}")
        self.stdout.write(self.style.SUCCESS("PREVENTIVE GENERATION SUMMARY"))
        self.stdout.write(f"{'=' * 50}")
        self.stdout.write(f"Sites processed: {len(sites)}")
        self.stdout.write(f"Plans analysed: {analysed}")
        self.stdout.write(f"{'Would generate' if dry_run else 'Work orders generated'}: {generated}")
        self.stdout.write(f"Skipped: {skipped}")
        self.stdout.write(f"Errors: {errors}")
        if dry_run:
            self.stdout.write("Mode: DRY-RUN (no changes made)")

        if errors:
            logger.error(f"Preventive generation finished with {errors} error(s)")
