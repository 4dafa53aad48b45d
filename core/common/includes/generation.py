"""
Preventive work order generation for the gmao application.

``generate`` turns one due plan into one work order inside a single
transaction: the plan row is locked, the trigger and the open work order
dedup are re-checked under the lock, then the work order, its history row
and the generation log are written and the plan's next-due marker advances.
An occurrence is keyed by its scheduled date (calendar plans) or by the
counter threshold it serves (counter plans); one already logged, typically by
a concurrent run, trips the unique constraint on the log and is reported as
a skip.
"""

import datetime
import logging
from dataclasses import dataclass, field
from typing import List

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.common.error_codes import MaintenanceErrorCodes
from core.common.exceptions import GenerationException
from core.common.includes import notifications, triggers, work_orders
from core.common.includes.clock import get_clock
from core.common.includes.results import Outcome
from core.common.logging import log_batch, log_error
from core.common.models import (
    FrequencyType,
    MaintenanceLog,
    MaintenanceLogStatus,
    MaintenancePlan,
    OPEN_STATUSES,
    WorkOrder,
    WorkType,
)

logger = logging.getLogger("gmao")

SEPARATOR = "=" * 30


class OccurrenceAlreadyGenerated(Exception):
    pass


@dataclass
class BatchSummary:
    analysed: int = 0
    generated: List[dict] = field(default_factory=list)
    skipped: List[dict] = field(default_factory=list)
    errors: List[dict] = field(default_factory=list)


def open_work_order_for(plan):
    return WorkOrder.objects.filter(plan=plan, status__in=OPEN_STATUSES).first()


def build_description(plan, scheduled_date, reading=None) -> str:
    """Plan description, ordered task checklist and trigger information."""
    lines = [plan.description] if plan.description else []

    tasks = list(plan.tasks.all())
    if tasks:
        lines += ["", SEPARATOR, "TASKS", SEPARATOR]
        for number, task in enumerate(tasks, start=1):
            lines.append(f"[ ] {number}. {task.description}")
            if task.instructions:
                lines.append(f"    Instructions: {task.instructions}")
            if task.estimated_duration:
                lines.append(f"    Estimated duration: {task.estimated_duration} min")

    lines += ["", SEPARATOR, f"Generated from plan {plan.code}"]
    if plan.is_counter_based:
        unit = plan.counter_unit or plan.asset.counter_unit
        trigger = "Mileage" if plan.frequency_type == FrequencyType.MILEAGE else "Counter"
        lines.append(f"Trigger: {trigger}")
        lines.append(f"Threshold: {plan.next_mileage} {unit}")
        lines.append(f"Current reading: {reading} {unit}")
    else:
        lines.append(f"Scheduled date: {scheduled_date:%d/%m/%Y}")

    return "\n".join(lines).strip()


def _advance_plan(plan, scheduled_date, reading, counter_override):
    if plan.is_counter_based:
        if counter_override is not None:
            plan.asset.update_counter(counter_override)
        plan.last_mileage = reading
        plan.next_mileage = reading + plan.counter_interval
    else:
        plan.last_execution_date = scheduled_date
        plan.next_execution_date = triggers.next_execution_date(
            scheduled_date, plan.frequency_type, plan.frequency_value, plan.end_date
        )
    plan.save()


def generate(plan, clock=None, triggered_by=None, counter_reading=None, force=False) -> Outcome:
    """
    Generate the work order of the plan's current occurrence.

    Returns a successful Outcome carrying the work order, or a failed one
    with the skip reason (inactive, not due, open work order, already
    generated). ``triggered_by`` is recorded as the actor of the work
    order's creation history, falling back to the plan's creator.
    ``force`` bypasses the due gate for a manual generation but
    never the open work order dedup. Any other error rolls the whole
    generation back and propagates.
    """
    clock = get_clock(clock)
    today = clock.today()

    try:
        with transaction.atomic():
            locked = (
                MaintenancePlan.objects.select_for_update()
                .select_related("asset", "site")
                .get(pk=plan.pk)
            )

            if not locked.is_active:
                return Outcome.failure(
                    f"Plan {locked.code} is inactive",
                    code=MaintenanceErrorCodes.PLAN_INACTIVE,
                )

            reading = None
            if locked.is_counter_based:
                if not locked.counter_interval:
                    raise GenerationException(
                        detail=f"Plan {locked.code} has no counter interval."
                    )
                reading = counter_reading if counter_reading is not None else clock.counter_for(locked.asset)

            snap = triggers.snapshot(locked, reading)
            if not force and not triggers.needs_generation(snap, today):
                return Outcome.failure(
                    f"Plan {locked.code} is not due",
                    code=MaintenanceErrorCodes.PLAN_NOT_DUE,
                )
            if not locked.is_counter_based and locked.next_execution_date is None:
                return Outcome.failure(
                    f"Plan {locked.code} has no upcoming occurrence",
                    code=MaintenanceErrorCodes.PLAN_NOT_DUE,
                )

            existing = open_work_order_for(locked)
            if existing is not None:
                return Outcome.failure(
                    f"Work order {existing.code} is already open for plan {locked.code}",
                    code=MaintenanceErrorCodes.OPEN_WORK_ORDER_EXISTS,
                    work_order_code=existing.code,
                )

            threshold = None
            if locked.is_counter_based:
                scheduled_date = today
                scheduled_start = clock.now()
                threshold = locked.next_mileage if locked.next_mileage is not None else reading
            else:
                scheduled_date = locked.next_execution_date
                scheduled_start = timezone.make_aware(
                    datetime.datetime.combine(scheduled_date, datetime.time.min)
                )

            work_order = work_orders.create(
                site=locked.site,
                asset=locked.asset,
                title=f"[PM] {locked.name}",
                requested_by=locked.created_by,
                description=build_description(locked, scheduled_date, reading),
                work_type=WorkType.PREVENTIVE,
                priority=locked.priority,
                assigned_to=locked.assigned_to,
                plan=locked,
                scheduled_start=scheduled_start,
                estimated_duration=locked.estimated_duration,
                history_description=f"Generated from plan {locked.code}",
                actor=triggered_by,
                clock=clock,
            ).raise_for_failure()

            try:
                with transaction.atomic():
                    MaintenanceLog.objects.create(
                        plan=locked,
                        work_order=work_order,
                        scheduled_date=scheduled_date,
                        mileage_at_generation=reading,
                        threshold_mileage=threshold,
                        status=MaintenanceLogStatus.GENERATED,
                    )
            except IntegrityError as e:
                raise OccurrenceAlreadyGenerated(str(e)) from e

            _advance_plan(locked, scheduled_date, reading, counter_reading)
            notifications.notify_work_order_generated(work_order)

    except OccurrenceAlreadyGenerated:
        logger.info(f"Plan {plan.code}: occurrence already logged")
        return Outcome.failure(
            f"Occurrence of plan {plan.code} was already generated",
            code=MaintenanceErrorCodes.ALREADY_GENERATED,
        )

    plan.refresh_from_db()
    logger.info(
        f"Preventive work order {work_order.code} generated from plan {plan.code} "
        f"(scheduled {scheduled_date})"
    )
    return Outcome.success(work_order)


def _due_plans(site):
    return (
        MaintenancePlan.objects.for_site(site)
        .filter(is_active=True)
        .select_related("asset")
        .order_by("code")
    )


def run_batch(site, clock=None, triggered_by=None, dry_run=False) -> BatchSummary:
    """
    Generate work orders for every active plan of a site that needs one.

    A failing plan is logged with its identity and counted; the batch moves
    on to the next plan.
    """
    clock = get_clock(clock)
    today = clock.today()
    summary = BatchSummary()

    for plan in _due_plans(site):
        summary.analysed += 1
        reading = clock.counter_for(plan.asset) if plan.is_counter_based else None
        snap = triggers.snapshot(plan, reading)

        if not triggers.needs_generation(snap, today):
            summary.skipped.append({"plan_code": plan.code, "reason": "not due"})
            continue

        existing = open_work_order_for(plan)
        if existing is not None:
            summary.skipped.append(
                {"plan_code": plan.code, "reason": f"work order {existing.code} already open"}
            )
            continue

        if dry_run:
            summary.generated.append(
                {
                    "plan_code": plan.code,
                    "plan_name": plan.name,
                    "work_order_code": None,
                    "asset_name": plan.asset.name,
                }
            )
            continue

        try:
            outcome = generate(plan, clock=clock, triggered_by=triggered_by)
        except Exception as e:
            log_error(
                "Preventive work order generation failed",
                exception=e,
                context={"plan_id": str(plan.pk), "plan_code": plan.code},
            )
            summary.errors.append({"plan_code": plan.code, "error": str(e)})
            continue

        if outcome:
            summary.generated.append(
                {
                    "plan_code": plan.code,
                    "plan_name": plan.name,
                    "work_order_code": outcome.value.code,
                    "asset_name": plan.asset.name,
                }
            )
        else:
            summary.skipped.append({"plan_code": plan.code, "reason": outcome.reason})

    log_batch(
        "preventive_generation",
        site.code,
        {
            "generated": len(summary.generated),
            "skipped": len(summary.skipped),
            "errors": len(summary.errors),
        },
        dry_run=dry_run,
    )
    return summary


def check_and_generate_due(site, clock=None, triggered_by=None) -> List[dict]:
    """Generate all due work orders of a site; returns one dict per generated order."""
    return run_batch(site, clock=clock, triggered_by=triggered_by).generated


def preview_due(site, clock=None) -> List[dict]:
    """Plans of a site that the next batch would generate, without writing anything."""
    return run_batch(site, clock=clock, dry_run=True).generated
