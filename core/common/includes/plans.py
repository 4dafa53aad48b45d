"""
Maintenance plan utilities for the gmao application.
Plan create/update wrappers that keep the next-due markers consistent.
"""

import logging
from typing import Optional

from django.conf import settings
from django.db import transaction

from core.common.code_generator import CodeGenerator
from core.common.error_codes import MaintenanceErrorCodes
from core.common.includes import triggers
from core.common.includes.clock import get_clock
from core.common.includes.results import Outcome
from core.common.models import (
    FrequencyType,
    MaintenancePlan,
    MaintenancePlanTask,
)

logger = logging.getLogger("gmao")

# Fields whose edit invalidates the stored next-due markers.
SCHEDULE_FIELDS = {
    "frequency_type",
    "frequency_value",
    "counter_threshold",
    "mileage_interval",
    "start_date",
    "end_date",
    "last_execution_date",
    "last_mileage",
}


def generate_code(site, year) -> str:
    return CodeGenerator.next_sequential_code(
        MaintenancePlan.objects.for_site(site), "PM", year
    )


def initial_schedule(plan: MaintenancePlan, clock=None) -> None:
    """
    Set the first next-due marker of a new plan: the start date for calendar
    plans, the current asset counter plus one interval for counter plans.
    """
    clock = get_clock(clock)
    if plan.is_counter_based:
        reading = clock.counter_for(plan.asset)
        plan.last_mileage = reading
        plan.next_mileage = reading + plan.counter_interval
        return

    if plan.end_date is not None and plan.start_date > plan.end_date:
        plan.next_execution_date = None
    else:
        plan.next_execution_date = plan.start_date


def recompute_schedule(plan: MaintenancePlan, clock=None) -> None:
    """Recompute next-due markers from the last execution after a manual edit."""
    clock = get_clock(clock)
    if plan.is_counter_based:
        base = plan.last_mileage
        if base is None:
            base = clock.counter_for(plan.asset)
            plan.last_mileage = base
        plan.next_mileage = base + plan.counter_interval
        return

    if plan.last_execution_date is None:
        initial_schedule(plan, clock)
        return

    plan.next_execution_date = triggers.next_execution_date(
        plan.last_execution_date,
        plan.frequency_type,
        plan.frequency_value,
        plan.end_date,
    )


@transaction.atomic
def create(
    site,
    asset,
    name: str,
    frequency_type: str,
    start_date,
    frequency_value: int = 1,
    tasks: Optional[list] = None,
    created_by=None,
    clock=None,
    **kwargs,
) -> Outcome:
    """
    Create a maintenance plan with its ordered task checklist.

    ``tasks`` is a list of dicts with ``description`` and optional
    ``instructions``, ``estimated_duration`` and ``requires_part``.
    """
    clock = get_clock(clock)

    if asset.site_id != site.pk:
        return Outcome.failure(
            f"Asset {asset.code} does not belong to site {site.code}",
            code=MaintenanceErrorCodes.INVALID_PLAN,
        )
    if frequency_type == FrequencyType.MILEAGE and not asset.is_vehicle:
        return Outcome.failure(
            "Mileage plans can only be attached to vehicles",
            code=MaintenanceErrorCodes.INVALID_PLAN,
        )

    kwargs.setdefault("advance_days", settings.MAINTENANCE_DEFAULT_ADVANCE_DAYS)
    kwargs.setdefault("advance_mileage", settings.MAINTENANCE_DEFAULT_ADVANCE_MILEAGE)

    plan = MaintenancePlan(
        site=site,
        asset=asset,
        name=name,
        frequency_type=frequency_type,
        frequency_value=frequency_value,
        start_date=start_date,
        created_by=created_by,
        **kwargs,
    )
    if plan.is_counter_based and not plan.counter_interval:
        return Outcome.failure(
            "Counter and mileage plans require an interval",
            code=MaintenanceErrorCodes.INVALID_PLAN,
        )

    plan.code = generate_code(site, clock.today().year)
    initial_schedule(plan, clock)
    plan.save()

    for index, task in enumerate(tasks or [], start=1):
        MaintenancePlanTask.objects.create(plan=plan, order=index, **task)

    logger.info(f"Maintenance plan created: {plan.code} for asset {asset.code}")
    return Outcome.success(plan)


def update(plan: MaintenancePlan, clock=None, **changes) -> Outcome:
    """
    Apply field edits to a plan; schedule edits trigger a recompute of the
    next-due markers.
    """
    if "next_execution_date" in changes or "next_mileage" in changes:
        return Outcome.failure(
            "Next-due markers are computed and cannot be edited directly",
            code=MaintenanceErrorCodes.INVALID_PLAN,
        )

    new_type = changes.get("frequency_type", plan.frequency_type)
    if new_type == FrequencyType.MILEAGE and not plan.asset.is_vehicle:
        return Outcome.failure(
            "Mileage plans can only be attached to vehicles",
            code=MaintenanceErrorCodes.INVALID_PLAN,
        )

    for key, value in changes.items():
        setattr(plan, key, value)

    if plan.is_counter_based and not plan.counter_interval:
        return Outcome.failure(
            "Counter and mileage plans require an interval",
            code=MaintenanceErrorCodes.INVALID_PLAN,
        )

    if SCHEDULE_FIELDS.intersection(changes):
        recompute_schedule(plan, clock)

    plan.save()
    logger.info(f"Maintenance plan updated: {plan.code}")
    return Outcome.success(plan)


def activate(plan: MaintenancePlan) -> bool:
    """Activate a plan."""
    if plan.is_active:
        return False

    plan.is_active = True
    plan.save(update_fields=["is_active", "last_modified_at"])
    logger.info(f"Maintenance plan activated: {plan.code}")
    return True


def deactivate(plan: MaintenancePlan) -> bool:
    """Deactivate a plan."""
    if not plan.is_active:
        return False

    plan.is_active = False
    plan.save(update_fields=["is_active", "last_modified_at"])
    logger.info(f"Maintenance plan deactivated: {plan.code}")
    return True


def mark_as_executed(plan: MaintenancePlan, executed_on=None, reading=None, clock=None) -> MaintenancePlan:
    """
    Record an execution of the plan and advance its next-due marker.

    Calendar plans restart their interval from ``executed_on`` (today by
    default); the new due date never moves before the previous one. Counter
    plans restart from ``reading`` (the current asset counter by default) and
    store the reading on the asset.
    """
    clock = get_clock(clock)

    if plan.is_counter_based:
        if reading is None:
            reading = clock.counter_for(plan.asset)
        else:
            plan.asset.update_counter(reading)
        plan.last_mileage = reading
        plan.next_mileage = reading + plan.counter_interval
        plan.save()
        logger.info(f"Maintenance plan {plan.code} executed at {reading}, next at {plan.next_mileage}")
        return plan

    executed_on = executed_on or clock.today()
    previous_next = plan.next_execution_date

    plan.last_execution_date = executed_on
    candidate = triggers.next_execution_date(
        executed_on, plan.frequency_type, plan.frequency_value, plan.end_date
    )
    if candidate is not None and previous_next is not None and candidate < previous_next:
        candidate = previous_next
    plan.next_execution_date = candidate
    plan.save()

    logger.info(f"Maintenance plan {plan.code} executed on {executed_on}, next on {candidate}")
    return plan


def get_status(plan: MaintenancePlan, clock=None) -> dict:
    """Display status of a plan: label, days and counter units left."""
    clock = get_clock(clock)
    today = clock.today()
    counter = clock.counter_for(plan.asset) if plan.is_counter_based else None
    snap = triggers.snapshot(plan, counter)
    return {
        "status": triggers.status_label(snap, today),
        "is_due": triggers.is_due(snap, today),
        "is_due_soon": triggers.is_due_soon(snap, today),
        "days_until_due": triggers.days_until_due(snap, today),
        "counter_until_due": triggers.counter_until_due(snap),
        "frequency_label": plan.frequency_label,
        "asset_name": plan.asset_name,
    }
