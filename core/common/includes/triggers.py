"""
Trigger evaluation for preventive maintenance plans.

Everything in this module is a pure function over a PlanSnapshot: nothing is
read from or written to the database, so the same functions back both the
display status of a plan and the generation gate.
"""

import datetime
from dataclasses import dataclass
from typing import Optional

from dateutil.relativedelta import relativedelta

from core.common.models.maintenance.plan import COUNTER_FREQUENCIES, FrequencyType


class PlanStatus:
    INACTIVE = "inactive"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    ON_TRACK = "on_track"


@dataclass(frozen=True)
class PlanSnapshot:
    frequency_type: str
    frequency_value: int
    is_active: bool
    next_execution_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    next_mileage: Optional[int] = None
    counter: Optional[int] = None
    advance_days: int = 0
    advance_mileage: int = 0

    @property
    def is_counter_based(self):
        return self.frequency_type in COUNTER_FREQUENCIES


def snapshot(plan, counter=None) -> PlanSnapshot:
    """
    Capture the trigger-relevant state of a plan.

    ``counter`` is the current usage reading of the plan's asset; it is only
    meaningful for counter and mileage plans.
    """
    return PlanSnapshot(
        frequency_type=plan.frequency_type,
        frequency_value=plan.frequency_value,
        is_active=plan.is_active,
        next_execution_date=plan.next_execution_date,
        end_date=plan.end_date,
        next_mileage=plan.next_mileage,
        counter=counter,
        advance_days=plan.advance_days or 0,
        advance_mileage=plan.advance_mileage or 0,
    )


def is_due(plan: PlanSnapshot, today: datetime.date) -> bool:
    if plan.is_counter_based:
        if plan.next_mileage is None or plan.counter is None:
            return False
        return plan.counter >= plan.next_mileage

    if plan.next_execution_date is None:
        return False
    return plan.next_execution_date <= today


def is_due_soon(plan: PlanSnapshot, today: datetime.date) -> bool:
    if is_due(plan, today):
        return False

    if plan.is_counter_based:
        if plan.next_mileage is None or plan.counter is None:
            return False
        return plan.counter >= plan.next_mileage - plan.advance_mileage

    if plan.next_execution_date is None:
        return False
    return today >= plan.next_execution_date - datetime.timedelta(days=plan.advance_days)


def needs_generation(plan: PlanSnapshot, today: datetime.date) -> bool:
    """A work order is generated once the plan enters its advance window."""
    if not plan.is_active:
        return False
    return is_due(plan, today) or is_due_soon(plan, today)


def status_label(plan: PlanSnapshot, today: datetime.date) -> str:
    if not plan.is_active:
        return PlanStatus.INACTIVE
    if is_due(plan, today):
        return PlanStatus.OVERDUE
    if is_due_soon(plan, today):
        return PlanStatus.DUE_SOON
    return PlanStatus.ON_TRACK


def days_until_due(plan: PlanSnapshot, today: datetime.date) -> Optional[int]:
    """Days left before a calendar plan is due; negative when overdue."""
    if plan.is_counter_based or plan.next_execution_date is None:
        return None
    return (plan.next_execution_date - today).days


def counter_until_due(plan: PlanSnapshot) -> Optional[int]:
    """Counter units left before a counter plan is due; negative when overdue."""
    if not plan.is_counter_based or plan.next_mileage is None or plan.counter is None:
        return None
    return plan.next_mileage - plan.counter


def add_interval(base_date: datetime.date, frequency_type: str, frequency_value: int) -> datetime.date:
    """
    Add ``frequency_value`` units of ``frequency_type`` to ``base_date``.

    Month and year steps clamp to the last day of the target month
    (Jan 31 + 1 month = Feb 28, or Feb 29 in a leap year).
    """
    if frequency_type == FrequencyType.DAILY:
        return base_date + relativedelta(days=frequency_value)
    elif frequency_type == FrequencyType.WEEKLY:
        return base_date + relativedelta(weeks=frequency_value)
    elif frequency_type == FrequencyType.MONTHLY:
        return base_date + relativedelta(months=frequency_value)
    elif frequency_type == FrequencyType.YEARLY:
        return base_date + relativedelta(years=frequency_value)
    raise ValueError(f"{frequency_type} is not a calendar frequency")


def next_execution_date(
    base_date: datetime.date,
    frequency_type: str,
    frequency_value: int,
    end_date: Optional[datetime.date] = None,
) -> Optional[datetime.date]:
    """
    The occurrence following ``base_date``, or None once it falls after
    ``end_date`` (the plan goes dormant).
    """
    candidate = add_interval(base_date, frequency_type, frequency_value)
    if end_date is not None and candidate > end_date:
        return None
    return candidate
