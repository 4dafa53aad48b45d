"""
Maintenance reminders for the gmao application.

Scans a site for overdue plans, plans coming due, work orders stuck in
execution and urgent work orders nobody is assigned to, and notifies the
people concerned. A reminder already sent for the same object within its
window is not sent again.
"""

import datetime
from dataclasses import dataclass, field
from typing import List

from django.conf import settings

from core.common.includes import notifications, triggers
from core.common.includes.clock import get_clock
from core.common.logging import log_batch
from core.common.models import (
    MaintenancePlan,
    MaintenancePriority,
    Notification,
    WorkOrder,
    WorkOrderStatus,
)
from core.notifications.events import NotificationEvents


DUE_SOON_WINDOW = datetime.timedelta(days=3)
DAILY_WINDOW = datetime.timedelta(days=1)


@dataclass
class ReminderSummary:
    overdue_plans: List[dict] = field(default_factory=list)
    due_soon_plans: List[dict] = field(default_factory=list)
    long_running: List[dict] = field(default_factory=list)
    unassigned_urgent: List[dict] = field(default_factory=list)
    notifications_sent: int = 0

    def as_dict(self):
        return {
            "overdue_plans": self.overdue_plans,
            "due_soon_plans": self.due_soon_plans,
            "long_running": self.long_running,
            "unassigned_urgent": self.unassigned_urgent,
            "notifications_sent": self.notifications_sent,
        }


def already_notified(event, reference_id, recipient, since) -> bool:
    return Notification.objects.filter(
        event=event.value,
        reference_id=str(reference_id),
        recipient=recipient,
        created_at__gte=since,
    ).exists()


def _send_once(event, recipients, site, context, since) -> int:
    fresh = [
        user
        for user in dict.fromkeys(u for u in recipients if u is not None)
        if not already_notified(event, context["reference_id"], user, since)
    ]
    if not fresh:
        return 0
    notifications.send(event_name=event, recipients=fresh, site=site, context=context)
    return len(fresh)


def _plan_context(plan, message, **extra):
    context = {
        "reference_type": "maintenance_plan",
        "reference_id": str(plan.pk),
        "plan_code": plan.code,
        "asset_name": plan.asset.name,
        "message": message,
    }
    context.update(extra)
    return context


def _plan_recipients(plan):
    return [plan.assigned_to, plan.created_by]


def check_plans(site, clock, summary: ReminderSummary):
    today = clock.today()
    now = clock.now()

    plans = (
        MaintenancePlan.objects.for_site(site)
        .filter(is_active=True)
        .select_related("asset", "assigned_to", "created_by")
        .order_by("code")
    )
    for plan in plans:
        reading = clock.counter_for(plan.asset) if plan.is_counter_based else None
        snap = triggers.snapshot(plan, reading)
        status = triggers.status_label(snap, today)

        if status == triggers.PlanStatus.OVERDUE:
            days_overdue = -(triggers.days_until_due(snap, today) or 0)
            summary.overdue_plans.append(
                {
                    "plan_code": plan.code,
                    "plan_name": plan.name,
                    "asset_name": plan.asset.name,
                    "days_overdue": days_overdue,
                }
            )
            if plan.is_counter_based:
                message = f"Maintenance {plan.name} on {plan.asset.name} is due ({reading} / {plan.next_mileage})."
            else:
                message = f"Maintenance {plan.name} on {plan.asset.name} is {days_overdue} day(s) overdue."
            summary.notifications_sent += _send_once(
                NotificationEvents.MAINTENANCE_OVERDUE,
                _plan_recipients(plan),
                site,
                _plan_context(plan, message, days_overdue=days_overdue),
                now - DAILY_WINDOW,
            )

        elif status == triggers.PlanStatus.DUE_SOON:
            summary.due_soon_plans.append(
                {
                    "plan_code": plan.code,
                    "plan_name": plan.name,
                    "asset_name": plan.asset.name,
                    "days_until_due": triggers.days_until_due(snap, today),
                    "counter_until_due": triggers.counter_until_due(snap),
                }
            )
            summary.notifications_sent += _send_once(
                NotificationEvents.MAINTENANCE_DUE,
                _plan_recipients(plan),
                site,
                _plan_context(plan, f"Maintenance {plan.name} on {plan.asset.name} is coming due."),
                now - DUE_SOON_WINDOW,
            )


def check_long_running(site, clock, summary: ReminderSummary, days: int):
    now = clock.now()
    threshold = now - datetime.timedelta(days=days)

    work_orders = (
        WorkOrder.objects.for_site(site)
        .filter(status=WorkOrderStatus.IN_PROGRESS, actual_start__lt=threshold)
        .select_related("asset", "assigned_to", "requested_by")
        .order_by("actual_start")
    )
    for work_order in work_orders:
        days_running = (now - work_order.actual_start).days
        summary.long_running.append(
            {
                "work_order_code": work_order.code,
                "title": work_order.title,
                "asset_name": work_order.asset.name,
                "days_running": days_running,
            }
        )
        summary.notifications_sent += _send_once(
            NotificationEvents.WORK_ORDER_LONG_RUNNING,
            [work_order.assigned_to, work_order.requested_by],
            site,
            notifications.work_order_context(
                work_order,
                days_running=days_running,
                message=f"Work order {work_order.code} has been in progress for {days_running} days.",
            ),
            now - DAILY_WINDOW,
        )


def check_unassigned_urgent(site, summary: ReminderSummary):
    work_orders = (
        WorkOrder.objects.for_site(site)
        .filter(
            status__in=[WorkOrderStatus.PENDING, WorkOrderStatus.APPROVED],
            priority__in=[MaintenancePriority.HIGH, MaintenancePriority.CRITICAL],
            assigned_to__isnull=True,
        )
        .select_related("asset")
        .order_by("created_at")
    )
    for work_order in work_orders:
        summary.unassigned_urgent.append(
            {
                "work_order_code": work_order.code,
                "title": work_order.title,
                "priority": work_order.priority,
                "asset_name": work_order.asset.name,
            }
        )


def send_reminders(site, clock=None, long_running_days=None) -> ReminderSummary:
    """Run every reminder check for one site and return what was found."""
    clock = get_clock(clock)
    if long_running_days is None:
        long_running_days = settings.MAINTENANCE_LONG_RUNNING_DAYS

    summary = ReminderSummary()
    check_plans(site, clock, summary)
    check_long_running(site, clock, summary, long_running_days)
    check_unassigned_urgent(site, summary)

    log_batch(
        "maintenance_reminders",
        site.code,
        {
            "overdue": len(summary.overdue_plans),
            "due soon": len(summary.due_soon_plans),
            "long running": len(summary.long_running),
            "urgent unassigned": len(summary.unassigned_urgent),
            "notifications": summary.notifications_sent,
        },
    )
    return summary
