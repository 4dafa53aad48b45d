"""
Work order lifecycle for the gmao application.

Every transition locks the work order row, re-checks its status under the
lock, applies its side effects (timestamps, asset availability, costs) and
appends exactly one history row. Expected rejections come back as a falsy
Outcome; infrastructure errors propagate.
"""

import logging

from django.db import transaction

from core.common.code_generator import CodeGenerator
from core.common.error_codes import CommonAPIErrorCodes, MaintenanceErrorCodes
from core.common.includes import availability, costs, history, notifications
from core.common.includes.clock import get_clock
from core.common.includes.results import Outcome
from core.common.logging import log_audit
from core.common.models import (
    EXECUTING_STATUSES,
    MaintenanceLog,
    MaintenanceLogStatus,
    MaintenancePriority,
    WorkOrder,
    WorkOrderAction,
    WorkOrderComment,
    WorkOrderStatus,
    WorkType,
)

logger = logging.getLogger("gmao")

TRANSITIONS = {
    WorkOrderStatus.PENDING: {
        WorkOrderStatus.APPROVED,
        WorkOrderStatus.ASSIGNED,
        WorkOrderStatus.IN_PROGRESS,
        WorkOrderStatus.CANCELLED,
    },
    WorkOrderStatus.APPROVED: {
        WorkOrderStatus.ASSIGNED,
        WorkOrderStatus.IN_PROGRESS,
        WorkOrderStatus.CANCELLED,
    },
    WorkOrderStatus.ASSIGNED: {
        WorkOrderStatus.IN_PROGRESS,
        WorkOrderStatus.CANCELLED,
    },
    WorkOrderStatus.IN_PROGRESS: {
        WorkOrderStatus.ON_HOLD,
        WorkOrderStatus.COMPLETED,
        WorkOrderStatus.CANCELLED,
    },
    WorkOrderStatus.ON_HOLD: {
        WorkOrderStatus.IN_PROGRESS,
        WorkOrderStatus.COMPLETED,
        WorkOrderStatus.CANCELLED,
    },
    WorkOrderStatus.COMPLETED: set(),
    WorkOrderStatus.CANCELLED: set(),
}

# On hold goes back to in progress through resume, not start.
START_FROM = {
    WorkOrderStatus.PENDING,
    WorkOrderStatus.APPROVED,
    WorkOrderStatus.ASSIGNED,
}

REPORT_FIELDS = ("work_performed", "root_cause", "diagnosis", "technician_notes")


def can_transition(current, target) -> bool:
    return target in TRANSITIONS.get(current, set())


def generate_code(site, year) -> str:
    return CodeGenerator.next_sequential_code(
        WorkOrder.objects.for_site(site), "WO", year
    )


def _lock(work_order: WorkOrder) -> WorkOrder:
    return WorkOrder.objects.select_for_update().get(pk=work_order.pk)


def _reject(work_order: WorkOrder, action: str) -> Outcome:
    return Outcome.failure(
        f"Cannot {action} a work order that is {work_order.get_status_display().lower()}",
        code=MaintenanceErrorCodes.INVALID_TRANSITION,
        status=work_order.status,
    )


def _audit(work_order, user, action):
    log_audit(
        event_type=f"work_order.{action}",
        user_id=str(user.pk) if user else None,
        site_id=str(work_order.site_id),
        resource_type="work_order",
        resource_id=str(work_order.pk),
    )


def _append_note(existing: str, note: str) -> str:
    return f"{existing}\n{note}".strip() if existing else note


@transaction.atomic
def create(
    site,
    asset,
    title: str,
    requested_by=None,
    description: str = "",
    work_type: str = WorkType.CORRECTIVE,
    priority: str = MaintenancePriority.MEDIUM,
    assigned_to=None,
    plan=None,
    scheduled_start=None,
    scheduled_end=None,
    estimated_duration=None,
    history_description: str = "",
    actor=None,
    clock=None,
) -> Outcome:
    """
    Create a work order in ``assigned`` status when a technician is given,
    else ``pending``. A critical work order puts its asset under maintenance
    straight away. ``actor`` is recorded on the history row and defaults to
    the requester.
    """
    clock = get_clock(clock)
    actor = actor or requested_by

    if asset.site_id != site.pk:
        return Outcome.failure(
            f"Asset {asset.code} does not belong to site {site.code}",
            code=CommonAPIErrorCodes.VALIDATION_ERROR,
        )

    status = WorkOrderStatus.ASSIGNED if assigned_to else WorkOrderStatus.PENDING
    work_order = WorkOrder.objects.create(
        site=site,
        asset=asset,
        plan=plan,
        code=generate_code(site, clock.today().year),
        title=title,
        description=description,
        work_type=work_type,
        priority=priority,
        status=status,
        requested_by=requested_by,
        assigned_to=assigned_to,
        scheduled_start=scheduled_start,
        scheduled_end=scheduled_end,
        estimated_duration=estimated_duration,
    )

    history.record(
        work_order,
        actor,
        WorkOrderAction.CREATED,
        new_value=status,
        description=history_description or f"Work order created: {title}",
    )

    if priority == MaintenancePriority.CRITICAL:
        availability.set_under_maintenance(asset)

    if assigned_to:
        notifications.notify_work_order_assigned(work_order)

    logger.info(f"Work order created: {work_order.code} on asset {asset.code}")
    _audit(work_order, actor, "created")
    return Outcome.success(work_order)


def approve(work_order: WorkOrder, user, clock=None) -> Outcome:
    """Approve a pending work order."""
    clock = get_clock(clock)

    with transaction.atomic():
        locked = _lock(work_order)
        if locked.status != WorkOrderStatus.PENDING:
            return _reject(locked, "approve")

        old_status = locked.status
        locked.status = WorkOrderStatus.APPROVED
        locked.approved_by = user
        locked.approved_at = clock.now()
        locked.save()

        history.record(
            locked,
            user,
            WorkOrderAction.APPROVED,
            old_value=old_status,
            new_value=locked.status,
            description="Work order approved",
        )

    work_order.refresh_from_db()
    logger.info(f"Work order approved: {work_order.code}")
    _audit(work_order, user, "approved")
    return Outcome.success(work_order)


def start(work_order: WorkOrder, user, clock=None) -> Outcome:
    """
    Start execution. Allowed from pending, approved and assigned; puts the
    asset under maintenance.
    """
    clock = get_clock(clock)

    with transaction.atomic():
        locked = _lock(work_order)
        if locked.status not in START_FROM:
            return _reject(locked, "start")

        old_status = locked.status
        locked.status = WorkOrderStatus.IN_PROGRESS
        if locked.actual_start is None:
            locked.actual_start = clock.now()
        if locked.assigned_to_id is None and user is not None:
            locked.assigned_to = user
        locked.save()

        availability.set_under_maintenance(locked.asset)

        history.record(
            locked,
            user,
            WorkOrderAction.STARTED,
            old_value=old_status,
            new_value=locked.status,
            description="Work started",
        )

    work_order.refresh_from_db()
    logger.info(f"Work order started: {work_order.code}")
    _audit(work_order, user, "started")
    return Outcome.success(work_order)


def pause(work_order: WorkOrder, user, reason=None) -> Outcome:
    """Put an in-progress work order on hold. Costs are not touched."""
    with transaction.atomic():
        locked = _lock(work_order)
        if locked.status != WorkOrderStatus.IN_PROGRESS:
            return _reject(locked, "pause")

        locked.status = WorkOrderStatus.ON_HOLD
        if reason:
            locked.technician_notes = _append_note(locked.technician_notes, f"[Paused] {reason}")
        locked.save()

        history.record(
            locked,
            user,
            WorkOrderAction.PAUSED,
            old_value=WorkOrderStatus.IN_PROGRESS,
            new_value=WorkOrderStatus.ON_HOLD,
            description=reason or "Work paused",
        )

    work_order.refresh_from_db()
    logger.info(f"Work order paused: {work_order.code}")
    _audit(work_order, user, "paused")
    return Outcome.success(work_order)


def resume(work_order: WorkOrder, user) -> Outcome:
    """Resume a work order that is on hold."""
    with transaction.atomic():
        locked = _lock(work_order)
        if locked.status != WorkOrderStatus.ON_HOLD:
            return _reject(locked, "resume")

        locked.status = WorkOrderStatus.IN_PROGRESS
        locked.save()

        history.record(
            locked,
            user,
            WorkOrderAction.RESUMED,
            old_value=WorkOrderStatus.ON_HOLD,
            new_value=WorkOrderStatus.IN_PROGRESS,
            description="Work resumed",
        )

    work_order.refresh_from_db()
    logger.info(f"Work order resumed: {work_order.code}")
    _audit(work_order, user, "resumed")
    return Outcome.success(work_order)


def complete(work_order: WorkOrder, user, report=None, clock=None) -> Outcome:
    """
    Complete a work order that is in progress or on hold.

    ``report`` carries work_performed, root_cause, diagnosis,
    technician_notes and, mandatory for vehicles, mileage_at_intervention.
    Sets the actual end and duration, computes the labor cost, releases the
    asset and closes the generation log of preventive orders.
    """
    clock = get_clock(clock)
    report = report or {}

    with transaction.atomic():
        locked = _lock(work_order)
        if not can_transition(locked.status, WorkOrderStatus.COMPLETED):
            return _reject(locked, "complete")

        asset = locked.asset
        mileage = report.get("mileage_at_intervention")
        if asset.is_vehicle and mileage is None:
            return Outcome.failure(
                "A mileage reading is required to complete a vehicle work order",
                code=MaintenanceErrorCodes.MISSING_MILEAGE,
            )

        old_status = locked.status
        now = clock.now()
        locked.status = WorkOrderStatus.COMPLETED
        locked.actual_end = now
        locked.completed_by = user
        locked.completed_at = now
        if locked.actual_start is not None:
            elapsed = (now - locked.actual_start).total_seconds()
            locked.actual_duration = max(int(elapsed // 60), 0)

        for field in REPORT_FIELDS:
            if report.get(field):
                setattr(locked, field, report[field])

        if asset.is_vehicle:
            locked.mileage_at_intervention = mileage
            asset.update_counter(mileage)

        costs.apply_labor_cost(locked)
        costs.check_totals(locked)
        locked.save()

        availability.set_operational(asset, releasing=locked)

        MaintenanceLog.objects.filter(
            work_order=locked, status=MaintenanceLogStatus.GENERATED
        ).update(status=MaintenanceLogStatus.COMPLETED, executed_date=clock.today())

        history.record(
            locked,
            user,
            WorkOrderAction.COMPLETED,
            old_value=old_status,
            new_value=locked.status,
            description="Work completed",
        )

        notifications.notify_work_order_completed(locked)

    work_order.refresh_from_db()
    logger.info(
        f"Work order completed: {work_order.code} in {work_order.actual_duration} min, "
        f"total cost {work_order.total_cost}"
    )
    _audit(work_order, user, "completed")
    return Outcome.success(work_order)


def cancel(work_order: WorkOrder, user, reason: str, clock=None) -> Outcome:
    """
    Cancel a work order that is not completed or already cancelled. A reason
    is required; the asset is released when the order was being executed or
    was critical, since a critical order holds the asset from its creation.
    """
    clock = get_clock(clock)

    if not reason or not reason.strip():
        return Outcome.failure(
            "A cancellation reason is required",
            code=MaintenanceErrorCodes.MISSING_REASON,
        )

    with transaction.atomic():
        locked = _lock(work_order)
        if not can_transition(locked.status, WorkOrderStatus.CANCELLED):
            return _reject(locked, "cancel")

        old_status = locked.status
        locked.status = WorkOrderStatus.CANCELLED
        locked.cancelled_by = user
        locked.cancelled_at = clock.now()
        locked.cancellation_reason = reason
        locked.save()

        if old_status in EXECUTING_STATUSES or locked.priority == MaintenancePriority.CRITICAL:
            availability.set_operational(locked.asset, releasing=locked)

        MaintenanceLog.objects.filter(
            work_order=locked, status=MaintenanceLogStatus.GENERATED
        ).update(status=MaintenanceLogStatus.SKIPPED, notes=f"Work order cancelled: {reason}")

        history.record(
            locked,
            user,
            WorkOrderAction.CANCELLED,
            old_value=old_status,
            new_value=locked.status,
            description=f"Work order cancelled: {reason}",
        )

        notifications.notify_work_order_cancelled(locked)

    work_order.refresh_from_db()
    logger.info(f"Work order cancelled: {work_order.code} ({reason})")
    _audit(work_order, user, "cancelled")
    return Outcome.success(work_order)


def assign(work_order: WorkOrder, technician, user) -> Outcome:
    """
    Assign a technician. Pending and approved orders are promoted to
    assigned; executing orders keep their status.
    """
    with transaction.atomic():
        locked = _lock(work_order)
        if locked.is_terminal:
            return _reject(locked, "assign")

        old_name = history.display_name(locked.assigned_to) or "Unassigned"
        new_name = history.display_name(technician)

        locked.assigned_to = technician
        if locked.status in (WorkOrderStatus.PENDING, WorkOrderStatus.APPROVED):
            locked.status = WorkOrderStatus.ASSIGNED
        locked.save()

        history.record(
            locked,
            user,
            WorkOrderAction.ASSIGNED,
            old_value=old_name,
            new_value=new_name,
            description=f"Assigned to {new_name}",
        )

        notifications.notify_work_order_assigned(locked)

    work_order.refresh_from_db()
    logger.info(f"Work order {work_order.code} assigned to {new_name}")
    _audit(work_order, user, "assigned")
    return Outcome.success(work_order)


@transaction.atomic
def add_comment(work_order: WorkOrder, author, content: str, is_internal: bool = False) -> Outcome:
    """Add a comment to a work order."""
    if not content or not content.strip():
        return Outcome.failure(
            "A comment cannot be empty",
            code=CommonAPIErrorCodes.VALIDATION_ERROR,
        )

    comment = WorkOrderComment.objects.create(
        work_order=work_order,
        author=author,
        content=content,
        is_internal=is_internal,
    )

    history.record(
        work_order,
        author,
        WorkOrderAction.COMMENT_ADDED,
        description=content[:200],
    )

    logger.info(f"Comment added to work order {work_order.code}")
    return Outcome.success(comment)
