"""
Notification utilities for the gmao application.

Best-effort emitter: notifications are delivered once the surrounding
transaction commits, and a delivery failure is logged, never raised, so it
can not undo the maintenance operation that triggered it.
"""

import logging
from typing import Any, List

from django.db import transaction

from core.notifications.events import NotificationEvents
from core.notifications.manager import NotificationManager

logger = logging.getLogger("gmao")


def deliver(event_name: NotificationEvents, recipients: List[Any], site, context: dict) -> bool:
    try:
        return NotificationManager.send(
            event_name=event_name,
            recipients=recipients,
            site=site,
            context=context,
        )
    except Exception as e:
        logger.error(f"Failed to send notification {event_name.value}: {e}")
        return False


def send(event_name: NotificationEvents, recipients: List[Any], site, context: dict) -> bool:
    """
    Schedule a notification for delivery after the current transaction commits.
    Outside a transaction it is delivered immediately.
    """
    recipients = [user for user in recipients if user is not None]
    if not recipients:
        return False

    transaction.on_commit(lambda: deliver(event_name, recipients, site, context))
    return True


def work_order_context(work_order, **extra) -> dict:
    context = {
        "reference_type": "work_order",
        "reference_id": str(work_order.pk),
        "work_order_code": work_order.code,
        "work_order_title": work_order.title,
        "asset_name": work_order.asset.name,
    }
    context.update(extra)
    return context


def notify_work_order_assigned(work_order) -> bool:
    return send(
        event_name=NotificationEvents.WORK_ORDER_ASSIGNED,
        recipients=[work_order.assigned_to],
        site=work_order.site,
        context=work_order_context(
            work_order,
            message=f"Work order {work_order.code} ({work_order.title}) has been assigned to you.",
        ),
    )


def notify_work_order_completed(work_order) -> bool:
    return send(
        event_name=NotificationEvents.WORK_ORDER_COMPLETED,
        recipients=[work_order.requested_by],
        site=work_order.site,
        context=work_order_context(
            work_order,
            message=f"Work order {work_order.code} on {work_order.asset.name} has been completed.",
        ),
    )


def notify_work_order_cancelled(work_order) -> bool:
    recipients = [work_order.requested_by]
    if work_order.assigned_to_id and work_order.assigned_to_id != work_order.requested_by_id:
        recipients.append(work_order.assigned_to)
    return send(
        event_name=NotificationEvents.WORK_ORDER_CANCELLED,
        recipients=recipients,
        site=work_order.site,
        context=work_order_context(
            work_order,
            message=f"Work order {work_order.code} was cancelled: {work_order.cancellation_reason}",
        ),
    )


def notify_work_order_generated(work_order) -> bool:
    # The assignee already receives the assignment notification.
    if work_order.requested_by_id == work_order.assigned_to_id:
        return False
    return send(
        event_name=NotificationEvents.WORK_ORDER_GENERATED,
        recipients=[work_order.requested_by],
        site=work_order.site,
        context=work_order_context(
            work_order,
            plan_code=work_order.plan.code if work_order.plan_id else "",
            message=f"Preventive work order {work_order.code} generated for {work_order.asset.name}.",
        ),
    )


def notify_part_low_stock(part, recipients) -> bool:
    return send(
        event_name=NotificationEvents.PART_LOW_STOCK,
        recipients=recipients,
        site=part.site,
        context={
            "reference_type": "part",
            "reference_id": str(part.pk),
            "part_code": part.code,
            "quantity_in_stock": part.quantity_in_stock,
            "message": f"Part {part.code} is low on stock ({part.quantity_in_stock} {part.unit} left).",
        },
    )
