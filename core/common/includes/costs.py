"""
Work order cost utilities for the gmao application.

Keeps labor_cost, parts_cost and total_cost consistent as parts are attached
and detached and as work orders complete, and moves stock accordingly.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import transaction
from django.db.models import Sum

from core.common.error_codes import CommonAPIErrorCodes, MaintenanceErrorCodes
from core.common.exceptions import ConsistencyViolationException
from core.common.includes import history, notifications
from core.common.includes.results import Outcome
from core.common.models import (
    Part,
    StockMovement,
    StockMovementType,
    WorkOrder,
    WorkOrderAction,
    WorkOrderPart,
)

logger = logging.getLogger("gmao")

CENT = Decimal("0.01")


def compute_labor_cost(duration_minutes) -> Decimal:
    """round(minutes / 60 * hourly rate, 2)"""
    if not duration_minutes:
        return Decimal("0.00")
    rate = Decimal(str(settings.MAINTENANCE_HOURLY_RATE))
    return (Decimal(duration_minutes) / Decimal(60) * rate).quantize(CENT, rounding=ROUND_HALF_UP)


def recompute_parts_cost(work_order: WorkOrder) -> None:
    """Recompute parts_cost from the remaining part lines, then total_cost."""
    parts_total = work_order.parts.aggregate(total=Sum("total_price"))["total"]
    work_order.parts_cost = (parts_total or Decimal("0.00")).quantize(CENT)
    work_order.total_cost = work_order.labor_cost + work_order.parts_cost


def apply_labor_cost(work_order: WorkOrder) -> None:
    """Set labor_cost from actual_duration and recompute total_cost. Does not save."""
    work_order.labor_cost = compute_labor_cost(work_order.actual_duration)
    work_order.total_cost = work_order.labor_cost + work_order.parts_cost


def check_totals(work_order: WorkOrder) -> None:
    if work_order.total_cost != work_order.labor_cost + work_order.parts_cost:
        logger.critical(
            f"Cost totals drifted on work order {work_order.code}: "
            f"{work_order.total_cost} != {work_order.labor_cost} + {work_order.parts_cost}"
        )
        raise ConsistencyViolationException(
            detail=f"Cost totals are inconsistent on work order {work_order.code}."
        )


def _lock_work_order(work_order: WorkOrder) -> WorkOrder:
    return WorkOrder.objects.select_for_update().get(pk=work_order.pk)


def add_part(work_order: WorkOrder, part: Part, quantity: int, user=None) -> Outcome:
    """
    Attach ``quantity`` units of ``part`` to a work order.

    Stock is re-read under a row lock, decremented and traced with an
    outgoing stock movement.
    """
    if quantity is None or quantity < 1:
        return Outcome.failure(
            "Quantity must be at least 1", code=MaintenanceErrorCodes.INVALID_QUANTITY
        )
    if part.site_id != work_order.site_id:
        return Outcome.failure(
            f"Part {part.code} does not belong to the work order site",
            code=CommonAPIErrorCodes.VALIDATION_ERROR,
        )

    with transaction.atomic():
        locked = _lock_work_order(work_order)
        if locked.is_terminal:
            return Outcome.failure(
                f"Cannot add parts to a {locked.get_status_display().lower()} work order",
                code=MaintenanceErrorCodes.TERMINAL_WORK_ORDER,
            )

        stock = Part.objects.select_for_update().get(pk=part.pk)
        if stock.quantity_in_stock < quantity:
            return Outcome.failure(
                f"Insufficient stock. Available: {stock.quantity_in_stock} {stock.unit}",
                code=MaintenanceErrorCodes.INSUFFICIENT_STOCK,
                available=stock.quantity_in_stock,
            )

        line = WorkOrderPart.objects.create(
            site_id=locked.site_id,
            work_order=locked,
            part=stock,
            quantity_used=quantity,
            unit_price=stock.unit_price,
        )

        quantity_before = stock.quantity_in_stock
        stock.quantity_in_stock = quantity_before - quantity
        stock.save(update_fields=["quantity_in_stock", "last_modified_at"])

        StockMovement.objects.create(
            site_id=stock.site_id,
            part=stock,
            user=user,
            work_order=locked,
            movement_type=StockMovementType.OUT,
            quantity=-quantity,
            quantity_before=quantity_before,
            quantity_after=stock.quantity_in_stock,
            unit_price=stock.unit_price,
            reason=f"Used on {locked.code}",
        )

        recompute_parts_cost(locked)
        check_totals(locked)
        locked.save(update_fields=["parts_cost", "total_cost", "last_modified_at"])

        history.record(
            locked,
            user,
            WorkOrderAction.PART_ADDED,
            new_value=f"{quantity} x {stock.code}",
            description=f"Part added: {quantity} x {stock.name} ({line.total_price})",
        )

        if stock.is_low_stock:
            recipients = [user]
            if locked.requested_by_id and locked.requested_by_id != getattr(user, "pk", None):
                recipients.append(locked.requested_by)
            notifications.notify_part_low_stock(stock, recipients)

    work_order.refresh_from_db()
    part.refresh_from_db()
    logger.info(f"Part {stock.code} x{quantity} added to work order {work_order.code}")
    return Outcome.success(line)


def remove_part(work_order_part: WorkOrderPart, user=None) -> Outcome:
    """
    Detach a part line: restock its quantity, trace an incoming stock movement
    and recompute the costs.
    """
    work_order = work_order_part.work_order

    with transaction.atomic():
        locked = _lock_work_order(work_order)
        if locked.is_terminal:
            return Outcome.failure(
                f"Cannot remove parts from a {locked.get_status_display().lower()} work order",
                code=MaintenanceErrorCodes.TERMINAL_WORK_ORDER,
            )

        stock = Part.objects.select_for_update().get(pk=work_order_part.part_id)
        quantity = work_order_part.quantity_used
        quantity_before = stock.quantity_in_stock
        stock.quantity_in_stock = quantity_before + quantity
        stock.save(update_fields=["quantity_in_stock", "last_modified_at"])

        StockMovement.objects.create(
            site_id=stock.site_id,
            part=stock,
            user=user,
            work_order=locked,
            movement_type=StockMovementType.IN,
            quantity=quantity,
            quantity_before=quantity_before,
            quantity_after=stock.quantity_in_stock,
            unit_price=work_order_part.unit_price,
            reason=f"Returned from {locked.code}",
        )

        history.record(
            locked,
            user,
            WorkOrderAction.PART_REMOVED,
            old_value=f"{quantity} x {stock.code}",
            description=f"Part removed: {quantity} x {stock.name}",
        )

        work_order_part.delete()

        recompute_parts_cost(locked)
        check_totals(locked)
        locked.save(update_fields=["parts_cost", "total_cost", "last_modified_at"])

    work_order.refresh_from_db()
    logger.info(f"Part {stock.code} x{quantity} removed from work order {work_order.code}")
    return Outcome.success(work_order)
