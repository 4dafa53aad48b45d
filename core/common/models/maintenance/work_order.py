"""
Work order models for the gmao application.
"""

import logging
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractSiteModel
from core.common.models.maintenance.plan import MaintenancePriority

logger = logging.getLogger('gmao')


class WorkOrderStatus(models.TextChoices):
    """Lifecycle states of a work order."""

    PENDING = "PENDING", _("Pending")
    APPROVED = "APPROVED", _("Approved")
    ASSIGNED = "ASSIGNED", _("Assigned")
    IN_PROGRESS = "IN_PROGRESS", _("In Progress")
    ON_HOLD = "ON_HOLD", _("On Hold")
    COMPLETED = "COMPLETED", _("Completed")
    CANCELLED = "CANCELLED", _("Cancelled")


OPEN_STATUSES = (
    WorkOrderStatus.PENDING,
    WorkOrderStatus.APPROVED,
    WorkOrderStatus.ASSIGNED,
    WorkOrderStatus.IN_PROGRESS,
    WorkOrderStatus.ON_HOLD,
)
EXECUTING_STATUSES = (WorkOrderStatus.IN_PROGRESS, WorkOrderStatus.ON_HOLD)
TERMINAL_STATUSES = (WorkOrderStatus.COMPLETED, WorkOrderStatus.CANCELLED)


class WorkType(models.TextChoices):
    """Kinds of maintenance work."""

    CORRECTIVE = "CORRECTIVE", _("Corrective")
    PREVENTIVE = "PREVENTIVE", _("Preventive")
    IMPROVEMENT = "IMPROVEMENT", _("Improvement")
    INSPECTION = "INSPECTION", _("Inspection")


class WorkOrder(AbstractSiteModel):
    """
    A unit of maintenance execution, created manually or generated from a
    preventive plan.

    Status, timestamps and costs are only mutated through
    ``core.common.includes.work_orders`` and ``core.common.includes.costs``.
    """

    asset = models.ForeignKey(
        verbose_name=_("asset"),
        to="common.Asset",
        on_delete=models.PROTECT,
        related_name="work_orders",
    )

    plan = models.ForeignKey(
        verbose_name=_("maintenance plan"),
        to="common.MaintenancePlan",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="work_orders",
        help_text=_("Plan this work order was generated from"),
    )

    requested_by = models.ForeignKey(
        verbose_name=_("requested by"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="requested_work_orders",
    )

    assigned_to = models.ForeignKey(
        verbose_name=_("assigned to"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_work_orders",
    )

    code = models.CharField(
        verbose_name=_("work order code"),
        max_length=20,
        help_text=_("Work order code, unique per site (WO-YYYY-NNNN)"),
    )

    title = models.CharField(
        verbose_name=_("title"),
        max_length=255,
    )

    description = models.TextField(
        verbose_name=_("description"),
        blank=True,
    )

    work_type = models.CharField(
        verbose_name=_("work type"),
        max_length=20,
        choices=WorkType.choices,
        default=WorkType.CORRECTIVE,
    )

    priority = models.CharField(
        verbose_name=_("priority"),
        max_length=10,
        choices=MaintenancePriority.choices,
        default=MaintenancePriority.MEDIUM,
    )

    status = models.CharField(
        verbose_name=_("status"),
        max_length=20,
        choices=WorkOrderStatus.choices,
        default=WorkOrderStatus.PENDING,
    )

    scheduled_start = models.DateTimeField(
        verbose_name=_("scheduled start"),
        null=True,
        blank=True,
    )

    scheduled_end = models.DateTimeField(
        verbose_name=_("scheduled end"),
        null=True,
        blank=True,
    )

    actual_start = models.DateTimeField(
        verbose_name=_("actual start"),
        null=True,
        blank=True,
    )

    actual_end = models.DateTimeField(
        verbose_name=_("actual end"),
        null=True,
        blank=True,
    )

    estimated_duration = models.PositiveIntegerField(
        verbose_name=_("estimated duration"),
        null=True,
        blank=True,
        help_text=_("Estimated duration in minutes"),
    )

    actual_duration = models.PositiveIntegerField(
        verbose_name=_("actual duration"),
        null=True,
        blank=True,
        help_text=_("Actual duration in minutes"),
    )

    labor_cost = models.DecimalField(
        verbose_name=_("labor cost"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    parts_cost = models.DecimalField(
        verbose_name=_("parts cost"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    total_cost = models.DecimalField(
        verbose_name=_("total cost"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Labor cost plus parts cost"),
    )

    approved_by = models.ForeignKey(
        verbose_name=_("approved by"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="approved_work_orders",
    )

    approved_at = models.DateTimeField(
        verbose_name=_("approved at"),
        null=True,
        blank=True,
    )

    completed_by = models.ForeignKey(
        verbose_name=_("completed by"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="completed_work_orders",
    )

    completed_at = models.DateTimeField(
        verbose_name=_("completed at"),
        null=True,
        blank=True,
    )

    cancelled_by = models.ForeignKey(
        verbose_name=_("cancelled by"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cancelled_work_orders",
    )

    cancelled_at = models.DateTimeField(
        verbose_name=_("cancelled at"),
        null=True,
        blank=True,
    )

    cancellation_reason = models.TextField(
        verbose_name=_("cancellation reason"),
        blank=True,
    )

    work_performed = models.TextField(
        verbose_name=_("work performed"),
        blank=True,
    )

    root_cause = models.TextField(
        verbose_name=_("root cause"),
        blank=True,
    )

    diagnosis = models.TextField(
        verbose_name=_("diagnosis"),
        blank=True,
    )

    technician_notes = models.TextField(
        verbose_name=_("technician notes"),
        blank=True,
    )

    mileage_at_intervention = models.PositiveIntegerField(
        verbose_name=_("counter at intervention"),
        null=True,
        blank=True,
        help_text=_("Odometer reading reported when completing a vehicle work order"),
    )

    class Meta:
        default_permissions = []
        verbose_name = _("work order")
        verbose_name_plural = _("work orders")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["site", "code"], name="unique_work_order_code_per_site"),
        ]
        indexes = [
            models.Index(fields=["status"], name="work_order_status_idx"),
            models.Index(fields=["priority"], name="work_order_priority_idx"),
            models.Index(fields=["work_type"], name="work_order_type_idx"),
            models.Index(fields=["scheduled_start"], name="work_order_sched_start_idx"),
        ]

    def __str__(self):
        return f"{self.code} - {self.title}"

    @property
    def is_open(self):
        return self.status in OPEN_STATUSES

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    @property
    def is_overdue(self):
        """Check if the work order has passed its scheduled end while still open."""
        if not self.scheduled_end or not self.is_open:
            return False
        return timezone.now() > self.scheduled_end

    @property
    def duration_formatted(self):
        if self.actual_duration is None:
            return None
        hours, minutes = divmod(self.actual_duration, 60)
        if hours:
            return f"{hours}h {minutes:02d}min"
        return f"{minutes}min"


class WorkOrderPart(AbstractSiteModel):
    """
    A stock item consumed by a work order.
    """

    work_order = models.ForeignKey(
        verbose_name=_("work order"),
        to="common.WorkOrder",
        on_delete=models.CASCADE,
        related_name="parts",
    )

    part = models.ForeignKey(
        verbose_name=_("part"),
        to="common.Part",
        on_delete=models.PROTECT,
        related_name="work_order_lines",
    )

    quantity_used = models.PositiveIntegerField(
        verbose_name=_("quantity used"),
    )

    unit_price = models.DecimalField(
        verbose_name=_("unit price"),
        max_digits=12,
        decimal_places=2,
    )

    total_price = models.DecimalField(
        verbose_name=_("total price"),
        max_digits=12,
        decimal_places=2,
        help_text=_("Quantity used × unit price"),
    )

    class Meta:
        default_permissions = []
        verbose_name = _("work order part")
        verbose_name_plural = _("work order parts")
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.work_order.code} - {self.part.code} x{self.quantity_used}"

    def save(self, *args, **kwargs):
        self.total_price = self.unit_price * self.quantity_used
        super().save(*args, **kwargs)
