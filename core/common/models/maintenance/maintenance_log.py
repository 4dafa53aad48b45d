"""
Maintenance log models for the gmao application.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import UUIDPrimaryKey, ObjectHistoryTracker


class MaintenanceLogStatus(models.TextChoices):
    """Status of a generation event."""

    SCHEDULED = "SCHEDULED", _("Scheduled")
    GENERATED = "GENERATED", _("Generated")
    COMPLETED = "COMPLETED", _("Completed")
    SKIPPED = "SKIPPED", _("Skipped")


class MaintenanceLog(UUIDPrimaryKey, ObjectHistoryTracker):
    """
    One row per generation event of a plan.

    An occurrence is identified by its scheduled date for calendar plans and
    by the counter threshold it serves for counter plans; the matching unique
    constraint is the last guard against generating it twice.
    """

    plan = models.ForeignKey(
        verbose_name=_("maintenance plan"),
        to="common.MaintenancePlan",
        on_delete=models.CASCADE,
        related_name="logs",
    )

    work_order = models.ForeignKey(
        verbose_name=_("work order"),
        to="common.WorkOrder",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="maintenance_logs",
    )

    scheduled_date = models.DateField(
        verbose_name=_("scheduled date"),
        help_text=_("Occurrence date this generation covers"),
    )

    mileage_at_generation = models.PositiveIntegerField(
        verbose_name=_("counter at generation"),
        null=True,
        blank=True,
    )

    threshold_mileage = models.PositiveIntegerField(
        verbose_name=_("counter threshold"),
        null=True,
        blank=True,
        help_text=_("Counter value this generation covers, for counter plans"),
    )

    status = models.CharField(
        verbose_name=_("status"),
        max_length=20,
        choices=MaintenanceLogStatus.choices,
        default=MaintenanceLogStatus.SCHEDULED,
    )

    executed_date = models.DateField(
        verbose_name=_("executed date"),
        null=True,
        blank=True,
    )

    notes = models.TextField(
        verbose_name=_("notes"),
        blank=True,
    )

    class Meta:
        default_permissions = []
        verbose_name = _("maintenance log")
        verbose_name_plural = _("maintenance logs")
        ordering = ["-scheduled_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["plan", "scheduled_date"],
                condition=models.Q(threshold_mileage__isnull=True),
                name="unique_maintenance_log_per_occurrence",
            ),
            models.UniqueConstraint(
                fields=["plan", "threshold_mileage"],
                condition=models.Q(threshold_mileage__isnull=False),
                name="unique_maintenance_log_per_threshold",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="maintenance_log_status_idx"),
        ]

    def __str__(self):
        return f"{self.plan.code} @ {self.scheduled_date} ({self.status})"
