"""
Preventive maintenance plan models for the gmao application.
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractSiteModel, UUIDPrimaryKey, ObjectHistoryTracker

logger = logging.getLogger('gmao')


class FrequencyType(models.TextChoices):
    """How a plan recurs."""

    DAILY = "DAILY", _("Daily")
    WEEKLY = "WEEKLY", _("Weekly")
    MONTHLY = "MONTHLY", _("Monthly")
    YEARLY = "YEARLY", _("Yearly")
    COUNTER = "COUNTER", _("Counter")
    MILEAGE = "MILEAGE", _("Mileage")


CALENDAR_FREQUENCIES = (
    FrequencyType.DAILY,
    FrequencyType.WEEKLY,
    FrequencyType.MONTHLY,
    FrequencyType.YEARLY,
)
COUNTER_FREQUENCIES = (FrequencyType.COUNTER, FrequencyType.MILEAGE)


class MaintenancePriority(models.TextChoices):
    """Priority levels shared by plans and work orders."""

    LOW = "LOW", _("Low")
    MEDIUM = "MEDIUM", _("Medium")
    HIGH = "HIGH", _("High")
    CRITICAL = "CRITICAL", _("Critical")


class MaintenancePlan(AbstractSiteModel):
    """
    A recurring preventive maintenance obligation for one asset.

    Calendar plans (daily/weekly/monthly/yearly) are driven by
    ``next_execution_date``; counter and mileage plans by ``next_mileage``.
    The two are mutually exclusive: the non-authoritative pair is cleared on
    save.
    """

    asset = models.ForeignKey(
        verbose_name=_("asset"),
        to="common.Asset",
        on_delete=models.PROTECT,
        related_name="maintenance_plans",
        help_text=_("The asset this plan maintains"),
    )

    code = models.CharField(
        verbose_name=_("plan code"),
        max_length=20,
        help_text=_("Plan code, unique per site (PM-YYYY-NNNN)"),
    )

    name = models.CharField(
        verbose_name=_("plan name"),
        max_length=200,
        help_text=_("Name of the maintenance plan"),
    )

    description = models.TextField(
        verbose_name=_("description"),
        blank=True,
        help_text=_("Description of the preventive maintenance"),
    )

    frequency_type = models.CharField(
        verbose_name=_("frequency type"),
        max_length=20,
        choices=FrequencyType.choices,
        default=FrequencyType.MONTHLY,
        help_text=_("How often the maintenance should be performed"),
    )

    frequency_value = models.PositiveIntegerField(
        verbose_name=_("frequency value"),
        default=1,
        validators=[MinValueValidator(1)],
        help_text=_("Number of frequency units between two executions"),
    )

    counter_threshold = models.PositiveIntegerField(
        verbose_name=_("counter threshold"),
        null=True,
        blank=True,
        help_text=_("Usage interval for counter plans (e.g. every 250 hours)"),
    )

    counter_unit = models.CharField(
        verbose_name=_("counter unit"),
        max_length=20,
        blank=True,
        help_text=_("Unit of the counter threshold"),
    )

    mileage_interval = models.PositiveIntegerField(
        verbose_name=_("mileage interval"),
        null=True,
        blank=True,
        help_text=_("Kilometres between two executions for mileage plans"),
    )

    start_date = models.DateField(
        verbose_name=_("start date"),
        help_text=_("Date from which the plan applies"),
    )

    end_date = models.DateField(
        verbose_name=_("end date"),
        null=True,
        blank=True,
        help_text=_("Optional date after which the plan goes dormant"),
    )

    last_execution_date = models.DateField(
        verbose_name=_("last execution date"),
        null=True,
        blank=True,
    )

    next_execution_date = models.DateField(
        verbose_name=_("next execution date"),
        null=True,
        blank=True,
        help_text=_("Next due date for calendar plans"),
    )

    last_mileage = models.PositiveIntegerField(
        verbose_name=_("last counter reading"),
        null=True,
        blank=True,
    )

    next_mileage = models.PositiveIntegerField(
        verbose_name=_("next counter reading"),
        null=True,
        blank=True,
        help_text=_("Counter reading at which counter plans become due"),
    )

    priority = models.CharField(
        verbose_name=_("priority"),
        max_length=10,
        choices=MaintenancePriority.choices,
        default=MaintenancePriority.MEDIUM,
    )

    estimated_duration = models.PositiveIntegerField(
        verbose_name=_("estimated duration"),
        null=True,
        blank=True,
        help_text=_("Estimated duration in minutes"),
    )

    assigned_to = models.ForeignKey(
        verbose_name=_("assigned to"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_maintenance_plans",
        help_text=_("Technician who receives the generated work orders"),
    )

    advance_days = models.PositiveIntegerField(
        verbose_name=_("advance days"),
        default=7,
        help_text=_("Days before the due date at which the work order is generated"),
    )

    advance_mileage = models.PositiveIntegerField(
        verbose_name=_("advance mileage"),
        default=500,
        help_text=_("Counter units before the due reading at which the work order is generated"),
    )

    is_active = models.BooleanField(
        verbose_name=_("is active"),
        default=True,
    )

    created_by = models.ForeignKey(
        verbose_name=_("created by"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_maintenance_plans",
    )

    class Meta:
        default_permissions = []
        verbose_name = _("maintenance plan")
        verbose_name_plural = _("maintenance plans")
        ordering = ["next_execution_date", "code"]
        constraints = [
            models.UniqueConstraint(fields=["site", "code"], name="unique_plan_code_per_site"),
        ]
        indexes = [
            models.Index(fields=["is_active"], name="plan_active_idx"),
            models.Index(fields=["frequency_type"], name="plan_frequency_idx"),
            models.Index(fields=["next_execution_date"], name="plan_next_execution_idx"),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"

    @property
    def is_counter_based(self):
        return self.frequency_type in COUNTER_FREQUENCIES

    @property
    def counter_interval(self):
        """Interval between two executions of a counter plan."""
        if self.frequency_type == FrequencyType.MILEAGE:
            return self.mileage_interval or self.counter_threshold
        return self.counter_threshold or self.mileage_interval

    @property
    def asset_name(self):
        return self.asset.name if self.asset_id else _("Unknown")

    @property
    def frequency_label(self):
        if self.is_counter_based:
            unit = self.counter_unit or self.asset.counter_unit
            return f"Every {self.counter_interval} {unit}"
        unit = {
            FrequencyType.DAILY: "day(s)",
            FrequencyType.WEEKLY: "week(s)",
            FrequencyType.MONTHLY: "month(s)",
            FrequencyType.YEARLY: "year(s)",
        }[self.frequency_type]
        return f"Every {self.frequency_value} {unit}"

    def clean(self):
        super().clean()

        if self.end_date and self.start_date and self.end_date < self.start_date:
            raise ValidationError(_("End date must be on or after the start date"))

        if self.frequency_type == FrequencyType.MILEAGE:
            if self.asset_id and not self.asset.is_vehicle:
                raise ValidationError(_("Mileage plans can only be attached to vehicles"))
            if not self.mileage_interval:
                raise ValidationError(_("Mileage plans require a mileage interval"))

        if self.frequency_type == FrequencyType.COUNTER and not self.counter_interval:
            raise ValidationError(_("Counter plans require a counter threshold"))

    def save(self, *args, **kwargs):
        if self.is_counter_based:
            self.last_execution_date = None
            self.next_execution_date = None
        else:
            self.last_mileage = None
            self.next_mileage = None
        super().save(*args, **kwargs)


class MaintenancePlanTask(UUIDPrimaryKey, ObjectHistoryTracker):
    """
    One line of the ordered checklist attached to a plan.
    """

    plan = models.ForeignKey(
        verbose_name=_("maintenance plan"),
        to="common.MaintenancePlan",
        on_delete=models.CASCADE,
        related_name="tasks",
    )

    order = models.PositiveIntegerField(
        verbose_name=_("order"),
        default=0,
    )

    description = models.CharField(
        verbose_name=_("description"),
        max_length=255,
    )

    instructions = models.TextField(
        verbose_name=_("instructions"),
        blank=True,
    )

    estimated_duration = models.PositiveIntegerField(
        verbose_name=_("estimated duration"),
        null=True,
        blank=True,
        help_text=_("Estimated duration in minutes"),
    )

    requires_part = models.BooleanField(
        verbose_name=_("requires part"),
        default=False,
    )

    class Meta:
        default_permissions = []
        verbose_name = _("maintenance plan task")
        verbose_name_plural = _("maintenance plan tasks")
        ordering = ["order"]

    def __str__(self):
        return f"{self.order}. {self.description}"
