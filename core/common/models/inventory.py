"""
Inventory models for the gmao application.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractSiteModel


class Part(AbstractSiteModel):
    """
    A stock item (spare part, consumable) held on a site.
    """

    code = models.CharField(
        verbose_name=_("part code"),
        max_length=50,
    )

    name = models.CharField(
        verbose_name=_("part name"),
        max_length=200,
    )

    unit = models.CharField(
        verbose_name=_("unit"),
        max_length=20,
        default="unit",
    )

    unit_price = models.DecimalField(
        verbose_name=_("unit price"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    quantity_in_stock = models.PositiveIntegerField(
        verbose_name=_("quantity in stock"),
        default=0,
    )

    minimum_stock = models.PositiveIntegerField(
        verbose_name=_("minimum stock"),
        default=0,
        help_text=_("Reorder threshold"),
    )

    class Meta:
        default_permissions = []
        verbose_name = _("part")
        verbose_name_plural = _("parts")
        ordering = ["code"]
        constraints = [
            models.UniqueConstraint(fields=["site", "code"], name="unique_part_code_per_site"),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"

    @property
    def is_low_stock(self):
        return self.quantity_in_stock <= self.minimum_stock

    @property
    def is_out_of_stock(self):
        return self.quantity_in_stock == 0


class StockMovementType(models.TextChoices):
    """Direction of a stock movement."""

    IN = "IN", _("In")
    OUT = "OUT", _("Out")
    ADJUSTMENT = "ADJUSTMENT", _("Adjustment")


class StockMovement(AbstractSiteModel):
    """
    Append-only audit row of a stock quantity change.
    ``quantity`` is signed: negative for outgoing movements.
    """

    part = models.ForeignKey(
        verbose_name=_("part"),
        to="common.Part",
        on_delete=models.CASCADE,
        related_name="movements",
    )

    user = models.ForeignKey(
        verbose_name=_("user"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    work_order = models.ForeignKey(
        verbose_name=_("work order"),
        to="common.WorkOrder",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    movement_type = models.CharField(
        verbose_name=_("movement type"),
        max_length=20,
        choices=StockMovementType.choices,
    )

    quantity = models.IntegerField(
        verbose_name=_("quantity"),
    )

    quantity_before = models.PositiveIntegerField(
        verbose_name=_("quantity before"),
    )

    quantity_after = models.PositiveIntegerField(
        verbose_name=_("quantity after"),
    )

    unit_price = models.DecimalField(
        verbose_name=_("unit price"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    reason = models.CharField(
        verbose_name=_("reason"),
        max_length=255,
        blank=True,
    )

    class Meta:
        default_permissions = []
        verbose_name = _("stock movement")
        verbose_name_plural = _("stock movements")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["movement_type"], name="stock_movement_type_idx"),
        ]

    def __str__(self):
        return f"{self.part.code} {self.movement_type} {self.quantity}"
