"""
Asset models for the gmao application.
"""

import logging

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractSiteModel

logger = logging.getLogger('gmao')


class AssetKind(models.TextChoices):
    """Kinds of maintained assets."""

    EQUIPMENT = "EQUIPMENT", _("Equipment")
    VEHICLE = "VEHICLE", _("Vehicle")


class AssetStatus(models.TextChoices):
    """Operational status of an asset."""

    OPERATIONAL = "OPERATIONAL", _("Operational")
    UNDER_MAINTENANCE = "UNDER_MAINTENANCE", _("Under Maintenance")
    OUT_OF_SERVICE = "OUT_OF_SERVICE", _("Out of Service")


class Asset(AbstractSiteModel):
    """
    A maintained asset, equipment or vehicle.

    Lifecycle and availability code only talks to the capability methods
    (get_counter, update_counter, set_status) and never branches on the kind
    except where a rule is kind specific (vehicles report mileage on
    completion).
    """

    kind = models.CharField(
        verbose_name=_("asset kind"),
        max_length=20,
        choices=AssetKind.choices,
        default=AssetKind.EQUIPMENT,
        help_text=_("Whether the asset is an equipment or a vehicle"),
    )

    code = models.CharField(
        verbose_name=_("asset code"),
        max_length=50,
        help_text=_("Inventory code of the asset"),
    )

    name = models.CharField(
        verbose_name=_("asset name"),
        max_length=200,
        help_text=_("Display name of the asset"),
    )

    status = models.CharField(
        verbose_name=_("status"),
        max_length=20,
        choices=AssetStatus.choices,
        default=AssetStatus.OPERATIONAL,
        help_text=_("Current operational status"),
    )

    counter = models.PositiveIntegerField(
        verbose_name=_("usage counter"),
        default=0,
        help_text=_("Odometer (km) for vehicles, running hours for equipment"),
    )

    counter_unit = models.CharField(
        verbose_name=_("counter unit"),
        max_length=20,
        default="km",
        help_text=_("Unit of the usage counter"),
    )

    is_active = models.BooleanField(
        verbose_name=_("is active"),
        default=True,
        help_text=_("Whether the asset is still in the fleet"),
    )

    class Meta:
        default_permissions = []
        verbose_name = _("asset")
        verbose_name_plural = _("assets")
        ordering = ["code"]
        constraints = [
            models.UniqueConstraint(fields=["site", "code"], name="unique_asset_code_per_site"),
        ]
        indexes = [
            models.Index(fields=["kind"], name="asset_kind_idx"),
            models.Index(fields=["status"], name="asset_status_idx"),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"

    @property
    def is_vehicle(self):
        return self.kind == AssetKind.VEHICLE

    @property
    def is_available(self):
        return self.is_active and self.status == AssetStatus.OPERATIONAL

    def get_counter(self):
        """Return the current usage counter reading."""
        return self.counter

    def update_counter(self, value):
        """
        Record a new counter reading.

        Counters only move forward: a reading lower than the stored one is
        ignored and False is returned.
        """
        if value is None:
            return False
        if value < self.counter:
            logger.warning(
                f"Ignored counter reading {value} for asset {self.code}: "
                f"lower than current {self.counter}"
            )
            return False
        self.counter = value
        self.save(update_fields=["counter", "last_modified_at"])
        return True

    def set_status(self, status):
        """Change the operational status of the asset."""
        if status not in AssetStatus.values:
            raise ValueError(f"Unknown asset status: {status}")
        if self.status == status:
            return False
        self.status = status
        self.save(update_fields=["status", "last_modified_at"])
        return True
