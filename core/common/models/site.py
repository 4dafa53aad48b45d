"""
Site models for the gmao application.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import UUIDPrimaryKey, ObjectHistoryTracker


class Site(UUIDPrimaryKey, ObjectHistoryTracker):
    """
    A maintenance site (plant, depot, workshop).
    Every asset, plan, work order and stock item belongs to exactly one site,
    and the preventive generation batch runs once per site.
    """

    name = models.CharField(
        verbose_name=_("site name"),
        max_length=255,
        help_text=_("Name of the site"),
    )
    code = models.CharField(
        verbose_name=_("site code"),
        max_length=20,
        unique=True,
        help_text=_("Short unique code of the site"),
    )
    address = models.TextField(
        verbose_name=_("address"),
        blank=True,
        help_text=_("Physical address of the site"),
    )
    is_active = models.BooleanField(
        verbose_name=_("is active"),
        default=True,
        help_text=_("Inactive sites are skipped by scheduled batches"),
    )

    class Meta:
        default_permissions = []
        verbose_name = _("site")
        verbose_name_plural = _("sites")
        ordering = ["name"]

    def __str__(self):
        return f"{self.code} - {self.name}"
