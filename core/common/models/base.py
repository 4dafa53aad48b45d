"""
Base models for the gmao application.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.managers import SiteScopedManager


class ObjectHistoryTracker(models.Model):
    """Abstract class for keeping track of creation and changes made to a model object"""

    created_at = models.DateTimeField(
        verbose_name=_("creation date"),
        auto_now_add=True,
    )
    last_modified_at = models.DateTimeField(
        verbose_name=_("last modified date"),
        auto_now=True,
    )

    class Meta:
        abstract = True


class UUIDPrimaryKey(models.Model):
    id = models.UUIDField(
        verbose_name="id",
        primary_key=True,
        default=uuid.uuid4,
        help_text=_("UUID primary key"),
    )

    class Meta:
        abstract = True


class AbstractSiteModel(UUIDPrimaryKey, ObjectHistoryTracker):
    """
    Base model for all site-scoped models.
    The site is always set explicitly by the caller.
    """

    site = models.ForeignKey(
        verbose_name=_("site"),
        to="common.Site",
        on_delete=models.CASCADE,
        related_name="%(class)ss",
        related_query_name="%(class)s",
        help_text=_("The site this object belongs to"),
    )

    objects = SiteScopedManager()

    class Meta:
        abstract = True
