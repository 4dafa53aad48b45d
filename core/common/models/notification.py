"""
In-app notification models for the gmao application.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.common.models.base import AbstractSiteModel


class Notification(AbstractSiteModel):
    """
    An in-app notification addressed to one user.
    """

    recipient = models.ForeignKey(
        verbose_name=_("recipient"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="maintenance_notifications",
    )

    event = models.CharField(
        verbose_name=_("event"),
        max_length=50,
        help_text=_("Name of the notification event"),
    )

    title = models.CharField(
        verbose_name=_("title"),
        max_length=255,
    )

    message = models.TextField(
        verbose_name=_("message"),
        blank=True,
    )

    reference_type = models.CharField(
        verbose_name=_("reference type"),
        max_length=50,
        blank=True,
        help_text=_("Kind of object the notification refers to"),
    )

    reference_id = models.CharField(
        verbose_name=_("reference id"),
        max_length=64,
        blank=True,
    )

    context_data = models.JSONField(
        verbose_name=_("context data"),
        default=dict,
        blank=True,
    )

    read_at = models.DateTimeField(
        verbose_name=_("read at"),
        null=True,
        blank=True,
    )

    class Meta:
        default_permissions = []
        verbose_name = _("notification")
        verbose_name_plural = _("notifications")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "read_at"], name="notif_recipient_read_idx"),
            models.Index(fields=["event"], name="notif_event_idx"),
        ]

    def __str__(self):
        return f"{self.event} → {self.recipient}"

    @property
    def is_read(self):
        return self.read_at is not None

    def mark_as_read(self):
        if self.read_at is None:
            self.read_at = timezone.now()
            self.save(update_fields=["read_at", "last_modified_at"])
