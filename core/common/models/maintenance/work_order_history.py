"""
Work order history and comment models for the gmao application.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.common.models.base import UUIDPrimaryKey, ObjectHistoryTracker


class WorkOrderAction(models.TextChoices):
    """Actions recorded in the work order history."""

    CREATED = "created", _("Created")
    APPROVED = "approved", _("Approved")
    ASSIGNED = "assigned", _("Assigned")
    STARTED = "started", _("Started")
    PAUSED = "paused", _("Paused")
    RESUMED = "resumed", _("Resumed")
    COMPLETED = "completed", _("Completed")
    CANCELLED = "cancelled", _("Cancelled")
    PART_ADDED = "part_added", _("Part added")
    PART_REMOVED = "part_removed", _("Part removed")
    COMMENT_ADDED = "comment_added", _("Comment added")


class WorkOrderHistory(UUIDPrimaryKey, ObjectHistoryTracker):
    """
    Append-only audit entry of a work order.
    A null user means the entry was written by the system (generation batch).
    """

    work_order = models.ForeignKey(
        verbose_name=_("work order"),
        to="common.WorkOrder",
        on_delete=models.CASCADE,
        related_name="history",
    )

    user = models.ForeignKey(
        verbose_name=_("user"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="work_order_history",
    )

    action = models.CharField(
        verbose_name=_("action"),
        max_length=30,
        choices=WorkOrderAction.choices,
    )

    old_value = models.CharField(
        verbose_name=_("old value"),
        max_length=255,
        blank=True,
    )

    new_value = models.CharField(
        verbose_name=_("new value"),
        max_length=255,
        blank=True,
    )

    description = models.TextField(
        verbose_name=_("description"),
        blank=True,
    )

    class Meta:
        default_permissions = []
        verbose_name = _("work order history")
        verbose_name_plural = _("work order histories")
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.work_order.code}: {self.action} {self.old_value} → {self.new_value}"


class WorkOrderComment(UUIDPrimaryKey, ObjectHistoryTracker):
    """
    Model for comments on work orders.
    """

    work_order = models.ForeignKey(
        verbose_name=_("work order"),
        to="common.WorkOrder",
        on_delete=models.CASCADE,
        related_name="comments",
    )

    author = models.ForeignKey(
        verbose_name=_("author"),
        to=settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="work_order_comments",
    )

    content = models.TextField(
        verbose_name=_("content"), help_text=_("Content of the comment")
    )

    is_internal = models.BooleanField(
        verbose_name=_("is internal"),
        default=False,
        help_text=_("Whether this comment is internal (staff only)"),
    )

    class Meta:
        default_permissions = []
        verbose_name = _("work order comment")
        verbose_name_plural = _("work order comments")
        ordering = ["created_at"]

    def __str__(self):
        return f"Comment on {self.work_order.code} by {self.author}"
