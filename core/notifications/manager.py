"""
NotificationManager - Central orchestrator for the gmao notification system.

Resolves an event from the registry and delivers it on each supported
channel. The in-app channel stores one Notification row per recipient.
"""

import logging
from typing import Any, List

from core.notifications.events import (
    NotificationChannel,
    NotificationEvents,
    get_event,
)

logger = logging.getLogger("gmao")


class NotificationManager:
    @staticmethod
    def send(
        event_name: NotificationEvents,
        recipients: List[Any],
        site,
        context: dict,
    ) -> bool:
        """
        Deliver a notification event to the given recipients.

        ``context`` may carry ``message``, ``reference_type`` and
        ``reference_id``; the remaining keys are stored as context data.
        """
        from core.common.models import Notification

        event = get_event(event_name)
        recipients = [user for user in recipients if user is not None]
        if not recipients:
            logger.debug(f"No recipients for notification {event.name}")
            return True

        if event.supports_channel(NotificationChannel.APP):
            context = dict(context)
            message = context.pop("message", "")
            reference_type = context.pop("reference_type", "")
            reference_id = str(context.pop("reference_id", "") or "")
            title = context.pop("title", None) or event.title
            Notification.objects.bulk_create(
                [
                    Notification(
                        site=site,
                        recipient=recipient,
                        event=event.name,
                        title=title,
                        message=message,
                        reference_type=reference_type,
                        reference_id=reference_id,
                        context_data=context,
                    )
                    for recipient in recipients
                ]
            )

        logger.info(f"Notification {event.name} sent to {len(recipients)} recipient(s)")
        return True
