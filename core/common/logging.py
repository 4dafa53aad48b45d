"""
Logging helpers for gmao.

Everything goes through the "gmao" logger configured in settings.LOGGING.
"""

import logging
from typing import Optional, Dict, Any
from django.conf import settings


def get_logger(name='gmao'):
    """Get a logger instance."""
    return logging.getLogger(name)


logger = get_logger()


def log_audit(
    event_type: str,
    user_id: Optional[str] = None,
    site_id: Optional[str] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
):
    """Log audit event (only in DEBUG mode)."""
    if not settings.DEBUG:
        return

    suffix = f" details={details}" if details else ""
    logger.debug(
        f"AUDIT: {event_type} user={user_id} site={site_id} resource={resource_type}:{resource_id}{suffix}"
    )


def log_batch(operation: str, site_code: str, counts: Dict[str, int], dry_run: bool = False):
    """
    Log one summary line for a scheduled batch run over a site.

    Runs where every count is zero are logged at DEBUG so the daily beat does
    not flood the console.
    """
    parts = ", ".join(f"{count} {label}" for label, count in counts.items())
    mode = " [dry-run]" if dry_run else ""
    level = logging.INFO if any(counts.values()) else logging.DEBUG
    logger.log(level, f"BATCH: {operation} site={site_code}{mode} {parts}")


def log_error(
    message: str,
    exception: Optional[Exception] = None,
    context: Optional[Dict[str, Any]] = None
):
    """Log error with context."""
    if context:
        message = f"{message} {context}"
    if exception:
        logger.error(f"{message}: {str(exception)}", exc_info=settings.DEBUG)
    else:
        logger.error(message)
