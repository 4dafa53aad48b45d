import logging

from celery import shared_task
from django.conf import settings
from django.core.cache import cache

from core.common.includes import generation, reminders
from core.common.models import Site

logger = logging.getLogger("gmao")


def generation_lock_key(site_id):
    return f"gmao:preventive-generation:{site_id}"


@shared_task(name="generate_preventive_work_orders_for_site")
def generate_preventive_work_orders_for_site(site_id):
    """
    Generates the due preventive work orders of a specific site.
    Only one batch runs per site at a time.
    """
    lock_key = generation_lock_key(site_id)
    if not cache.add(lock_key, "locked", settings.MAINTENANCE_GENERATION_LOCK_TIMEOUT):
        logger.warning(f"Preventive generation already running for site {site_id}, skipping.")
        return

    try:
        site = Site.objects.get(id=site_id)
        summary = generation.run_batch(site)
        if summary.generated:
            logger.info(f"Generated {len(summary.generated)} preventive work orders for site {site.name}")
        if summary.errors:
            logger.error(f"{len(summary.errors)} plan(s) failed to generate for site {site.name}")
    except Site.DoesNotExist:
        logger.error(f"Site with id {site_id} not found.")
    except Exception as e:
        logger.error(f"Error generating preventive work orders for site {site_id}: {str(e)}")
    finally:
        cache.delete(lock_key)


@shared_task(name="spawn_generate_preventive_work_orders")
def spawn_generate_preventive_work_orders():
    """
    Spawns a task to generate preventive work orders for each active site.
    """
    for site in Site.objects.filter(is_active=True).iterator():
        generate_preventive_work_orders_for_site.delay(site.id)


@shared_task(name="send_maintenance_reminders_for_site")
def send_maintenance_reminders_for_site(site_id):
    """
    Sends overdue, due soon and long running reminders for a specific site.
    """
    try:
        site = Site.objects.get(id=site_id)
        summary = reminders.send_reminders(site)
        if summary.notifications_sent:
            logger.info(f"Sent {summary.notifications_sent} maintenance reminders for site {site.name}")
    except Site.DoesNotExist:
        logger.error(f"Site with id {site_id} not found.")
    except Exception as e:
        logger.error(f"Error sending maintenance reminders for site {site_id}: {str(e)}")


@shared_task(name="spawn_send_maintenance_reminders")
def spawn_send_maintenance_reminders():
    """
    Spawns a task to send maintenance reminders for each active site.
    """
    for site in Site.objects.filter(is_active=True).iterator():
        send_maintenance_reminders_for_site.delay(site.id)
