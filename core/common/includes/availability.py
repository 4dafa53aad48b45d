"""
Asset availability utilities for the gmao application.

The single place where work orders flip the operational status of an asset.
Both operations lock the asset row first, so two work orders releasing the
same asset at the same time are serialized and the second one sees the
first one's final status. Callers must be inside a transaction.
"""

import logging

from core.common.models import Asset, AssetStatus, EXECUTING_STATUSES, WorkOrder

logger = logging.getLogger("gmao")


def _lock(asset) -> Asset:
    locked = Asset.objects.select_for_update().get(pk=asset.pk)
    asset.status = locked.status
    return locked


def _apply(asset, locked, status) -> bool:
    changed = locked.set_status(status)
    asset.status = locked.status
    return changed


def set_under_maintenance(asset) -> bool:
    """Put an asset under maintenance. Returns False if it already was."""
    locked = _lock(asset)
    changed = _apply(asset, locked, AssetStatus.UNDER_MAINTENANCE)
    if changed:
        logger.info(f"Asset {asset.code} set under maintenance")
    return changed


def other_executing_work_orders(asset, releasing=None):
    queryset = WorkOrder.objects.filter(asset=asset, status__in=EXECUTING_STATUSES)
    if releasing is not None:
        queryset = queryset.exclude(pk=releasing.pk)
    return queryset


def set_operational(asset, releasing=None) -> bool:
    """
    Release an asset back to operational.

    No-op while another work order on the same asset is still in progress or
    on hold; ``releasing`` is the work order doing the release and is not
    counted.
    """
    locked = _lock(asset)
    if other_executing_work_orders(locked, releasing).exists():
        logger.info(
            f"Asset {asset.code} kept under maintenance: other work orders still executing"
        )
        return False

    changed = _apply(asset, locked, AssetStatus.OPERATIONAL)
    if changed:
        logger.info(f"Asset {asset.code} set operational")
    return changed
