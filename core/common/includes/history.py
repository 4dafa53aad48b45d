"""
Work order audit trail helpers.
"""

from core.common.models import WorkOrderHistory


def display_name(user) -> str:
    """Full name of a user, falling back to the username."""
    if user is None:
        return ""
    full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return full_name or user.get_username()


def record(work_order, user, action, old_value="", new_value="", description=""):
    """Append one history row to a work order."""
    return WorkOrderHistory.objects.create(
        work_order=work_order,
        user=user,
        action=action,
        old_value=old_value or "",
        new_value=new_value or "",
        description=description,
    )
