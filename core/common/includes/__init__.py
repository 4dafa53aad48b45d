"""
Maintenance services for the gmao application.
Pure functions with module-scoped imports, grouped by concern.
"""

from core.common.includes import notifications
from core.common.includes import triggers
from core.common.includes import plans
from core.common.includes import availability
from core.common.includes import costs
from core.common.includes import work_orders
from core.common.includes import generation
from core.common.includes import reminders
