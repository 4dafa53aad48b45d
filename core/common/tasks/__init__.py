from core.common.tasks.maintenance import (
    generate_preventive_work_orders_for_site,
    send_maintenance_reminders_for_site,
    spawn_generate_preventive_work_orders,
    spawn_send_maintenance_reminders,
)
