# Generated manually for the gmao maintenance models

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def uuid_field():
    return ("id", models.UUIDField(default=uuid.uuid4, help_text="UUID primary key", primary_key=True, serialize=False, verbose_name="id"))


def history_fields():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="creation date")),
        ("last_modified_at", models.DateTimeField(auto_now=True, verbose_name="last modified date")),
    ]


def site_field(related_name, related_query_name):
    return (
        "site",
        models.ForeignKey(
            help_text="The site this object belongs to",
            on_delete=django.db.models.deletion.CASCADE,
            related_name=related_name,
            related_query_name=related_query_name,
            to="common.site",
            verbose_name="site",
        ),
    )


PRIORITY_CHOICES = [("LOW", "Low"), ("MEDIUM", "Medium"), ("HIGH", "High"), ("CRITICAL", "Critical")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Site",
            fields=[
                uuid_field(),
                *history_fields(),
                ("name", models.CharField(help_text="Name of the site", max_length=255, verbose_name="site name")),
                ("code", models.CharField(help_text="Short unique code of the site", max_length=20, unique=True, verbose_name="site code")),
                ("address", models.TextField(blank=True, help_text="Physical address of the site", verbose_name="address")),
                ("is_active", models.BooleanField(default=True, help_text="Inactive sites are skipped by scheduled batches", verbose_name="is active")),
            ],
            options={
                "verbose_name": "site",
                "verbose_name_plural": "sites",
                "ordering": ["name"],
                "default_permissions": [],
            },
        ),
        migrations.CreateModel(
            name="Asset",
            fields=[
                uuid_field(),
                *history_fields(),
                ("kind", models.CharField(choices=[("EQUIPMENT", "Equipment"), ("VEHICLE", "Vehicle")], default="EQUIPMENT", help_text="Whether the asset is an equipment or a vehicle", max_length=20, verbose_name="asset kind")),
                ("code", models.CharField(help_text="Inventory code of the asset", max_length=50, verbose_name="asset code")),
                ("name", models.CharField(help_text="Display name of the asset", max_length=200, verbose_name="asset name")),
                ("status", models.CharField(choices=[("OPERATIONAL", "Operational"), ("UNDER_MAINTENANCE", "Under Maintenance"), ("OUT_OF_SERVICE", "Out of Service")], default="OPERATIONAL", help_text="Current operational status", max_length=20, verbose_name="status")),
                ("counter", models.PositiveIntegerField(default=0, help_text="Odometer (km) for vehicles, running hours for equipment", verbose_name="usage counter")),
                ("counter_unit", models.CharField(default="km", help_text="Unit of the usage counter", max_length=20, verbose_name="counter unit")),
                ("is_active", models.BooleanField(default=True, help_text="Whether the asset is still in the fleet", verbose_name="is active")),
                site_field("assets", "asset"),
            ],
            options={
                "verbose_name": "asset",
                "verbose_name_plural": "assets",
                "ordering": ["code"],
                "default_permissions": [],
                "indexes": [
                    models.Index(fields=["kind"], name="asset_kind_idx"),
                    models.Index(fields=["status"], name="asset_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("site", "code"), name="unique_asset_code_per_site"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Part",
            fields=[
                uuid_field(),
                *history_fields(),
                ("code", models.CharField(max_length=50, verbose_name="part code")),
                ("name", models.CharField(max_length=200, verbose_name="part name")),
                ("unit", models.CharField(default="unit", max_length=20, verbose_name="unit")),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, verbose_name="unit price")),
                ("quantity_in_stock", models.PositiveIntegerField(default=0, verbose_name="quantity in stock")),
                ("minimum_stock", models.PositiveIntegerField(default=0, help_text="Reorder threshold", verbose_name="minimum stock")),
                site_field("parts", "part"),
            ],
            options={
                "verbose_name": "part",
                "verbose_name_plural": "parts",
                "ordering": ["code"],
                "default_permissions": [],
                "constraints": [
                    models.UniqueConstraint(fields=("site", "code"), name="unique_part_code_per_site"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MaintenancePlan",
            fields=[
                uuid_field(),
                *history_fields(),
                ("code", models.CharField(help_text="Plan code, unique per site (PM-YYYY-NNNN)", max_length=20, verbose_name="plan code")),
                ("name", models.CharField(help_text="Name of the maintenance plan", max_length=200, verbose_name="plan name")),
                ("description", models.TextField(blank=True, help_text="Description of the preventive maintenance", verbose_name="description")),
                ("frequency_type", models.CharField(choices=[("DAILY", "Daily"), ("WEEKLY", "Weekly"), ("MONTHLY", "Monthly"), ("YEARLY", "Yearly"), ("COUNTER", "Counter"), ("MILEAGE", "Mileage")], default="MONTHLY", help_text="How often the maintenance should be performed", max_length=20, verbose_name="frequency type")),
                ("frequency_value", models.PositiveIntegerField(default=1, help_text="Number of frequency units between two executions", validators=[django.core.validators.MinValueValidator(1)], verbose_name="frequency value")),
                ("counter_threshold", models.PositiveIntegerField(blank=True, help_text="Usage interval for counter plans (e.g. every 250 hours)", null=True, verbose_name="counter threshold")),
                ("counter_unit", models.CharField(blank=True, help_text="Unit of the counter threshold", max_length=20, verbose_name="counter unit")),
                ("mileage_interval", models.PositiveIntegerField(blank=True, help_text="Kilometres between two executions for mileage plans", null=True, verbose_name="mileage interval")),
                ("start_date", models.DateField(help_text="Date from which the plan applies", verbose_name="start date")),
                ("end_date", models.DateField(blank=True, help_text="Optional date after which the plan goes dormant", null=True, verbose_name="end date")),
                ("last_execution_date", models.DateField(blank=True, null=True, verbose_name="last execution date")),
                ("next_execution_date", models.DateField(blank=True, help_text="Next due date for calendar plans", null=True, verbose_name="next execution date")),
                ("last_mileage", models.PositiveIntegerField(blank=True, null=True, verbose_name="last counter reading")),
                ("next_mileage", models.PositiveIntegerField(blank=True, help_text="Counter reading at which counter plans become due", null=True, verbose_name="next counter reading")),
                ("priority", models.CharField(choices=PRIORITY_CHOICES, default="MEDIUM", max_length=10, verbose_name="priority")),
                ("estimated_duration", models.PositiveIntegerField(blank=True, help_text="Estimated duration in minutes", null=True, verbose_name="estimated duration")),
                ("advance_days", models.PositiveIntegerField(default=7, help_text="Days before the due date at which the work order is generated", verbose_name="advance days")),
                ("advance_mileage", models.PositiveIntegerField(default=500, help_text="Counter units before the due reading at which the work order is generated", verbose_name="advance mileage")),
                ("is_active", models.BooleanField(default=True, verbose_name="is active")),
                ("asset", models.ForeignKey(help_text="The asset this plan maintains", on_delete=django.db.models.deletion.PROTECT, related_name="maintenance_plans", to="common.asset", verbose_name="asset")),
                ("assigned_to", models.ForeignKey(blank=True, help_text="Technician who receives the generated work orders", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assigned_maintenance_plans", to=settings.AUTH_USER_MODEL, verbose_name="assigned to")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="created_maintenance_plans", to=settings.AUTH_USER_MODEL, verbose_name="created by")),
                site_field("maintenanceplans", "maintenanceplan"),
            ],
            options={
                "verbose_name": "maintenance plan",
                "verbose_name_plural": "maintenance plans",
                "ordering": ["next_execution_date", "code"],
                "default_permissions": [],
                "indexes": [
                    models.Index(fields=["is_active"], name="plan_active_idx"),
                    models.Index(fields=["frequency_type"], name="plan_frequency_idx"),
                    models.Index(fields=["next_execution_date"], name="plan_next_execution_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("site", "code"), name="unique_plan_code_per_site"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MaintenancePlanTask",
            fields=[
                uuid_field(),
                *history_fields(),
                ("order", models.PositiveIntegerField(default=0, verbose_name="order")),
                ("description", models.CharField(max_length=255, verbose_name="description")),
                ("instructions", models.TextField(blank=True, verbose_name="instructions")),
                ("estimated_duration", models.PositiveIntegerField(blank=True, help_text="Estimated duration in minutes", null=True, verbose_name="estimated duration")),
                ("requires_part", models.BooleanField(default=False, verbose_name="requires part")),
                ("plan", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="tasks", to="common.maintenanceplan", verbose_name="maintenance plan")),
            ],
            options={
                "verbose_name": "maintenance plan task",
                "verbose_name_plural": "maintenance plan tasks",
                "ordering": ["order"],
                "default_permissions": [],
            },
        ),
        migrations.CreateModel(
            name="WorkOrder",
            fields=[
                uuid_field(),
                *history_fields(),
                ("code", models.CharField(help_text="Work order code, unique per site (WO-YYYY-NNNN)", max_length=20, verbose_name="work order code")),
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                ("work_type", models.CharField(choices=[("CORRECTIVE", "Corrective"), ("PREVENTIVE", "Preventive"), ("IMPROVEMENT", "Improvement"), ("INSPECTION", "Inspection")], default="CORRECTIVE", max_length=20, verbose_name="work type")),
                ("priority", models.CharField(choices=PRIORITY_CHOICES, default="MEDIUM", max_length=10, verbose_name="priority")),
                ("status", models.CharField(choices=[("PENDING", "Pending"), ("APPROVED", "Approved"), ("ASSIGNED", "Assigned"), ("IN_PROGRESS", "In Progress"), ("ON_HOLD", "On Hold"), ("COMPLETED", "Completed"), ("CANCELLED", "Cancelled")], default="PENDING", max_length=20, verbose_name="status")),
                ("scheduled_start", models.DateTimeField(blank=True, null=True, verbose_name="scheduled start")),
                ("scheduled_end", models.DateTimeField(blank=True, null=True, verbose_name="scheduled end")),
                ("actual_start", models.DateTimeField(blank=True, null=True, verbose_name="actual start")),
                ("actual_end", models.DateTimeField(blank=True, null=True, verbose_name="actual end")),
                ("estimated_duration", models.PositiveIntegerField(blank=True, help_text="Estimated duration in minutes", null=True, verbose_name="estimated duration")),
                ("actual_duration", models.PositiveIntegerField(blank=True, help_text="Actual duration in minutes", null=True, verbose_name="actual duration")),
                ("labor_cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, verbose_name="labor cost")),
                ("parts_cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, verbose_name="parts cost")),
                ("total_cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Labor cost plus parts cost", max_digits=12, verbose_name="total cost")),
                ("approved_at", models.DateTimeField(blank=True, null=True, verbose_name="approved at")),
                ("completed_at", models.DateTimeField(blank=True, null=True, verbose_name="completed at")),
                ("cancelled_at", models.DateTimeField(blank=True, null=True, verbose_name="cancelled at")),
                ("cancellation_reason", models.TextField(blank=True, verbose_name="cancellation reason")),
                ("work_performed", models.TextField(blank=True, verbose_name="work performed")),
                ("root_cause", models.TextField(blank=True, verbose_name="root cause")),
                ("diagnosis", models.TextField(blank=True, verbose_name="diagnosis")),
                ("technician_notes", models.TextField(blank=True, verbose_name="technician notes")),
                ("mileage_at_intervention", models.PositiveIntegerField(blank=True, help_text="Odometer reading reported when completing a vehicle work order", null=True, verbose_name="counter at intervention")),
                ("asset", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="work_orders", to="common.asset", verbose_name="asset")),
                ("plan", models.ForeignKey(blank=True, help_text="Plan this work order was generated from", null=True, on_delete=django.db.models.deletion.PROTECT, related_name="work_orders", to="common.maintenanceplan", verbose_name="maintenance plan")),
                ("requested_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="requested_work_orders", to=settings.AUTH_USER_MODEL, verbose_name="requested by")),
                ("assigned_to", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assigned_work_orders", to=settings.AUTH_USER_MODEL, verbose_name="assigned to")),
                ("approved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="approved_work_orders", to=settings.AUTH_USER_MODEL, verbose_name="approved by")),
                ("completed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="completed_work_orders", to=settings.AUTH_USER_MODEL, verbose_name="completed by")),
                ("cancelled_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="cancelled_work_orders", to=settings.AUTH_USER_MODEL, verbose_name="cancelled by")),
                site_field("workorders", "workorder"),
            ],
            options={
                "verbose_name": "work order",
                "verbose_name_plural": "work orders",
                "ordering": ["-created_at"],
                "default_permissions": [],
                "indexes": [
                    models.Index(fields=["status"], name="work_order_status_idx"),
                    models.Index(fields=["priority"], name="work_order_priority_idx"),
                    models.Index(fields=["work_type"], name="work_order_type_idx"),
                    models.Index(fields=["scheduled_start"], name="work_order_sched_start_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("site", "code"), name="unique_work_order_code_per_site"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MaintenanceLog",
            fields=[
                uuid_field(),
                *history_fields(),
                ("scheduled_date", models.DateField(help_text="Occurrence date this generation covers", verbose_name="scheduled date")),
                ("mileage_at_generation", models.PositiveIntegerField(blank=True, null=True, verbose_name="counter at generation")),
                ("threshold_mileage", models.PositiveIntegerField(blank=True, help_text="Counter value this generation covers, for counter plans", null=True, verbose_name="counter threshold")),
                ("status", models.CharField(choices=[("SCHEDULED", "Scheduled"), ("GENERATED", "Generated"), ("COMPLETED", "Completed"), ("SKIPPED", "Skipped")], default="SCHEDULED", max_length=20, verbose_name="status")),
                ("executed_date", models.DateField(blank=True, null=True, verbose_name="executed date")),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                ("plan", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="logs", to="common.maintenanceplan", verbose_name="maintenance plan")),
                ("work_order", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="maintenance_logs", to="common.workorder", verbose_name="work order")),
            ],
            options={
                "verbose_name": "maintenance log",
                "verbose_name_plural": "maintenance logs",
                "ordering": ["-scheduled_date"],
                "default_permissions": [],
                "indexes": [
                    models.Index(fields=["status"], name="maintenance_log_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("threshold_mileage__isnull", True)), fields=("plan", "scheduled_date"), name="unique_maintenance_log_per_occurrence"),
                    models.UniqueConstraint(condition=models.Q(("threshold_mileage__isnull", False)), fields=("plan", "threshold_mileage"), name="unique_maintenance_log_per_threshold"),
                ],
            },
        ),
        migrations.CreateModel(
            name="WorkOrderPart",
            fields=[
                uuid_field(),
                *history_fields(),
                ("quantity_used", models.PositiveIntegerField(verbose_name="quantity used")),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="unit price")),
                ("total_price", models.DecimalField(decimal_places=2, help_text="Quantity used × unit price", max_digits=12, verbose_name="total price")),
                ("work_order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="parts", to="common.workorder", verbose_name="work order")),
                ("part", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="work_order_lines", to="common.part", verbose_name="part")),
                site_field("workorderparts", "workorderpart"),
            ],
            options={
                "verbose_name": "work order part",
                "verbose_name_plural": "work order parts",
                "ordering": ["created_at"],
                "default_permissions": [],
            },
        ),
        migrations.CreateModel(
            name="WorkOrderHistory",
            fields=[
                uuid_field(),
                *history_fields(),
                ("action", models.CharField(choices=[("created", "Created"), ("approved", "Approved"), ("assigned", "Assigned"), ("started", "Started"), ("paused", "Paused"), ("resumed", "Resumed"), ("completed", "Completed"), ("cancelled", "Cancelled"), ("part_added", "Part added"), ("part_removed", "Part removed"), ("comment_added", "Comment added")], max_length=30, verbose_name="action")),
                ("old_value", models.CharField(blank=True, max_length=255, verbose_name="old value")),
                ("new_value", models.CharField(blank=True, max_length=255, verbose_name="new value")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                ("work_order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="history", to="common.workorder", verbose_name="work order")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="work_order_history", to=settings.AUTH_USER_MODEL, verbose_name="user")),
            ],
            options={
                "verbose_name": "work order history",
                "verbose_name_plural": "work order histories",
                "ordering": ["created_at"],
                "default_permissions": [],
            },
        ),
        migrations.CreateModel(
            name="WorkOrderComment",
            fields=[
                uuid_field(),
                *history_fields(),
                ("content", models.TextField(help_text="Content of the comment", verbose_name="content")),
                ("is_internal", models.BooleanField(default=False, help_text="Whether this comment is internal (staff only)", verbose_name="is internal")),
                ("work_order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="common.workorder", verbose_name="work order")),
                ("author", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="work_order_comments", to=settings.AUTH_USER_MODEL, verbose_name="author")),
            ],
            options={
                "verbose_name": "work order comment",
                "verbose_name_plural": "work order comments",
                "ordering": ["created_at"],
                "default_permissions": [],
            },
        ),
        migrations.CreateModel(
            name="StockMovement",
            fields=[
                uuid_field(),
                *history_fields(),
                ("movement_type", models.CharField(choices=[("IN", "In"), ("OUT", "Out"), ("ADJUSTMENT", "Adjustment")], max_length=20, verbose_name="movement type")),
                ("quantity", models.IntegerField(verbose_name="quantity")),
                ("quantity_before", models.PositiveIntegerField(verbose_name="quantity before")),
                ("quantity_after", models.PositiveIntegerField(verbose_name="quantity after")),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, verbose_name="unit price")),
                ("reason", models.CharField(blank=True, max_length=255, verbose_name="reason")),
                ("part", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="movements", to="common.part", verbose_name="part")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="stock_movements", to=settings.AUTH_USER_MODEL, verbose_name="user")),
                ("work_order", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="stock_movements", to="common.workorder", verbose_name="work order")),
                site_field("stockmovements", "stockmovement"),
            ],
            options={
                "verbose_name": "stock movement",
                "verbose_name_plural": "stock movements",
                "ordering": ["-created_at"],
                "default_permissions": [],
                "indexes": [
                    models.Index(fields=["movement_type"], name="stock_movement_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Notification",
            fields=[
                uuid_field(),
                *history_fields(),
                ("event", models.CharField(help_text="Name of the notification event", max_length=50, verbose_name="event")),
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("message", models.TextField(blank=True, verbose_name="message")),
                ("reference_type", models.CharField(blank=True, help_text="Kind of object the notification refers to", max_length=50, verbose_name="reference type")),
                ("reference_id", models.CharField(blank=True, max_length=64, verbose_name="reference id")),
                ("context_data", models.JSONField(blank=True, default=dict, verbose_name="context data")),
                ("read_at", models.DateTimeField(blank=True, null=True, verbose_name="read at")),
                ("recipient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="maintenance_notifications", to=settings.AUTH_USER_MODEL, verbose_name="recipient")),
                site_field("notifications", "notification"),
            ],
            options={
                "verbose_name": "notification",
                "verbose_name_plural": "notifications",
                "ordering": ["-created_at"],
                "default_permissions": [],
                "indexes": [
                    models.Index(fields=["recipient", "read_at"], name="notif_recipient_read_idx"),
                    models.Index(fields=["event"], name="notif_event_idx"),
                ],
            },
        ),
    ]
