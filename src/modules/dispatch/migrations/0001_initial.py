import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def _optional_char(max_length):
    return models.CharField(blank=True, max_length=max_length, null=True)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Assignment",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        primary_key=True,
                        related_name="assignment",
                        serialize=False,
                        to="orders.order",
                    ),
                ),
                (
                    "courier_id",
                    models.CharField(
                        blank=True, db_index=True, max_length=64, null=True
                    ),
                ),
                (
                    "courier_name",
                    models.CharField(blank=True, default="", max_length=200),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("assigned", "Assigned"),
                            ("picked_up", "Picked up"),
                            ("in_transit", "In transit"),
                            ("reached", "Reached store"),
                            ("out_for_delivery", "Out for delivery"),
                            ("delivered", "Delivered"),
                        ],
                        default="assigned",
                        max_length=32,
                    ),
                ),
                (
                    "assignment_type",
                    models.CharField(
                        choices=[
                            ("pickup", "Pickup (customer to store)"),
                            ("delivery", "Delivery (store to customer)"),
                        ],
                        default="pickup",
                        max_length=16,
                    ),
                ),
                ("store_address_id", _optional_char(64)),
                (
                    "total_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                ("payment_method", _optional_char(50)),
                ("payment_status", _optional_char(50)),
                ("pickup_date", models.DateField(blank=True, null=True)),
                ("pickup_slot_display_time", _optional_char(64)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("delivery_slot_display_time", _optional_char(64)),
                ("delivery_address", models.TextField(blank=True, null=True)),
                ("address_details", models.JSONField(blank=True, default=dict)),
                ("customer_name", _optional_char(200)),
                ("customer_phone", _optional_char(32)),
            ],
            options={
                "db_table": "assigned_orders",
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(fields=["status"], name="assigned_status_idx"),
                ],
            },
        ),
    ]
