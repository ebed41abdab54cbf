import django.utils.timezone
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoreAddress",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=200)),
                ("address_line_1", models.CharField(max_length=255)),
                (
                    "address_line_2",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("landmark", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=100)),
                ("state", models.CharField(blank=True, default="", max_length=100)),
                ("pincode", models.CharField(blank=True, default="", max_length=20)),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                (
                    "contact_name",
                    models.CharField(blank=True, default="", max_length=200),
                ),
                (
                    "contact_phone",
                    models.CharField(blank=True, default="", max_length=32),
                ),
                ("is_default", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "store_addresses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["is_default", "-created_at"],
                        name="store_default_created_idx",
                    ),
                ],
            },
        ),
    ]
