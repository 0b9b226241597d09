from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("organization", models.CharField(max_length=255)),
                ("contact_person", models.CharField(blank=True, max_length=255)),
                ("email", models.CharField(blank=True, max_length=254)),
                ("phone_number", models.CharField(blank=True, default="", max_length=64)),
                ("domain", models.CharField(db_index=True, max_length=255)),
                ("key", models.CharField(db_index=True, max_length=100, unique=True)),
                ("valid_until", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("suspended", "Suspended")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("features", models.JSONField(blank=True, default=dict)),
                ("note", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="licenses_status_6f0c1e_idx"),
                    models.Index(fields=["valid_until"], name="licenses_valid_u_3b9d2a_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LicenseRequest",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("organization", models.CharField(max_length=255)),
                ("contact_person", models.CharField(blank=True, max_length=255)),
                ("email", models.CharField(blank=True, max_length=254)),
                ("phone_number", models.CharField(blank=True, default="", max_length=64)),
                ("requested_domain", models.CharField(db_index=True, max_length=255)),
                ("request_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("note", models.TextField(blank=True, default="")),
                (
                    "custom_message",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="Returned to the installation while the request is pending",
                    ),
                ),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "verbose_name": "license request",
                "db_table": "license_requests",
                "ordering": ["-request_date"],
            },
        ),
    ]
