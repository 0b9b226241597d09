from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ApiLogEntry",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                (
                    "timestamp",
                    models.DateTimeField(db_index=True, default=django.utils.timezone.now),
                ),
                ("method", models.CharField(default="POST", max_length=10)),
                ("endpoint", models.CharField(max_length=255)),
                (
                    "source_url",
                    models.CharField(
                        db_index=True, help_text="Normalized calling domain", max_length=255
                    ),
                ),
                ("provided_key", models.TextField(blank=True, default="")),
                ("response_status", models.PositiveSmallIntegerField()),
                ("response_body", models.TextField(blank=True, default="")),
            ],
            options={
                "verbose_name": "API log entry",
                "verbose_name_plural": "API log",
                "db_table": "api_logs",
                "ordering": ["-timestamp"],
            },
        ),
    ]
