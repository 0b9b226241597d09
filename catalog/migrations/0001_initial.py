from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ModuleDefinition",
            fields=[
                (
                    "id",
                    models.CharField(
                        help_text="Technical name, e.g. apiAccess",
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("label", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("icon_name", models.CharField(default="Box", max_length=64)),
                ("position", models.PositiveIntegerField(default=0)),
            ],
            options={
                "verbose_name": "module",
                "db_table": "modules",
                "ordering": ["position", "id"],
            },
        ),
    ]
