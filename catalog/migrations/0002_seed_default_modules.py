from django.db import migrations

DEFAULT_MODULES = [
    ("inventory", "Basic inventory", "Equipment and storage location management", "Server"),
    ("respiratory", "Respiratory protection", "Breathing apparatus workshop and inspections", "Wind"),
    ("hoses", "Hose maintenance", "Hose washing and testing", "Droplet"),
    ("vehicles", "Vehicle logbook", "Digital logbook and refuelling", "Truck"),
    ("apiAccess", "API access", "Access for external systems", "Database"),
    ("personnel", "Personnel", "Crew management and training courses", "Users"),
]


def seed_modules(apps, schema_editor):
    ModuleDefinition = apps.get_model("catalog", "ModuleDefinition")
    if ModuleDefinition.objects.exists():
        return
    for position, (module_id, label, description, icon_name) in enumerate(DEFAULT_MODULES, start=1):
        ModuleDefinition.objects.create(
            id=module_id,
            label=label,
            description=description,
            icon_name=icon_name,
            position=position,
        )


def unseed_modules(apps, schema_editor):
    ModuleDefinition = apps.get_model("catalog", "ModuleDefinition")
    ModuleDefinition.objects.filter(id__in=[row[0] for row in DEFAULT_MODULES]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_modules, unseed_modules),
    ]
