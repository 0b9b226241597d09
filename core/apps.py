from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = "core"
    verbose_name = "Core"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        register_event_handlers()
        setup_opentelemetry()
