from django.apps import AppConfig


class LaboraConfig(AppConfig):
    name = "labora_api"
    verbose_name = "Labora Tech API"

    def ready(self):
        from django.conf import settings

        # ─── DI container ───────────────────────────────────────────
        from labora_core.adapters.config.composition_root import setup_di_container_from_settings

        setup_di_container_from_settings(settings)
