from django.apps import AppConfig
from django.db.models.signals import post_migrate


class SectionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.sections"

    def ready(self):
        from .signals import seed_sections

        post_migrate.connect(seed_sections, sender=self)
