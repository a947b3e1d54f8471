import logging

from django.db import DEFAULT_DB_ALIAS
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache import clear_sections_cache
from .catalog import DEFAULT_SECTIONS
from .models import Section

logger = logging.getLogger(__name__)


def seed_sections(sender=None, using=DEFAULT_DB_ALIAS, **kwargs):
    """Create the catalog sections that do not exist yet. Existing rows are left untouched."""
    created = 0
    manager = Section.objects.db_manager(using)
    for entry in DEFAULT_SECTIONS:
        defaults = {key: value for key, value in entry.items() if key != "name"}
        _, was_created = manager.get_or_create(name=entry["name"], defaults=defaults)
        created += was_created
    if created:
        logger.info("Seeded %d sections", created)
    return created


@receiver(post_save, sender=Section)
@receiver(post_delete, sender=Section)
def handle_section_change(sender, instance, **kwargs):
    clear_sections_cache()
