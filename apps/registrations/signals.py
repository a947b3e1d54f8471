from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.sections.cache import clear_sections_cache

from .models import Student


# Enrolled and available counts on the public section list depend on registrations
@receiver(post_save, sender=Student)
@receiver(post_delete, sender=Student)
def handle_student_change(sender, instance, **kwargs):
    clear_sections_cache()
