from django.core.management.base import BaseCommand

from apps.sections.models import Section


class Command(BaseCommand):
    help = "Recompute each section's current_enrollment from its registrations that were not rejected"

    def handle(self, *args, **options):
        changed = Section.objects.recount()
        for name, old, new in changed:
            self.stdout.write(f"{name}: {old} -> {new}")
        self.stdout.write(self.style.SUCCESS(f"{len(changed)} section(s) updated"))
