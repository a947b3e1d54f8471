import logging

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Count, F, Q
from django.utils import timezone

from apps.common.models import BaseModel

from .cache import clear_sections_cache

logger = logging.getLogger(__name__)


class SectionQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def with_live_enrollment(self):
        """Annotate ``live_enrollment``: registrations of the section that were not rejected."""
        return self.annotate(live_enrollment=Count("students", filter=~Q(students__status="rejected")))

    def recount(self):
        """Recompute ``current_enrollment`` from the registrations that were not rejected.

        Returns:
            list[tuple[str, int, int]]: (name, old count, new count) for every section that changed
        """
        changed = []
        for section in self.with_live_enrollment():
            new_count = section.live_enrollment
            if new_count > section.capacity:
                logger.warning(
                    "Section %s has %d live registrations for %d seats", section.name, new_count, section.capacity
                )
                new_count = section.capacity
            if new_count != section.current_enrollment:
                changed.append((section.name, section.current_enrollment, new_count))
                self.model.objects.filter(pk=section.pk).update(current_enrollment=new_count, updated_at=timezone.now())
        if changed:
            logger.info("Recounted enrollment of %d section(s)", len(changed))
            clear_sections_cache()
        return changed


class SectionManager(models.Manager.from_queryset(SectionQuerySet)):
    def reserve_seat(self, name):
        """Take one seat in ``name`` if any is left.

        The increment is a single conditional UPDATE, so concurrent callers can
        never push ``current_enrollment`` past ``capacity``.

        Returns:
            bool: True if a seat was taken
        """
        updated = self.filter(name=name, is_active=True, current_enrollment__lt=F("capacity")).update(
            current_enrollment=F("current_enrollment") + 1,
            updated_at=timezone.now(),
        )
        return updated == 1


class Section(BaseModel):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")
    capacity = models.PositiveIntegerField(default=50)
    current_enrollment = models.PositiveIntegerField(default=0)
    fee_termly = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    fee_annual = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    age_min = models.PositiveSmallIntegerField(null=True, blank=True)
    age_max = models.PositiveSmallIntegerField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    objects = SectionManager()

    def __str__(self):
        return self.name

    class Meta:
        db_table = "sections"
        ordering = ("name",)
        constraints = [
            models.CheckConstraint(
                condition=Q(current_enrollment__lte=F("capacity")),
                name="section_enrollment_within_capacity",
            ),
        ]

    @property
    def available_spots(self):
        return max(self.capacity - self.current_enrollment, 0)

    @property
    def is_full(self):
        return self.current_enrollment >= self.capacity

    def clean(self):
        if self.capacity is not None and self.capacity < self.current_enrollment:
            raise ValidationError({"capacity": "Capacity cannot be lower than the current enrollment"})
        if self.age_min is not None and self.age_max is not None and self.age_min > self.age_max:
            raise ValidationError({"age_max": "Maximum age must not be lower than minimum age"})
