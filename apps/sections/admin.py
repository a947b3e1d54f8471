from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import Section


@admin.register(Section)
class SectionAdmin(BaseModelAdmin):
    list_display = (
        "name",
        "capacity",
        "current_enrollment",
        "available_spots",
        "fee_termly",
        "fee_annual",
        "age_min",
        "age_max",
        "is_active",
    )
    list_filter = ("is_active",)
    search_fields = ("name",)
    readonly_fields = ("current_enrollment", "created_at", "updated_at")
    actions = ("recount_enrollment",)

    @admin.action(description="Recount enrollment from registrations")
    def recount_enrollment(self, request, queryset):
        changed = queryset.recount()
        if not changed:
            self.message_user(request, "All enrollment counts are up to date")
            return
        for name, old, new in changed:
            self.message_user(request, f"{name}: {old} -> {new}")
