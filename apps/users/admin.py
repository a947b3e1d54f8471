from django.contrib import admin, messages
from django.core.exceptions import ValidationError

from apps.common.admin import BaseModelAdmin

from .models import ROLE_SUPER_ADMIN, AdminUser


@admin.register(AdminUser)
class AdminUserAdmin(BaseModelAdmin):
    list_display = ("username", "email", "role", "is_active", "last_login", "created_at")
    search_fields = ("username", "email")
    list_filter = ("role", "is_active")
    readonly_fields = ("last_login", "created_at", "updated_at")
    exclude = ("groups", "user_permissions")

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)
        # Only a super admin may hand out elevated roles
        if not request.user.is_superuser:
            for field in ("role", "is_superuser", "is_staff"):
                if field in form.base_fields:
                    form.base_fields[field].disabled = True
        return form

    def save_model(self, request, obj, form, change):
        """
        1) The last super admin cannot be demoted
        2) Passwords typed in the admin form are hashed before saving
        """
        if change and "role" in form.changed_data and obj.role != ROLE_SUPER_ADMIN:
            if AdminUser.objects.filter(role=ROLE_SUPER_ADMIN).exclude(pk=obj.pk).count() == 0:
                raise ValidationError("At least one super admin must remain.")

        if "password" in form.changed_data:
            obj.set_password(form.cleaned_data["password"])

        super().save_model(request, obj, form, change)
        messages.success(request, f"Admin user '{obj.username}' saved.")
