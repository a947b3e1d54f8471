from django.contrib import admin


class BaseModelAdmin(admin.ModelAdmin):
    readonly_fields = ("created_at", "updated_at")

    def has_add_permission(self, request):
        return request.user.is_staff

    def has_change_permission(self, request, obj=None):
        return request.user.is_staff

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser

    def has_module_permission(self, request):
        return request.user.is_staff
