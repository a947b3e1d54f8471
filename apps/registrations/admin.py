from django.contrib import admin

from apps.common.admin import BaseModelAdmin

from .models import STATUS_APPROVED, STATUS_REJECTED, Payment, Student


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    readonly_fields = ("created_at",)


@admin.register(Student)
class StudentAdmin(BaseModelAdmin):
    list_display = (
        "registration_id",
        "student_name",
        "student_age",
        "parent_name",
        "phone",
        "section",
        "payment_plan",
        "status",
        "payment_status",
        "created_at",
    )
    list_filter = ("status", "payment_status", "payment_plan", "section")
    search_fields = ("student_name", "parent_name", "phone", "email")
    readonly_fields = ("registration_date", "created_at", "updated_at")
    inlines = (PaymentInline,)
    actions = ("approve", "reject")

    @admin.display(description="Registration ID")
    def registration_id(self, obj):
        return obj.registration_id

    @admin.action(description="Approve selected registrations")
    def approve(self, request, queryset):
        self._set_status(request, queryset, STATUS_APPROVED)

    @admin.action(description="Reject selected registrations")
    def reject(self, request, queryset):
        self._set_status(request, queryset, STATUS_REJECTED)

    def _set_status(self, request, queryset, new_status):
        # save() per row so the section cache is refreshed
        for student in queryset:
            student.status = new_status
            student.save(update_fields=["status", "updated_at"])
        self.message_user(request, f"{queryset.count()} registration(s) marked {new_status}")


@admin.register(Payment)
class PaymentAdmin(BaseModelAdmin):
    list_display = ("student", "amount", "payment_method", "academic_term", "status", "payment_date")
    list_filter = ("status", "academic_term")
    search_fields = ("student__student_name", "payment_reference")
    readonly_fields = ("created_at",)
