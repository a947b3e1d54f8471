from rest_framework import serializers

from apps.common.serializers import PaginationQuerySerializer
from apps.registrations.models import STATUS_CHOICES

from .models import Section


class SectionSerializer(serializers.ModelSerializer):
    fee_termly = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True)
    fee_annual = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False, read_only=True)
    available_spots = serializers.IntegerField(read_only=True)

    class Meta:
        model = Section
        fields = (
            "id",
            "name",
            "description",
            "capacity",
            "current_enrollment",
            "available_spots",
            "fee_termly",
            "fee_annual",
            "age_min",
            "age_max",
            "is_active",
        )


class SectionListSerializer(SectionSerializer):
    """Public list entry: ``enrolled_students`` counts approved registrations."""

    enrolled_students = serializers.IntegerField(read_only=True)

    class Meta(SectionSerializer.Meta):
        fields = SectionSerializer.Meta.fields + ("enrolled_students",)


class SectionDetailSerializer(SectionSerializer):
    """Detail view: ``available_spots`` here is capacity minus approved registrations."""

    enrolled_students = serializers.IntegerField(read_only=True)
    approved_students = serializers.IntegerField(read_only=True)
    pending_students = serializers.IntegerField(read_only=True)
    available_spots = serializers.SerializerMethodField()

    class Meta(SectionSerializer.Meta):
        fields = SectionSerializer.Meta.fields + ("enrolled_students", "approved_students", "pending_students")

    def get_available_spots(self, obj):
        return max(obj.capacity - obj.approved_students, 0)


class SectionStudentsQuerySerializer(PaginationQuerySerializer):
    status = serializers.ChoiceField(choices=STATUS_CHOICES, required=False)
