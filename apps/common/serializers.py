from rest_framework import serializers


class PaginationQuerySerializer(serializers.Serializer):
    """``page``/``limit`` query parameters shared by every list endpoint."""

    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=20)
