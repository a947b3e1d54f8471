from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class HealthCheckView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(summary="Health check", tags=["Health"])
    def get(self, request):
        return Response(
            {
                "status": "OK",
                "timestamp": timezone.now().isoformat(),
                "service": f"{settings.SCHOOL_NAME} API",
            },
            status=status.HTTP_200_OK,
        )


@csrf_exempt
def api_not_found(request, *args, **kwargs):
    """Catch-all for unknown ``/api/`` routes."""
    return JsonResponse({"success": False, "message": "API endpoint not found"}, status=404)
