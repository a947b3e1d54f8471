from django.contrib import admin
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from apps.common.views import HealthCheckView, api_not_found

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("api/health/", HealthCheckView.as_view(), name="health"),
    path("api/registration/", include("apps.registrations.urls")),
    path("api/contact/", include("apps.contacts.urls")),
    path("api/sections/", include("apps.sections.urls")),
    path("api/admin/", include("apps.users.urls")),
    path("api/admin/", include("apps.dashboard.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Anything else under /api/ answers with a JSON 404
    re_path(r"^api/.*$", api_not_found, name="api-not-found"),
]
