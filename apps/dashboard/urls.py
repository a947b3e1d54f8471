from django.urls import path

from .views import DashboardView, ExportView

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="admin-dashboard"),
    path("export/<str:export_type>/", ExportView.as_view(), name="admin-export"),
]
