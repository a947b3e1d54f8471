from django.urls import path

from .views import RegistrationDetailView, RegistrationStatusView, RegistrationView

urlpatterns = [
    path("", RegistrationView.as_view(), name="registration"),
    path("<int:pk>/", RegistrationDetailView.as_view(), name="registration-detail"),
    path("<int:pk>/status/", RegistrationStatusView.as_view(), name="registration-status"),
]
