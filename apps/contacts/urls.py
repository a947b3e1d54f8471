from django.urls import path

from .views import ContactDetailView, ContactStatusView, ContactView

urlpatterns = [
    path("", ContactView.as_view(), name="contact"),
    path("<int:pk>/", ContactDetailView.as_view(), name="contact-detail"),
    path("<int:pk>/status/", ContactStatusView.as_view(), name="contact-status"),
]
