from django.urls import path

from .views import SectionDetailView, SectionListView, SectionStatsView, SectionStudentsView

# Section names may contain "/" (Mosque/Majlis), hence the path converter
urlpatterns = [
    path("", SectionListView.as_view(), name="section-list"),
    path("<path:section_name>/students/", SectionStudentsView.as_view(), name="section-students"),
    path("<path:section_name>/stats/", SectionStatsView.as_view(), name="section-stats"),
    path("<path:identifier>/", SectionDetailView.as_view(), name="section-detail"),
]
