"""
URL configuration for application endpoints.
"""

from django.urls import path

from api.v1.apps import views

urlpatterns = [
    path(
        "",
        views.ApplicationListView.as_view(),
        name="applications",
    ),
    path(
        "<uuid:application_id>/",
        views.ApplicationDetailView.as_view(),
        name="application-detail",
    ),
]
