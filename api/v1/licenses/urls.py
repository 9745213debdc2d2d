"""
URL configuration for license endpoints.

Mounted under ``apps/<uuid:application_id>/licenses/``.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path(
        "",
        views.LicenseCollectionView.as_view(),
        name="licenses",
    ),
    path(
        "add-time/",
        views.AddLicenseTimeView.as_view(),
        name="add-license-time",
    ),
    path(
        "<uuid:license_id>/ban/",
        views.BanLicenseView.as_view(),
        name="ban-license",
    ),
]
