"""
URL configuration for application user endpoints.

Mounted under ``apps/<uuid:application_id>/users/``.
"""

from django.urls import path

from api.v1.users import views

urlpatterns = [
    path(
        "",
        views.AppUserCollectionView.as_view(),
        name="app-users",
    ),
    path(
        "extend/",
        views.ExtendAppUsersView.as_view(),
        name="extend-app-users",
    ),
    path(
        "subtract/",
        views.SubtractAppUserTimeView.as_view(),
        name="subtract-app-user-time",
    ),
    path(
        "pause/",
        views.PauseAppUsersView.as_view(),
        name="pause-app-users",
    ),
    path(
        "reset-hwid/",
        views.ResetHwidView.as_view(),
        name="reset-hwid",
    ),
    path(
        "<uuid:user_id>/",
        views.AppUserDetailView.as_view(),
        name="app-user-detail",
    ),
    path(
        "<uuid:user_id>/ban/",
        views.BanAppUserView.as_view(),
        name="ban-app-user",
    ),
    path(
        "<uuid:user_id>/delete-subscription/",
        views.DeleteSubscriptionView.as_view(),
        name="delete-subscription",
    ),
    path(
        "<uuid:user_id>/vars/",
        views.UserVarCollectionView.as_view(),
        name="user-vars",
    ),
    path(
        "<uuid:user_id>/vars/<str:var_name>/",
        views.UserVarDetailView.as_view(),
        name="user-var-detail",
    ),
]
