"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.licenses import views

app_name = "licenses"

urlpatterns = [
    path(
        "licenses",
        views.LicenseListView.as_view(),
        name="license-list",
    ),
    # Must precede the <hash> route
    path(
        "licenses/validate",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
    path(
        "licenses/<str:license_hash>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<str:license_hash>/users",
        views.LicenseUsersView.as_view(),
        name="license-users",
    ),
    path(
        "licenses/<str:license_hash>/users/<str:username>",
        views.LicenseUserDetailView.as_view(),
        name="license-user-detail",
    ),
    path(
        "licenses/<str:license_hash>/activate",
        views.SetLicenseActiveView.as_view(active=True),
        name="activate-license",
    ),
    path(
        "licenses/<str:license_hash>/deactivate",
        views.SetLicenseActiveView.as_view(active=False),
        name="deactivate-license",
    ),
    path(
        "licenses/<str:license_hash>/extend",
        views.ExtendLicenseView.as_view(),
        name="extend-license",
    ),
    path(
        "stats",
        views.LicenseStatsView.as_view(),
        name="license-stats",
    ),
    path(
        "verify-license",
        views.VerifyDeviceLicenseView.as_view(),
        name="verify-device-license",
    ),
    path(
        "verify-user-license",
        views.VerifyUserLicenseView.as_view(),
        name="verify-user-license",
    ),
]
