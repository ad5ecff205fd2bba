from django.urls import path

from accounts.views import (
    LoginAPIView,
    RefreshAPIView,
    LogoutAPIView,
    MeAPIView,
)

urlpatterns = [
    # Auth (cookies JWT)
    path("auth/login/", LoginAPIView.as_view(), name="auth-login"),
    path("auth/refresh/", RefreshAPIView.as_view(), name="auth-refresh"),
    path("auth/logout/", LogoutAPIView.as_view(), name="auth-logout"),
    path("auth/me/", MeAPIView.as_view(), name="auth-me"),
]
