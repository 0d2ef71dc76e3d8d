from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import UserLoggedInView

urlpatterns = [
    path("user/token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("user/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("user/me/", UserLoggedInView.as_view(), name="user-me"),
]
