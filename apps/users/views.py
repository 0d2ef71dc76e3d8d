from rest_framework import generics, permissions
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .serializers import UserLoggedInSerializer


@extend_schema(
    summary="Get current user (requires authentication).",
    request=None,
    responses={
        200: OpenApiResponse(response=UserLoggedInSerializer, description="Current user"),
        401: OpenApiResponse(description="Unauthorized"),
    },
)
class UserLoggedInView(generics.RetrieveAPIView):
    serializer_class = UserLoggedInSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user
