from rest_framework import serializers

from .models import User


class UserLoggedInSerializer(serializers.ModelSerializer):
    """
    Current user profile for /user/me/.
    """
    class Meta:
        model = User
        fields = ("id", "email", "username", "first_name", "last_name", "role", "nickname", "total_views")
        read_only_fields = fields
