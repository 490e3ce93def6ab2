from rest_framework import serializers
from django.contrib.auth import get_user_model

from portfolio.serializers import PortfolioSerializer
from projects.serializers import ProjectSerializer

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model
    """

    class Meta:
        model = User
        fields = [
            'id', 'firebase_uid', 'email', 'email_verified', 'name',
            'display_name', 'created_at', 'updated_at', 'last_login_at'
        ]
        read_only_fields = fields


class CurrentUserSerializer(UserSerializer):
    """
    The signed-in user together with their projects and portfolios
    """
    projects = ProjectSerializer(many=True, read_only=True)
    portfolios = PortfolioSerializer(many=True, read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['projects', 'portfolios']
        read_only_fields = fields


class UpdateNameSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=255,
        error_messages={
            'required': 'Name is required',
            'blank': 'Name cannot be empty',
            'null': 'Name is required',
        },
    )


class UpdateEmailSerializer(serializers.Serializer):
    email = serializers.EmailField(
        error_messages={
            'required': 'Email is required',
            'blank': 'Email is required',
            'invalid': 'Invalid email address',
        },
    )

    def validate_email(self, value):
        return value.strip().lower()
