import logging

from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exceptions import AlreadyExists
from .models import ThemeSettings
from .serializers import ThemeSettingsSerializer

logger = logging.getLogger(__name__)


class ThemeSettingsView(APIView):
    """
    Manage the current user's theme settings
    GET /api/theme-settings/ - {"theme_settings": settings or null}
    POST /api/theme-settings/ - Create settings
    PUT /api/theme-settings/ - Create or partially update settings
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        theme_settings = ThemeSettings.objects.filter(user=request.user).select_related('default_language').first()
        data = ThemeSettingsSerializer(theme_settings).data if theme_settings else None
        return Response({'theme_settings': data}, status=status.HTTP_200_OK)

    def post(self, request):
        if ThemeSettings.objects.filter(user=request.user).exists():
            raise AlreadyExists('Theme settings already exist. Use PUT to update.')

        serializer = ThemeSettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        theme_settings = serializer.save(user=request.user)
        logger.info(f"Created theme settings for {request.user.email}")
        return Response(ThemeSettingsSerializer(theme_settings).data, status=status.HTTP_201_CREATED)

    def put(self, request):
        theme_settings = ThemeSettings.objects.filter(user=request.user).first()
        serializer = ThemeSettingsSerializer(theme_settings, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        theme_settings = serializer.save(user=request.user)
        logger.info(f"Saved theme settings for {request.user.email}: {', '.join(serializer.validated_data.keys()) or 'no changes'}")
        return Response(ThemeSettingsSerializer(theme_settings).data, status=status.HTTP_200_OK)
