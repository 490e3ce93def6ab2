from rest_framework import serializers

from projects.models import Language
from projects.serializers import LanguageSerializer
from .models import ThemeSettings


class ThemeSettingsSerializer(serializers.ModelSerializer):
    """
    Serializer for a user's theme settings. The default language is
    written by id and read back nested.
    """
    default_language = LanguageSerializer(read_only=True)
    default_language_id = serializers.PrimaryKeyRelatedField(
        source='default_language',
        queryset=Language.objects.all(),
        required=False,
        allow_null=True,
        write_only=True,
    )

    class Meta:
        model = ThemeSettings
        fields = [
            'id',
            'user',
            'background_color',
            'text_color',
            'accent_color',
            'secondary_color',
            'heading_font',
            'body_font',
            'logo_url',
            'company_name',
            'company_description',
            'company_email',
            'company_phone',
            'company_address',
            'default_language',
            'default_language_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'user', 'created_at', 'updated_at']
