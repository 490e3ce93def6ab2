from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import RegexValidator
import uuid

User = get_user_model()

hex_color_validator = RegexValidator(
    regex=r'^#(?:[0-9a-fA-F]{3}){1,2}$',
    message='Colors must be hex values such as #fff or #1a2b3c'
)


class ThemeSettings(models.Model):
    """
    Per-user presentation settings applied to every portfolio the user publishes
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='theme_settings'
    )

    # Colors
    background_color = models.CharField(max_length=7, blank=True, validators=[hex_color_validator])
    text_color = models.CharField(max_length=7, blank=True, validators=[hex_color_validator])
    accent_color = models.CharField(max_length=7, blank=True, validators=[hex_color_validator])
    secondary_color = models.CharField(max_length=7, blank=True, validators=[hex_color_validator])

    # Typography
    heading_font = models.CharField(max_length=100, blank=True)
    body_font = models.CharField(max_length=100, blank=True)

    # Company details shown on published portfolios
    company_name = models.CharField(max_length=200, blank=True)
    company_description = models.TextField(blank=True)
    company_email = models.EmailField(blank=True)
    company_phone = models.CharField(max_length=50, blank=True)
    company_address = models.TextField(blank=True)

    logo_url = models.URLField(blank=True)
    default_language = models.ForeignKey(
        'projects.Language',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        help_text="Language portfolios open in"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Theme Settings'
        verbose_name_plural = 'Theme Settings'

    def __str__(self):
        return f"Theme settings for {self.user.email}"
