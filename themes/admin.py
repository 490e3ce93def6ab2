from django.contrib import admin
from .models import ThemeSettings


@admin.register(ThemeSettings)
class ThemeSettingsAdmin(admin.ModelAdmin):
    """Admin interface for per-user theme settings"""
    list_display = ('user', 'background_color', 'text_color', 'accent_color', 'default_language', 'updated_at')
    search_fields = ('user__email',)
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        ('Owner', {
            'fields': ('user',)
        }),
        ('Colors', {
            'fields': ('background_color', 'text_color', 'accent_color', 'secondary_color'),
        }),
        ('Typography', {
            'fields': ('heading_font', 'body_font'),
        }),
        ('Branding', {
            'fields': ('logo_url', 'default_language'),
        }),
        ('Company', {
            'fields': ('company_name', 'company_description', 'company_email', 'company_phone', 'company_address'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
