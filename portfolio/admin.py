from django.contrib import admin
from .models import Portfolio, PortfolioProject


class PortfolioProjectInline(admin.TabularInline):
    model = PortfolioProject
    extra = 0
    fields = ['project', 'order', 'created_at']
    readonly_fields = ['created_at']
    ordering = ['order']


@admin.register(Portfolio)
class PortfolioAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'user', 'is_public', 'created_at', 'updated_at']
    list_filter = ['is_public', 'created_at']
    search_fields = ['user__email', 'name', 'slug']
    readonly_fields = ['created_at', 'updated_at', 'public_url']
    inlines = [PortfolioProjectInline]
    fieldsets = (
        ('Owner', {
            'fields': ('user',)
        }),
        ('Portfolio Details', {
            'fields': ('name', 'description')
        }),
        ('Visibility', {
            'fields': ('is_public', 'slug', 'public_url')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(PortfolioProject)
class PortfolioProjectAdmin(admin.ModelAdmin):
    list_display = ['portfolio', 'project', 'order', 'created_at']
    list_filter = ['created_at']
    search_fields = ['portfolio__slug', 'portfolio__name', 'project__name']
    readonly_fields = ['created_at', 'updated_at']
