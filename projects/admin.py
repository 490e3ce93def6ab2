from django.contrib import admin
from .models import ContentBlock, Language, Project, ProjectContent, ProjectTag, SlideTag, Tag


class ProjectContentInline(admin.TabularInline):
    model = ProjectContent
    extra = 0
    readonly_fields = ['created_at', 'updated_at']


class ProjectTagInline(admin.TabularInline):
    model = ProjectTag
    extra = 0
    raw_id_fields = ['tag']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'client', 'order', 'created_at', 'updated_at']
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'client', 'user__email']
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProjectContentInline, ProjectTagInline]
    fieldsets = (
        ('Owner', {
            'fields': ('user',)
        }),
        ('Project Details', {
            'fields': ('name', 'description', 'client', 'order')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(ContentBlock)
class ContentBlockAdmin(admin.ModelAdmin):
    list_display = ['project_content', 'type', 'order', 'slide_tag', 'updated_at']
    list_filter = ['type']
    search_fields = ['project_content__project__name']
    raw_id_fields = ['project_content', 'slide_tag']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Language)
class LanguageAdmin(admin.ModelAdmin):
    list_display = ['name', 'code']
    search_fields = ['name', 'code']


@admin.register(Tag, SlideTag)
class TagAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'created_at']
    search_fields = ['name', 'user__email']
    raw_id_fields = ['user']
