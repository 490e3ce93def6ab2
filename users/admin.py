from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'name', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['is_active', 'is_staff', 'is_superuser', 'date_joined']
    search_fields = ['email', 'name', 'firebase_uid']
    ordering = ['-date_joined']

    fieldsets = (
        ('Authentication', {
            'fields': ('email', 'email_verified', 'password', 'firebase_uid')
        }),
        ('Personal Info', {
            'fields': ('name', 'first_name', 'last_name', 'username')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')
        }),
        ('Important Dates', {
            'fields': ('last_login', 'date_joined', 'last_login_at')
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'firebase_uid', 'name'),
        }),
    )

    readonly_fields = ['date_joined', 'last_login']
