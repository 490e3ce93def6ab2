"""
URL configuration for backend project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse

urlpatterns = [
    path("admin/", admin.site.urls),

    # API endpoints
    path("api/auth/", include('authentication.urls')),
    path("api/projects/", include('projects.urls')),
    path("api/portfolios/", include('portfolio.urls')),
    path("api/theme-settings/", include('themes.urls')),

    # Health check endpoint
    path("health/", lambda request: JsonResponse({"status": "ok"})),

    # Root endpoint
    path("", lambda request: JsonResponse({
        "message": "Portfolio Showcase API",
        "status": "running",
    })),
]
