from django.urls import path
from . import views

app_name = 'themes'

urlpatterns = [
    path('', views.ThemeSettingsView.as_view(), name='theme_settings'),
]
