from django.urls import path
from . import views

app_name = 'authentication'

urlpatterns = [
    # Current user account
    path('user/', views.AuthenticatedUserView.as_view(), name='current_user'),
    path('user/name/', views.UpdateNameView.as_view(), name='update_name'),
    path('user/email/', views.UpdateEmailView.as_view(), name='update_email'),
]
