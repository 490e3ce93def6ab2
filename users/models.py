from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom User model that integrates with Firebase Authentication
    """

    # Firebase UID is the primary identifier
    firebase_uid = models.CharField(max_length=255, unique=True)

    # Display name as provided by the auth provider or edited by the user
    name = models.CharField(max_length=255, blank=True)
    email_verified = models.BooleanField(default=False)

    # Additional fields
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login_at = models.DateTimeField(null=True, blank=True)

    # Override username to use email as primary identifier
    username = models.CharField(max_length=150, unique=False, blank=True)
    email = models.EmailField(unique=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['firebase_uid']

    class Meta:
        db_table = 'users'

    def __str__(self):
        return self.email

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.email
