from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from firebase_admin import auth
import firebase_admin
import logging

logger = logging.getLogger(__name__)
User = get_user_model()


def ensure_firebase_initialized():
    """Ensure Firebase is initialized before use"""
    if not firebase_admin._apps:
        try:
            from backend.settings import initialize_firebase
            initialize_firebase()
        except (ValueError, IOError) as e:
            logger.error(f"Failed to initialize Firebase: {e}")
            return False
    return True


class FirebaseAuthentication(BaseAuthentication):
    """
    Firebase Authentication for Django REST Framework

    Verifies the Firebase ID token sent as "Authorization: Bearer <token>"
    and maps it onto a Django user, creating the user on first sight.
    """

    def authenticate(self, request):
        """
        Returns:
            tuple: (user, token) if authentication successful, None when no
            bearer token was sent
        """
        auth_header = request.META.get('HTTP_AUTHORIZATION')
        if not auth_header:
            return None

        token = self.extract_token(auth_header)
        if not token:
            return None

        if not ensure_firebase_initialized():
            raise AuthenticationFailed('Authentication service unavailable')

        try:
            decoded_token = auth.verify_id_token(token, check_revoked=False)
        except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError) as e:
            logger.warning(f"Invalid Firebase token: {e}")
            raise AuthenticationFailed('Invalid authentication token')
        except (ValueError, auth.CertificateFetchError) as e:
            logger.error(f"Token verification error: {e}")
            raise AuthenticationFailed('Authentication failed')

        if not decoded_token.get('uid') or not decoded_token.get('email'):
            raise AuthenticationFailed('Invalid token: missing required fields')

        user = self.get_or_create_user(decoded_token)
        return (user, token)

    def extract_token(self, auth_header):
        parts = auth_header.split()

        if len(parts) != 2 or parts[0].lower() != 'bearer':
            return None

        return parts[1]

    def get_or_create_user(self, decoded_token):
        """
        Get or create the Django user for a decoded Firebase token, keeping
        email, name and verification state in sync with the identity provider.
        """
        firebase_uid = decoded_token['uid']
        email = decoded_token['email']
        name = decoded_token.get('name', '')
        email_verified = decoded_token.get('email_verified', False)

        try:
            user = User.objects.get(firebase_uid=firebase_uid)

            updated_fields = []
            if user.email != email:
                user.email = email
                updated_fields.append('email')
            if name and not user.name:
                user.name = name
                updated_fields.append('name')
            if user.email_verified != email_verified:
                user.email_verified = email_verified
                updated_fields.append('email_verified')
            if updated_fields:
                user.save(update_fields=updated_fields + ['updated_at'])

        except User.DoesNotExist:
            user = User.objects.create_user(
                firebase_uid=firebase_uid,
                email=email,
                username=email,
                name=name,
                email_verified=email_verified,
            )
            logger.info(f"Created new user: {email}")

        user.last_login_at = timezone.now()
        user.save(update_fields=['last_login_at'])

        return user

    def authenticate_header(self, request):
        """
        Return the authentication header for 401 responses.
        """
        return 'Bearer'
