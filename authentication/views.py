from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.exceptions import APIException
from django.contrib.auth import get_user_model
from django.db.models import Prefetch
from firebase_admin import auth

from backend.exceptions import AlreadyExists
from projects.models import Project
from .authentication import ensure_firebase_initialized
from .serializers import CurrentUserSerializer, UpdateEmailSerializer, UpdateNameSerializer
import logging

logger = logging.getLogger(__name__)
User = get_user_model()


class AuthenticatedUserView(APIView):
    """
    Get current authenticated user information.
    GET /api/auth/user/ - User with projects and portfolios
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = (
            User.objects
            .prefetch_related(
                Prefetch('projects', queryset=Project.objects.prefetch_related('project_tags__tag')),
                'portfolios',
            )
            .get(id=request.user.id)
        )
        return Response({'user': CurrentUserSerializer(user).data}, status=status.HTTP_200_OK)


class UpdateNameView(APIView):
    """
    Change the current user's display name
    PUT /api/auth/user/name/ - {"name": ...}
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):
        serializer = UpdateNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.name = serializer.validated_data['name']
        user.save(update_fields=['name', 'updated_at'])

        logger.info(f"Updated name for {user.email}")
        return Response({'success': True, 'message': 'Name updated successfully'}, status=status.HTTP_200_OK)


class UpdateEmailView(APIView):
    """
    Change the current user's email address. The new address is pushed to
    Firebase and has to be verified again.
    PUT /api/auth/user/email/ - {"email": ...}
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):
        serializer = UpdateEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']

        user = request.user
        if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
            raise AlreadyExists('Email is already in use')

        if not ensure_firebase_initialized():
            raise APIException('Authentication service unavailable')
        try:
            auth.update_user(user.firebase_uid, email=email, email_verified=False)
        except auth.EmailAlreadyExistsError:
            raise AlreadyExists('Email is already in use')

        user.email = email
        user.email_verified = False
        user.save(update_fields=['email', 'email_verified', 'updated_at'])

        logger.info(f"Updated email for user {user.id}")
        return Response({'success': True, 'message': 'Email updated successfully'}, status=status.HTTP_200_OK)
