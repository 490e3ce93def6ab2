from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from firebase_admin import auth
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.test import APIRequestFactory, APITestCase

from portfolio.services import PortfolioService
from projects.models import Project
from .authentication import FirebaseAuthentication

User = get_user_model()


class FirebaseAuthenticationTest(TestCase):
    """Test cases for Firebase token authentication."""

    def setUp(self):
        self.factory = APIRequestFactory()
        self.backend = FirebaseAuthentication()

    def test_no_header_means_anonymous(self):
        request = self.factory.get('/api/projects/')
        self.assertIsNone(self.backend.authenticate(request))

    def test_non_bearer_header_is_ignored(self):
        request = self.factory.get('/api/projects/', HTTP_AUTHORIZATION='Basic abc')
        self.assertIsNone(self.backend.authenticate(request))

    @patch('authentication.authentication.ensure_firebase_initialized', return_value=True)
    @patch('authentication.authentication.auth.verify_id_token')
    def test_first_login_creates_user(self, mock_verify, mock_init):
        mock_verify.return_value = {
            'uid': 'firebase-123',
            'email': 'new@example.com',
            'name': 'New Person',
            'email_verified': True,
        }
        request = self.factory.get('/api/projects/', HTTP_AUTHORIZATION='Bearer good-token')

        user, token = self.backend.authenticate(request)

        self.assertEqual(token, 'good-token')
        self.assertEqual(user.firebase_uid, 'firebase-123')
        self.assertEqual(user.name, 'New Person')
        self.assertTrue(user.email_verified)
        self.assertIsNotNone(user.last_login_at)

        # Second login reuses the same user
        again, _ = self.backend.authenticate(request)
        self.assertEqual(again.id, user.id)
        self.assertEqual(User.objects.count(), 1)

    @patch('authentication.authentication.ensure_firebase_initialized', return_value=True)
    @patch('authentication.authentication.auth.verify_id_token')
    def test_invalid_token_fails(self, mock_verify, mock_init):
        mock_verify.side_effect = auth.InvalidIdTokenError('bad token')
        request = self.factory.get('/api/projects/', HTTP_AUTHORIZATION='Bearer bad-token')
        with self.assertRaises(AuthenticationFailed):
            self.backend.authenticate(request)

    @patch('authentication.authentication.ensure_firebase_initialized', return_value=True)
    @patch('authentication.authentication.auth.verify_id_token')
    def test_bearer_token_reaches_protected_view(self, mock_verify, mock_init):
        mock_verify.return_value = {'uid': 'firebase-9', 'email': 'api@example.com'}
        response = self.client.get(reverse('projects:project_list'), HTTP_AUTHORIZATION='Bearer token')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), [])


class AccountApiTest(APITestCase):
    """Test cases for the current user endpoints."""

    def setUp(self):
        self.user = User.objects.create_user(
            firebase_uid='uid-owner',
            email='owner@example.com',
            username='owner@example.com',
            password='testpass123',
            email_verified=True,
        )
        self.other = User.objects.create_user(
            firebase_uid='uid-other',
            email='other@example.com',
            username='other@example.com',
            password='testpass123',
        )
        self.client.force_authenticate(user=self.user)

    def test_current_user_includes_projects_and_portfolios(self):
        Project.objects.create(user=self.user, name='Logo')
        PortfolioService.create_portfolio(self.user, 'Showcase')

        response = self.client.get(reverse('authentication:current_user'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user = response.data['user']
        self.assertEqual(user['email'], 'owner@example.com')
        self.assertEqual([project['name'] for project in user['projects']], ['Logo'])
        self.assertEqual([portfolio['slug'] for portfolio in user['portfolios']], ['showcase'])

    def test_update_name_is_trimmed(self):
        response = self.client.put(reverse('authentication:update_name'), {'name': '  Ada  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, 'Ada')

    def test_blank_name_is_rejected(self):
        response = self.client.put(reverse('authentication:update_name'), {'name': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Name cannot be empty')

    @patch('authentication.views.ensure_firebase_initialized', return_value=True)
    @patch('authentication.views.auth.update_user')
    def test_update_email_resets_verification(self, mock_update_user, mock_init):
        response = self.client.put(
            reverse('authentication:update_email'),
            {'email': 'New@Example.com'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_update_user.assert_called_once_with('uid-owner', email='new@example.com', email_verified=False)

        self.user.refresh_from_db()
        self.assertEqual(self.user.email, 'new@example.com')
        self.assertFalse(self.user.email_verified)

    @patch('authentication.views.auth.update_user')
    def test_email_in_use_is_rejected(self, mock_update_user):
        response = self.client.put(
            reverse('authentication:update_email'),
            {'email': 'other@example.com'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Email is already in use')
        mock_update_user.assert_not_called()

    def test_invalid_email_is_rejected(self):
        response = self.client.put(reverse('authentication:update_email'), {'email': 'nope'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid email address')
