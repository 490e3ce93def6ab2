from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from projects.models import Language
from .models import ThemeSettings

User = get_user_model()


class ThemeSettingsApiTest(APITestCase):
    """Test cases for the theme settings endpoint."""

    def setUp(self):
        self.user = User.objects.create_user(
            firebase_uid='uid-owner',
            email='owner@example.com',
            username='owner@example.com',
            password='testpass123',
        )
        self.client.force_authenticate(user=self.user)
        self.url = reverse('themes:theme_settings')

    def test_get_without_settings_returns_null(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'theme_settings': None})

    def test_create_then_second_create_is_rejected(self):
        french = Language.objects.get(code='fr')
        response = self.client.post(
            self.url,
            {'background_color': '#ffffff', 'accent_color': '#ff0066', 'default_language_id': str(french.id)},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['default_language']['code'], 'fr')

        response = self.client.post(self.url, {'text_color': '#000'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Theme settings already exist. Use PUT to update.')
        self.assertEqual(ThemeSettings.objects.filter(user=self.user).count(), 1)

    def test_put_creates_then_updates_partially(self):
        response = self.client.put(self.url, {'background_color': '#101010'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.put(self.url, {'text_color': '#fafafa'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['background_color'], '#101010')
        self.assertEqual(response.data['text_color'], '#fafafa')
        self.assertEqual(ThemeSettings.objects.filter(user=self.user).count(), 1)

        response = self.client.get(self.url)
        self.assertEqual(response.data['theme_settings']['text_color'], '#fafafa')

    def test_typography_and_company_details(self):
        response = self.client.put(
            self.url,
            {
                'heading_font': 'Playfair Display',
                'body_font': 'Inter',
                'company_name': 'Studio North',
                'company_email': 'hello@studionorth.example',
            },
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['heading_font'], 'Playfair Display')
        self.assertEqual(response.data['company_name'], 'Studio North')
        self.assertEqual(response.data['company_phone'], '')

        response = self.client.put(self.url, {'company_email': 'not-an-email'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('company_email', response.data['errors'])

    def test_invalid_color_is_rejected(self):
        response = self.client.put(self.url, {'accent_color': 'red'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('accent_color', response.data['errors'])

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_401_UNAUTHORIZED)
