from django.test import TestCase
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.test import APIRequestFactory

from .exceptions import AlreadyExists, api_exception_handler


class ApiExceptionHandlerTest(TestCase):
    """Test cases for the API error body."""

    def setUp(self):
        self.context = {'view': None, 'request': APIRequestFactory().get('/')}

    def test_not_found_body(self):
        response = api_exception_handler(NotFound('Portfolio not found'), self.context)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data, {'error': 'Portfolio not found', 'status_code': 404})

    def test_already_exists_is_bad_request(self):
        response = api_exception_handler(AlreadyExists('Tag already exists'), self.context)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Tag already exists')

    def test_validation_errors_keep_field_map(self):
        exc = ValidationError({'name': ['Project name is required']})
        response = api_exception_handler(exc, self.context)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Project name is required')
        self.assertEqual(response.data['errors'], {'name': ['Project name is required']})

    def test_unexpected_errors_are_hidden(self):
        with self.assertLogs('backend.exceptions', level='ERROR'):
            response = api_exception_handler(RuntimeError('db password leaked'), self.context)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {'error': 'Internal server error', 'status_code': 500})


class HealthCheckTest(TestCase):

    def test_health(self):
        response = self.client.get('/health/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'ok'})
