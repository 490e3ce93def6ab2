import uuid

from django.contrib.auth import get_user_model
from django.db import connection
from django.test import TestCase
from django.test.utils import CaptureQueriesContext
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.test import APITestCase

from projects.models import Language, Project
from projects.services import ContentBlockService
from .models import Portfolio, PortfolioProject
from .services import PortfolioLinkService, PortfolioService
from .utils import generate_slug, unique_portfolio_slug

User = get_user_model()


def make_user(email):
    return User.objects.create_user(
        firebase_uid=f"uid-{email}",
        email=email,
        username=email,
        password='testpass123',
    )


class SlugTest(TestCase):
    """Test cases for portfolio slug generation."""

    def test_diacritics_and_punctuation_are_normalized(self):
        self.assertEqual(generate_slug("  Café Déjà-Vu!! "), "cafe-deja-vu")

    def test_slug_is_truncated(self):
        self.assertEqual(len(generate_slug("a" * 80)), 50)

    def test_name_without_slug_characters(self):
        self.assertEqual(generate_slug("!!!"), "")
        self.assertEqual(unique_portfolio_slug("!!!"), "portfolio")

    def test_identical_names_get_distinct_slugs(self):
        user = make_user('owner@example.com')
        first = PortfolioService.create_portfolio(user, 'My Work')
        second = PortfolioService.create_portfolio(user, 'My Work')
        self.assertEqual(first.slug, 'my-work')
        self.assertNotEqual(first.slug, second.slug)
        self.assertRegex(second.slug, r'^my-work-[a-z0-9]{5}$')


class PortfolioLinkServiceTest(TestCase):
    """Test cases for keeping portfolio link orders dense."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.portfolio = PortfolioService.create_portfolio(self.user, 'Showcase')
        self.projects = [
            Project.objects.create(user=self.user, name=f"Project {index}")
            for index in range(3)
        ]

    def orders(self):
        return list(
            PortfolioProject.objects.filter(portfolio=self.portfolio).values_list('order', flat=True)
        )

    def test_links_are_appended_in_order(self):
        for project in self.projects:
            PortfolioLinkService.add_project(self.portfolio, project)
        self.assertEqual(self.orders(), [0, 1, 2])

    def test_removing_middle_link_renumbers(self):
        links = [PortfolioLinkService.add_project(self.portfolio, project) for project in self.projects]
        PortfolioLinkService.remove_link(self.portfolio, links[1].id)

        remaining = PortfolioProject.objects.filter(portfolio=self.portfolio)
        self.assertEqual(self.orders(), [0, 1])
        self.assertEqual(
            [link.project_id for link in remaining],
            [self.projects[0].id, self.projects[2].id]
        )

    def test_deleting_a_project_renumbers_its_portfolios(self):
        for project in self.projects:
            PortfolioLinkService.add_project(self.portfolio, project)
        self.projects[0].delete()
        self.assertEqual(self.orders(), [0, 1])

    def test_remove_unknown_link_leaves_links_unchanged(self):
        PortfolioLinkService.add_project(self.portfolio, self.projects[0])
        with self.assertRaises(NotFound):
            PortfolioLinkService.remove_link(self.portfolio, uuid.uuid4())
        self.assertEqual(self.orders(), [0])


class PortfolioApiTest(APITestCase):
    """Test cases for the portfolio endpoints."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.other = make_user('other@example.com')
        self.project = Project.objects.create(user=self.user, name='Logo')
        self.second_project = Project.objects.create(user=self.user, name='Website')
        self.client.force_authenticate(user=self.user)
        self.portfolio = PortfolioService.create_portfolio(self.user, 'Showcase')
        self.link_url = reverse('portfolio:portfolio_project_link', args=[self.portfolio.slug])

    def test_create_portfolio(self):
        response = self.client.post(
            reverse('portfolio:portfolio_list'),
            {'name': 'Café Déjà Vu', 'description': 'Coffee work'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'cafe-deja-vu')
        self.assertTrue(response.data['public_url'].endswith('/portfolio/cafe-deja-vu'))

    def test_create_requires_name(self):
        response = self.client.post(reverse('portfolio:portfolio_list'), {'name': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Valid portfolio name is required')

    def test_add_project_then_duplicate_is_rejected(self):
        response = self.client.post(self.link_url, {'related_project': str(self.project.id)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        links = response.data['portfolio']['portfolio_projects']
        self.assertEqual([(link['order'], link['project']['name']) for link in links], [(0, 'Logo')])

        response = self.client.post(self.link_url, {'related_project': str(self.project.id)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Project is already linked to this portfolio')
        self.assertEqual(PortfolioProject.objects.filter(portfolio=self.portfolio).count(), 1)

    def test_add_requires_project_id(self):
        response = self.client.post(self.link_url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Project ID is required')

    def test_cannot_link_foreign_project(self):
        foreign = Project.objects.create(user=self.other, name='Theirs')
        response = self.client.post(self.link_url, {'related_project': str(foreign.id)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(PortfolioProject.objects.exists())

    def test_remove_link_by_link_id(self):
        first = PortfolioLinkService.add_project(self.portfolio, self.project)
        PortfolioLinkService.add_project(self.portfolio, self.second_project)

        response = self.client.delete(self.link_url, {'related_project': str(first.id)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        links = response.data['portfolio']['portfolio_projects']
        self.assertEqual([(link['order'], link['project']['name']) for link in links], [(0, 'Website')])

    def test_remove_unknown_link_is_not_found(self):
        PortfolioLinkService.add_project(self.portfolio, self.project)
        response = self.client.delete(self.link_url, {'related_project': str(uuid.uuid4())}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Project link not found in this portfolio')
        self.assertEqual(PortfolioProject.objects.filter(portfolio=self.portfolio).count(), 1)

    def test_non_owner_cannot_manage_links(self):
        self.client.force_authenticate(user=self.other)
        response = self.client.post(self.link_url, {'related_project': str(self.project.id)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_public_portfolio_view(self):
        PortfolioLinkService.add_project(self.portfolio, self.project)
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('portfolio:portfolio_detail', args=[self.portfolio.slug]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['portfolio']['name'], 'Showcase')
        self.assertEqual(len(response.data['portfolio']['portfolio_projects']), 1)

    def test_private_portfolio_hidden_from_others(self):
        Portfolio.objects.filter(id=self.portfolio.id).update(is_public=False)
        url = reverse('portfolio:portfolio_detail', args=[self.portfolio.slug])

        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)
        self.client.force_authenticate(user=self.other)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_unknown_slug_is_not_found(self):
        response = self.client.get(reverse('portfolio:portfolio_detail', args=['missing']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Portfolio not found', 'status_code': 404})

    def test_update_keeps_slug(self):
        response = self.client.put(
            reverse('portfolio:portfolio_detail', args=[self.portfolio.slug]),
            {'name': 'Renamed'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['updated_portfolio']['name'], 'Renamed')
        self.assertEqual(response.data['updated_portfolio']['slug'], 'showcase')

    def test_update_requires_a_field(self):
        response = self.client.put(
            reverse('portfolio:portfolio_detail', args=[self.portfolio.slug]),
            {'name': ''},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'At least one field to update must be provided')

    def test_non_owner_cannot_delete(self):
        self.client.force_authenticate(user=self.other)
        response = self.client.delete(reverse('portfolio:portfolio_detail', args=[self.portfolio.slug]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Portfolio.objects.filter(id=self.portfolio.id).exists())

    def test_delete_returns_deleted_portfolio(self):
        PortfolioLinkService.add_project(self.portfolio, self.project)
        response = self.client.delete(reverse('portfolio:portfolio_detail', args=[self.portfolio.slug]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted_portfolio']['slug'], 'showcase')
        self.assertFalse(Portfolio.objects.exists())
        self.assertFalse(PortfolioProject.objects.exists())

    def test_projects_with_link_status(self):
        PortfolioLinkService.add_project(self.portfolio, self.project)
        Project.objects.create(user=self.other, name='Not mine')
        response = self.client.get(reverse('portfolio:portfolio_projects', args=[self.portfolio.slug]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        flags = {project['name']: project['is_linked'] for project in response.data}
        self.assertEqual(flags, {'Logo': True, 'Website': False})

    def test_list_own_portfolios_only(self):
        PortfolioService.create_portfolio(self.other, 'Theirs')
        response = self.client.get(reverse('portfolio:portfolio_list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([portfolio['slug'] for portfolio in response.data], ['showcase'])

    def test_list_query_count_does_not_grow_with_blocks(self):
        PortfolioLinkService.add_project(self.portfolio, self.project)
        PortfolioLinkService.add_project(self.portfolio, self.second_project)
        english = Language.objects.get(code='en')
        content = ContentBlockService.create_content(self.project, english.id)
        ContentBlockService.create_block(self.project, content.id)

        url = reverse('portfolio:portfolio_list')
        with CaptureQueriesContext(connection) as baseline:
            self.client.get(url)

        for language in Language.objects.exclude(code='en'):
            more = ContentBlockService.create_content(self.project, language.id)
            ContentBlockService.create_block(self.project, more.id)
            ContentBlockService.create_block(self.project, more.id)
        other_content = ContentBlockService.create_content(self.second_project, english.id)
        ContentBlockService.create_block(self.second_project, other_content.id)

        with CaptureQueriesContext(connection) as larger:
            response = self.client.get(url)

        self.assertEqual(len(larger), len(baseline))
        links = response.data[0]['portfolio_projects']
        self.assertEqual(len(links[0]['project']['contents']), 3)
