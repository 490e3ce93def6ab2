import uuid

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import ContentBlock, Language, Project, ProjectContent, ProjectTag, SlideTag, Tag
from .services import ContentBlockService, TagService

User = get_user_model()


def make_user(email):
    return User.objects.create_user(
        firebase_uid=f"uid-{email}",
        email=email,
        username=email,
        password='testpass123',
    )


class ProjectReorderTest(APITestCase):
    """Test cases for reordering the owner's project list."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.other = make_user('other@example.com')
        self.project_a = Project.objects.create(user=self.user, name='A', order=0)
        self.project_b = Project.objects.create(user=self.user, name='B', order=1)
        self.foreign = Project.objects.create(user=self.other, name='Foreign', order=0)
        self.client.force_authenticate(user=self.user)
        self.url = reverse('projects:project_reorder')

    def test_reorder_puts_b_before_a(self):
        response = self.client.put(
            self.url,
            {'projects': [str(self.project_b.id), str(self.project_a.id)]},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['name'] for p in response.data['projects']], ['B', 'A'])

        listing = self.client.get(reverse('projects:project_list'))
        self.assertEqual([p['name'] for p in listing.data], ['B', 'A'])

    def test_reorder_with_foreign_project_is_forbidden_and_changes_nothing(self):
        response = self.client.put(
            self.url,
            {'projects': [str(self.foreign.id), str(self.project_b.id), str(self.project_a.id)]},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'Some projects do not belong to the current user')

        self.project_a.refresh_from_db()
        self.project_b.refresh_from_db()
        self.foreign.refresh_from_db()
        self.assertEqual((self.project_a.order, self.project_b.order, self.foreign.order), (0, 1, 0))

    def test_reorder_rejects_missing_or_non_list_payload(self):
        for payload in ({}, {'projects': 'nope'}, {'projects': []}):
            response = self.client.put(self.url, payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data['error'], 'Invalid project order')

    def test_reorder_rejects_duplicate_ids(self):
        response = self.client.put(
            self.url,
            {'projects': [str(self.project_a.id), str(self.project_a.id)]},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reorder_treats_malformed_ids_as_foreign(self):
        response = self.client.put(self.url, {'projects': ['not-a-uuid']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_reorder_with_several_malformed_ids_is_forbidden(self):
        response = self.client.put(
            self.url,
            {'projects': [str(self.project_a.id), 'x', 'y']},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.project_a.refresh_from_db()
        self.assertEqual(self.project_a.order, 0)

    def test_reorder_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.put(self.url, {'projects': [str(self.project_a.id)]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['status_code'], 401)


class ProjectCrudTest(APITestCase):
    """Test cases for the project endpoints."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.other = make_user('other@example.com')
        self.client.force_authenticate(user=self.user)

    def test_create_and_list_projects(self):
        response = self.client.post(
            reverse('projects:project_list'),
            {'name': 'Website redesign', 'client': 'ACME'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['project']['client'], 'ACME')

        listing = self.client.get(reverse('projects:project_list'))
        self.assertEqual(len(listing.data), 1)
        self.assertEqual(listing.data[0]['tags'], [])

    def test_create_requires_name(self):
        response = self.client.post(reverse('projects:project_list'), {'description': 'x'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Project name is required')
        self.assertIn('name', response.data['errors'])

    def test_update_only_writes_supplied_fields(self):
        project = Project.objects.create(user=self.user, name='Old', description='Keep me')
        response = self.client.put(
            reverse('projects:project_detail', args=[project.id]),
            {'name': 'New'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        project.refresh_from_db()
        self.assertEqual(project.name, 'New')
        self.assertEqual(project.description, 'Keep me')

    def test_foreign_project_is_reported_missing(self):
        foreign = Project.objects.create(user=self.other, name='Theirs')
        response = self.client.put(
            reverse('projects:project_detail', args=[foreign.id]),
            {'name': 'Mine now'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.delete(reverse('projects:project_detail', args=[foreign.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Project.objects.filter(id=foreign.id).exists())

    def test_public_detail_needs_no_authentication(self):
        project = Project.objects.create(user=self.user, name='Public')
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('projects:project_detail', args=[project.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['project']['name'], 'Public')
        self.assertEqual(response.data['project']['contents'], [])

    def test_delete_project(self):
        project = Project.objects.create(user=self.user, name='Gone')
        response = self.client.delete(reverse('projects:project_detail', args=[project.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['project']['name'], 'Gone')
        self.assertFalse(Project.objects.filter(id=project.id).exists())

    def test_languages_are_seeded_and_public(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('projects:language_list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({language['code'] for language in response.data}, {'en', 'fr', 'de'})


class TagTest(APITestCase):
    """Test cases for tags and project tagging."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.other = make_user('other@example.com')
        self.project = Project.objects.create(user=self.user, name='Tagged')
        self.client.force_authenticate(user=self.user)

    def test_duplicate_tag_name_rejected_for_same_owner(self):
        url = reverse('projects:tag_list')
        first = self.client.post(url, {'name': 'design'}, format='json')
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        second = self.client.post(url, {'name': 'design'}, format='json')
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(second.data['error'], 'Tag already exists')
        self.assertEqual(Tag.objects.filter(user=self.user, name='design').count(), 1)

    def test_same_tag_name_allowed_across_owners(self):
        TagService.create_tag(self.user, 'design')
        tag = TagService.create_tag(self.other, 'design')
        self.assertEqual(tag.user, self.other)
        self.assertEqual(Tag.objects.filter(name='design').count(), 2)

    def test_tag_name_required(self):
        response = self.client.post(reverse('projects:tag_list'), {'name': '  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Tag name is required')

    def test_add_and_remove_project_tag(self):
        tag = Tag.objects.create(user=self.user, name='branding')
        url = reverse('projects:project_tags', args=[self.project.id])

        response = self.client.post(url, {'tag_id': str(tag.id)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['added_tag']['tag']['name'], 'branding')

        # Adding again keeps a single association
        self.client.post(url, {'tag_id': str(tag.id)}, format='json')
        self.assertEqual(ProjectTag.objects.filter(project=self.project).count(), 1)

        response = self.client.delete(reverse('projects:project_tag_detail', args=[self.project.id, tag.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(ProjectTag.objects.filter(project=self.project).exists())

    def test_removing_unattached_tag_is_a_no_op(self):
        tag = Tag.objects.create(user=self.user, name='unused')
        response = self.client.delete(reverse('projects:project_tag_detail', args=[self.project.id, tag.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertTrue(Tag.objects.filter(id=tag.id).exists())

    def test_cannot_attach_someone_elses_tag(self):
        foreign_tag = Tag.objects.create(user=self.other, name='theirs')
        response = self.client.post(
            reverse('projects:project_tags', args=[self.project.id]),
            {'tag_id': str(foreign_tag.id)},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_tag_removes_associations(self):
        tag = Tag.objects.create(user=self.user, name='old')
        ProjectTag.objects.create(project=self.project, tag=tag)
        response = self.client.delete(reverse('projects:tag_detail', args=[tag.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(ProjectTag.objects.exists())

    def test_slide_tags(self):
        url = reverse('projects:slide_tag_list')
        response = self.client.post(url, {'name': 'intro'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(self.client.post(url, {'name': 'intro'}, format='json').status_code, 400)
        self.assertEqual([tag['name'] for tag in self.client.get(url).data['tags']], ['intro'])


class ContentBlockServiceTest(TestCase):
    """Test cases for content block ordering."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.project = Project.objects.create(user=self.user, name='Slides')
        self.content = ProjectContent.objects.create(
            project=self.project,
            language=Language.objects.get(code='en')
        )

    def test_first_blocks_get_orders_one_then_two(self):
        first = ContentBlockService.create_block(self.project, self.content.id)
        second = ContentBlockService.create_block(self.project, self.content.id)
        self.assertEqual(first.order, 1)
        self.assertEqual(second.order, 2)

    def test_new_block_goes_after_highest_order(self):
        ContentBlockService.create_block(self.project, self.content.id, order=7)
        block = ContentBlockService.create_block(self.project, self.content.id)
        self.assertEqual(block.order, 8)

    def test_explicit_zero_order_is_kept(self):
        block = ContentBlockService.create_block(self.project, self.content.id, order=0)
        self.assertEqual(block.order, 0)

    def test_block_defaults_follow_type(self):
        block = ContentBlockService.create_block(
            self.project,
            self.content.id,
            block_type=ContentBlock.BlockType.QUOTE,
            content={'text': 'Hello'},
        )
        self.assertEqual(block.content, {'text': 'Hello', 'author': 'Author name'})
        self.assertEqual(block.config, {'style': 'modern'})


class ContentBlockApiTest(APITestCase):
    """Test cases for the content and block endpoints."""

    def setUp(self):
        self.user = make_user('owner@example.com')
        self.project = Project.objects.create(user=self.user, name='Slides')
        self.other_project = Project.objects.create(user=self.user, name='Other slides')
        self.english = Language.objects.get(code='en')
        self.client.force_authenticate(user=self.user)

    def _add_content(self, project):
        response = self.client.post(
            reverse('projects:project_content_create', args=[project.id]),
            {'language_id': str(self.english.id)},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return response.data['content']

    def test_content_language_is_unique_per_project(self):
        self._add_content(self.project)
        response = self.client.post(
            reverse('projects:project_content_create', args=[self.project.id]),
            {'language_id': str(self.english.id)},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_language_is_not_found(self):
        response = self.client.post(
            reverse('projects:project_content_create', args=[self.project.id]),
            {'language_id': str(uuid.uuid4())},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_update_and_tag_block(self):
        content = self._add_content(self.project)
        url = reverse('projects:block_create', args=[self.project.id])

        response = self.client.post(url, {'content_id': content['id'], 'type': 'HEADER'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        block = response.data['block']
        self.assertEqual(block['order'], 1)
        self.assertEqual(block['content'], {'text': 'New Header'})

        response = self.client.put(
            reverse('projects:block_detail', args=[self.project.id, block['id']]),
            {'content': {'text': 'Welcome'}},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['block']['content'], {'text': 'Welcome'})
        self.assertEqual(response.data['block']['type'], 'HEADER')

        # config is replaced, not merged with the HEADER defaults
        response = self.client.put(
            reverse('projects:block_detail', args=[self.project.id, block['id']]),
            {'config': {'align': 'left'}},
            format='json'
        )
        self.assertEqual(response.data['block']['config'], {'align': 'left'})
        self.assertNotIn('size', response.data['block']['config'])
        self.assertEqual(response.data['block']['content'], {'text': 'Welcome'})

        slide_tag = SlideTag.objects.create(user=self.user, name='intro')
        tag_url = reverse('projects:block_slide_tag', args=[self.project.id, block['id']])
        response = self.client.put(tag_url, {'tag_id': str(slide_tag.id)}, format='json')
        self.assertEqual(response.data['block']['slide_tag']['name'], 'intro')
        response = self.client.put(tag_url, {'tag_id': None}, format='json')
        self.assertIsNone(response.data['block']['slide_tag'])

    def test_block_from_another_project_is_forbidden(self):
        content = self._add_content(self.other_project)
        block = ContentBlockService.create_block(self.other_project, content['id'])
        response = self.client.put(
            reverse('projects:block_detail', args=[self.project.id, block.id]),
            {'type': 'TEXT'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'Block does not belong to the specified project')

    def test_unknown_block_is_not_found(self):
        response = self.client.put(
            reverse('projects:block_detail', args=[self.project.id, uuid.uuid4()]),
            {'type': 'TEXT'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Content block not found')

    def test_editor_lists_blocks_in_order(self):
        content = self._add_content(self.project)
        ContentBlockService.create_block(self.project, content['id'], order=5)
        ContentBlockService.create_block(self.project, content['id'], order=2)
        response = self.client.get(reverse('projects:project_editor', args=[self.project.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        blocks = response.data['project']['contents'][0]['blocks']
        self.assertEqual([block['order'] for block in blocks], [2, 5])
