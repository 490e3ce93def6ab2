"""
Project services: owner lookups, display ordering, tag maintenance and
content block maintenance.

Views validate request bodies with serializers and hand clean values to
these services, which enforce ownership and the ordering rules.
"""
import logging
import uuid

from django.db import IntegrityError, transaction
from django.db.models import Max
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from backend.exceptions import AlreadyExists
from .models import (
    ContentBlock,
    Language,
    Project,
    ProjectContent,
    ProjectTag,
    SlideTag,
    Tag,
)

logger = logging.getLogger(__name__)


BLOCK_DEFAULTS = {
    ContentBlock.BlockType.HEADER: {
        'config': {'align': 'center', 'size': 'large'},
        'content': {'text': 'New Header'},
    },
    ContentBlock.BlockType.TEXT: {
        'config': {'align': 'left'},
        'content': {'text': 'New text content'},
    },
    ContentBlock.BlockType.IMAGE: {
        'config': {'width': 'full', 'height': 'auto'},
        'content': {'src': '', 'alt': 'Image description'},
    },
    ContentBlock.BlockType.QUOTE: {
        'config': {'style': 'modern'},
        'content': {'text': 'New quote text', 'author': 'Author name'},
    },
}


def _parse_uuid(value):
    """Return value as a UUID, or None when it is not one."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


class ProjectService:
    """
    Owner-scoped project lookups and the project display order
    """

    @staticmethod
    def get_owned_project(user, project_id):
        """
        Fetch a project owned by user. Missing and foreign projects both
        surface as 404 so other users' project ids are not leaked.
        """
        project = Project.objects.filter(id=project_id, user=user).first()
        if project is None:
            raise NotFound('Project not found')
        return project

    @staticmethod
    def create_project(user, name, description='', client=''):
        project = Project.objects.create(
            user=user,
            name=name,
            description=description,
            client=client,
        )
        logger.info(f"Created project {project.id} for {user.email}")
        return project

    @staticmethod
    def update_project(project, **fields):
        """Write only the supplied fields"""
        if not fields:
            return project
        for field, value in fields.items():
            setattr(project, field, value)
        project.save(update_fields=[*fields.keys(), 'updated_at'])
        return project

    @staticmethod
    def delete_project(project):
        # Portfolio links are renumbered by portfolio.signals
        project_id = project.id
        with transaction.atomic():
            project.delete()
        logger.info(f"Deleted project {project_id}")

    @staticmethod
    def reorder(user, project_ids):
        """
        Set each project's order to its index in project_ids.

        Every id must belong to user, otherwise nothing is changed. Ids that
        are not UUIDs count as foreign. The owned rows are locked and
        updated in a single transaction.
        """
        if not isinstance(project_ids, list) or not project_ids:
            raise ValidationError('Invalid project order')

        parsed_ids = [_parse_uuid(project_id) for project_id in project_ids]

        with transaction.atomic():
            candidate_ids = [project_id for project_id in parsed_ids if project_id is not None]
            owned = set(
                Project.objects.select_for_update()
                .filter(user=user, id__in=candidate_ids)
                .values_list('id', flat=True)
            )
            if any(project_id not in owned for project_id in parsed_ids):
                logger.warning(f"Reorder rejected for {user.email}: foreign project ids present")
                raise PermissionDenied('Some projects do not belong to the current user')

            if len(set(parsed_ids)) != len(parsed_ids):
                raise ValidationError('Invalid project order')

            for index, project_id in enumerate(parsed_ids):
                Project.objects.filter(id=project_id).update(order=index)

            projects = {
                project.id: project
                for project in Project.objects.filter(id__in=parsed_ids).prefetch_related('project_tags__tag')
            }

        logger.info(f"Reordered {len(parsed_ids)} projects for {user.email}")
        return [projects[project_id] for project_id in parsed_ids]


class TagService:
    """
    Per-user project tags and slide tags
    """

    @staticmethod
    def _create_unique(model, user, name):
        if model.objects.filter(user=user, name=name).exists():
            raise AlreadyExists('Tag already exists')
        try:
            with transaction.atomic():
                return model.objects.create(user=user, name=name)
        except IntegrityError:
            # Lost a race against a concurrent create of the same name
            raise AlreadyExists('Tag already exists')

    @staticmethod
    def create_tag(user, name):
        tag = TagService._create_unique(Tag, user, name.strip())
        logger.info(f"Created tag '{tag.name}' for {user.email}")
        return tag

    @staticmethod
    def delete_tag(user, tag_id):
        """Delete the user's tag. Deleting an unknown tag is a no-op."""
        deleted, _ = Tag.objects.filter(id=tag_id, user=user).delete()
        return deleted

    @staticmethod
    def add_tag_to_project(user, project, tag_id):
        """
        Attach one of the user's tags to the project. Adding a tag that is
        already attached returns the existing association.
        """
        tag = Tag.objects.filter(id=tag_id, user=user).first()
        if tag is None:
            raise NotFound('Tag not found')

        project_tag, created = ProjectTag.objects.get_or_create(project=project, tag=tag)
        if created:
            project.touch()
            logger.info(f"Tagged project {project.id} with '{tag.name}'")
        return project_tag

    @staticmethod
    def remove_tag_from_project(project, tag_id):
        deleted, _ = ProjectTag.objects.filter(project=project, tag_id=tag_id).delete()
        if deleted:
            project.touch()
        return deleted

    @staticmethod
    def create_slide_tag(user, name):
        tag = TagService._create_unique(SlideTag, user, name.strip())
        logger.info(f"Created slide tag '{tag.name}' for {user.email}")
        return tag

    @staticmethod
    def set_block_slide_tag(user, project, block_id, tag_id):
        """Assign a slide tag to a block of project, or clear it when tag_id is None"""
        block = ContentBlock.objects.filter(id=block_id, project_content__project=project).first()
        if block is None:
            raise NotFound('Content block not found')

        slide_tag = None
        if tag_id is not None:
            slide_tag = SlideTag.objects.filter(id=tag_id, user=user).first()
            if slide_tag is None:
                raise NotFound('Tag not found')

        block.slide_tag = slide_tag
        block.save(update_fields=['slide_tag', 'updated_at'])
        return block


class ContentBlockService:
    """
    Per-language project content and its ordered blocks
    """

    @staticmethod
    def create_content(project, language_id):
        language = Language.objects.filter(id=language_id).first()
        if language is None:
            raise NotFound('Language not found')
        if ProjectContent.objects.filter(project=project, language=language).exists():
            raise AlreadyExists('Project already has content in this language')

        project_content = ProjectContent.objects.create(project=project, language=language)
        project.touch()
        logger.info(f"Added {language.code} content to project {project.id}")
        return project_content

    @staticmethod
    def next_block_order(project_content):
        """One past the highest block order, or 1 for a content without blocks"""
        highest = project_content.blocks.aggregate(highest=Max('order'))['highest']
        return highest + 1 if highest is not None else 1

    @staticmethod
    def create_block(project, content_id, block_type=ContentBlock.BlockType.TEXT, order=None,
                     config=None, content=None):
        project_content = ProjectContent.objects.filter(id=content_id, project=project).first()
        if project_content is None:
            raise NotFound('Project content not found or does not belong to the specified project')

        if order is None:
            order = ContentBlockService.next_block_order(project_content)

        defaults = BLOCK_DEFAULTS[block_type]
        block = ContentBlock.objects.create(
            project_content=project_content,
            type=block_type,
            order=order,
            config={**defaults['config'], **(config or {})},
            content={**defaults['content'], **(content or {})},
        )
        project.touch()
        logger.info(f"Created {block_type} block at order {order} in content {project_content.id}")
        return block

    @staticmethod
    def update_block(project, block_id, block_type=None, config=None, content=None):
        """
        Update the supplied fields of a block. config and content replace the
        stored payloads wholesale.
        """
        block = ContentBlock.objects.select_related('project_content').filter(id=block_id).first()
        if block is None:
            raise NotFound('Content block not found')
        if block.project_content.project_id != project.id:
            raise PermissionDenied('Block does not belong to the specified project')

        update_fields = ['updated_at']
        if block_type is not None:
            block.type = block_type
            update_fields.append('type')
        if config is not None:
            block.config = config
            update_fields.append('config')
        if content is not None:
            block.content = content
            update_fields.append('content')

        block.save(update_fields=update_fields)
        project.touch()
        return block
