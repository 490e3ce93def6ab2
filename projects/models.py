from django.conf import settings
from django.db import models
import uuid


class Language(models.Model):
    """
    Language a project's content can be written in
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=10, unique=True, help_text="Language code (e.g., 'en', 'fr')")
    name = models.CharField(max_length=100)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.code})"


class Project(models.Model):
    """
    A showcase project owned by a user. Its slides live in one
    ProjectContent per language.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='projects',
        help_text="The user who owns this project"
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    client = models.CharField(max_length=200, blank=True)
    order = models.IntegerField(
        default=0,
        help_text="Display order in the owner's project list (lower numbers appear first)"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', 'created_at']

    def __str__(self):
        return self.name

    def touch(self):
        """Bump updated_at after a change to one of the project's children"""
        self.save(update_fields=['updated_at'])


class ProjectContent(models.Model):
    """
    Per-language content of a project; owns the ordered content blocks
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='contents')
    language = models.ForeignKey(Language, on_delete=models.PROTECT, related_name='project_contents')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'language'], name='unique_project_language_content'),
        ]

    def __str__(self):
        return f"{self.project.name} [{self.language.code}]"


class SlideTag(models.Model):
    """
    Tag attached to individual content blocks, namespaced per user
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='slide_tags')
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['user', 'name'], name='unique_slide_tag_name_per_user'),
        ]

    def __str__(self):
        return self.name


class ContentBlock(models.Model):
    """
    A typed display block (slide) inside a project's per-language content
    """

    class BlockType(models.TextChoices):
        HEADER = 'HEADER', 'Header'
        TEXT = 'TEXT', 'Text'
        IMAGE = 'IMAGE', 'Image'
        QUOTE = 'QUOTE', 'Quote'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project_content = models.ForeignKey(ProjectContent, on_delete=models.CASCADE, related_name='blocks')
    type = models.CharField(max_length=10, choices=BlockType.choices, default=BlockType.TEXT)
    order = models.IntegerField(default=1, help_text="Position of the block inside its content")
    config = models.JSONField(default=dict, blank=True, help_text="Type-specific display configuration")
    content = models.JSONField(default=dict, blank=True, help_text="Type-specific content payload")
    slide_tag = models.ForeignKey(
        SlideTag,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='blocks'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', 'created_at']

    def __str__(self):
        return f"{self.get_type_display()} block #{self.order}"


class Tag(models.Model):
    """
    Project tag, namespaced per user
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tags')
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['user', 'name'], name='unique_tag_name_per_user'),
        ]

    def __str__(self):
        return self.name


class ProjectTag(models.Model):
    """
    Many-to-many association between projects and tags
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='project_tags')
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name='project_tags')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'tag'], name='unique_project_tag'),
        ]

    def __str__(self):
        return f"{self.project.name} - {self.tag.name}"
