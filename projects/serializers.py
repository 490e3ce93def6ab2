from rest_framework import serializers

from .models import (
    ContentBlock,
    Language,
    Project,
    ProjectContent,
    ProjectTag,
    SlideTag,
    Tag,
)


class LanguageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Language
        fields = ['id', 'code', 'name']


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ['id', 'name', 'created_at', 'updated_at']


class SlideTagSerializer(serializers.ModelSerializer):
    class Meta:
        model = SlideTag
        fields = ['id', 'name', 'created_at', 'updated_at']


class ProjectTagSerializer(serializers.ModelSerializer):
    """Serializer for a project <-> tag association"""
    project_id = serializers.UUIDField(source='project.id', read_only=True)
    tag = TagSerializer(read_only=True)

    class Meta:
        model = ProjectTag
        fields = ['id', 'project_id', 'tag', 'created_at']


class ContentBlockSerializer(serializers.ModelSerializer):
    slide_tag = SlideTagSerializer(read_only=True)

    class Meta:
        model = ContentBlock
        fields = [
            'id',
            'project_content',
            'type',
            'order',
            'config',
            'content',
            'slide_tag',
            'created_at',
            'updated_at',
        ]


class ProjectContentSerializer(serializers.ModelSerializer):
    """Per-language content with its blocks in display order"""
    language = LanguageSerializer(read_only=True)
    blocks = serializers.SerializerMethodField()

    class Meta:
        model = ProjectContent
        fields = ['id', 'project', 'language', 'blocks', 'created_at', 'updated_at']

    def get_blocks(self, obj):
        blocks = sorted(obj.blocks.all(), key=lambda block: (block.order, block.created_at))
        return ContentBlockSerializer(blocks, many=True).data


class ProjectSerializer(serializers.ModelSerializer):
    """Project with its tags, as listed in the owner's project list"""
    tags = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'user',
            'name',
            'description',
            'client',
            'order',
            'tags',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'user', 'order', 'created_at', 'updated_at']

    def get_tags(self, obj):
        return TagSerializer([project_tag.tag for project_tag in obj.project_tags.all()], many=True).data


class ProjectDetailSerializer(ProjectSerializer):
    """Project with tags and every language content"""
    contents = ProjectContentSerializer(many=True, read_only=True)

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ['contents']


class ProjectWithLinkStatusSerializer(ProjectSerializer):
    """Project annotated with whether it is linked to a given portfolio"""
    is_linked = serializers.BooleanField(read_only=True)

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ['is_linked']


# Request body serializers

class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=200,
        error_messages={'required': 'Project name is required', 'blank': 'Project name is required'},
    )
    description = serializers.CharField(required=False, allow_blank=True, default='')
    client = serializers.CharField(required=False, allow_blank=True, max_length=200, default='')


class ProjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(
        required=False,
        max_length=200,
        error_messages={'blank': 'Project name cannot be blank'},
    )
    description = serializers.CharField(required=False, allow_blank=True)
    client = serializers.CharField(required=False, allow_blank=True, max_length=200)


class ProjectReorderSerializer(serializers.Serializer):
    projects = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=False,
        error_messages={
            'required': 'Invalid project order',
            'not_a_list': 'Invalid project order',
            'empty': 'Invalid project order',
        },
    )


class TagCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        error_messages={'required': 'Tag name is required', 'blank': 'Tag name is required'},
    )


class ProjectTagAddSerializer(serializers.Serializer):
    tag_id = serializers.UUIDField(
        error_messages={'required': 'Tag ID is required', 'invalid': 'Tag ID must be a valid UUID'},
    )


class SlideTagAssignSerializer(serializers.Serializer):
    tag_id = serializers.UUIDField(
        allow_null=True,
        error_messages={'required': 'Tag ID is required (use null to clear)', 'invalid': 'Tag ID must be a valid UUID'},
    )


class ProjectContentCreateSerializer(serializers.Serializer):
    language_id = serializers.UUIDField(
        error_messages={'required': 'Language ID is required', 'invalid': 'Language ID must be a valid UUID'},
    )


class ContentBlockCreateSerializer(serializers.Serializer):
    content_id = serializers.UUIDField(
        error_messages={'required': 'Content ID is required', 'invalid': 'Content ID must be a valid UUID'},
    )
    type = serializers.ChoiceField(choices=ContentBlock.BlockType.choices, default=ContentBlock.BlockType.TEXT)
    order = serializers.IntegerField(required=False, allow_null=True, default=None)
    config = serializers.DictField(required=False, default=dict)
    content = serializers.DictField(required=False, default=dict)


class ContentBlockUpdateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=ContentBlock.BlockType.choices, required=False)
    config = serializers.DictField(required=False)
    content = serializers.DictField(required=False)
