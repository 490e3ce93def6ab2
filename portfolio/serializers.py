from rest_framework import serializers

from projects.serializers import ProjectSerializer, ProjectDetailSerializer
from .models import Portfolio, PortfolioProject


class PortfolioProjectSerializer(serializers.ModelSerializer):
    """A portfolio link with its project"""
    project = ProjectSerializer(read_only=True)

    class Meta:
        model = PortfolioProject
        fields = ['id', 'portfolio', 'project', 'order', 'created_at', 'updated_at']
        read_only_fields = fields


class PortfolioProjectDetailSerializer(PortfolioProjectSerializer):
    """A portfolio link with its project's tags and contents"""
    project = ProjectDetailSerializer(read_only=True)


class PortfolioSerializer(serializers.ModelSerializer):
    """Portfolio record without its links"""

    class Meta:
        model = Portfolio
        fields = [
            'id',
            'user',
            'slug',
            'name',
            'description',
            'is_public',
            'public_url',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PortfolioDetailSerializer(PortfolioSerializer):
    """Portfolio with its links in display order"""
    portfolio_projects = serializers.SerializerMethodField()

    class Meta(PortfolioSerializer.Meta):
        fields = PortfolioSerializer.Meta.fields + ['portfolio_projects']
        read_only_fields = fields

    def get_portfolio_projects(self, obj):
        links = sorted(obj.portfolio_projects.all(), key=lambda link: link.order)
        link_serializer = self.context.get('link_serializer', PortfolioProjectSerializer)
        return link_serializer(links, many=True).data


# Request body serializers

class PortfolioCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=200,
        error_messages={
            'required': 'Valid portfolio name is required',
            'blank': 'Valid portfolio name is required',
            'null': 'Valid portfolio name is required',
        },
    )
    description = serializers.CharField(required=False, allow_blank=True, default='')


class PortfolioUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        # A blank name is ignored rather than written
        if not attrs.get('name'):
            attrs.pop('name', None)
        if not attrs:
            raise serializers.ValidationError('At least one field to update must be provided')
        return attrs


class PortfolioLinkSerializer(serializers.Serializer):
    related_project = serializers.UUIDField(
        error_messages={
            'required': 'Project ID is required',
            'null': 'Project ID is required',
            'invalid': 'Project ID must be a valid UUID',
        },
    )
