from django.db.models import Prefetch
from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.exceptions import NotFound

from .models import ContentBlock, Language, Project, ProjectContent
from .serializers import (
    ContentBlockCreateSerializer,
    ContentBlockSerializer,
    ContentBlockUpdateSerializer,
    LanguageSerializer,
    ProjectContentCreateSerializer,
    ProjectContentSerializer,
    ProjectCreateSerializer,
    ProjectDetailSerializer,
    ProjectReorderSerializer,
    ProjectSerializer,
    ProjectTagAddSerializer,
    ProjectTagSerializer,
    ProjectUpdateSerializer,
    SlideTagAssignSerializer,
    SlideTagSerializer,
    TagCreateSerializer,
    TagSerializer,
)
from .services import ContentBlockService, ProjectService, TagService


def _contents_prefetch():
    return Prefetch(
        'contents',
        queryset=ProjectContent.objects.select_related('language').prefetch_related(
            Prefetch('blocks', queryset=ContentBlock.objects.select_related('slide_tag').order_by('order', 'created_at'))
        ),
    )


class ProjectListView(APIView):
    """
    List and create the current user's projects
    GET /api/projects/ - Projects in display order, with tags
    POST /api/projects/ - Create a project
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        projects = Project.objects.filter(user=request.user).prefetch_related('project_tags__tag')
        return Response(ProjectSerializer(projects, many=True).data, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = ProjectService.create_project(request.user, **serializer.validated_data)
        return Response(
            {'success': True, 'project': ProjectSerializer(project).data},
            status=status.HTTP_201_CREATED
        )


class ProjectReorderView(APIView):
    """
    Reorder the current user's projects
    PUT /api/projects/reorder/ - {"projects": [id, ...]}
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):
        serializer = ProjectReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        projects = ProjectService.reorder(request.user, serializer.validated_data['projects'])
        return Response(
            {'success': True, 'projects': ProjectSerializer(projects, many=True).data},
            status=status.HTTP_200_OK
        )


class ProjectDetailView(APIView):
    """
    Get, update, or delete a project
    GET /api/projects/{id}/ - Public project view with tags and contents
    PUT /api/projects/{id}/ - Update name, description or client
    DELETE /api/projects/{id}/ - Delete project
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request, project_id):
        project = (
            Project.objects
            .filter(id=project_id)
            .prefetch_related('project_tags__tag', _contents_prefetch())
            .first()
        )
        if project is None:
            raise NotFound('Project not found')
        return Response({'project': ProjectDetailSerializer(project).data}, status=status.HTTP_200_OK)

    def put(self, request, project_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        serializer = ProjectUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = ProjectService.update_project(project, **serializer.validated_data)
        return Response({'success': True, 'project': ProjectSerializer(project).data}, status=status.HTTP_200_OK)

    def delete(self, request, project_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        data = ProjectSerializer(project).data
        ProjectService.delete_project(project)
        return Response({'success': True, 'project': data}, status=status.HTTP_200_OK)


class ProjectEditorView(APIView):
    """
    Project editor data: every language content with its ordered blocks
    GET /api/projects/{id}/editor/
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, project_id):
        ProjectService.get_owned_project(request.user, project_id)
        project = (
            Project.objects
            .filter(id=project_id)
            .prefetch_related('project_tags__tag', _contents_prefetch())
            .get()
        )
        return Response({'project': ProjectDetailSerializer(project).data}, status=status.HTTP_200_OK)


class ProjectContentCreateView(APIView):
    """
    Add a language content to a project
    POST /api/projects/{id}/contents/ - {"language_id": ...}
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, project_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        serializer = ProjectContentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project_content = ContentBlockService.create_content(project, serializer.validated_data['language_id'])
        return Response(
            {'content': ProjectContentSerializer(project_content).data},
            status=status.HTTP_201_CREATED
        )


class ContentBlockCreateView(APIView):
    """
    Create a content block
    POST /api/projects/{id}/blocks/ - {"content_id", "type"?, "order"?, "config"?, "content"?}
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, project_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        serializer = ContentBlockCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        block = ContentBlockService.create_block(
            project,
            data['content_id'],
            block_type=data['type'],
            order=data['order'],
            config=data['config'],
            content=data['content'],
        )
        return Response({'block': ContentBlockSerializer(block).data}, status=status.HTTP_201_CREATED)


class ContentBlockDetailView(APIView):
    """
    Update a content block
    PUT /api/projects/{id}/blocks/{block_id}/ - {"type"?, "config"?, "content"?}
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, project_id, block_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        serializer = ContentBlockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        block = ContentBlockService.update_block(
            project,
            block_id,
            block_type=data.get('type'),
            config=data.get('config'),
            content=data.get('content'),
        )
        return Response({'block': ContentBlockSerializer(block).data}, status=status.HTTP_200_OK)


class ContentBlockSlideTagView(APIView):
    """
    Assign or clear the slide tag of a block
    PUT /api/projects/{id}/blocks/{block_id}/slide-tag/ - {"tag_id": id | null}
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, project_id, block_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        serializer = SlideTagAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        block = TagService.set_block_slide_tag(
            request.user,
            project,
            block_id,
            serializer.validated_data['tag_id'],
        )
        return Response({'block': ContentBlockSerializer(block).data}, status=status.HTTP_200_OK)


class ProjectTagListView(APIView):
    """
    Tag a project
    POST /api/projects/{id}/tags/ - {"tag_id": id}
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, project_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        serializer = ProjectTagAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project_tag = TagService.add_tag_to_project(request.user, project, serializer.validated_data['tag_id'])
        return Response(
            {'success': True, 'added_tag': ProjectTagSerializer(project_tag).data},
            status=status.HTTP_200_OK
        )


class ProjectTagDetailView(APIView):
    """
    Remove a tag from a project
    DELETE /api/projects/{id}/tags/{tag_id}/
    """
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, project_id, tag_id):
        project = ProjectService.get_owned_project(request.user, project_id)
        TagService.remove_tag_from_project(project, tag_id)
        return Response({'success': True, 'message': 'Tag removed from project'}, status=status.HTTP_200_OK)


class TagListView(APIView):
    """
    The current user's project tags
    GET /api/projects/tags/
    POST /api/projects/tags/ - {"name": ...}
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        tags = request.user.tags.all()
        return Response({'tags': TagSerializer(tags, many=True).data}, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = TagCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tag = TagService.create_tag(request.user, serializer.validated_data['name'])
        return Response({'success': True, 'tag': TagSerializer(tag).data}, status=status.HTTP_201_CREATED)


class TagDetailView(APIView):
    """
    Delete one of the current user's tags
    DELETE /api/projects/tags/{tag_id}/
    """
    permission_classes = [permissions.IsAuthenticated]

    def delete(self, request, tag_id):
        TagService.delete_tag(request.user, tag_id)
        return Response({'success': True, 'message': 'Tag removed'}, status=status.HTTP_200_OK)


class SlideTagListView(APIView):
    """
    The current user's slide tags
    GET /api/projects/slide-tags/
    POST /api/projects/slide-tags/ - {"name": ...}
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        tags = request.user.slide_tags.order_by('name')
        return Response({'tags': SlideTagSerializer(tags, many=True).data}, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = TagCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tag = TagService.create_slide_tag(request.user, serializer.validated_data['name'])
        return Response({'tag': SlideTagSerializer(tag).data}, status=status.HTTP_201_CREATED)


class LanguageListView(APIView):
    """
    Languages project content can be written in
    GET /api/projects/languages/
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        languages = Language.objects.all()
        return Response(LanguageSerializer(languages, many=True).data, status=status.HTTP_200_OK)
