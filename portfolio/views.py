from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from projects.serializers import ProjectWithLinkStatusSerializer
from projects.services import ProjectService
from .serializers import (
    PortfolioCreateSerializer,
    PortfolioDetailSerializer,
    PortfolioLinkSerializer,
    PortfolioProjectDetailSerializer,
    PortfolioSerializer,
    PortfolioUpdateSerializer,
)
from .services import PortfolioLinkService, PortfolioService


class PortfolioListView(APIView):
    """
    List and create the current user's portfolios
    GET /api/portfolios/ - Portfolios with linked projects, tags and contents
    POST /api/portfolios/ - Create portfolio
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        portfolios = PortfolioService.list_for_user(request.user)
        serializer = PortfolioDetailSerializer(
            portfolios,
            many=True,
            context={'request': request, 'link_serializer': PortfolioProjectDetailSerializer}
        )
        return Response(serializer.data, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = PortfolioCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        portfolio = PortfolioService.create_portfolio(request.user, **serializer.validated_data)
        return Response(PortfolioSerializer(portfolio).data, status=status.HTTP_201_CREATED)


class PortfolioDetailView(APIView):
    """
    Get, update, or delete a portfolio
    GET /api/portfolios/{slug}/ - Public portfolio with ordered projects
    PUT /api/portfolios/{slug}/ - Update name and/or description
    DELETE /api/portfolios/{slug}/ - Delete portfolio
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request, slug):
        viewer = request.user if request.user.is_authenticated else None
        portfolio = PortfolioService.get_by_slug(slug, viewer=viewer)
        serializer = PortfolioDetailSerializer(portfolio, context={'request': request})
        return Response({'portfolio': serializer.data}, status=status.HTTP_200_OK)

    def put(self, request, slug):
        serializer = PortfolioUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        portfolio = PortfolioService.get_owned_by_slug(request.user, slug, action='update')
        portfolio = PortfolioService.update_portfolio(portfolio, **serializer.validated_data)
        return Response({'updated_portfolio': PortfolioSerializer(portfolio).data}, status=status.HTTP_200_OK)

    def delete(self, request, slug):
        portfolio = PortfolioService.get_owned_by_slug(request.user, slug, action='delete')
        data = PortfolioSerializer(portfolio).data
        PortfolioService.delete_portfolio(portfolio)
        return Response({'deleted_portfolio': data}, status=status.HTTP_200_OK)


class PortfolioProjectLinkView(APIView):
    """
    Add a project to, or remove a link from, a portfolio
    POST /api/portfolios/{slug}/project/ - {"related_project": project id}
    DELETE /api/portfolios/{slug}/project/ - {"related_project": link id}
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, slug):
        serializer = PortfolioLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        portfolio = PortfolioService.get_owned_by_slug(request.user, slug)
        project = ProjectService.get_owned_project(request.user, serializer.validated_data['related_project'])
        PortfolioLinkService.add_project(portfolio, project)
        return self._portfolio_response(request, slug)

    def delete(self, request, slug):
        serializer = PortfolioLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        portfolio = PortfolioService.get_owned_by_slug(request.user, slug)
        PortfolioLinkService.remove_link(portfolio, serializer.validated_data['related_project'])
        return self._portfolio_response(request, slug)

    def _portfolio_response(self, request, slug):
        portfolio = PortfolioService.get_by_slug(slug, viewer=request.user)
        serializer = PortfolioDetailSerializer(portfolio, context={'request': request})
        return Response({'success': True, 'portfolio': serializer.data}, status=status.HTTP_200_OK)


class PortfolioProjectsView(APIView):
    """
    The current user's projects flagged with their link status
    GET /api/portfolios/{slug}/projects/
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, slug):
        portfolio = PortfolioService.get_owned_by_slug(request.user, slug, action='view')
        projects = PortfolioService.projects_with_link_status(request.user, portfolio)
        return Response(ProjectWithLinkStatusSerializer(projects, many=True).data, status=status.HTTP_200_OK)
