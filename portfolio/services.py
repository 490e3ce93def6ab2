"""
Portfolio services: owner-scoped lookups and maintenance of the ordered
portfolio -> project links.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Exists, OuterRef, Prefetch
from rest_framework.exceptions import NotFound, PermissionDenied

from backend.exceptions import AlreadyExists
from projects.models import Project
from .models import Portfolio, PortfolioProject
from .utils import unique_portfolio_slug

logger = logging.getLogger(__name__)


def ordered_links_prefetch(with_project_details=False):
    """Prefetch a portfolio's links in display order together with their projects"""
    queryset = PortfolioProject.objects.select_related('project').order_by('order')
    if with_project_details:
        queryset = queryset.prefetch_related(
            'project__project_tags__tag',
            'project__contents__language',
            'project__contents__blocks__slide_tag',
        )
    return Prefetch('portfolio_projects', queryset=queryset)


class PortfolioService:
    """
    Portfolio CRUD scoped to the owning user
    """

    @staticmethod
    def get_by_slug(slug, viewer=None):
        """
        Fetch a portfolio with its ordered, project-populated links. Private
        portfolios are only visible to their owner.
        """
        portfolio = (
            Portfolio.objects
            .filter(slug=slug)
            .prefetch_related(ordered_links_prefetch())
            .first()
        )
        if portfolio is None:
            raise NotFound('Portfolio not found')
        if not portfolio.is_public and (viewer is None or portfolio.user_id != viewer.id):
            raise NotFound('Portfolio not found')
        return portfolio

    @staticmethod
    def get_owned_by_slug(user, slug, action='modify'):
        """
        Fetch a portfolio the user owns. Portfolio slugs are public, so a
        foreign portfolio is reported as 403 rather than masked.
        """
        portfolio = Portfolio.objects.filter(slug=slug).first()
        if portfolio is None:
            raise NotFound('Portfolio not found')
        if portfolio.user_id != user.id:
            logger.warning(f"{user.email} tried to {action} portfolio {slug} they do not own")
            raise PermissionDenied(f"You don't have permission to {action} this portfolio")
        return portfolio

    @staticmethod
    def list_for_user(user):
        return (
            Portfolio.objects
            .filter(user=user)
            .prefetch_related(ordered_links_prefetch(with_project_details=True))
        )

    @staticmethod
    def create_portfolio(user, name, description=''):
        portfolio = Portfolio.objects.create(
            user=user,
            slug=unique_portfolio_slug(name),
            name=name.strip(),
            description=description,
        )
        logger.info(f"Created portfolio {portfolio.slug} for {user.email}")
        return portfolio

    @staticmethod
    def update_portfolio(portfolio, **fields):
        """Write only the supplied fields; the slug is kept when the name changes"""
        for field, value in fields.items():
            setattr(portfolio, field, value)
        portfolio.save(update_fields=[*fields.keys(), 'updated_at'])
        logger.info(f"Updated portfolio {portfolio.slug}: {', '.join(fields.keys())}")
        return portfolio

    @staticmethod
    def delete_portfolio(portfolio):
        slug = portfolio.slug
        portfolio.delete()
        logger.info(f"Deleted portfolio {slug}")

    @staticmethod
    def projects_with_link_status(user, portfolio):
        """The user's projects, each annotated with is_linked for portfolio"""
        linked = PortfolioProject.objects.filter(portfolio=portfolio, project=OuterRef('pk'))
        return (
            Project.objects
            .filter(user=user)
            .annotate(is_linked=Exists(linked))
            .prefetch_related('project_tags__tag')
        )


class PortfolioLinkService:
    """
    Adds and removes portfolio -> project links while keeping the link
    orders of each portfolio dense (0..n-1).
    """

    @staticmethod
    def _lock(portfolio):
        # Serializes concurrent link changes on the same portfolio
        return Portfolio.objects.select_for_update().get(pk=portfolio.pk)

    @staticmethod
    def add_project(portfolio, project):
        """Append project at the end of the portfolio"""
        with transaction.atomic():
            PortfolioLinkService._lock(portfolio)

            if PortfolioProject.objects.filter(portfolio=portfolio, project=project).exists():
                raise AlreadyExists('Project is already linked to this portfolio')

            position = PortfolioProject.objects.filter(portfolio=portfolio).count()
            try:
                with transaction.atomic():
                    link = PortfolioProject.objects.create(
                        portfolio=portfolio,
                        project=project,
                        order=position,
                    )
            except IntegrityError:
                raise AlreadyExists('Project is already linked to this portfolio')

        logger.info(f"Linked project {project.id} to portfolio {portfolio.slug} at {position}")
        return link

    @staticmethod
    def remove_link(portfolio, link_id):
        """Delete a link by its own id and close the gap it leaves"""
        with transaction.atomic():
            PortfolioLinkService._lock(portfolio)

            link = PortfolioProject.objects.filter(id=link_id, portfolio=portfolio).first()
            if link is None:
                raise NotFound('Project link not found in this portfolio')

            link.delete()
            PortfolioLinkService.renumber(portfolio.pk)

        logger.info(f"Removed link {link_id} from portfolio {portfolio.slug}")

    @staticmethod
    def renumber(portfolio_id):
        """Rewrite the remaining link orders to their positions 0..n-1"""
        links = PortfolioProject.objects.filter(portfolio_id=portfolio_id).order_by('order', 'created_at')
        changed = 0
        for index, link in enumerate(links):
            if link.order != index:
                link.order = index
                link.save(update_fields=['order', 'updated_at'])
                changed += 1
        return changed
