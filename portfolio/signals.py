"""
Signals keeping portfolio link orders dense when a linked project is deleted.
"""
from django.db.models.signals import post_delete, pre_delete
from django.dispatch import receiver
import logging

from projects.models import Project
from .models import PortfolioProject
from .services import PortfolioLinkService

logger = logging.getLogger(__name__)


@receiver(pre_delete, sender=Project)
def remember_linked_portfolios(sender, instance, **kwargs):
    """
    Record which portfolios link the project before the cascade removes
    the links.
    """
    instance._linked_portfolio_ids = list(
        PortfolioProject.objects.filter(project=instance).values_list('portfolio_id', flat=True)
    )


@receiver(post_delete, sender=Project)
def renumber_linked_portfolios(sender, instance, **kwargs):
    """
    Close the gaps the deleted project left in its portfolios.
    """
    for portfolio_id in getattr(instance, '_linked_portfolio_ids', []):
        changed = PortfolioLinkService.renumber(portfolio_id)
        if changed:
            logger.info(f"Renumbered {changed} links in portfolio {portfolio_id} after project deletion")
