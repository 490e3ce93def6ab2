from django.conf import settings
from django.db import models
from django.core.validators import RegexValidator
import uuid

from projects.models import Project


class Portfolio(models.Model):
    """
    A shareable, ordered selection of a user's projects
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='portfolios',
        help_text="The user who owns this portfolio"
    )
    slug = models.SlugField(
        max_length=64,
        unique=True,
        validators=[
            RegexValidator(
                regex=r'^[a-z0-9-]*$',
                message='Slug can only contain lowercase letters, numbers, and hyphens'
            )
        ],
        help_text="URL slug derived from the portfolio name"
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    is_public = models.BooleanField(
        default=True,
        help_text="Whether the portfolio is publicly accessible"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']
        verbose_name_plural = "Portfolios"

    def __str__(self):
        return self.name

    @property
    def public_url(self):
        """Get the public URL for this portfolio"""
        return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/portfolio/{self.slug}"


class PortfolioProject(models.Model):
    """
    Link between a portfolio and one of its projects. The orders of a
    portfolio's links always form the range 0..n-1.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    portfolio = models.ForeignKey(
        Portfolio,
        on_delete=models.CASCADE,
        related_name='portfolio_projects',
        help_text="The portfolio this link belongs to"
    )
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='portfolio_projects',
        help_text="The linked project"
    )
    order = models.IntegerField(
        default=0,
        help_text="Position in the portfolio (zero-based, lower numbers appear first)"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order']
        verbose_name_plural = "Portfolio projects"
        constraints = [
            models.UniqueConstraint(fields=['portfolio', 'project'], name='unique_portfolio_project'),
        ]

    def __str__(self):
        return f"{self.portfolio.name} #{self.order} - {self.project.name}"
