import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Portfolio',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('slug', models.SlugField(help_text='URL slug derived from the portfolio name', max_length=64, unique=True, validators=[django.core.validators.RegexValidator(message='Slug can only contain lowercase letters, numbers, and hyphens', regex='^[a-z0-9-]*$')])),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('is_public', models.BooleanField(default=True, help_text='Whether the portfolio is publicly accessible')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(help_text='The user who owns this portfolio', on_delete=django.db.models.deletion.CASCADE, related_name='portfolios', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'Portfolios',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='PortfolioProject',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order', models.IntegerField(default=0, help_text='Position in the portfolio (zero-based, lower numbers appear first)')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('portfolio', models.ForeignKey(help_text='The portfolio this link belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='portfolio_projects', to='portfolio.portfolio')),
                ('project', models.ForeignKey(help_text='The linked project', on_delete=django.db.models.deletion.CASCADE, related_name='portfolio_projects', to='projects.project')),
            ],
            options={
                'verbose_name_plural': 'Portfolio projects',
                'ordering': ['order'],
            },
        ),
        migrations.AddConstraint(
            model_name='portfolioproject',
            constraint=models.UniqueConstraint(fields=('portfolio', 'project'), name='unique_portfolio_project'),
        ),
    ]
