import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


def hex_color_validator():
    return django.core.validators.RegexValidator(
        message='Colors must be hex values such as #fff or #1a2b3c',
        regex='^#(?:[0-9a-fA-F]{3}){1,2}$',
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ThemeSettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('background_color', models.CharField(blank=True, max_length=7, validators=[hex_color_validator()])),
                ('text_color', models.CharField(blank=True, max_length=7, validators=[hex_color_validator()])),
                ('accent_color', models.CharField(blank=True, max_length=7, validators=[hex_color_validator()])),
                ('secondary_color', models.CharField(blank=True, max_length=7, validators=[hex_color_validator()])),
                ('logo_url', models.URLField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('default_language', models.ForeignKey(blank=True, help_text='Language portfolios open in', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='projects.language')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='theme_settings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Theme Settings',
                'verbose_name_plural': 'Theme Settings',
            },
        ),
    ]
