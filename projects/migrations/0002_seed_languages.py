# Seed the languages project content can be written in

from django.db import migrations

LANGUAGES = [
    ('en', 'English'),
    ('fr', 'French'),
    ('de', 'German'),
]


def seed_languages(apps, schema_editor):
    Language = apps.get_model('projects', 'Language')
    for code, name in LANGUAGES:
        Language.objects.get_or_create(code=code, defaults={'name': name})


def remove_languages(apps, schema_editor):
    Language = apps.get_model('projects', 'Language')
    Language.objects.filter(code__in=[code for code, _ in LANGUAGES]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_languages, remove_languages),
    ]
