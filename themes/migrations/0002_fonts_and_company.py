from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('themes', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='themesettings',
            name='heading_font',
            field=models.CharField(blank=True, max_length=100),
        ),
        migrations.AddField(
            model_name='themesettings',
            name='body_font',
            field=models.CharField(blank=True, max_length=100),
        ),
        migrations.AddField(
            model_name='themesettings',
            name='company_name',
            field=models.CharField(blank=True, max_length=200),
        ),
        migrations.AddField(
            model_name='themesettings',
            name='company_description',
            field=models.TextField(blank=True),
        ),
        migrations.AddField(
            model_name='themesettings',
            name='company_email',
            field=models.EmailField(blank=True, max_length=254),
        ),
        migrations.AddField(
            model_name='themesettings',
            name='company_phone',
            field=models.CharField(blank=True, max_length=50),
        ),
        migrations.AddField(
            model_name='themesettings',
            name='company_address',
            field=models.TextField(blank=True),
        ),
    ]
