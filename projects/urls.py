from django.urls import path
from . import views

app_name = 'projects'

urlpatterns = [
    # Project management (authenticated)
    path('', views.ProjectListView.as_view(), name='project_list'),
    path('reorder/', views.ProjectReorderView.as_view(), name='project_reorder'),
    path('languages/', views.LanguageListView.as_view(), name='language_list'),

    # Tags
    path('tags/', views.TagListView.as_view(), name='tag_list'),
    path('tags/<uuid:tag_id>/', views.TagDetailView.as_view(), name='tag_detail'),
    path('slide-tags/', views.SlideTagListView.as_view(), name='slide_tag_list'),

    # Single project
    path('<uuid:project_id>/', views.ProjectDetailView.as_view(), name='project_detail'),
    path('<uuid:project_id>/editor/', views.ProjectEditorView.as_view(), name='project_editor'),
    path('<uuid:project_id>/contents/', views.ProjectContentCreateView.as_view(), name='project_content_create'),
    path('<uuid:project_id>/tags/', views.ProjectTagListView.as_view(), name='project_tags'),
    path('<uuid:project_id>/tags/<uuid:tag_id>/', views.ProjectTagDetailView.as_view(), name='project_tag_detail'),

    # Content blocks
    path('<uuid:project_id>/blocks/', views.ContentBlockCreateView.as_view(), name='block_create'),
    path('<uuid:project_id>/blocks/<uuid:block_id>/', views.ContentBlockDetailView.as_view(), name='block_detail'),
    path(
        '<uuid:project_id>/blocks/<uuid:block_id>/slide-tag/',
        views.ContentBlockSlideTagView.as_view(),
        name='block_slide_tag'
    ),
]
