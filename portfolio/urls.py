from django.urls import path
from . import views

app_name = 'portfolio'

urlpatterns = [
    # Portfolio management (authenticated)
    path('', views.PortfolioListView.as_view(), name='portfolio_list'),

    # Public portfolio view, owner updates and deletes
    path('<slug:slug>/', views.PortfolioDetailView.as_view(), name='portfolio_detail'),

    # Portfolio -> project links
    path('<slug:slug>/project/', views.PortfolioProjectLinkView.as_view(), name='portfolio_project_link'),
    path('<slug:slug>/projects/', views.PortfolioProjectsView.as_view(), name='portfolio_projects'),
]
