from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('panel/', views.panel_home, name='home'),
    path('panel/login/', views.login_view, name='login'),
    path('panel/logout/', views.logout_view, name='logout'),
]
