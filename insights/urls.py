from django.urls import path
from . import views

app_name = 'insights'

urlpatterns = [
    path('panel/dashboard/', views.dashboard, name='dashboard'),
    path('panel/registrations/export/', views.export_registrations, name='export_registrations'),
]
