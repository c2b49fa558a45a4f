from django.urls import path
from . import views

app_name = 'registrations'

urlpatterns = [
    path('register/', views.submit, name='submit'),
    path('check-status/', views.check_status, name='check_status'),

    path('panel/registrations/', views.manage, name='manage'),
    path('panel/registrations/<int:registration_id>/status/', views.change_status, name='change_status'),
    path('panel/registrations/<int:registration_id>/reopen/', views.reopen, name='reopen'),
    path('panel/registrations/<int:registration_id>/category/', views.correct_category, name='correct_category'),
]
