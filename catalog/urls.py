from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    path('options/categories/', views.active_categories, name='active_categories'),
    path('options/panchayaths/', views.panchayath_options, name='panchayath_options'),

    path('panel/categories/', views.categories, name='categories'),
    path('panel/categories/<int:category_id>/', views.category_update, name='category_update'),
    path('panel/categories/<int:category_id>/toggle/', views.category_toggle, name='category_toggle'),
    path('panel/panchayaths/', views.panchayaths, name='panchayaths'),
    path('panel/panchayaths/<int:panchayath_id>/', views.panchayath_update, name='panchayath_update'),
    path('panel/panchayaths/<int:panchayath_id>/delete/', views.panchayath_delete, name='panchayath_delete'),
]
