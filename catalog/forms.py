from django import forms

from .models import Category, Panchayath


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ['name', 'description', 'actual_fee', 'offer_fee', 'image_url', 'popup_image_url', 'is_active']


class PanchayathForm(forms.ModelForm):
    class Meta:
        model = Panchayath
        fields = ['name', 'district']
