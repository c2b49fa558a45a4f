from django import forms
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from .models import AdminUser


class LoginForm(forms.Form):
    username = forms.CharField(max_length=150)
    password = forms.CharField(widget=forms.PasswordInput)


class AdminUserCreationForm(UserCreationForm):
    class Meta(UserCreationForm.Meta):
        model = AdminUser
        fields = ('username', 'role')


class AdminUserChangeForm(UserChangeForm):
    class Meta(UserChangeForm.Meta):
        model = AdminUser
        fields = ('username', 'role', 'is_active')
