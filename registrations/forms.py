from django import forms

from .models import Registration


class RegistrationForm(forms.ModelForm):
    class Meta:
        model = Registration
        fields = ['category', 'name', 'address', 'mobile_number', 'panchayath', 'ward', 'agent_pro']

    def validate_unique(self):
        # Mobile number collisions are reported as DuplicateRegistrationError by the service.
        pass


class CategoryCorrectionForm(forms.Form):
    category = forms.CharField(max_length=100)
