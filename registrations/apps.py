from django.apps import AppConfig


class RegistrationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'registrations'
    verbose_name = 'Registrations'

    def ready(self):
        from .services import reopen_min_role
        reopen_min_role()
