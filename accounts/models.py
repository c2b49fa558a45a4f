from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.utils import timezone


class Role(models.TextChoices):
    SUPER_ADMIN = 'super_admin', 'Super Admin'
    LOCAL_ADMIN = 'local_admin', 'Local Admin'
    USER_ADMIN = 'user_admin', 'User Admin'

    @classmethod
    def parse(cls, value):
        """Return the Role for ``value`` or None when it is absent or unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def rank(self):
        return ROLE_RANKS[self]


ROLE_RANKS = {
    Role.SUPER_ADMIN: 3,
    Role.LOCAL_ADMIN: 2,
    Role.USER_ADMIN: 1,
}


class AdminUserManager(BaseUserManager):
    def create_user(self, username, password=None, **extra_fields):
        if not username:
            raise ValueError('The Username field must be set')
        username = self.model.normalize_username(username)
        user = self.model(username=username, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('role', Role.SUPER_ADMIN)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('role') != Role.SUPER_ADMIN:
            raise ValueError('Superuser must have role=super_admin.')

        return self.create_user(username, password, **extra_fields)


class AdminUser(AbstractBaseUser, PermissionsMixin):
    username = models.CharField(max_length=150, unique=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER_ADMIN)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=True)

    date_joined = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AdminUserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = 'Administrator'
        verbose_name_plural = 'Administrators'
        constraints = [
            models.CheckConstraint(
                condition=models.Q(role__in=Role.values),
                name='adminuser_role_valid',
            ),
        ]

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    def sync_role_flags(self):
        # Every administrator may sign in to the Django admin; only super admins get all permissions.
        self.is_staff = True
        self.is_superuser = self.role == Role.SUPER_ADMIN

    def save(self, *args, **kwargs):
        self.sync_role_flags()
        super().save(*args, **kwargs)


class ActivityLog(models.Model):
    ACTION_TYPES = (
        ('LOGIN', 'Login'),
        ('LOGOUT', 'Logout'),
        ('CREATE', 'Create'),
        ('UPDATE', 'Update'),
        ('DELETE', 'Delete'),
        ('STATUS', 'Status Change'),
        ('EXPORT', 'Export'),
    )

    actor_username = models.CharField(max_length=150)
    action = models.TextField()
    action_type = models.CharField(max_length=20, choices=ACTION_TYPES)
    affected_object = models.CharField(max_length=255, blank=True, default='')
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    path = models.CharField(max_length=255, blank=True, default='')
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']

    def __str__(self):
        return f"{self.actor_username} - {self.action}"
