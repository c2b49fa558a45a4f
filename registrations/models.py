from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone

mobile_number_validator = RegexValidator(r'^[0-9]{10}$', 'Please enter a valid 10-digit mobile number.')


class RegistrationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending Approval'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class Registration(models.Model):
    """One applicant's submission and its approval state.

    ``customer_id`` is derived from the mobile number and name when the row is
    created and never recomputed. ``category`` and ``panchayath`` hold names by
    value, not foreign keys.
    """
    customer_id = models.CharField(max_length=32, unique=True, editable=False)
    category = models.CharField(max_length=100)
    name = models.CharField(max_length=255)
    address = models.TextField()
    mobile_number = models.CharField(max_length=10, unique=True, validators=[mobile_number_validator])
    panchayath = models.CharField(max_length=100)
    ward = models.CharField(max_length=50)
    agent_pro = models.CharField('Agent/P.R.O', max_length=255, blank=True, default='')

    status = models.CharField(max_length=20, choices=RegistrationStatus.choices, default=RegistrationStatus.PENDING)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status'], name='registration_status_idx'),
            models.Index(fields=['category'], name='registration_category_idx'),
            models.Index(fields=['panchayath'], name='registration_panchayath_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=RegistrationStatus.values),
                name='registration_status_valid',
            ),
            models.CheckConstraint(
                condition=models.Q(created_at__lte=models.F('updated_at')),
                name='registration_created_before_updated',
            ),
        ]

    def __str__(self):
        return f"{self.customer_id} - {self.name} ({self.status})"

    def as_dict(self):
        return {
            'id': self.id,
            'customer_id': self.customer_id,
            'category': self.category,
            'name': self.name,
            'address': self.address,
            'mobile_number': self.mobile_number,
            'panchayath': self.panchayath,
            'ward': self.ward,
            'agent_pro': self.agent_pro,
            'status': self.status,
            'status_display': self.get_status_display(),
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }


class StatusChange(models.Model):
    """Audit trail of every approval status transition."""
    registration = models.ForeignKey(Registration, on_delete=models.PROTECT, related_name='status_changes')
    from_status = models.CharField(max_length=20, choices=RegistrationStatus.choices)
    to_status = models.CharField(max_length=20, choices=RegistrationStatus.choices)
    changed_by = models.CharField(max_length=150)
    reason = models.TextField(blank=True, default='')
    changed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-changed_at', '-id']

    def __str__(self):
        return f"{self.registration.customer_id}: {self.from_status} -> {self.to_status} by {self.changed_by}"
