import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('customer_id', models.CharField(editable=False, max_length=32, unique=True)),
                ('category', models.CharField(max_length=100)),
                ('name', models.CharField(max_length=255)),
                ('address', models.TextField()),
                ('mobile_number', models.CharField(max_length=10, unique=True, validators=[django.core.validators.RegexValidator('^[0-9]{10}$', 'Please enter a valid 10-digit mobile number.')])),
                ('panchayath', models.CharField(max_length=100)),
                ('ward', models.CharField(max_length=50)),
                ('agent_pro', models.CharField(blank=True, default='', max_length=255, verbose_name='Agent/P.R.O')),
                ('status', models.CharField(choices=[('pending', 'Pending Approval'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['status'], name='registration_status_idx'),
                    models.Index(fields=['category'], name='registration_category_idx'),
                    models.Index(fields=['panchayath'], name='registration_panchayath_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('status__in', ['pending', 'approved', 'rejected'])), name='registration_status_valid'),
                    models.CheckConstraint(condition=models.Q(('created_at__lte', models.F('updated_at'))), name='registration_created_before_updated'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StatusChange',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('from_status', models.CharField(choices=[('pending', 'Pending Approval'), ('approved', 'Approved'), ('rejected', 'Rejected')], max_length=20)),
                ('to_status', models.CharField(choices=[('pending', 'Pending Approval'), ('approved', 'Approved'), ('rejected', 'Rejected')], max_length=20)),
                ('changed_by', models.CharField(max_length=150)),
                ('reason', models.TextField(blank=True, default='')),
                ('changed_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('registration', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='status_changes', to='registrations.registration')),
            ],
            options={
                'ordering': ['-changed_at', '-id'],
            },
        ),
    ]
