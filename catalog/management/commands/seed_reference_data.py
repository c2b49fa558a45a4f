from decimal import Decimal

from django.core.management.base import BaseCommand

from catalog.models import Category, Panchayath

CATEGORIES = [
    ('FarmeLife', 'Farming and allied agriculture based self-employment.', Decimal('1000.00'), Decimal('500.00')),
    ('OrganeLife', 'Organic produce cultivation and marketing.', Decimal('1000.00'), Decimal('500.00')),
    ('FoodeLife', 'Home made food products and catering units.', Decimal('1000.00'), Decimal('750.00')),
    ('EntreLife', 'Small business and entrepreneurship track.', Decimal('1500.00'), Decimal('1000.00')),
    ('Job Card', 'Registration for job card holders.', Decimal('0.00'), Decimal('0.00')),
]

PANCHAYATHS = [
    ('Kadavoor', 'Kollam'),
    ('Chavara', 'Kollam'),
    ('Thrikkaruva', 'Kollam'),
    ('Kundara', 'Kollam'),
]


class Command(BaseCommand):
    help = 'Seeds the default program categories and panchayaths (existing rows are left untouched)'

    def handle(self, *args, **options):
        created = 0
        for name, description, actual_fee, offer_fee in CATEGORIES:
            _, was_created = Category.objects.get_or_create(
                name=name,
                defaults={
                    'description': description,
                    'actual_fee': actual_fee,
                    'offer_fee': offer_fee,
                },
            )
            created += was_created
        self.stdout.write(self.style.SUCCESS(f'Categories: {created} created'))

        created = 0
        for name, district in PANCHAYATHS:
            _, was_created = Panchayath.objects.get_or_create(name=name, district=district)
            created += was_created
        self.stdout.write(self.style.SUCCESS(f'Panchayaths: {created} created'))
