from collections import Counter

from catalog.models import Category, Panchayath
from esep.exceptions import store_errors
from registrations.models import RegistrationStatus


class DashboardService:
    @staticmethod
    def summarize(records):
        """Total and per-status counts over ``records``."""
        counts = Counter(record.status for record in records)
        return {
            'total': len(records),
            'pending': counts[RegistrationStatus.PENDING.value],
            'approved': counts[RegistrationStatus.APPROVED.value],
            'rejected': counts[RegistrationStatus.REJECTED.value],
        }

    @staticmethod
    def get_stats(records):
        """Dashboard figures over one ``load_snapshot`` result plus reference data counts."""
        stats = DashboardService.summarize(records)
        with store_errors('dashboard_stats'):
            stats['categories'] = Category.objects.count()
            stats['active_categories'] = Category.objects.filter(is_active=True).count()
            stats['panchayaths'] = Panchayath.objects.count()
        return stats

    @staticmethod
    def get_category_breakdown(records):
        """Registrations per category, busiest first."""
        counts = Counter(record.category for record in records)
        return [{'category': name, 'count': count} for name, count in counts.most_common()]
