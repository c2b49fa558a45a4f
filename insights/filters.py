"""Read-only filtering over an immutable snapshot of registrations."""
from dataclasses import dataclass, fields

from esep.exceptions import store_errors
from registrations.models import Registration


@dataclass(frozen=True)
class RegistrationFilter:
    """Exact-match criteria. A blank criterion imposes no constraint."""
    category: str = ''
    panchayath: str = ''
    status: str = ''

    @classmethod
    def from_query(cls, query):
        return cls(**{f.name: (query.get(f.name) or '').strip() for f in fields(cls)})

    def criteria(self):
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    def is_empty(self):
        return not self.criteria()


def load_snapshot():
    """Fetch every registration once, newest first."""
    with store_errors('load_snapshot'):
        return tuple(Registration.objects.order_by('-created_at', '-id'))


def filter_registrations(records, criteria):
    wanted = criteria.criteria()
    return tuple(
        record for record in records
        if all(getattr(record, field) == value for field, value in wanted.items())
    )


def facets(records):
    """Distinct categories and panchayaths in first-seen order."""
    categories = dict.fromkeys(record.category for record in records)
    panchayaths = dict.fromkeys(record.panchayath for record in records)
    return {'categories': list(categories), 'panchayaths': list(panchayaths)}
