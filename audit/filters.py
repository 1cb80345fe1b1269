"""
Filtering and statistics over resolved audit entries.

These run on the in-memory list produced by resolve_audit_trail; the
record store query itself is only bounded by RECENT_LIMIT.
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Dict, List, Optional

from django.utils import timezone

from core.constants import AuditAction, DateRange, UserRole
from core.validators import AuditFilterValidator

ALL = 'all'


@dataclass
class AuditLogFilter:
    """Filter criteria; 'all' (or empty) disables a criterion"""
    search: str = ''
    action: str = ALL
    entity_type: str = ALL
    date_range: str = DateRange.ALL
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    department: str = ALL
    employee: str = ALL

    @classmethod
    def from_query_params(cls, params) -> "AuditLogFilter":
        """Build from request query params, validating dates"""
        date_range = (params.get('date_range') or DateRange.ALL).lower()
        start_date = AuditFilterValidator.parse_date(params.get('start_date'), 'start_date')
        end_date = AuditFilterValidator.parse_date(params.get('end_date'), 'end_date')
        AuditFilterValidator.validate_date_range(date_range, start_date, end_date)
        return cls(
            search=(params.get('search') or '').strip(),
            action=params.get('action') or ALL,
            entity_type=params.get('entity_type') or ALL,
            date_range=date_range,
            start_date=start_date,
            end_date=end_date,
            department=params.get('department') or ALL,
            employee=params.get('employee') or ALL,
        )


def _matches_search(entry, query):
    if not query:
        return True
    query = query.lower()
    actor = entry.actor
    fields = [
        entry.entity_type,
        entry.action,
        entry.category,
        entry.target,
        entry.object_identifier,
        actor.first_name if actor else None,
        actor.last_name if actor else None,
    ]
    return any(query in field.lower() for field in fields if field)


def _start_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def _end_of_day(day):
    return timezone.make_aware(datetime.combine(day, time.max))


def _matches_date(entry, audit_filter, now):
    if audit_filter.date_range == DateRange.ALL:
        return True
    occurred = entry.occurred_at
    if occurred is None:
        return False

    if audit_filter.date_range == DateRange.CUSTOM:
        if audit_filter.start_date and occurred < _start_of_day(audit_filter.start_date):
            return False
        if audit_filter.end_date and occurred > _end_of_day(audit_filter.end_date):
            return False
        return True

    # Whole days elapsed, as the presets count them
    days = (now - occurred).days
    if audit_filter.date_range == DateRange.TODAY:
        return days == 0
    return days <= DateRange.DAYS[audit_filter.date_range]


def _matches_department(entry, audit_filter, viewer, departments):
    actor_department = departments.get(entry.actor_user_id) if entry.actor_user_id else None

    # Leads are always limited to the departments they lead
    if viewer is not None and getattr(viewer, 'role', None) == UserRole.LEAD:
        scoped = viewer.scoped_departments
        if not actor_department or actor_department not in scoped:
            return False

    if audit_filter.department == ALL:
        return True
    return entry.actor is not None and actor_department == audit_filter.department


def filter_entries(entries, audit_filter, viewer=None, directory=None, now=None):
    """
    Apply audit_filter to resolved entries, keeping their order.

    directory is the employee directory (rows with id and department); the
    department criterion and lead scoping compare the actor's department
    from it.
    """
    now = now or timezone.now()
    departments = {
        row['id']: row.get('department')
        for row in (directory or [])
    }

    result = []
    for entry in entries:
        if audit_filter.action != ALL and entry.action != audit_filter.action:
            continue
        if audit_filter.entity_type != ALL and entry.entity_type != audit_filter.entity_type:
            continue
        if audit_filter.employee != ALL and entry.actor_user_id != audit_filter.employee:
            continue
        if not _matches_search(entry, audit_filter.search):
            continue
        if not _matches_date(entry, audit_filter, now):
            continue
        if not _matches_department(entry, audit_filter, viewer, departments):
            continue
        result.append(entry)
    return result


def compute_stats(entries) -> Dict[str, int]:
    """Totals shown above the trail"""
    stats = {'total': len(entries), 'creates': 0, 'updates': 0, 'deletes': 0}
    keys = {
        AuditAction.CREATE: 'creates',
        AuditAction.UPDATE: 'updates',
        AuditAction.DELETE: 'deletes',
    }
    for entry in entries:
        key = keys.get(entry.action)
        if key:
            stats[key] += 1
    return stats


def filter_options(entries) -> Dict[str, List[str]]:
    """Distinct actions and entity types present, for filter dropdowns"""
    return {
        'actions': sorted({entry.action for entry in entries if entry.action}),
        'entity_types': sorted({entry.entity_type for entry in entries if entry.entity_type}),
    }
