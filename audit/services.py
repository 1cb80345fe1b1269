"""
Audit trail service - loads, resolves and filters change records.
"""
from dataclasses import dataclass, field
from typing import List

from django.db import DatabaseError

from audit.filters import AuditLogFilter, compute_stats, filter_entries, filter_options
from audit.lookups import OrmLookupSource
from audit.repositories import AuditLogRepository
from audit.resolver import resolve_audit_trail
from core.constants import AuditAction, DefaultLimits
from core.dto import ResolvedLogEntryDTO
from core.exceptions import PermissionDeniedError, RecordStoreError, RecordStoreMissingError
from core.services import BaseService
from users.repositories import ProfileRepository


@dataclass
class AuditTrail:
    """One resolved load of the trail"""
    entries: List[ResolvedLogEntryDTO] = field(default_factory=list)
    # True when the store returned exactly RECENT_LIMIT rows (older ones exist or may exist)
    limited: bool = False


def translate_store_error(error):
    """Map a database error on the base fetch to the message the viewer sees"""
    text = str(error).lower()
    if 'does not exist' in text or 'no such table' in text:
        return RecordStoreMissingError(details={'error': str(error)})
    if 'permission' in text:
        return PermissionDeniedError(details={'error': str(error)})
    return RecordStoreError(details={'error': str(error)})


class AuditTrailService(BaseService):
    """Service for the audit trail screen"""

    settings_name = 'AUDIT_TRAIL'
    defaults = {
        'RECENT_LIMIT': DefaultLimits.AUDIT_RECENT_LIMIT,
        'HIDDEN_ACTIONS': AuditAction.HIDDEN,
        'LOOKUP_WORKERS': DefaultLimits.AUDIT_LOOKUP_WORKERS,
    }

    def __init__(self, repository=None, source=None, profiles=None):
        super().__init__()
        self.repository = repository or AuditLogRepository()
        self.source = source or OrmLookupSource()
        self.profiles = profiles or ProfileRepository()

    def load(self) -> AuditTrail:
        """
        Fetch the most recent records and resolve them.

        Only the record fetch can fail the call; lookup failures degrade
        inside the resolver.
        """
        limit = self.get_option('RECENT_LIMIT')
        hidden_actions = self.get_option('HIDDEN_ACTIONS')

        try:
            records = self.repository.recent(limit=limit, exclude_actions=hidden_actions)
        except DatabaseError as e:
            self.log_error("Error loading audit logs", error=e, limit=limit)
            raise translate_store_error(e) from e

        entries = resolve_audit_trail(
            records,
            self.source,
            max_workers=self.get_option('LOOKUP_WORKERS'),
            hidden_actions=hidden_actions,
        )
        self.log_info("Loaded audit logs", count=len(entries))
        return AuditTrail(entries=entries, limited=len(records) >= limit)

    def directory(self):
        """Employee directory used by the department filter and lead scoping"""
        return self.profiles.directory()

    def list_entries(self, viewer, audit_filter: AuditLogFilter):
        """Filtered entries plus stats over them"""
        trail = self.load()
        entries = filter_entries(trail.entries, audit_filter, viewer=viewer, directory=self.directory())
        return {
            'entries': entries,
            'stats': compute_stats(entries),
            'limited': trail.limited,
        }

    def stats(self, viewer, audit_filter: AuditLogFilter):
        return self.list_entries(viewer, audit_filter)['stats']

    def options(self, viewer):
        """Distinct filter values plus the employee directory"""
        trail = self.load()
        directory = self.directory()
        visible = filter_entries(trail.entries, AuditLogFilter(), viewer=viewer, directory=directory)
        options = filter_options(visible)
        options['departments'] = sorted({row['department'] for row in directory if row.get('department')})
        options['employees'] = [
            {'id': row['id'], 'name': f"{row.get('first_name', '')} {row.get('last_name', '')}".strip()}
            for row in directory
        ]
        return options
