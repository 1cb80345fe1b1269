"""
Audit log repository - read access to the change record store.
"""
from typing import Iterable, List, Optional

from audit.models import AuditLog
from core.dto import ChangeRecordDTO
from core.repositories import BaseRepository

RECORD_FIELDS = (
    'id', 'user_id', 'action', 'entity_type', 'entity_id',
    'operation', 'table_name', 'record_id',
    'old_values', 'new_values', 'metadata',
    'department', 'created_at',
)


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for AuditLog"""

    summary_fields = RECORD_FIELDS

    def __init__(self):
        super().__init__(AuditLog)

    def recent(self, limit: int = 500, exclude_actions: Optional[Iterable[str]] = None) -> List[ChangeRecordDTO]:
        """
        Most recent change records, newest first.

        Database errors propagate; the service decides what the caller sees.
        """
        queryset = AuditLog.objects.excluding_actions(list(exclude_actions or [])).recent(limit)
        return [ChangeRecordDTO.from_row(self._normalize(row)) for row in queryset.values(*RECORD_FIELDS)]
