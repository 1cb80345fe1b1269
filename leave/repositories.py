"""
Leave repositories - Data access layer for leave requests and approvals.
"""
from typing import Dict, Any, Iterable, List
from django.db.models import F
from core.repositories import BaseRepository
from .models import LeaveRequest, LeaveApproval


class LeaveRequestRepository(BaseRepository[LeaveRequest]):
    """Repository for LeaveRequest model"""

    summary_fields = ('id', 'user_id')

    def __init__(self):
        super().__init__(LeaveRequest)

    def get_by_ids(self, ids: Iterable[str], fields=None) -> List[Dict[str, Any]]:
        """Requests with their leave type name"""
        ids = list(ids)
        if not ids:
            return []
        rows = self.get_all(id__in=ids).values(
            *(fields or self.summary_fields),
            leave_type_name=F('leave_type__name'),
        )
        return [self._normalize(row) for row in rows]


class LeaveApprovalRepository(BaseRepository[LeaveApproval]):
    """Repository for LeaveApproval model"""

    summary_fields = ('id', 'leave_request_id')

    def __init__(self):
        super().__init__(LeaveApproval)
