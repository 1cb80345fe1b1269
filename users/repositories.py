"""
Profile repository - Data access layer for employee profiles.
"""
from typing import Dict, List, Any
from django.contrib.auth import get_user_model
from core.repositories import BaseRepository


class ProfileRepository(BaseRepository):
    """Repository for the User (profile) model"""

    summary_fields = ('id', 'first_name', 'last_name', 'company_email', 'employee_number', 'department')

    def __init__(self):
        super().__init__(get_user_model())

    def directory(self) -> List[Dict[str, Any]]:
        """Active employees with their department, for filters and lead scoping"""
        rows = self.get_all(is_active=True).order_by('first_name', 'last_name').values(
            'id', 'first_name', 'last_name', 'department'
        )
        return [self._normalize(row) for row in rows]
