"""
Department repository - Data access layer for Department domain.
"""
from core.repositories import BaseRepository
from .models import Department


class DepartmentRepository(BaseRepository[Department]):
    """Repository for Department model"""

    summary_fields = ('id', 'name')

    def __init__(self):
        super().__init__(Department)
