"""
Task repository - Data access layer for Task domain.
"""
from core.repositories import BaseRepository
from .models import Task


class TaskRepository(BaseRepository[Task]):
    """Repository for Task model"""

    summary_fields = ('id', 'title', 'assigned_to')

    def __init__(self):
        super().__init__(Task)
