"""
Repository pattern implementation.
Abstracts data access and provides a clean interface for domain services.
"""
from typing import Generic, TypeVar, Optional, List, Dict, Any, Iterable
from django.db.models import QuerySet, Model
import uuid

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Base repository providing common read operations.
    Follows Repository pattern for data access abstraction.
    """

    # Columns returned by batch reads; subclasses narrow this down
    summary_fields: tuple = ('id',)

    def __init__(self, model: type[T]):
        self.model = model

    def get_all(self, **filters) -> QuerySet[T]:
        """Get all instances matching filters"""
        return self.model.objects.filter(**filters)

    def get_by_ids(self, ids: Iterable[str], fields: Optional[tuple] = None) -> List[Dict[str, Any]]:
        """
        Batch read: one WHERE id IN (...) query, rows as dicts.

        Database errors propagate so the caller decides how to degrade.
        """
        ids = list(ids)
        if not ids:
            return []
        rows = self.model.objects.filter(id__in=ids).values(*(fields or self.summary_fields))
        return [self._normalize(row) for row in rows]

    @staticmethod
    def _normalize(row: Dict[str, Any]) -> Dict[str, Any]:
        """UUID values come back as uuid.UUID; callers key maps by str"""
        return {
            key: str(value) if isinstance(value, uuid.UUID) else value
            for key, value in row.items()
        }
