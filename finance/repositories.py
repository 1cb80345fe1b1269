"""
Finance repositories - Data access layer for payments and their documents.
Department names are joined in the query so callers get one flat row.
"""
from typing import Dict, Any, Iterable, List
from django.db.models import F
from core.repositories import BaseRepository
from .models import PaymentCategory, DepartmentPayment, PaymentDocument


class PaymentCategoryRepository(BaseRepository[PaymentCategory]):
    """Repository for PaymentCategory model"""

    summary_fields = ('id', 'name')

    def __init__(self):
        super().__init__(PaymentCategory)


class DepartmentPaymentRepository(BaseRepository[DepartmentPayment]):
    """Repository for DepartmentPayment model"""

    summary_fields = ('id', 'title', 'amount', 'currency')

    def __init__(self):
        super().__init__(DepartmentPayment)

    def get_by_ids(self, ids: Iterable[str], fields=None) -> List[Dict[str, Any]]:
        """Payments with their department name"""
        ids = list(ids)
        if not ids:
            return []
        rows = self.get_all(id__in=ids).values(
            *(fields or self.summary_fields),
            department_name=F('department__name'),
        )
        return [self._normalize(row) for row in rows]


class PaymentDocumentRepository(BaseRepository[PaymentDocument]):
    """Repository for PaymentDocument model"""

    summary_fields = ('id', 'file_name', 'document_type', 'payment_id')

    def __init__(self):
        super().__init__(PaymentDocument)

    def get_by_ids(self, ids: Iterable[str], fields=None) -> List[Dict[str, Any]]:
        """Documents with the department name of their parent payment"""
        ids = list(ids)
        if not ids:
            return []
        rows = self.get_all(id__in=ids).values(
            *(fields or self.summary_fields),
            department_name=F('payment__department__name'),
        )
        return [self._normalize(row) for row in rows]
