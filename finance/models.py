import uuid

from django.db import models

from departments.models import Department


class PaymentCategory(models.Model):
    """Grouping for department payments"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Payment Category"
        verbose_name_plural = "Payment Categories"
        db_table = 'payment_categories'

    def __str__(self):
        return self.name


class DepartmentPayment(models.Model):
    """Payment made by or to a department"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='NGN')
    payment_reference = models.CharField(max_length=100, blank=True)
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )
    category = models.ForeignKey(
        PaymentCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Department Payment"
        verbose_name_plural = "Department Payments"
        db_table = 'department_payments'

    def __str__(self):
        return f"{self.title} ({self.amount} {self.currency})"


class PaymentDocument(models.Model):
    """Receipt/invoice attached to a payment"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payment = models.ForeignKey(
        DepartmentPayment,
        on_delete=models.CASCADE,
        related_name='documents'
    )
    file_name = models.CharField(max_length=255)
    document_type = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Payment Document"
        verbose_name_plural = "Payment Documents"
        db_table = 'payment_documents'

    def __str__(self):
        return self.file_name
