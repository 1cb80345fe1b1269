from django.contrib import admin
from .models import PaymentCategory, DepartmentPayment, PaymentDocument


@admin.register(PaymentCategory)
class PaymentCategoryAdmin(admin.ModelAdmin):
    list_display = ['name']
    search_fields = ['name']


class PaymentDocumentInline(admin.TabularInline):
    model = PaymentDocument
    extra = 0


@admin.register(DepartmentPayment)
class DepartmentPaymentAdmin(admin.ModelAdmin):
    list_display = ['title', 'department', 'category', 'amount', 'currency', 'created_at']
    list_filter = ['department', 'category', 'currency']
    search_fields = ['title', 'payment_reference', 'department__name']
    inlines = [PaymentDocumentInline]
