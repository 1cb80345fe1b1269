"""
Audit Log Admin - READ ONLY

Audit logs are immutable and cannot be edited or deleted via admin.
"""

import json

from django.contrib import admin
from django.utils.html import format_html
from audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """
    Read-only admin for raw change records.

    Shows the current columns next to the legacy trigger columns so old
    rows can be inspected as stored.
    """

    list_display = [
        'created_at',
        'user_id',
        'action_or_operation',
        'entity_or_table',
        'entity_id',
        'department',
    ]

    list_filter = [
        'action',
        'entity_type',
        'created_at',
    ]

    search_fields = [
        'entity_type',
        'entity_id',
        'table_name',
        'record_id',
        'department',
    ]

    readonly_fields = [
        'user_id',
        'action',
        'entity_type',
        'entity_id',
        'operation',
        'table_name',
        'record_id',
        'old_values_display',
        'new_values_display',
        'metadata_display',
        'department',
        'created_at',
    ]

    fieldsets = (
        ('Change', {
            'fields': ('user_id', 'action', 'entity_type', 'entity_id', 'department', 'created_at')
        }),
        ('State', {
            'fields': ('old_values_display', 'new_values_display')
        }),
        ('Legacy Columns', {
            'fields': ('operation', 'table_name', 'record_id', 'metadata_display'),
            'classes': ('collapse',)
        }),
    )

    date_hierarchy = 'created_at'

    ordering = ['-created_at']

    # Disable all editing
    def has_add_permission(self, request):
        """Disable manual creation via admin"""
        return False

    def has_change_permission(self, request, obj=None):
        """Disable editing"""
        return False

    def has_delete_permission(self, request, obj=None):
        """Disable deletion"""
        return False

    @admin.display(description='Action')
    def action_or_operation(self, obj):
        return obj.action or (obj.operation or '').lower() or '-'

    @admin.display(description='Entity')
    def entity_or_table(self, obj):
        return obj.entity_type or obj.table_name or '-'

    @staticmethod
    def _json(value):
        if not value:
            return "-"
        return format_html('<pre>{}</pre>', json.dumps(value, indent=2, default=str))

    @admin.display(description='Before')
    def old_values_display(self, obj):
        return self._json(obj.old_values)

    @admin.display(description='After')
    def new_values_display(self, obj):
        return self._json(obj.new_values)

    @admin.display(description='Metadata')
    def metadata_display(self, obj):
        return self._json(obj.metadata)
