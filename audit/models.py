"""
Audit Log Model

IMMUTABLE: Audit logs cannot be edited or deleted after creation.
Purpose: Complete transparency and accountability for all system actions.

Rows come from several generations of writers, so the schema carries both
the current columns (action, entity_type, entity_id, old_values, new_values)
and the legacy trigger columns (operation, table_name, record_id, metadata).
"""

import uuid
from functools import reduce
from operator import or_

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.core.exceptions import PermissionDenied


# ============================================================================
# CUSTOM MANAGER AND QUERYSET
# ============================================================================

class AuditLogQuerySet(models.QuerySet):
    """Custom queryset for audit logs with filtering helpers"""

    def for_entity(self, entity_type, entity_id):
        """Filter logs for a specific entity"""
        return self.filter(entity_type=entity_type, entity_id=entity_id)

    def excluding_actions(self, actions):
        """Drop system/internal actions (case-insensitive)"""
        if not actions:
            return self
        return self.exclude(reduce(or_, (Q(action__iexact=action) for action in actions)))

    def recent(self, limit=500):
        """Get recent logs"""
        return self.order_by('-created_at')[:limit]


class AuditLogManager(models.Manager):
    """Custom manager for audit logs"""

    def get_queryset(self):
        return AuditLogQuerySet(self.model, using=self._db)

    def for_entity(self, entity_type, entity_id):
        return self.get_queryset().for_entity(entity_type, entity_id)

    def excluding_actions(self, actions):
        return self.get_queryset().excluding_actions(actions)

    def recent(self, limit=500):
        return self.get_queryset().recent(limit)


# ============================================================================
# AUDIT LOG MODEL
# ============================================================================

class AuditLog(models.Model):
    """
    Immutable change record.

    Security:
    - Logs CANNOT be edited after creation
    - Logs CANNOT be deleted
    - user_id is a plain column so deleting a profile never rewrites history
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Profile that performed the action"
    )

    action = models.CharField(
        max_length=50,
        blank=True,
        db_index=True,
        help_text="Semantic action (create, update, delete, assign...)"
    )

    entity_type = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        help_text="Kind of entity affected (free-form)"
    )

    entity_id = models.CharField(
        max_length=64,
        blank=True,
        null=True,
        db_index=True,
        help_text="ID of the entity affected"
    )

    # Legacy trigger columns
    operation = models.CharField(max_length=20, blank=True, help_text="Raw SQL operation (INSERT/UPDATE/DELETE)")
    table_name = models.CharField(max_length=100, blank=True)
    record_id = models.CharField(max_length=64, blank=True, null=True)

    old_values = models.JSONField(null=True, blank=True, help_text="State before the change")
    new_values = models.JSONField(null=True, blank=True, help_text="State after the change")
    metadata = models.JSONField(null=True, blank=True, help_text="Legacy wrapper holding old_values/new_values")

    department = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="Department snapshot at the time of the change"
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = "Audit Log"
        verbose_name_plural = "Audit Logs"
        ordering = ['-created_at']
        db_table = 'audit_logs'
        indexes = [
            models.Index(fields=['user_id', '-created_at'], name='audit_log_user_idx'),
            models.Index(fields=['entity_type', 'entity_id'], name='audit_log_entity_idx'),
            models.Index(fields=['action', '-created_at'], name='audit_log_action_idx'),
        ]

    def __str__(self):
        actor = self.user_id or 'System'
        return f"{actor} - {self.action or self.operation} - {self.entity_type or self.table_name} #{self.entity_id or self.record_id} - {self.created_at}"

    def save(self, *args, **kwargs):
        """
        Override save to enforce immutability.
        Only allow creation, not updates.
        """
        if not self._state.adding:
            raise PermissionDenied(
                "Audit logs are immutable and cannot be modified after creation."
            )

        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """
        Override delete to prevent deletion.
        """
        raise PermissionDenied(
            "Audit logs are immutable and cannot be deleted."
        )

    objects = AuditLogManager()
