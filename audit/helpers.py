"""
Audit Logging Helper Functions

Provides a centralized way to record changes into the audit trail.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from audit.models import AuditLog

logger = logging.getLogger(__name__)


def _jsonable(state):
    """Copy a state dict with UUID/Decimal/date values turned into JSON primitives"""
    if state is None:
        return None
    cleaned = {}
    for key, value in state.items():
        if isinstance(value, UUID):
            value = str(value)
        elif isinstance(value, Decimal):
            value = float(value)
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        cleaned[key] = value
    return cleaned


def record_change(user, action, entity_type, entity_id=None, before=None, after=None, department=None):
    """
    Record a change in the audit trail.

    Args:
        user: User who performed the change (None for system changes)
        action: create, update, delete, assign, reassign...
        entity_type: Kind of entity affected (e.g. 'assets', 'profiles')
        entity_id: ID of the entity affected
        before: State before the change (optional)
        after: State after the change (optional)
        department: Department snapshot (defaults to the user's department)

    Returns:
        AuditLog instance, or None if it could not be written

    Example:
        record_change(
            user=request.user,
            action=AuditAction.ASSIGN,
            entity_type='asset_assignments',
            entity_id=assignment.id,
            after={'asset_id': asset.id, 'assigned_to': employee.id},
        )
    """
    try:
        if department is None and user is not None:
            department = getattr(user, 'department', None) or None

        audit_log = AuditLog.objects.create(
            user_id=getattr(user, 'id', None),
            action=(action or '').lower(),
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            old_values=_jsonable(before),
            new_values=_jsonable(after),
            department=department,
        )

        actor = user.username if user is not None else 'system'
        logger.info(f"Audit: {actor} - {action} - {entity_type} #{entity_id}")

        return audit_log

    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {e}", exc_info=True)
        return None
