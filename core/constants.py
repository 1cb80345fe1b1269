"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# User Roles
class UserRole:
    ADMIN = 'admin'
    LEAD = 'lead'
    STAFF = 'staff'

    CHOICES = [
        (ADMIN, 'Admin'),
        (LEAD, 'Lead'),
        (STAFF, 'Staff'),
    ]

    AUDIT_VIEWERS = [ADMIN, LEAD]


# Asset assignment types
class AssignmentType:
    INDIVIDUAL = 'individual'
    DEPARTMENT = 'department'
    OFFICE = 'office'

    CHOICES = [
        (INDIVIDUAL, 'Individual'),
        (DEPARTMENT, 'Department'),
        (OFFICE, 'Office'),
    ]


# Change record actions
class AuditAction:
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'
    ASSIGN = 'assign'
    REASSIGN = 'reassign'

    # System/internal operations never shown in the audit trail
    HIDDEN = ['sync', 'migrate', 'update_schema', 'migration']


# Audit trail display
class AuditDisplay:
    EMPTY = '-'
    UNKNOWN = 'Unknown'
    ANONYMOUS = 'Anonymous'
    NOT_AVAILABLE = 'N/A'

    IDENTIFIER_LENGTH = 36  # UUID-shaped ids
    TASK_TITLE_MAX = 30
    PAYMENT_TITLE_MAX = 50
    FILE_NAME_MAX = 50
    DEPARTMENT_LABEL_MAX = 50


# Default Limits
class DefaultLimits:
    AUDIT_RECENT_LIMIT = 500
    AUDIT_LOOKUP_WORKERS = 4


# Date range filter presets
class DateRange:
    ALL = 'all'
    TODAY = 'today'
    WEEK = 'week'
    MONTH = 'month'
    CUSTOM = 'custom'

    CHOICES = [ALL, TODAY, WEEK, MONTH, CUSTOM]

    DAYS = {
        WEEK: 7,
        MONTH: 30,
    }
