"""
Entity-type classification for change records.

Writers have used many spellings for the same concept over time
("asset", "assets", "asset_assignment"...). Everything downstream
dispatches on EntityKind rather than on the raw string.
"""

from enum import Enum

from common.utils import titleize_identifier


class EntityKind(Enum):
    ASSET = 'asset'
    EMPLOYEE = 'employee'
    TASK = 'task'
    PROJECT = 'project'
    PAYMENT = 'payment'
    PAYMENT_DOCUMENT = 'payment_document'
    PAYMENT_CATEGORY = 'payment_category'
    FINANCE_OTHER = 'finance_other'
    LEAVE_REQUEST = 'leave_request'
    LEAVE_APPROVAL = 'leave_approval'
    LEAVE_OTHER = 'leave_other'
    DEPARTMENT = 'department'
    FEEDBACK = 'feedback'
    DOCUMENTATION = 'documentation'
    DEVICE = 'device'
    SYSTEM = 'system'
    OTHER = 'other'


_SYNONYMS = {
    EntityKind.ASSET: ('asset', 'assets', 'asset_assignment', 'asset_assignments'),
    EntityKind.EMPLOYEE: ('profile', 'profiles', 'user', 'pending_user', 'admin_action'),
    EntityKind.TASK: ('task', 'tasks', 'task_assignment', 'task_assignments'),
    EntityKind.PROJECT: ('project', 'projects', 'project_members', 'project_updates'),
    EntityKind.PAYMENT: ('department_payments',),
    EntityKind.PAYMENT_DOCUMENT: ('payment_documents',),
    EntityKind.PAYMENT_CATEGORY: ('payment_categories',),
    EntityKind.FINANCE_OTHER: ('starlink_payments',),
    EntityKind.LEAVE_REQUEST: ('leave_requests',),
    EntityKind.LEAVE_APPROVAL: ('leave_approvals',),
    EntityKind.LEAVE_OTHER: ('leave_balances',),
    EntityKind.DEPARTMENT: ('departments', 'department'),
    EntityKind.FEEDBACK: ('feedback',),
    EntityKind.DOCUMENTATION: ('user_documentation', 'documentation'),
    EntityKind.DEVICE: ('device', 'devices', 'device_assignment', 'device_assignments'),
    EntityKind.SYSTEM: ('management',),
}

ENTITY_KINDS = {
    synonym: kind
    for kind, synonyms in _SYNONYMS.items()
    for synonym in synonyms
}

CATEGORY_LABELS = {
    EntityKind.ASSET: 'Assets',
    EntityKind.EMPLOYEE: 'Employees',
    EntityKind.TASK: 'Tasks',
    EntityKind.PROJECT: 'Projects',
    EntityKind.PAYMENT: 'Finance',
    EntityKind.PAYMENT_DOCUMENT: 'Finance',
    EntityKind.PAYMENT_CATEGORY: 'Finance',
    EntityKind.FINANCE_OTHER: 'Finance',
    EntityKind.LEAVE_REQUEST: 'Leave',
    EntityKind.LEAVE_APPROVAL: 'Leave',
    EntityKind.LEAVE_OTHER: 'Leave',
    EntityKind.DEPARTMENT: 'Departments',
    EntityKind.FEEDBACK: 'Feedback',
    EntityKind.DOCUMENTATION: 'Documentation',
    EntityKind.DEVICE: 'Devices',
    EntityKind.SYSTEM: 'System',
}

ASSIGNMENT_ENTITY_TYPES = ('asset_assignment', 'asset_assignments')


def normalize_entity_type(entity_type):
    """Lower-cased entity type, 'unknown' when missing"""
    if not entity_type or not isinstance(entity_type, str):
        return 'unknown'
    return entity_type.strip().lower() or 'unknown'


def classify(entity_type):
    """Map a free-form entity type to its EntityKind (never fails)"""
    return ENTITY_KINDS.get(normalize_entity_type(entity_type), EntityKind.OTHER)


def category_label(entity_type):
    """
    Display category for an entity type.

    Known kinds map to a fixed label; anything else is title-cased
    word by word ("widget_thing" -> "Widget Thing").
    """
    kind = classify(entity_type)
    if kind in CATEGORY_LABELS:
        return CATEGORY_LABELS[kind]
    return titleize_identifier(normalize_entity_type(entity_type)) or 'Unknown'


def is_assignment_entity(entity_type):
    """Asset assignment records reference the asset through their payload"""
    return normalize_entity_type(entity_type) in ASSIGNMENT_ENTITY_TYPES
