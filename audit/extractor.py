"""
Batched reference extraction.

One pass over the whole batch collects every identifier that needs a
lookup, grouped by the table it lives in, so each table is read once
instead of once per record.
"""

from dataclasses import dataclass, field
from typing import Set

from audit.classifier import EntityKind, classify, is_assignment_entity
from audit.payload import extract_states, first_identifier, get_identifier, is_identifier

PERSON_KEYS = ('assigned_to', 'user_id', 'target_user_id')
DEPARTMENT_KEYS = ('department_id', 'department')


@dataclass
class CanonicalRecord:
    """Record fields after legacy-column fallback, shared by extraction and enrichment"""
    action: str
    entity_type: str
    entity_id: object
    kind: EntityKind
    before: dict
    after: dict


def canonicalize(record):
    """Fill canonical fields from legacy columns and decode payloads"""
    action = record.action or (record.operation or '').lower() or 'unknown'
    entity_type = record.entity_type or record.table_name or 'unknown'
    entity_id = record.entity_id or record.record_id
    before, after = extract_states(record.before_state, record.after_state, record.metadata)
    return CanonicalRecord(
        action=action.lower(),
        entity_type=entity_type.lower(),
        entity_id=entity_id,
        kind=classify(entity_type),
        before=before,
        after=after,
    )


def assignment_asset_id(canonical):
    """Asset referenced by an asset record (its own id, or asset_id for assignment rows)"""
    if is_assignment_entity(canonical.entity_type):
        return first_identifier(
            (canonical.after, 'asset_id'),
            (canonical.before, 'asset_id'),
        )
    return canonical.entity_id


@dataclass
class ReferenceSet:
    """Candidate ids per lookup table"""
    users: Set[str] = field(default_factory=set)
    assets: Set[str] = field(default_factory=set)
    tasks: Set[str] = field(default_factory=set)
    devices: Set[str] = field(default_factory=set)
    payments: Set[str] = field(default_factory=set)
    documents: Set[str] = field(default_factory=set)
    departments: Set[str] = field(default_factory=set)
    categories: Set[str] = field(default_factory=set)
    leave_requests: Set[str] = field(default_factory=set)
    leave_approvals: Set[str] = field(default_factory=set)

    def add(self, kind_name, value):
        """Add value to the named set if it is identifier-shaped"""
        if is_identifier(value):
            getattr(self, kind_name).add(value)

    def is_empty(self):
        return not any(getattr(self, name) for name in self.__dataclass_fields__)


# Kinds whose entity_id points straight into one lookup table
_ENTITY_TABLES = {
    EntityKind.EMPLOYEE: 'users',
    EntityKind.TASK: 'tasks',
    EntityKind.DEVICE: 'devices',
    EntityKind.PAYMENT: 'payments',
    EntityKind.PAYMENT_DOCUMENT: 'documents',
    EntityKind.DEPARTMENT: 'departments',
    EntityKind.PAYMENT_CATEGORY: 'categories',
    EntityKind.LEAVE_REQUEST: 'leave_requests',
    EntityKind.LEAVE_APPROVAL: 'leave_approvals',
}


def extract_references(records):
    """Scan change records once and collect every id that needs resolving"""
    refs = ReferenceSet()

    for record in records:
        canonical = canonicalize(record)
        refs.add('users', record.actor_user_id)

        table = _ENTITY_TABLES.get(canonical.kind)
        if table:
            refs.add(table, canonical.entity_id)

        if canonical.kind is EntityKind.ASSET:
            refs.add('assets', canonical.entity_id)
            refs.add('assets', assignment_asset_id(canonical))

        if canonical.kind is EntityKind.PAYMENT_DOCUMENT:
            refs.add('payments', first_identifier(
                (canonical.after, 'payment_id'),
                (canonical.before, 'payment_id'),
            ))

        for state in (canonical.after, canonical.before):
            for key in PERSON_KEYS:
                refs.add('users', get_identifier(state, key))
            for key in DEPARTMENT_KEYS:
                refs.add('departments', get_identifier(state, key))

    return refs
