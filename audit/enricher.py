"""
Per-record enrichment: turns one change record plus the batch lookup maps
into a display-ready ResolvedLogEntryDTO.

Target, object identifier and category each dispatch once on EntityKind.
Every accessor goes through audit.payload, so a malformed historical row
degrades to "-" / "Unknown" instead of raising.
"""

from audit.classifier import EntityKind, category_label
from audit.extractor import DEPARTMENT_KEYS, PERSON_KEYS, assignment_asset_id, canonicalize
from audit.payload import first_identifier, first_text, get_flag, get_text, is_identifier
from core.constants import AssignmentType, AuditDisplay
from core.dto import NamedEntityDTO, ResolvedLogEntryDTO
from common.utils import capitalize_first, format_name, truncate

# Kinds whose after-state assigned_to names the person acted on
_ASSIGNEE_KINDS = (EntityKind.ASSET, EntityKind.TASK, EntityKind.DEVICE)


def _name(person):
    """Formatted full name, or None"""
    if person is None:
        return None
    return person.full_name or None


# ============================================================================
# RESOLVED OBJECTS
# ============================================================================

def _target_user(canonical, maps):
    """
    The person recorded as acted on.

    Only what the record itself captured counts. An asset's current holder
    is deliberately not consulted: showing today's owner on a historical
    event would misattribute it.
    """
    if canonical.kind in _ASSIGNEE_KINDS:
        return maps.user(first_identifier((canonical.after, 'assigned_to')))
    if canonical.kind is EntityKind.EMPLOYEE:
        user = maps.user(canonical.entity_id)
        if user is None and canonical.entity_type == 'admin_action':
            user = maps.user(first_identifier(
                (canonical.after, 'target_user_id'),
                (canonical.before, 'target_user_id'),
            ))
        return user
    return None


def _department_id(canonical):
    return first_identifier(*[
        (state, key)
        for key in DEPARTMENT_KEYS
        for state in (canonical.after, canonical.before)
    ])


def _department_info(canonical, maps):
    if canonical.kind is EntityKind.DEPARTMENT:
        return maps.departments.get(canonical.entity_id)
    department_id = _department_id(canonical)
    if department_id:
        return maps.departments.get(department_id)
    if canonical.kind is EntityKind.PAYMENT:
        payment = maps.payments.get(canonical.entity_id)
        if payment and payment.department_name:
            return NamedEntityDTO(name=payment.department_name)
    return None


def _attach_infos(entry, canonical, maps):
    entity_id = canonical.entity_id
    kind = canonical.kind
    if kind is EntityKind.ASSET:
        entry.asset_info = maps.assets.get(assignment_asset_id(canonical))
    elif kind is EntityKind.TASK:
        entry.task_info = maps.tasks.get(entity_id)
    elif kind is EntityKind.DEVICE:
        entry.device_info = maps.devices.get(entity_id)
    elif kind is EntityKind.PAYMENT:
        entry.payment_info = maps.payments.get(entity_id)
    elif kind is EntityKind.PAYMENT_DOCUMENT:
        entry.document_info = maps.documents.get(entity_id)
    elif kind is EntityKind.PAYMENT_CATEGORY:
        entry.category_info = maps.categories.get(entity_id)
    elif kind in (EntityKind.LEAVE_REQUEST, EntityKind.LEAVE_APPROVAL):
        entry.leave_request_info = maps.leave_requests.get(entity_id)
    entry.department_info = _department_info(canonical, maps)


# ============================================================================
# LABEL INJECTION
# ============================================================================

def _inject_labels(canonical, maps):
    """
    Copies of (before, after) with resolved names added.

    A department id stored under ``department``/``department_id`` puts the
    department name in ``department``; a person id puts the person's name in
    ``assigned_to_name``. Empty states stay empty.
    """
    before = dict(canonical.before)
    after = dict(canonical.after)

    department_name = None
    department = maps.departments.get(_department_id(canonical) or '')
    if department:
        department_name = department.name
    if not department_name and canonical.kind in (EntityKind.PAYMENT, EntityKind.PAYMENT_DOCUMENT):
        if canonical.kind is EntityKind.PAYMENT:
            payment_id = canonical.entity_id
        else:
            payment_id = first_identifier((canonical.after, 'payment_id'), (canonical.before, 'payment_id'))
        payment = maps.payments.get(payment_id or '')
        department_name = payment.department_name if payment else None

    person_id = first_identifier(*[
        (state, key)
        for key in PERSON_KEYS
        for state in (canonical.after, canonical.before)
    ])
    person_name = _name(maps.user(person_id))

    for state in (before, after):
        if not state:
            continue
        if department_name:
            state['department'] = department_name
        if person_name:
            state['assigned_to_name'] = person_name
    return before, after


# ============================================================================
# TARGET
# ============================================================================

def _asset_target(entry):
    after, before = entry.after_state, entry.before_state
    person = _name(entry.target_user) or get_text(after, 'assigned_to_name')
    if person:
        return person

    assignment_type = first_text((after, 'assignment_type'), (before, 'assignment_type'))
    if not assignment_type and entry.asset_info:
        assignment_type = entry.asset_info.assignment_type
    if not assignment_type and (get_text(after, 'assigned_to') or get_text(before, 'assigned_to')):
        assignment_type = AssignmentType.INDIVIDUAL
    # An individual assignment without a captured person has no target
    if assignment_type == AssignmentType.INDIVIDUAL:
        return AuditDisplay.EMPTY

    department = first_text((after, 'department'), (before, 'department'))
    if department:
        return f"{department} (Dept)"
    location = first_text((after, 'office_location'), (before, 'office_location'))
    if location:
        return f"{location} (Location)"
    return AuditDisplay.EMPTY


def _assignee_target(info_attr):
    def resolve(entry):
        info = getattr(entry, info_attr)
        return _name(info.assigned_to_user if info else None) or _name(entry.target_user)
    return resolve


def _employee_target(entry):
    target = _name(entry.target_user)
    if target:
        return target
    first = get_text(entry.after_state, 'first_name')
    last = get_text(entry.after_state, 'last_name')
    if first and last:
        return f"{format_name(first)} {format_name(last)}"
    return None


def _requester(entry):
    info = entry.leave_request_info
    return _name(info.requester_user if info else None)


def _leave_request_target(entry):
    return _requester(entry) or _name(entry.target_user)


def _finance_target(entry):
    if entry.department_info and entry.department_info.name:
        return entry.department_info.name
    if entry.payment_info and entry.payment_info.department_name:
        return entry.payment_info.department_name
    return first_text(
        (entry.after_state, 'department_name'),
        (entry.after_state, 'department'),
        (entry.before_state, 'department'),
    )


def _department_target(entry):
    if entry.department_info:
        return entry.department_info.name or None
    return first_text((entry.after_state, 'name'), (entry.before_state, 'name'))


def _feedback_target(entry):
    if get_flag(entry.after_state, 'is_anonymous'):
        return AuditDisplay.ANONYMOUS
    return _name(entry.actor)


def _actor_target(entry):
    return _name(entry.actor)


TARGET_RESOLVERS = {
    EntityKind.ASSET: _asset_target,
    EntityKind.TASK: _assignee_target('task_info'),
    EntityKind.DEVICE: _assignee_target('device_info'),
    EntityKind.EMPLOYEE: _employee_target,
    EntityKind.LEAVE_REQUEST: _leave_request_target,
    EntityKind.LEAVE_APPROVAL: _requester,
    EntityKind.PAYMENT: _finance_target,
    EntityKind.PAYMENT_DOCUMENT: _finance_target,
    EntityKind.DEPARTMENT: _department_target,
    EntityKind.FEEDBACK: _feedback_target,
    EntityKind.DOCUMENTATION: _actor_target,
}


# ============================================================================
# OBJECT IDENTIFIER
# ============================================================================

def _asset_identifier(entry):
    info = entry.asset_info
    after, before = entry.after_state, entry.before_state
    code = (info.unique_code if info else None) or first_text(
        (after, 'unique_code'), (before, 'unique_code'),
        (after, 'asset_code'), (before, 'asset_code'),
    )
    if code and code not in ('null', AuditDisplay.EMPTY):
        return code
    return (info.asset_name if info else None) or first_text((after, 'asset_name'), (before, 'asset_name'))


def _employee_identifier(entry):
    after, before, target = entry.after_state, entry.before_state, entry.target_user
    number = first_text((after, 'employee_number'), (before, 'employee_number'))
    if not number and target:
        number = target.employee_number
    if number:
        return number
    email = first_text((after, 'company_email'), (before, 'company_email'))
    if not email and target:
        email = target.company_email
    if email:
        return email.split('@')[0]
    return _name(target)


def _task_identifier(entry):
    title = first_text((entry.after_state, 'title'), (entry.before_state, 'title'))
    if not title and entry.task_info:
        title = entry.task_info.title
    return truncate(title, AuditDisplay.TASK_TITLE_MAX) if title else None


def _payment_identifier(entry):
    title = first_text((entry.after_state, 'title'), (entry.before_state, 'title'))
    if not title and entry.payment_info:
        title = entry.payment_info.title
    title = title or get_text(entry.after_state, 'payment_reference')
    return truncate(title, AuditDisplay.PAYMENT_TITLE_MAX) if title else None


def _document_identifier(entry):
    file_name = first_text((entry.after_state, 'file_name'), (entry.before_state, 'file_name'))
    if not file_name and entry.document_info:
        file_name = entry.document_info.file_name
    return truncate(file_name, AuditDisplay.FILE_NAME_MAX) if file_name else None


def _device_identifier(entry):
    name = first_text((entry.after_state, 'device_name'), (entry.before_state, 'device_name'))
    return name or (entry.device_info.device_name if entry.device_info else None)


def _leave_identifier(entry):
    info = entry.leave_request_info
    return info.leave_type_name if info else None


def _department_identifier(entry):
    name = first_text((entry.after_state, 'name'), (entry.before_state, 'name'))
    return name or (entry.department_info.name if entry.department_info else None)


def _feedback_identifier(entry):
    feedback_type = first_text((entry.after_state, 'feedback_type'), (entry.before_state, 'feedback_type'))
    return capitalize_first(feedback_type) if feedback_type else None


IDENTIFIER_RESOLVERS = {
    EntityKind.ASSET: _asset_identifier,
    EntityKind.EMPLOYEE: _employee_identifier,
    EntityKind.TASK: _task_identifier,
    EntityKind.PAYMENT: _payment_identifier,
    EntityKind.PAYMENT_DOCUMENT: _document_identifier,
    EntityKind.DEVICE: _device_identifier,
    EntityKind.LEAVE_REQUEST: _leave_identifier,
    EntityKind.LEAVE_APPROVAL: _leave_identifier,
    EntityKind.DEPARTMENT: _department_identifier,
    EntityKind.FEEDBACK: _feedback_identifier,
}


# ============================================================================
# DEPARTMENT / LOCATION, PERFORMED BY
# ============================================================================

def _short_department(state):
    department = get_text(state, 'department')
    if department and len(department) < AuditDisplay.DEPARTMENT_LABEL_MAX:
        return department
    return None


def department_or_location(entry):
    """Best-effort department or office label, first non-empty source wins"""
    candidates = (
        entry.department,
        entry.department_info.name if entry.department_info else None,
        entry.payment_info.department_name if entry.payment_info else None,
        entry.document_info.department_name if entry.document_info else None,
        _short_department(entry.after_state),
        _short_department(entry.before_state),
        first_text((entry.after_state, 'office_location'), (entry.before_state, 'office_location')),
    )
    for candidate in candidates:
        if candidate:
            return candidate
    return AuditDisplay.EMPTY


def performed_by(entry, kind):
    if kind is EntityKind.FEEDBACK and get_flag(entry.after_state, 'is_anonymous'):
        return AuditDisplay.ANONYMOUS
    return _name(entry.actor) or AuditDisplay.NOT_AVAILABLE


# ============================================================================
# ENTRY POINT
# ============================================================================

def enrich_record(record, maps):
    """Build the resolved entry for one ChangeRecordDTO (never raises on bad payloads)"""
    canonical = canonicalize(record)
    entity_id = canonical.entity_id

    entry = ResolvedLogEntryDTO(
        id=record.id,
        actor_user_id=record.actor_user_id,
        action=canonical.action,
        entity_type=canonical.entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        occurred_at=record.occurred_at,
        department=record.department or None,
    )
    entry.actor = maps.user(record.actor_user_id) if is_identifier(record.actor_user_id) else None
    entry.target_user = _target_user(canonical, maps)
    _attach_infos(entry, canonical, maps)
    entry.before_state, entry.after_state = _inject_labels(canonical, maps)

    kind = canonical.kind
    entry.category = category_label(canonical.entity_type)
    resolve_target = TARGET_RESOLVERS.get(kind)
    entry.target = (resolve_target(entry) if resolve_target else None) or AuditDisplay.EMPTY
    resolve_identifier = IDENTIFIER_RESOLVERS.get(kind)
    entry.object_identifier = (resolve_identifier(entry) if resolve_identifier else None) or AuditDisplay.EMPTY
    entry.department_or_location = department_or_location(entry)
    entry.performed_by = performed_by(entry, kind)
    return entry
