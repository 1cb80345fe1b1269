"""
Batched lookups for the audit trail.

Every referenced table is read once per resolution pass with a
``WHERE id IN (...)`` query. Independent reads run concurrently on a small
thread pool; the two dependent steps (leave requests found through
approvals, and users found through first-pass results) follow in order.

A failed read only empties the map for that table. The rest of the pass
carries on, so one broken table never blanks the whole audit trail.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict

from django.db import connections

from audit.payload import is_identifier
from common.logging_config import carry_request_id
from core.dto import (
    AssetInfoDTO,
    DeviceInfoDTO,
    DocumentInfoDTO,
    LeaveRequestInfoDTO,
    NamedEntityDTO,
    PaymentInfoDTO,
    PersonSummaryDTO,
    TaskInfoDTO,
)

logger = logging.getLogger(__name__)


# ============================================================================
# LOOKUP SOURCES
# ============================================================================

class LookupSource(ABC):
    """
    Batch-read interface over the reference tables.

    Every method takes an iterable of ids and returns a list of row dicts.
    Implementations may raise; the resolver treats any exception as
    "this table is unavailable for this pass".
    """

    @abstractmethod
    def fetch_profiles(self, ids):
        """Rows: id, first_name, last_name, company_email, employee_number, department"""

    @abstractmethod
    def fetch_assets(self, ids):
        """Rows: id, asset_name, unique_code, serial_number, assignment_type"""

    @abstractmethod
    def fetch_current_assignments(self, asset_ids):
        """Rows: asset_id, assigned_to, assignment_type (current assignment only, one per asset)"""

    @abstractmethod
    def fetch_tasks(self, ids):
        """Rows: id, title, assigned_to"""

    @abstractmethod
    def fetch_devices(self, ids):
        """Rows: id, device_name, assigned_to"""

    @abstractmethod
    def fetch_payments(self, ids):
        """Rows: id, title, amount, currency, department_name"""

    @abstractmethod
    def fetch_documents(self, ids):
        """Rows: id, file_name, document_type, payment_id, department_name"""

    @abstractmethod
    def fetch_departments(self, ids):
        """Rows: id, name"""

    @abstractmethod
    def fetch_categories(self, ids):
        """Rows: id, name"""

    @abstractmethod
    def fetch_leave_requests(self, ids):
        """Rows: id, user_id, leave_type_name"""

    @abstractmethod
    def fetch_leave_approvals(self, ids):
        """Rows: id, leave_request_id"""

    def release_thread_resources(self):
        """Called on a worker thread once its fetch is done"""


class OrmLookupSource(LookupSource):
    """LookupSource backed by the Django ORM repositories"""

    def __init__(self):
        from departments.repositories import DepartmentRepository
        from finance.repositories import (
            DepartmentPaymentRepository,
            PaymentCategoryRepository,
            PaymentDocumentRepository,
        )
        from inventory.repositories import AssetAssignmentRepository, AssetRepository, DeviceRepository
        from leave.repositories import LeaveApprovalRepository, LeaveRequestRepository
        from tasks.repositories import TaskRepository
        from users.repositories import ProfileRepository

        self.profiles = ProfileRepository()
        self.assets = AssetRepository()
        self.assignments = AssetAssignmentRepository()
        self.tasks = TaskRepository()
        self.devices = DeviceRepository()
        self.payments = DepartmentPaymentRepository()
        self.documents = PaymentDocumentRepository()
        self.departments = DepartmentRepository()
        self.categories = PaymentCategoryRepository()
        self.leave_requests = LeaveRequestRepository()
        self.leave_approvals = LeaveApprovalRepository()

    def fetch_profiles(self, ids):
        return self.profiles.get_by_ids(ids)

    def fetch_assets(self, ids):
        return self.assets.get_by_ids(ids)

    def fetch_current_assignments(self, asset_ids):
        return self.assignments.current_for_assets(asset_ids)

    def fetch_tasks(self, ids):
        return self.tasks.get_by_ids(ids)

    def fetch_devices(self, ids):
        return self.devices.get_by_ids(ids)

    def fetch_payments(self, ids):
        return self.payments.get_by_ids(ids)

    def fetch_documents(self, ids):
        return self.documents.get_by_ids(ids)

    def fetch_departments(self, ids):
        return self.departments.get_by_ids(ids)

    def fetch_categories(self, ids):
        return self.categories.get_by_ids(ids)

    def fetch_leave_requests(self, ids):
        return self.leave_requests.get_by_ids(ids)

    def fetch_leave_approvals(self, ids):
        return self.leave_approvals.get_by_ids(ids)

    def release_thread_resources(self):
        # Connections are per thread; pool threads must not leak them
        connections.close_all()


# ============================================================================
# LOOKUP MAPS
# ============================================================================

@dataclass
class LookupMaps:
    """id -> summary maps for one resolution pass; missing ids are simply absent"""
    users: Dict[str, PersonSummaryDTO] = field(default_factory=dict)
    assets: Dict[str, AssetInfoDTO] = field(default_factory=dict)
    tasks: Dict[str, TaskInfoDTO] = field(default_factory=dict)
    devices: Dict[str, DeviceInfoDTO] = field(default_factory=dict)
    payments: Dict[str, PaymentInfoDTO] = field(default_factory=dict)
    documents: Dict[str, DocumentInfoDTO] = field(default_factory=dict)
    departments: Dict[str, NamedEntityDTO] = field(default_factory=dict)
    categories: Dict[str, NamedEntityDTO] = field(default_factory=dict)
    # Keyed by leave request id and by leave approval id
    leave_requests: Dict[str, LeaveRequestInfoDTO] = field(default_factory=dict)

    def user(self, user_id):
        return self.users.get(user_id) if user_id else None


def _fetch(source, name, method, ids):
    """Run one batched read; failures degrade to an empty result"""
    ids = sorted(ids)
    if not ids:
        return []
    try:
        return list(method(ids) or [])
    except Exception as e:
        logger.warning(f"Audit lookup '{name}' failed for {len(ids)} ids, skipping enrichment: {e}", exc_info=True)
        return []


def _run_round(source, jobs, max_workers):
    """
    Run independent fetches, concurrently when allowed.

    jobs: {name: (method, ids)}. Returns {name: rows}.
    """
    active = {name: job for name, job in jobs.items() if job[1]}
    results = {name: [] for name in jobs}
    if not active:
        return results

    if max_workers <= 1 or len(active) == 1:
        for name, (method, ids) in active.items():
            results[name] = _fetch(source, name, method, ids)
        return results

    def work(name, method, ids):
        try:
            return _fetch(source, name, method, ids)
        finally:
            source.release_thread_resources()

    with ThreadPoolExecutor(max_workers=min(max_workers, len(active)), thread_name_prefix='audit-lookup') as pool:
        futures = {
            name: pool.submit(carry_request_id(work), name, method, ids)
            for name, (method, ids) in active.items()
        }
        for name, future in futures.items():
            results[name] = future.result()
    return results


def _index(rows, key='id'):
    """Map rows by a column, keeping the first row per key"""
    indexed = {}
    for row in rows:
        value = row.get(key)
        if value is not None:
            indexed.setdefault(str(value), row)
    return indexed


def _amount(value):
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def build_lookup_maps(refs, source, max_workers=4):
    """
    Resolve every id in refs against source.

    Round one reads all independent tables at once. Leave requests follow
    (approval ids only reveal their request ids after round one). Finally a
    single extra profile read covers users discovered through round-one
    rows: current asset assignees, task and device assignees, and leave
    requesters.
    """
    first = _run_round(source, {
        'profiles': (source.fetch_profiles, refs.users),
        'assets': (source.fetch_assets, refs.assets),
        'assignments': (source.fetch_current_assignments, refs.assets),
        'tasks': (source.fetch_tasks, refs.tasks),
        'devices': (source.fetch_devices, refs.devices),
        'payments': (source.fetch_payments, refs.payments),
        'documents': (source.fetch_documents, refs.documents),
        'departments': (source.fetch_departments, refs.departments),
        'categories': (source.fetch_categories, refs.categories),
        'leave_approvals': (source.fetch_leave_approvals, refs.leave_approvals),
    }, max_workers)

    approval_requests = {
        str(row['id']): str(row['leave_request_id'])
        for row in first['leave_approvals']
        if row.get('id') and row.get('leave_request_id')
    }
    leave_ids = set(refs.leave_requests) | set(approval_requests.values())
    leave_rows = _fetch(source, 'leave_requests', source.fetch_leave_requests, leave_ids)

    profile_rows = _index(first['profiles'])
    assignment_rows = _index(first['assignments'], key='asset_id')
    task_rows = _index(first['tasks'])
    device_rows = _index(first['devices'])

    discovered = set()
    for rows, key in (
        (assignment_rows.values(), 'assigned_to'),
        (task_rows.values(), 'assigned_to'),
        (device_rows.values(), 'assigned_to'),
        (leave_rows, 'user_id'),
    ):
        for row in rows:
            value = row.get(key)
            if value is not None and is_identifier(str(value)):
                discovered.add(str(value))
    missing = discovered - set(profile_rows)
    if missing:
        for row in _fetch(source, 'profiles (secondary)', source.fetch_profiles, missing):
            profile_rows.setdefault(str(row['id']), row)

    maps = LookupMaps()
    maps.users = {user_id: PersonSummaryDTO.from_row(row) for user_id, row in profile_rows.items()}

    for asset_id, row in _index(first['assets']).items():
        assignment = assignment_rows.get(asset_id) or {}
        assigned_to = assignment.get('assigned_to')
        assigned_to = str(assigned_to) if assigned_to else None
        maps.assets[asset_id] = AssetInfoDTO(
            asset_name=row.get('asset_name') or '',
            unique_code=row.get('unique_code') or None,
            serial_number=row.get('serial_number') or None,
            assignment_type=row.get('assignment_type') or assignment.get('assignment_type') or None,
            assigned_to=assigned_to,
            assigned_to_user=maps.user(assigned_to),
        )

    for task_id, row in task_rows.items():
        assigned_to = str(row['assigned_to']) if row.get('assigned_to') else None
        maps.tasks[task_id] = TaskInfoDTO(
            title=row.get('title') or '',
            assigned_to=assigned_to,
            assigned_to_user=maps.user(assigned_to),
        )

    for device_id, row in device_rows.items():
        assigned_to = str(row['assigned_to']) if row.get('assigned_to') else None
        maps.devices[device_id] = DeviceInfoDTO(
            device_name=row.get('device_name') or '',
            assigned_to=assigned_to,
            assigned_to_user=maps.user(assigned_to),
        )

    for payment_id, row in _index(first['payments']).items():
        maps.payments[payment_id] = PaymentInfoDTO(
            title=row.get('title') or '',
            amount=_amount(row.get('amount')),
            currency=row.get('currency') or None,
            department_name=row.get('department_name') or None,
        )

    for document_id, row in _index(first['documents']).items():
        maps.documents[document_id] = DocumentInfoDTO(
            file_name=row.get('file_name') or '',
            document_type=row.get('document_type') or None,
            payment_id=str(row['payment_id']) if row.get('payment_id') else None,
            department_name=row.get('department_name') or None,
        )

    for name, rows in (('departments', first['departments']), ('categories', first['categories'])):
        target = getattr(maps, name)
        for entity_id, row in _index(rows).items():
            target[entity_id] = NamedEntityDTO(id=entity_id, name=row.get('name') or '')

    for request_id, row in _index(leave_rows).items():
        requester_id = str(row['user_id']) if row.get('user_id') else None
        maps.leave_requests[request_id] = LeaveRequestInfoDTO(
            user_id=requester_id,
            leave_type_name=row.get('leave_type_name') or 'Leave',
            requester_user=maps.user(requester_id),
        )
    for approval_id, request_id in approval_requests.items():
        info = maps.leave_requests.get(request_id)
        if info:
            maps.leave_requests.setdefault(approval_id, info)

    return maps
