"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from datetime import datetime

from common.utils import format_name


@dataclass
class ChangeRecordDTO:
    """
    Raw change record as read from the audit log table.

    Both the current column names and the legacy ones (operation,
    table_name, record_id) are carried; before/after states are left
    exactly as stored (dict, JSON string, or None).
    """
    id: str = ""
    actor_user_id: Optional[str] = None
    action: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    operation: Optional[str] = None
    table_name: Optional[str] = None
    record_id: Optional[str] = None
    before_state: Any = None
    after_state: Any = None
    metadata: Any = None
    department: Optional[str] = None
    occurred_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ChangeRecordDTO":
        """Build from an audit_logs row dict (values() or raw client rows)"""
        def text(key):
            value = row.get(key)
            return str(value) if value not in (None, "") else None

        return cls(
            id=str(row.get("id") or ""),
            actor_user_id=text("user_id"),
            action=text("action"),
            entity_type=text("entity_type"),
            entity_id=text("entity_id"),
            operation=text("operation"),
            table_name=text("table_name"),
            record_id=text("record_id"),
            before_state=row.get("old_values"),
            after_state=row.get("new_values"),
            metadata=row.get("metadata"),
            department=text("department"),
            occurred_at=row.get("created_at"),
        )


@dataclass
class PersonSummaryDTO:
    """Resolved user/profile summary"""
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    company_email: str = ""
    employee_number: Optional[str] = None
    department: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{format_name(self.first_name)} {format_name(self.last_name)}".strip()

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PersonSummaryDTO":
        return cls(
            id=str(row.get("id") or ""),
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            company_email=row.get("company_email") or "",
            employee_number=row.get("employee_number") or None,
            department=row.get("department") or None,
        )


@dataclass
class NamedEntityDTO:
    """Department, payment category and other id/name lookups"""
    id: str = ""
    name: str = ""


@dataclass
class AssetInfoDTO:
    """Asset plus its current assignment"""
    asset_name: str = ""
    unique_code: Optional[str] = None
    serial_number: Optional[str] = None
    assignment_type: Optional[str] = None
    assigned_to: Optional[str] = None
    assigned_to_user: Optional[PersonSummaryDTO] = None


@dataclass
class TaskInfoDTO:
    """Task summary"""
    title: str = ""
    assigned_to: Optional[str] = None
    assigned_to_user: Optional[PersonSummaryDTO] = None


@dataclass
class DeviceInfoDTO:
    """Device summary"""
    device_name: str = ""
    assigned_to: Optional[str] = None
    assigned_to_user: Optional[PersonSummaryDTO] = None


@dataclass
class PaymentInfoDTO:
    """Department payment summary"""
    title: str = ""
    amount: Optional[float] = None
    currency: Optional[str] = None
    department_name: Optional[str] = None


@dataclass
class DocumentInfoDTO:
    """Payment document summary"""
    file_name: str = ""
    document_type: Optional[str] = None
    payment_id: Optional[str] = None
    department_name: Optional[str] = None


@dataclass
class LeaveRequestInfoDTO:
    """Leave request summary (also used for approvals of that request)"""
    user_id: Optional[str] = None
    leave_type_name: str = "Leave"
    requester_user: Optional[PersonSummaryDTO] = None


@dataclass
class ResolvedLogEntryDTO:
    """Denormalized, display-ready audit log entry"""
    id: str = ""
    actor_user_id: Optional[str] = None
    action: str = "unknown"
    entity_type: str = "unknown"
    entity_id: Optional[str] = None
    before_state: Dict[str, Any] = field(default_factory=dict)
    after_state: Dict[str, Any] = field(default_factory=dict)
    occurred_at: Optional[datetime] = None
    department: Optional[str] = None

    actor: Optional[PersonSummaryDTO] = None
    target_user: Optional[PersonSummaryDTO] = None
    asset_info: Optional[AssetInfoDTO] = None
    task_info: Optional[TaskInfoDTO] = None
    device_info: Optional[DeviceInfoDTO] = None
    payment_info: Optional[PaymentInfoDTO] = None
    document_info: Optional[DocumentInfoDTO] = None
    department_info: Optional[NamedEntityDTO] = None
    category_info: Optional[NamedEntityDTO] = None
    leave_request_info: Optional[LeaveRequestInfoDTO] = None

    category: str = "Unknown"
    target: str = "-"
    object_identifier: str = "-"
    department_or_location: str = "-"
    performed_by: str = "N/A"
