"""Tests for the ORM repositories and the ORM-backed lookup source."""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from audit.lookups import OrmLookupSource
from audit.models import AuditLog
from audit.repositories import AuditLogRepository
from audit.resolver import resolve_audit_trail
from departments.models import Department
from finance.models import DepartmentPayment, PaymentDocument
from inventory.models import Asset, AssetAssignment
from inventory.repositories import AssetAssignmentRepository
from leave.models import LeaveApproval, LeaveRequest, LeaveType
from users.repositories import ProfileRepository

pytestmark = pytest.mark.django_db

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def jane():
    return get_user_model().objects.create_user(
        username="jane", first_name="jane", last_name="doe",
        company_email="jane.doe@example.com", employee_number="EMP-001", department="Engineering",
    )


@pytest.fixture
def omar():
    return get_user_model().objects.create_user(
        username="omar", first_name="Omar", last_name="Bello",
        company_email="omar.bello@example.com", department="Finance",
    )


class TestProfileRepository:
    def test_get_by_ids_returns_string_ids(self, jane, omar):
        rows = ProfileRepository().get_by_ids([str(jane.id)])
        assert rows == [{
            "id": str(jane.id),
            "first_name": "jane",
            "last_name": "doe",
            "company_email": "jane.doe@example.com",
            "employee_number": "EMP-001",
            "department": "Engineering",
        }]

    def test_get_by_ids_empty(self):
        assert ProfileRepository().get_by_ids([]) == []

    def test_directory_lists_active_users(self, jane, omar):
        omar.is_active = False
        omar.save()
        assert ProfileRepository().directory() == [
            {"id": str(jane.id), "first_name": "jane", "last_name": "doe", "department": "Engineering"},
        ]


class TestAssetAssignments:
    def test_latest_current_row_wins(self, jane, omar):
        asset_id = uuid.uuid4()
        AssetAssignment.objects.create(asset_id=asset_id, assigned_to=jane.id, assigned_at=T0)
        AssetAssignment.objects.create(asset_id=asset_id, assigned_to=omar.id, assigned_at=T0 + timedelta(days=1))
        AssetAssignment.objects.create(
            asset_id=asset_id, assigned_to=jane.id, assigned_at=T0 + timedelta(days=2), is_current=False
        )

        [row] = AssetAssignmentRepository().current_for_assets([str(asset_id)])
        assert row["asset_id"] == str(asset_id)
        assert row["assigned_to"] == str(omar.id)

    def test_no_current_row(self):
        asset_id = uuid.uuid4()
        AssetAssignment.objects.create(asset_id=asset_id, is_current=False)
        assert AssetAssignmentRepository().current_for_assets([str(asset_id)]) == []


class TestJoinedLookups:
    def test_payment_and_document_department_names(self):
        department = Department.objects.create(name="Operations")
        payment = DepartmentPayment.objects.create(title="Diesel", amount=Decimal("120.50"), department=department)
        document = PaymentDocument.objects.create(payment=payment, file_name="receipt.pdf")
        source = OrmLookupSource()

        [payment_row] = source.fetch_payments([str(payment.id)])
        assert payment_row["department_name"] == "Operations"
        assert payment_row["amount"] == Decimal("120.50")

        [document_row] = source.fetch_documents([str(document.id)])
        assert document_row["department_name"] == "Operations"
        assert document_row["payment_id"] == str(payment.id)

    def test_leave_type_name_and_approval(self, jane):
        leave_type = LeaveType.objects.create(name="Sick")
        request = LeaveRequest.objects.create(user_id=jane.id, leave_type=leave_type)
        approval = LeaveApproval.objects.create(leave_request=request)
        source = OrmLookupSource()

        [request_row] = source.fetch_leave_requests([str(request.id)])
        assert request_row == {"id": str(request.id), "user_id": str(jane.id), "leave_type_name": "Sick"}
        assert source.fetch_leave_approvals([str(approval.id)]) == [
            {"id": str(approval.id), "leave_request_id": str(request.id)},
        ]


class TestAuditLogRepository:
    def test_recent_newest_first_with_limit_and_exclusions(self, jane):
        for offset, action in enumerate(["create", "update", "MIGRATE", "delete"]):
            AuditLog.objects.create(
                user_id=jane.id, action=action, entity_type="tasks", created_at=T0 + timedelta(hours=offset)
            )

        records = AuditLogRepository().recent(limit=2, exclude_actions=["migrate"])
        assert [record.action for record in records] == ["delete", "update"]
        assert records[0].actor_user_id == str(jane.id)
        assert records[0].occurred_at == T0 + timedelta(hours=3)

    def test_recent_carries_legacy_columns(self):
        AuditLog.objects.create(
            operation="UPDATE", table_name="profiles", record_id="abc",
            metadata={"new_values": {"first_name": "x"}},
        )
        [record] = AuditLogRepository().recent()
        assert record.action is None
        assert record.operation == "UPDATE"
        assert record.table_name == "profiles"
        assert record.metadata == {"new_values": {"first_name": "x"}}


def test_orm_source_end_to_end(jane, omar):
    asset = Asset.objects.create(asset_name="Laptop", unique_code="LT-7", assignment_type="individual")
    AssetAssignment.objects.create(asset_id=asset.id, assigned_to=omar.id)
    AuditLog.objects.create(
        user_id=omar.id, action="assign", entity_type="asset_assignment",
        new_values={"asset_id": str(asset.id), "assigned_to": str(jane.id)}, created_at=T0,
    )
    AuditLog.objects.create(
        user_id=omar.id, action="update", entity_type="assets", entity_id=str(asset.id),
        created_at=T0 + timedelta(hours=1),
    )

    records = AuditLogRepository().recent()
    update, assign = resolve_audit_trail(records, OrmLookupSource(), max_workers=1)

    assert assign.target == "Jane Doe"
    assert assign.object_identifier == "LT-7"
    assert assign.performed_by == "Omar Bello"
    assert update.target == "-"
    assert update.asset_info.assigned_to_user.full_name == "Omar Bello"
