"""Tests for the AuditLog model and the record_change helper."""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied

from audit.helpers import record_change
from audit.models import AuditLog

pytestmark = pytest.mark.django_db


@pytest.fixture
def user():
    return get_user_model().objects.create_user(
        username="jdoe", password="pass12345", first_name="Jane", last_name="Doe", department="Engineering"
    )


class TestImmutability:
    def test_update_rejected(self):
        log = AuditLog.objects.create(action="create", entity_type="tasks")
        log.action = "delete"
        with pytest.raises(PermissionDenied):
            log.save()
        assert AuditLog.objects.get(pk=log.pk).action == "create"

    def test_delete_rejected(self):
        log = AuditLog.objects.create(action="create", entity_type="tasks")
        with pytest.raises(PermissionDenied):
            log.delete()
        assert AuditLog.objects.filter(pk=log.pk).exists()


class TestQuerySet:
    def test_excluding_actions_is_case_insensitive(self):
        AuditLog.objects.create(action="MIGRATE", entity_type="system")
        AuditLog.objects.create(action="sync", entity_type="system")
        kept = AuditLog.objects.create(action="update", entity_type="tasks")
        assert list(AuditLog.objects.excluding_actions(["migrate", "SYNC"])) == [kept]

    def test_excluding_nothing(self):
        AuditLog.objects.create(action="sync")
        assert AuditLog.objects.excluding_actions([]).count() == 1

    def test_for_entity(self):
        entity_id = str(uuid.uuid4())
        log = AuditLog.objects.create(action="update", entity_type="assets", entity_id=entity_id)
        AuditLog.objects.create(action="update", entity_type="assets", entity_id=str(uuid.uuid4()))
        assert list(AuditLog.objects.for_entity("assets", entity_id)) == [log]


class TestRecordChange:
    def test_records_with_user_department(self, user):
        asset_id = uuid.uuid4()
        log = record_change(
            user,
            "ASSIGN",
            "asset_assignments",
            entity_id=asset_id,
            after={"asset_id": asset_id, "cost": Decimal("99.50"), "since": date(2024, 5, 1)},
        )
        log.refresh_from_db()
        assert log.user_id == user.id
        assert log.action == "assign"
        assert log.entity_id == str(asset_id)
        assert log.department == "Engineering"
        assert log.old_values is None
        assert log.new_values == {"asset_id": str(asset_id), "cost": 99.5, "since": "2024-05-01"}

    def test_system_change(self):
        log = record_change(None, "create", "departments", after={"name": "Logistics"})
        assert log.user_id is None
        assert log.department is None

    def test_failure_returns_none(self, monkeypatch, caplog):
        def fail(**kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(AuditLog.objects, "create", fail)
        assert record_change(None, "create", "tasks") is None
        assert "Failed to create audit log" in caplog.text
