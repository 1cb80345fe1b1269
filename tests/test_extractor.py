"""Tests for canonicalization and batched reference extraction."""

from audit.classifier import EntityKind
from audit.extractor import canonicalize, extract_references
from tests.factories import make_record, new_id


class TestCanonicalize:
    def test_legacy_columns_fill_missing_fields(self):
        record_id = new_id()
        record = make_record(operation="UPDATE", table_name="Assets", record_id=record_id)
        canonical = canonicalize(record)
        assert canonical.action == "update"
        assert canonical.entity_type == "assets"
        assert canonical.entity_id == record_id
        assert canonical.kind is EntityKind.ASSET

    def test_current_columns_win(self):
        record = make_record(action="Create", entity_type="tasks", operation="DELETE", table_name="assets")
        canonical = canonicalize(record)
        assert canonical.action == "create"
        assert canonical.entity_type == "tasks"

    def test_defaults(self):
        canonical = canonicalize(make_record())
        assert canonical.action == "unknown"
        assert canonical.entity_type == "unknown"
        assert canonical.kind is EntityKind.OTHER
        assert canonical.before == {}
        assert canonical.after == {}


class TestExtractReferences:
    def test_actor_and_profile_entity(self):
        actor, subject = new_id(), new_id()
        refs = extract_references([
            make_record(actor_user_id=actor, action="update", entity_type="profiles", entity_id=subject),
        ])
        assert refs.users == {actor, subject}

    def test_asset_assignment_pulls_asset_from_payload(self):
        assignment_id, asset_id, user_id = new_id(), new_id(), new_id()
        refs = extract_references([
            make_record(
                action="assign",
                entity_type="asset_assignment",
                entity_id=assignment_id,
                after_state={"asset_id": asset_id, "assigned_to": user_id},
            ),
        ])
        assert asset_id in refs.assets
        assert user_id in refs.users

    def test_plain_asset_uses_entity_id(self):
        asset_id = new_id()
        refs = extract_references([make_record(action="update", entity_type="assets", entity_id=asset_id)])
        assert refs.assets == {asset_id}

    def test_non_identifier_strings_are_ignored(self):
        refs = extract_references([
            make_record(
                actor_user_id="system",
                action="update",
                entity_type="tasks",
                entity_id="42",
                after_state={"assigned_to": "Jane Doe", "department": "Engineering"},
            ),
        ])
        assert refs.is_empty()

    def test_department_ids_from_both_states(self):
        old_department, new_department = new_id(), new_id()
        refs = extract_references([
            make_record(
                action="update",
                entity_type="profiles",
                before_state={"department_id": old_department},
                after_state='{"department": "%s"}' % new_department,
            ),
        ])
        assert refs.departments == {old_department, new_department}

    def test_document_payment_is_looked_up(self):
        document_id, payment_id = new_id(), new_id()
        refs = extract_references([
            make_record(
                action="create",
                entity_type="payment_documents",
                entity_id=document_id,
                after_state={"payment_id": payment_id},
            ),
        ])
        assert refs.documents == {document_id}
        assert refs.payments == {payment_id}

    def test_leave_and_finance_tables(self):
        ids = {name: new_id() for name in ("leave", "approval", "payment", "category", "task", "device", "dept")}
        refs = extract_references([
            make_record(entity_type="leave_requests", entity_id=ids["leave"]),
            make_record(entity_type="leave_approvals", entity_id=ids["approval"]),
            make_record(entity_type="department_payments", entity_id=ids["payment"]),
            make_record(entity_type="payment_categories", entity_id=ids["category"]),
            make_record(entity_type="tasks", entity_id=ids["task"]),
            make_record(entity_type="device_assignments", entity_id=ids["device"]),
            make_record(entity_type="departments", entity_id=ids["dept"]),
        ])
        assert refs.leave_requests == {ids["leave"]}
        assert refs.leave_approvals == {ids["approval"]}
        assert refs.payments == {ids["payment"]}
        assert refs.categories == {ids["category"]}
        assert refs.tasks == {ids["task"]}
        assert refs.devices == {ids["device"]}
        assert refs.departments == {ids["dept"]}

    def test_duplicates_collapse(self):
        actor = new_id()
        refs = extract_references([make_record(actor_user_id=actor) for _ in range(5)])
        assert refs.users == {actor}
