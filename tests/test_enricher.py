"""Tests for per-record enrichment: targets, identifiers, labels."""

import pytest

from audit.enricher import enrich_record
from audit.lookups import LookupMaps
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
from tests.factories import make_record, new_id


def person(first_name, last_name, **extra):
    return PersonSummaryDTO(id=new_id(), first_name=first_name, last_name=last_name, **extra)


@pytest.fixture
def jane_doe():
    return person("jane", "doe", company_email="jane.doe@example.com", employee_number="EMP-7")


@pytest.fixture
def bob():
    return person("Bob", "Stone", company_email="bob.stone@example.com")


@pytest.fixture
def maps(jane_doe, bob):
    return LookupMaps(users={jane_doe.id: jane_doe, bob.id: bob})


class TestAssetTarget:
    def test_captured_assignee(self, maps, jane_doe):
        entry = enrich_record(
            make_record(action="assign", entity_type="asset_assignment",
                        after_state={"asset_id": new_id(), "assigned_to": jane_doe.id}),
            maps,
        )
        assert entry.target == "Jane Doe"
        assert entry.category == "Assets"

    def test_never_falls_back_to_current_owner(self, maps, bob):
        asset_id = new_id()
        maps.assets[asset_id] = AssetInfoDTO(
            asset_name="Laptop", unique_code="LT-9", assignment_type="individual",
            assigned_to=bob.id, assigned_to_user=bob,
        )
        entry = enrich_record(make_record(action="update", entity_type="assets", entity_id=asset_id), maps)
        assert entry.target == "-"
        assert entry.target_user is None
        assert entry.asset_info.assigned_to_user is bob

    def test_unresolvable_assignee_is_individual(self, maps):
        entry = enrich_record(
            make_record(action="assign", entity_type="assets", entity_id=new_id(),
                        after_state={"assigned_to": new_id(), "department": "Engineering"}),
            maps,
        )
        assert entry.target == "-"

    def test_assigned_to_name_in_payload(self, maps):
        entry = enrich_record(
            make_record(action="assign", entity_type="assets",
                        after_state={"assigned_to_name": "Legacy Person"}),
            maps,
        )
        assert entry.target == "Legacy Person"

    def test_department_assignment(self, maps):
        entry = enrich_record(
            make_record(action="assign", entity_type="assets",
                        after_state={"assignment_type": "department", "department": "Engineering"}),
            maps,
        )
        assert entry.target == "Engineering (Dept)"

    def test_office_assignment(self, maps):
        entry = enrich_record(
            make_record(action="assign", entity_type="assets",
                        after_state={"assignment_type": "office", "office_location": "Lagos HQ"}),
            maps,
        )
        assert entry.target == "Lagos HQ (Location)"
        assert entry.department_or_location == "Lagos HQ"

    def test_department_id_resolved_for_dept_label(self, maps):
        department_id = new_id()
        maps.departments[department_id] = NamedEntityDTO(id=department_id, name="Finance")
        entry = enrich_record(
            make_record(action="assign", entity_type="assets",
                        after_state={"assignment_type": "department", "department_id": department_id}),
            maps,
        )
        assert entry.after_state["department"] == "Finance"
        assert entry.target == "Finance (Dept)"


class TestAssetIdentifier:
    def test_unique_code_from_lookup(self, maps):
        asset_id = new_id()
        maps.assets[asset_id] = AssetInfoDTO(asset_name="Laptop", unique_code="LT-9")
        entry = enrich_record(make_record(entity_type="assets", entity_id=asset_id), maps)
        assert entry.object_identifier == "LT-9"

    def test_payload_code_then_name(self, maps):
        entry = enrich_record(
            make_record(entity_type="assets", after_state={"asset_code": "AC-1", "asset_name": "Chair"}), maps
        )
        assert entry.object_identifier == "AC-1"
        entry = enrich_record(
            make_record(entity_type="assets", after_state={"unique_code": "null", "asset_name": "Chair"}), maps
        )
        assert entry.object_identifier == "Chair"


class TestEmployee:
    def test_profile_target_and_employee_number(self, maps, jane_doe):
        entry = enrich_record(make_record(action="update", entity_type="profiles", entity_id=jane_doe.id), maps)
        assert entry.target == "Jane Doe"
        assert entry.object_identifier == "EMP-7"

    def test_email_local_part_without_employee_number(self, maps, bob):
        entry = enrich_record(make_record(action="update", entity_type="user", entity_id=bob.id), maps)
        assert entry.object_identifier == "bob.stone"

    def test_name_from_after_state(self, maps):
        entry = enrich_record(
            make_record(action="create", entity_type="pending_user",
                        after_state={"first_name": "ada", "last_name": "LOVELACE"}),
            maps,
        )
        assert entry.target == "Ada Lovelace"

    def test_admin_action_target_user_id(self, maps, bob):
        entry = enrich_record(
            make_record(action="update", entity_type="admin_action", after_state={"target_user_id": bob.id}),
            maps,
        )
        assert entry.target == "Bob Stone"
        assert entry.after_state["assigned_to_name"] == "Bob Stone"


class TestTaskAndDevice:
    def test_task_assignee_then_truncated_title(self, maps, bob):
        task_id = new_id()
        maps.tasks[task_id] = TaskInfoDTO(title="x", assigned_to=bob.id, assigned_to_user=bob)
        entry = enrich_record(
            make_record(action="update", entity_type="tasks", entity_id=task_id,
                        after_state={"title": "Reconcile every single vendor invoice for March"}),
            maps,
        )
        assert entry.target == "Bob Stone"
        assert entry.object_identifier == "Reconcile every single vendor ..."

    def test_task_falls_back_to_target_user(self, maps, jane_doe):
        entry = enrich_record(
            make_record(action="assign", entity_type="task", after_state={"assigned_to": jane_doe.id}), maps
        )
        assert entry.target == "Jane Doe"

    def test_device(self, maps, jane_doe):
        device_id = new_id()
        maps.devices[device_id] = DeviceInfoDTO(device_name="Pixel 7", assigned_to=jane_doe.id,
                                                assigned_to_user=jane_doe)
        entry = enrich_record(make_record(action="assign", entity_type="devices", entity_id=device_id), maps)
        assert entry.target == "Jane Doe"
        assert entry.object_identifier == "Pixel 7"
        assert entry.category == "Devices"


class TestFinance:
    def test_payment(self, maps):
        payment_id = new_id()
        maps.payments[payment_id] = PaymentInfoDTO(title="Generator diesel", amount=120.0, department_name="Operations")
        entry = enrich_record(make_record(action="create", entity_type="department_payments", entity_id=payment_id), maps)
        assert entry.target == "Operations"
        assert entry.object_identifier == "Generator diesel"
        assert entry.department_or_location == "Operations"
        assert entry.department_info.name == "Operations"

    def test_payment_reference_fallback(self, maps):
        entry = enrich_record(
            make_record(action="create", entity_type="department_payments",
                        after_state={"payment_reference": "REF-" + "9" * 60}),
            maps,
        )
        assert entry.object_identifier == "REF-" + "9" * 46 + "..."
        assert entry.target == "-"

    def test_document_department_from_parent_payment(self, maps):
        document_id, payment_id = new_id(), new_id()
        maps.payments[payment_id] = PaymentInfoDTO(title="Rent", department_name="Admin")
        maps.documents[document_id] = DocumentInfoDTO(file_name="receipt.pdf", payment_id=payment_id,
                                                      department_name="Admin")
        entry = enrich_record(
            make_record(action="create", entity_type="payment_documents", entity_id=document_id,
                        after_state={"payment_id": payment_id}),
            maps,
        )
        assert entry.after_state["department"] == "Admin"
        assert entry.target == "Admin"
        assert entry.object_identifier == "receipt.pdf"
        assert entry.department_or_location == "Admin"

    def test_category_has_no_target(self, maps):
        category_id = new_id()
        maps.categories[category_id] = NamedEntityDTO(id=category_id, name="Utilities")
        entry = enrich_record(make_record(action="create", entity_type="payment_categories", entity_id=category_id), maps)
        assert entry.target == "-"
        assert entry.category_info.name == "Utilities"
        assert entry.category == "Finance"


class TestLeave:
    def test_request_and_approval(self, maps, jane_doe):
        request_id, approval_id = new_id(), new_id()
        info = LeaveRequestInfoDTO(user_id=jane_doe.id, leave_type_name="Sick", requester_user=jane_doe)
        maps.leave_requests[request_id] = info
        maps.leave_requests[approval_id] = info
        for entity_type, entity_id in (("leave_requests", request_id), ("leave_approvals", approval_id)):
            entry = enrich_record(make_record(action="update", entity_type=entity_type, entity_id=entity_id), maps)
            assert entry.target == "Jane Doe"
            assert entry.object_identifier == "Sick"
            assert entry.category == "Leave"

    def test_unresolved_approval(self, maps):
        entry = enrich_record(make_record(action="update", entity_type="leave_approvals", entity_id=new_id()), maps)
        assert entry.target == "-"
        assert entry.object_identifier == "-"


class TestDepartmentFeedbackDocumentation:
    def test_department(self, maps):
        department_id = new_id()
        maps.departments[department_id] = NamedEntityDTO(id=department_id, name="Engineering")
        entry = enrich_record(make_record(action="update", entity_type="departments", entity_id=department_id), maps)
        assert entry.target == "Engineering"
        assert entry.object_identifier == "Engineering"

    def test_deleted_department_uses_payload_name(self, maps):
        entry = enrich_record(
            make_record(action="delete", entity_type="departments", entity_id=new_id(),
                        before_state={"name": "Logistics"}),
            maps,
        )
        assert entry.target == "Logistics"
        assert entry.object_identifier == "Logistics"

    def test_anonymous_feedback(self, maps, jane_doe):
        entry = enrich_record(
            make_record(actor_user_id=jane_doe.id, action="create", entity_type="feedback",
                        after_state={"is_anonymous": True, "feedback_type": "complaint"}),
            maps,
        )
        assert entry.target == "Anonymous"
        assert entry.performed_by == "Anonymous"
        assert entry.object_identifier == "Complaint"

    def test_named_feedback(self, maps, jane_doe):
        entry = enrich_record(
            make_record(actor_user_id=jane_doe.id, action="create", entity_type="feedback",
                        after_state={"feedback_type": "suggestion"}),
            maps,
        )
        assert entry.target == "Jane Doe"
        assert entry.performed_by == "Jane Doe"

    def test_documentation_targets_actor(self, maps, bob):
        entry = enrich_record(make_record(actor_user_id=bob.id, action="create", entity_type="user_documentation"), maps)
        assert entry.target == "Bob Stone"


class TestDepartmentOrLocation:
    def test_snapshot_column_first(self, maps):
        entry = enrich_record(
            make_record(entity_type="assets", department="Security", after_state={"department": "Engineering"}), maps
        )
        assert entry.department_or_location == "Security"

    def test_long_department_text_is_skipped(self, maps):
        entry = enrich_record(
            make_record(entity_type="assets", after_state={"department": "x" * 60, "office_location": "Abuja"}), maps
        )
        assert entry.department_or_location == "Abuja"

    def test_before_state_department(self, maps):
        entry = enrich_record(make_record(entity_type="tasks", before_state={"department": "HR"}), maps)
        assert entry.department_or_location == "HR"

    def test_nothing_known(self, maps):
        entry = enrich_record(make_record(entity_type="tasks"), maps)
        assert entry.department_or_location == "-"


class TestDegradation:
    def test_unknown_entity(self, maps):
        entry = enrich_record(make_record(action="poke", entity_type="widget_thing", entity_id="abc"), maps)
        assert entry.category == "Widget Thing"
        assert entry.target == "-"
        assert entry.object_identifier == "-"
        assert entry.performed_by == "N/A"

    @pytest.mark.parametrize(
        "before,after,metadata",
        [
            ("{broken", None, None),
            ("[1, 2, 3]", 42, "nope"),
            (None, None, {"new_values": ["not", "a", "dict"]}),
            ({"title": {"nested": True}}, {"assigned_to": ["x"]}, None),
        ],
    )
    def test_malformed_payloads(self, maps, before, after, metadata):
        for entity_type in ("assets", "tasks", "profiles", "feedback", "department_payments", "widget"):
            entry = enrich_record(
                make_record(action="update", entity_type=entity_type,
                            before_state=before, after_state=after, metadata=metadata),
                maps,
            )
            assert isinstance(entry.before_state, dict)
            assert isinstance(entry.after_state, dict)
            assert entry.target
            assert entry.object_identifier
            assert entry.category

    def test_actor_resolution(self, maps, jane_doe):
        entry = enrich_record(make_record(actor_user_id=jane_doe.id, action="update", entity_type="tasks"), maps)
        assert entry.actor is jane_doe
        assert entry.performed_by == "Jane Doe"

    def test_input_payload_not_mutated(self, maps, jane_doe):
        after = {"assigned_to": jane_doe.id}
        enrich_record(make_record(action="assign", entity_type="assets", after_state=after), maps)
        assert after == {"assigned_to": jane_doe.id}

    def test_empty_states_get_no_labels(self, maps, jane_doe):
        entry = enrich_record(
            make_record(action="assign", entity_type="assets", after_state={"assigned_to": jane_doe.id}), maps
        )
        assert entry.before_state == {}
        assert entry.after_state["assigned_to_name"] == "Jane Doe"
