"""
Audit Trail Serializers

Resolved entries are plain dataclasses, not model instances, so these are
read-only Serializer classes rather than ModelSerializers.
"""

from rest_framework import serializers


class PersonSummarySerializer(serializers.Serializer):
    """Resolved actor / target person"""

    id = serializers.CharField(read_only=True)
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)
    full_name = serializers.CharField(read_only=True)
    company_email = serializers.CharField(read_only=True)
    employee_number = serializers.CharField(read_only=True, allow_null=True)


class ResolvedLogEntrySerializer(serializers.Serializer):
    """
    Serializer for ResolvedLogEntryDTO.

    Read-only: the audit trail cannot be written through the API.
    """

    id = serializers.CharField(read_only=True)
    occurred_at = serializers.DateTimeField(read_only=True, allow_null=True)
    action = serializers.CharField(read_only=True)
    entity_type = serializers.CharField(read_only=True)
    entity_id = serializers.CharField(read_only=True, allow_null=True)
    category = serializers.CharField(read_only=True)

    actor_user_id = serializers.CharField(read_only=True, allow_null=True)
    actor = PersonSummarySerializer(read_only=True, allow_null=True)
    performed_by = serializers.CharField(read_only=True)
    target_user = PersonSummarySerializer(read_only=True, allow_null=True)
    target = serializers.CharField(read_only=True)
    object_identifier = serializers.CharField(read_only=True)
    department_or_location = serializers.CharField(read_only=True)

    before_state = serializers.DictField(read_only=True)
    after_state = serializers.DictField(read_only=True)


class AuditStatsSerializer(serializers.Serializer):
    """Totals over the filtered trail"""

    total = serializers.IntegerField(read_only=True)
    creates = serializers.IntegerField(read_only=True)
    updates = serializers.IntegerField(read_only=True)
    deletes = serializers.IntegerField(read_only=True)
