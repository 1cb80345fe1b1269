"""
Audit Trail API Views

Read-only access to the resolved audit trail, for admins and leads.
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from api.permissions import IsAuditViewer
from audit.filters import AuditLogFilter
from audit.serializers import AuditStatsSerializer, ResolvedLogEntrySerializer
from audit.services import AuditTrailService
from core.exceptions import (
    PermissionDeniedError,
    RecordStoreError,
    RecordStoreMissingError,
    ValidationError as AppValidationError,
)

logger = logging.getLogger(__name__)


def error_response(error):
    """Map service errors to responses that keep their distinguishing message"""
    if isinstance(error, AppValidationError):
        http_status = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, RecordStoreMissingError):
        http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(error, PermissionDeniedError):
        http_status = status.HTTP_403_FORBIDDEN
    else:
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response(
        {'detail': error.message, 'code': error.code},
        status=http_status
    )


class AuditLogViewSet(viewsets.ViewSet):
    """
    Read-only ViewSet for the resolved audit trail.

    Access Rules:
    - Admin: all entries, optional department filter
    - Lead: only entries by employees of the departments they lead

    Query params (all optional): search, action, entity_type, date_range
    (all/today/week/month/custom), start_date, end_date (YYYY-MM-DD),
    department, employee.
    """

    permission_classes = [IsAuditViewer]
    service_class = AuditTrailService

    def get_service(self):
        return self.service_class()

    def list(self, request):
        """
        Filtered trail plus stats.

        Example: GET /api/audit/logs/?action=update&date_range=week
        """
        try:
            audit_filter = AuditLogFilter.from_query_params(request.query_params)
            result = self.get_service().list_entries(request.user, audit_filter)
        except (AppValidationError, PermissionDeniedError, RecordStoreError) as e:
            return error_response(e)

        entries = result['entries']
        return Response({
            'count': len(entries),
            'limited': result['limited'],
            'stats': AuditStatsSerializer(result['stats']).data,
            'results': ResolvedLogEntrySerializer(entries, many=True).data,
        })

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """
        Totals over the filtered trail.

        Example: GET /api/audit/logs/stats/
        """
        try:
            audit_filter = AuditLogFilter.from_query_params(request.query_params)
            stats = self.get_service().stats(request.user, audit_filter)
        except (AppValidationError, PermissionDeniedError, RecordStoreError) as e:
            return error_response(e)
        return Response(AuditStatsSerializer(stats).data)

    @action(detail=False, methods=['get'], url_path='options')
    def filter_options(self, request):
        """
        Values for the filter dropdowns.

        Example: GET /api/audit/logs/options/
        """
        try:
            options = self.get_service().options(request.user)
        except (PermissionDeniedError, RecordStoreError) as e:
            return error_response(e)
        return Response(options)
