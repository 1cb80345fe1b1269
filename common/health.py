"""
Health Check Endpoints for OpsDesk

- /health/        liveness (is the app running?)
- /health/ready/  readiness (database reachable, audit trail table present)
- /health/deep/   row counts and latencies, use sparingly
"""

import time
import logging
from django.http import JsonResponse
from django.db import connection
from django.views.decorators.http import require_GET
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)


def _timed(check):
    """Run check(); return (ok, latency_ms, error)"""
    start = time.time()
    try:
        check()
    except Exception as e:
        logger.error(f'Health check - {getattr(check, "__name__", "check")} error: {e}')
        return False, None, str(e)
    return True, round((time.time() - start) * 1000, 2), None


def _ping_database():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        cursor.fetchone()


def _audit_table_present():
    from audit.models import AuditLog
    if AuditLog._meta.db_table not in connection.introspection.table_names():
        raise LookupError(f"table '{AuditLog._meta.db_table}' not found")


@csrf_exempt
@require_GET
def health_check(request):
    """
    Basic health check - returns 200 if app is running.
    Used by load balancers and container orchestration.
    """
    return JsonResponse({
        'status': 'healthy',
        'timestamp': time.time(),
    })


@csrf_exempt
@require_GET
def readiness_check(request):
    """
    Readiness check - the audit trail can only be served once the
    database answers and its change-record table exists.
    """
    checks = {}
    errors = []
    for name, check in (('database', _ping_database), ('audit_logs', _audit_table_present)):
        ok, _, error = _timed(check)
        checks[name] = ok
        if error:
            errors.append(f'{name}: {error}')

    ready = all(checks.values())
    return JsonResponse({
        'status': 'ready' if ready else 'not_ready',
        'timestamp': time.time(),
        'checks': checks,
        'errors': errors or None,
    }, status=200 if ready else 503)


@csrf_exempt
@require_GET
def deep_health_check(request):
    """
    Deep health check - database latency and row counts of the tables the
    audit trail resolves against.
    """
    from django.contrib.auth import get_user_model
    from audit.models import AuditLog
    from inventory.models import Asset

    ok, latency, error = _timed(_ping_database)
    checks = {'database': {'status': ok, 'latency_ms': latency}}
    errors = [f'Database: {error}'] if error else []

    try:
        checks['models'] = {'status': True, 'details': {
            'users': get_user_model().objects.count(),
            'assets': Asset.objects.count(),
            'audit_logs': AuditLog.objects.count(),
        }}
    except Exception as e:
        checks['models'] = {'status': False, 'details': {}}
        errors.append(f'Models: {str(e)}')
        logger.error(f'Deep health check - Model error: {e}')

    healthy = checks['database']['status']
    return JsonResponse({
        'status': 'healthy' if healthy else 'unhealthy',
        'timestamp': time.time(),
        'checks': checks,
        'errors': errors or None,
    }, status=200 if healthy else 503)


def get_health_urls():
    """
    Returns URL patterns for health endpoints.
    Add to your urls.py:
        from common.health import get_health_urls
        urlpatterns += get_health_urls()
    """
    from django.urls import path

    return [
        path('health/', health_check, name='health_check'),
        path('health/ready/', readiness_check, name='readiness_check'),
        path('health/deep/', deep_health_check, name='deep_health_check'),
    ]
