"""
Logging configuration with request ID support

The request ID lives in thread-local storage. Work handed to a thread pool
(the audit trail's batched lookups) is wrapped with carry_request_id so its
log lines keep the ID of the request that triggered it.
"""
import functools
import logging
import threading
import uuid

_thread_local = threading.local()


def get_request_id():
    """Request ID bound to the current thread, or None"""
    return getattr(_thread_local, 'request_id', None)


def set_request_id(request_id):
    """Bind (or with None, clear) the request ID for the current thread"""
    if request_id is None:
        try:
            delattr(_thread_local, 'request_id')
        except AttributeError:
            pass
    else:
        _thread_local.request_id = request_id


def carry_request_id(func):
    """
    Wrap func so it runs with the caller's request ID bound, even on
    another thread. The worker's previous binding is restored afterwards.
    """
    request_id = get_request_id()

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        previous = get_request_id()
        set_request_id(request_id)
        try:
            return func(*args, **kwargs)
        finally:
            set_request_id(previous)

    return wrapper


class RequestIDFilter(logging.Filter):
    """
    Logging filter to add request ID to log records
    """
    def filter(self, record):
        request_id = getattr(record, 'request_id', None) or get_request_id()
        record.request_id = request_id or 'N/A'
        return True


class RequestIDMiddleware:
    """
    Middleware to generate and attach unique request ID to each request.
    Request ID is available in request.request_id and in all log messages.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        # Honour an upstream proxy's ID, otherwise a short 8-character one
        request_id = request.META.get('HTTP_X_REQUEST_ID') or str(uuid.uuid4())[:8]
        request.request_id = request_id
        set_request_id(request_id)

        try:
            response = self.get_response(request)
        finally:
            set_request_id(None)

        response['X-Request-ID'] = request_id
        return response

    def process_exception(self, request, exception):
        """Log exceptions with request ID"""
        request_id = getattr(request, 'request_id', 'N/A')
        logger = logging.getLogger('django.request')
        logger.error(
            f"[{request_id}] Exception: {type(exception).__name__}: {str(exception)}",
            exc_info=True,
            extra={'request_id': request_id}
        )
