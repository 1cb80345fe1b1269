"""
Base service classes.
Services contain business logic and orchestrate between repositories.
"""
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base service class providing common functionality.
    Services should contain business logic and use repositories for data access.
    """

    # Name of the settings dict holding this service's options
    settings_name = None
    defaults = {}

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_option(self, key):
        """Read an option from the service's settings dict, falling back to defaults"""
        configured = {}
        if self.settings_name:
            configured = getattr(settings, self.settings_name, None) or {}
        return configured.get(key, self.defaults.get(key))

    def log_info(self, message: str, **context):
        """Log info message with context"""
        self.logger.info(f"{message} | Context: {context}")

    def log_warning(self, message: str, **context):
        """Log warning message with context"""
        self.logger.warning(f"{message} | Context: {context}")

    def log_error(self, message: str, error: Exception = None, **context):
        """Log error message with context"""
        if error:
            self.logger.error(f"{message} | Context: {context}", exc_info=error)
        else:
            self.logger.error(f"{message} | Context: {context}")
