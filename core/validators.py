"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from datetime import date
from typing import Optional
from core.constants import DateRange
from core.exceptions import ValidationError as AppValidationError


class AuditFilterValidator:
    """Validates audit trail filter parameters"""

    @staticmethod
    def parse_date(value: Optional[str], field_name: str) -> Optional[date]:
        """Parse a YYYY-MM-DD query parameter"""
        if not value:
            return None
        try:
            return date.fromisoformat(value)
        except (TypeError, ValueError):
            raise AppValidationError(
                message=f"Invalid {field_name}: expected YYYY-MM-DD",
                code="INVALID_DATE",
                details={"field": field_name, "value": value}
            )

    @staticmethod
    def validate_date_range(date_range: str, start_date: Optional[date], end_date: Optional[date]):
        """Validate the preset name and custom bounds"""
        if date_range not in DateRange.CHOICES:
            raise AppValidationError(
                message=f"Unknown date range '{date_range}'",
                code="INVALID_DATE_RANGE",
                details={"allowed": DateRange.CHOICES}
            )

        if start_date and end_date and end_date < start_date:
            raise AppValidationError(
                message="End date cannot be before start date",
                code="INVALID_END_DATE"
            )
