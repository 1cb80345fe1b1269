import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models

from core.constants import UserRole


class User(AbstractUser):
    """Custom User model - employee profile (admin/lead/staff)"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company_email = models.EmailField(blank=True)
    employee_number = models.CharField(max_length=30, blank=True)
    department = models.CharField(max_length=100, blank=True)
    office_location = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.STAFF)
    lead_departments = models.JSONField(
        default=list,
        blank=True,
        help_text="Departments a lead may see in the audit trail"
    )

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        db_table = 'profiles'

    def __str__(self):
        return f"{self.get_full_name() or self.username} ({self.get_role_display()})"

    @property
    def scoped_departments(self):
        """Departments this user is limited to when viewing the audit trail"""
        return list(self.lead_departments or [])
