from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Employee profiles.

    Role controls audit trail access:
    - admin: sees every change record
    - lead: sees change records made by staff in their lead departments
    - staff: no audit trail access
    """
    list_display = ['username', 'first_name', 'last_name', 'company_email', 'employee_number', 'department', 'role', 'is_active']
    list_filter = ['role', 'department', 'is_active']
    search_fields = ['username', 'first_name', 'last_name', 'company_email', 'employee_number']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Employee Information', {
            'fields': ('company_email', 'employee_number', 'department', 'office_location', 'role', 'lead_departments'),
            'description': 'Leads only see audit logs for staff in their lead departments.'
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Employee Information', {
            'fields': ('company_email', 'employee_number', 'department', 'role'),
        }),
    )
