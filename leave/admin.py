from django.contrib import admin
from .models import LeaveType, LeaveRequest, LeaveApproval


@admin.register(LeaveType)
class LeaveTypeAdmin(admin.ModelAdmin):
    list_display = ['name']


class LeaveApprovalInline(admin.TabularInline):
    model = LeaveApproval
    extra = 0


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'user_id', 'leave_type', 'start_date', 'end_date', 'status', 'created_at']
    list_filter = ['status', 'leave_type']
    inlines = [LeaveApprovalInline]
