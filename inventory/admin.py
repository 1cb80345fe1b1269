from django.contrib import admin
from .models import Asset, AssetAssignment, Device


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['asset_name', 'unique_code', 'asset_type', 'serial_number', 'assignment_type', 'created_at']
    list_filter = ['asset_type', 'assignment_type']
    search_fields = ['asset_name', 'unique_code', 'serial_number']


@admin.register(AssetAssignment)
class AssetAssignmentAdmin(admin.ModelAdmin):
    list_display = ['asset_id', 'assigned_to', 'assignment_type', 'department', 'office_location', 'is_current', 'assigned_at']
    list_filter = ['assignment_type', 'is_current']
    date_hierarchy = 'assigned_at'


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ['device_name', 'serial_number', 'assigned_to', 'created_at']
    search_fields = ['device_name', 'serial_number']
