import uuid

from django.db import models
from django.utils import timezone

from core.constants import AssignmentType


class Asset(models.Model):
    """Company asset (laptop, vehicle, furniture...)"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    asset_name = models.CharField(max_length=255)
    asset_type = models.CharField(max_length=100, blank=True)
    unique_code = models.CharField(max_length=50, blank=True, db_index=True)
    serial_number = models.CharField(max_length=100, blank=True)
    assignment_type = models.CharField(
        max_length=20,
        choices=AssignmentType.CHOICES,
        blank=True,
        help_text="Who the asset is issued to"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['asset_name']
        verbose_name = "Asset"
        verbose_name_plural = "Assets"
        db_table = 'assets'

    def __str__(self):
        return f"{self.asset_name} ({self.unique_code or 'no code'})"


class AssetAssignment(models.Model):
    """
    Assignment history for an asset.

    Exactly one row per asset is expected to carry is_current=True;
    older rows are kept as history.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    asset_id = models.UUIDField(db_index=True)
    assigned_to = models.UUIDField(null=True, blank=True, help_text="Profile id for individual assignments")
    assignment_type = models.CharField(max_length=20, choices=AssignmentType.CHOICES, default=AssignmentType.INDIVIDUAL)
    department = models.CharField(max_length=100, blank=True)
    office_location = models.CharField(max_length=100, blank=True)
    is_current = models.BooleanField(default=True, db_index=True)
    assigned_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-assigned_at']
        verbose_name = "Asset Assignment"
        verbose_name_plural = "Asset Assignments"
        db_table = 'asset_assignments'
        indexes = [
            models.Index(fields=['asset_id', 'is_current'], name='asset_assign_current_idx'),
        ]

    def __str__(self):
        return f"Asset {self.asset_id} -> {self.assigned_to or self.department or self.office_location}"


class Device(models.Model):
    """Legacy device register (pre-dates assets)"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    device_name = models.CharField(max_length=255)
    serial_number = models.CharField(max_length=100, blank=True)
    assigned_to = models.UUIDField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['device_name']
        verbose_name = "Device"
        verbose_name_plural = "Devices"
        db_table = 'devices'

    def __str__(self):
        return self.device_name
