"""
Inventory repositories - Data access layer for assets and devices.
"""
from typing import Dict, Any, Iterable, List
from core.repositories import BaseRepository
from .models import Asset, AssetAssignment, Device


class AssetRepository(BaseRepository[Asset]):
    """Repository for Asset model"""

    summary_fields = ('id', 'asset_name', 'unique_code', 'serial_number', 'assignment_type')

    def __init__(self):
        super().__init__(Asset)


class AssetAssignmentRepository(BaseRepository[AssetAssignment]):
    """Repository for AssetAssignment model"""

    summary_fields = ('id', 'asset_id', 'assigned_to', 'assignment_type', 'assigned_at')

    def __init__(self):
        super().__init__(AssetAssignment)

    def current_for_assets(self, asset_ids: Iterable[str]) -> List[Dict[str, Any]]:
        """
        Current assignment per asset, one row per asset.

        If bad data leaves several rows flagged current, the most recent wins.
        """
        asset_ids = list(asset_ids)
        if not asset_ids:
            return []

        rows = (
            self.get_all(asset_id__in=asset_ids, is_current=True)
            .order_by('-assigned_at')
            .values(*self.summary_fields)
        )

        latest = {}
        for row in rows:
            row = self._normalize(row)
            latest.setdefault(row['asset_id'], row)
        return list(latest.values())


class DeviceRepository(BaseRepository[Device]):
    """Repository for Device model"""

    summary_fields = ('id', 'device_name', 'assigned_to')

    def __init__(self):
        super().__init__(Device)
