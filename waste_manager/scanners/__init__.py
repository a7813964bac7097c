from .base_scanner import BaseScanner
from .compute_scanner import ComputeScanner
from .managed_db_scanner import ManagedDbScanner
from .volume_scanner import VolumeScanner
from .snapshot_scanner import SnapshotScanner

# Canonical output order of the aggregated listing
DEFAULT_SCANNERS = [
    ComputeScanner,
    ManagedDbScanner,
    VolumeScanner,
    SnapshotScanner
]

__all__ = [
    'BaseScanner',
    'ComputeScanner',
    'ManagedDbScanner',
    'VolumeScanner',
    'SnapshotScanner',
    'DEFAULT_SCANNERS'
]
