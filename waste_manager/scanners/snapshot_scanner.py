from typing import List, Dict, Any

from .base_scanner import BaseScanner
from ..types import Resource, ResourceType, SnapshotDetails
from ..type_defs import BotoClient, SnapshotRecord


class SnapshotScanner(BaseScanner):
    """Scanner for EBS snapshots owned by the calling account."""

    client_service = 'ec2'

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType.SNAPSHOT

    def fetch_records(self, client: BotoClient) -> List[Dict[str, Any]]:
        response = client.describe_snapshots(OwnerIds=['self'])
        return list(response.get('Snapshots', []))

    def to_resource(self, record: SnapshotRecord) -> Resource:
        return self.build_resource(
            resource_id=record.get('SnapshotId', ''),
            tags=record.get('Tags'),
            state=record.get('State', ''),
            launched=record.get('StartTime'),
            details=SnapshotDetails(snapshot_size=record.get('VolumeSize', 0))
        )
