from typing import List, Dict, Any

from .base_scanner import BaseScanner
from ..types import Resource, ResourceType, VolumeDetails
from ..type_defs import BotoClient, EBSVolumeRecord


class VolumeScanner(BaseScanner):
    """Scanner for EBS volumes not attached to any instance."""

    client_service = 'ec2'

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType.VOLUME

    def fetch_records(self, client: BotoClient) -> List[Dict[str, Any]]:
        response = client.describe_volumes(
            Filters=[{'Name': 'status', 'Values': ['available']}]
        )
        return list(response.get('Volumes', []))

    def to_resource(self, record: EBSVolumeRecord) -> Resource:
        return self.build_resource(
            resource_id=record.get('VolumeId', ''),
            tags=record.get('Tags'),
            state=record.get('State', ''),
            launched=record.get('CreateTime'),
            details=VolumeDetails(
                volume_size=record.get('Size', 0),
                volume_type=record.get('VolumeType', '')
            )
        )
