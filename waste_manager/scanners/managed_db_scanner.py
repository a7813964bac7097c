from typing import List, Dict, Any

from .base_scanner import BaseScanner
from ..types import Resource, ResourceType, ManagedDbDetails
from ..type_defs import BotoClient, DBInstanceRecord


class ManagedDbScanner(BaseScanner):
    """Scanner for stopped RDS instances."""

    client_service = 'rds'

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType.MANAGED_DB

    def fetch_records(self, client: BotoClient) -> List[Dict[str, Any]]:
        # describe_db_instances has no server-side status filter
        response = client.describe_db_instances()
        return [
            instance for instance in response.get('DBInstances', [])
            if instance.get('DBInstanceStatus') == 'stopped'
        ]

    def to_resource(self, record: DBInstanceRecord) -> Resource:
        return self.build_resource(
            resource_id=record.get('DBInstanceIdentifier', ''),
            tags=record.get('TagList'),
            state=record.get('DBInstanceStatus', ''),
            launched=record.get('InstanceCreateTime'),
            details=ManagedDbDetails(
                instance_type=record.get('DBInstanceClass', ''),
                engine=record.get('Engine', '')
            )
        )
