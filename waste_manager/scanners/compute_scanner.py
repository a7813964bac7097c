"""Stopped EC2 instance scanner."""
from typing import List, Dict, Any

from .base_scanner import BaseScanner
from ..types import Resource, ResourceType, ComputeDetails
from ..type_defs import BotoClient, EC2InstanceRecord


class ComputeScanner(BaseScanner):
    """Scanner for stopped EC2 instances."""

    client_service = 'ec2'

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType.COMPUTE

    def fetch_records(self, client: BotoClient) -> List[Dict[str, Any]]:
        response = client.describe_instances(
            Filters=[{'Name': 'instance-state-name', 'Values': ['stopped']}]
        )
        return [
            instance
            for reservation in response.get('Reservations', [])
            for instance in reservation.get('Instances', [])
        ]

    def to_resource(self, record: EC2InstanceRecord) -> Resource:
        return self.build_resource(
            resource_id=record.get('InstanceId', ''),
            tags=record.get('Tags'),
            state=(record.get('State') or {}).get('Name', ''),
            launched=record.get('LaunchTime'),
            details=ComputeDetails(instance_type=record.get('InstanceType', ''))
        )
