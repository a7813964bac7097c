"""Pytest configuration and fixtures."""
import pytest
from unittest.mock import MagicMock
from datetime import datetime

from waste_manager.types import (
    Resource,
    ResourceType,
    ComputeDetails,
    ManagedDbDetails,
    VolumeDetails,
    SnapshotDetails,
)
from waste_manager.config import WasteManagerConfig


@pytest.fixture
def mock_boto_client():
    """Create a mock boto3 client."""
    return MagicMock()


@pytest.fixture
def sample_ec2_instance():
    """Stopped EC2 instance record from describe_instances."""
    return {
        'InstanceId': 'i-1234567890abcdef0',
        'InstanceType': 't3.micro',
        'State': {'Name': 'stopped'},
        'LaunchTime': datetime(2024, 1, 1, 12, 0, 0),
        'Tags': [
            {'Key': 'Name', 'Value': 'test-instance'},
            {'Key': 'Environment', 'Value': 'test'}
        ]
    }


@pytest.fixture
def sample_db_instance():
    """Stopped RDS instance record from describe_db_instances."""
    return {
        'DBInstanceIdentifier': 'orders-db',
        'DBInstanceClass': 'db.t3.micro',
        'DBInstanceStatus': 'stopped',
        'Engine': 'postgres',
        'InstanceCreateTime': datetime(2023, 6, 1, 8, 30, 0),
        'TagList': [{'Key': 'Name', 'Value': 'orders'}]
    }


@pytest.fixture
def sample_ebs_volume():
    """Unattached EBS volume record from describe_volumes."""
    return {
        'VolumeId': 'vol-1234567890abcdef0',
        'VolumeType': 'gp3',
        'Size': 100,
        'State': 'available',
        'CreateTime': datetime(2024, 1, 1, 12, 0, 0),
        'Attachments': [],
        'Tags': [
            {'Key': 'Name', 'Value': 'test-volume'}
        ]
    }


@pytest.fixture
def sample_snapshot():
    """Snapshot record from describe_snapshots."""
    return {
        'SnapshotId': 'snap-1234567890abcdef0',
        'VolumeSize': 8,
        'State': 'completed',
        'StartTime': datetime(2024, 2, 1, 0, 0, 0),
    }


@pytest.fixture
def test_config():
    """Configuration with short timeouts for tests."""
    return WasteManagerConfig(
        region='us-east-1',
        provider_timeout=5.0,
        connect_timeout=1.0,
        read_timeout=1.0,
        partial_results=True,
        delete_mode='noop',
        log_level='INFO'
    )


@pytest.fixture
def sample_resources():
    """One resource of each type, in canonical order."""
    return [
        Resource(
            id='i-1',
            type=ResourceType.COMPUTE,
            name='web-server',
            region='us-east-1',
            state='stopped',
            last_used='2024-01-01T00:00:00',
            details=ComputeDetails(instance_type='t3.micro')
        ),
        Resource(
            id='orders-db',
            type=ResourceType.MANAGED_DB,
            name='orders-db',
            region='us-east-1',
            state='stopped',
            last_used='2023-06-01T08:30:00',
            details=ManagedDbDetails(instance_type='db.t3.micro', engine='postgres')
        ),
        Resource(
            id='v-1',
            type=ResourceType.VOLUME,
            name='data-volume',
            region='us-east-1',
            state='available',
            last_used='2024-01-01T12:00:00',
            details=VolumeDetails(volume_size=100, volume_type='gp3')
        ),
        Resource(
            id='snap-1',
            type=ResourceType.SNAPSHOT,
            name='snap-1',
            region='us-east-1',
            state='completed',
            last_used='2024-02-01T00:00:00',
            details=SnapshotDetails(snapshot_size=8)
        )
    ]


@pytest.fixture(autouse=True)
def reset_config():
    """Reset global config before each test."""
    from waste_manager.config import settings
    settings._config = None
    yield
    settings._config = None
