"""Type definitions for provider records and HTTP payloads."""
from typing import TypedDict, Optional, Dict, Any, List, Protocol, runtime_checkable
from datetime import datetime


class TagInfo(TypedDict):
    """A single provider tag."""
    Key: str
    Value: str


class EC2InstanceRecord(TypedDict, total=False):
    """Fields read from an EC2 describe_instances record."""
    InstanceId: str
    InstanceType: str
    State: Dict[str, Any]
    LaunchTime: datetime
    Tags: List[TagInfo]


class DBInstanceRecord(TypedDict, total=False):
    """Fields read from an RDS describe_db_instances record."""
    DBInstanceIdentifier: str
    DBInstanceClass: str
    DBInstanceStatus: str
    Engine: str
    InstanceCreateTime: datetime
    TagList: List[TagInfo]


class EBSVolumeRecord(TypedDict, total=False):
    """Fields read from an EC2 describe_volumes record."""
    VolumeId: str
    VolumeType: str
    Size: int
    State: str
    CreateTime: datetime
    Tags: List[TagInfo]


class SnapshotRecord(TypedDict, total=False):
    """Fields read from an EC2 describe_snapshots record."""
    SnapshotId: str
    VolumeSize: int
    State: str
    StartTime: datetime
    Tags: List[TagInfo]


class ResourcePayload(TypedDict):
    """Wire shape of a single resource."""
    id: str
    type: str
    name: str
    region: str
    state: str
    lastUsed: str
    cost: float
    details: Dict[str, Any]


class SourceWarning(TypedDict):
    """A failed source reported alongside a partial listing."""
    type: str
    error: str


class ResourceListResponse(TypedDict, total=False):
    """Body of GET /resources."""
    resources: List[ResourcePayload]
    warnings: List[SourceWarning]
    error: Optional[str]


@runtime_checkable
class BotoClient(Protocol):
    """Protocol for boto3 client objects."""

    def can_paginate(self, operation_name: str) -> bool:
        """Whether the operation supports pagination."""
        ...
