from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Union

from .type_defs import ResourcePayload


class ResourceType(str, Enum):
    """Kinds of idle resource, declared in canonical output order."""
    COMPUTE = 'COMPUTE'
    MANAGED_DB = 'MANAGED_DB'
    VOLUME = 'VOLUME'
    SNAPSHOT = 'SNAPSHOT'


@dataclass(frozen=True)
class ComputeDetails:
    instance_type: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'instanceType': self.instance_type}


@dataclass(frozen=True)
class ManagedDbDetails:
    instance_type: str = ''
    engine: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'instanceType': self.instance_type, 'engine': self.engine}


@dataclass(frozen=True)
class VolumeDetails:
    volume_size: int = 0
    volume_type: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'volumeSize': self.volume_size, 'volumeType': self.volume_type}


@dataclass(frozen=True)
class SnapshotDetails:
    snapshot_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {'snapshotSize': self.snapshot_size}


ResourceDetails = Union[ComputeDetails, ManagedDbDetails, VolumeDetails, SnapshotDetails]

DETAILS_BY_TYPE = {
    ResourceType.COMPUTE: ComputeDetails,
    ResourceType.MANAGED_DB: ManagedDbDetails,
    ResourceType.VOLUME: VolumeDetails,
    ResourceType.SNAPSHOT: SnapshotDetails,
}

# Flattened spreadsheet layout; detail keys not used by a type stay empty.
EXPORT_COLUMNS: List[str] = [
    'id', 'type', 'name', 'region', 'state', 'lastUsed', 'cost',
    'instanceType', 'engine', 'volumeSize', 'volumeType', 'snapshotSize',
]


def details_from_dict(resource_type: ResourceType, data: Optional[Dict[str, Any]]) -> ResourceDetails:
    """Build the details variant for a type from its wire payload."""
    data = data or {}
    if resource_type is ResourceType.COMPUTE:
        return ComputeDetails(instance_type=data.get('instanceType') or '')
    if resource_type is ResourceType.MANAGED_DB:
        return ManagedDbDetails(
            instance_type=data.get('instanceType') or '',
            engine=data.get('engine') or ''
        )
    if resource_type is ResourceType.VOLUME:
        return VolumeDetails(
            volume_size=data.get('volumeSize') or 0,
            volume_type=data.get('volumeType') or ''
        )
    return SnapshotDetails(snapshot_size=data.get('snapshotSize') or 0)


@dataclass
class Resource:
    id: str
    type: ResourceType
    name: str
    region: str
    state: str
    details: ResourceDetails
    last_used: str = ''
    cost: float = 0.0

    def __post_init__(self):
        if not self.id:
            raise ValueError('Resource id must not be empty')
        if not isinstance(self.type, ResourceType):
            raise ValueError(f"Unknown resource type: {self.type!r}")
        expected = DETAILS_BY_TYPE[self.type]
        if not isinstance(self.details, expected):
            raise ValueError(
                f"{self.type.value} resource requires {expected.__name__}, "
                f"got {type(self.details).__name__}"
            )

    def to_dict(self) -> ResourcePayload:
        """Serialize to the JSON payload shape served by the aggregator."""
        return {
            'id': self.id,
            'type': self.type.value,
            'name': self.name,
            'region': self.region,
            'state': self.state,
            'lastUsed': self.last_used,
            'cost': self.cost,
            'details': self.details.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Resource':
        """Parse a resource from the aggregator's JSON payload."""
        resource_type = ResourceType(data.get('type'))
        return cls(
            id=data.get('id') or '',
            type=resource_type,
            name=data.get('name') or data.get('id') or '',
            region=data.get('region') or '',
            state=data.get('state') or '',
            last_used=data.get('lastUsed') or '',
            cost=float(data.get('cost') or 0),
            details=details_from_dict(resource_type, data.get('details')),
        )

    def to_row(self) -> Dict[str, Any]:
        """Flatten into the fixed export column layout."""
        row: Dict[str, Any] = {column: None for column in EXPORT_COLUMNS}
        payload: Dict[str, Any] = dict(self.to_dict())
        details = payload.pop('details')
        row.update(payload)
        row.update(details)
        return row


@dataclass
class SourceResult:
    """Outcome of one scanner: either a resource list or a failure reason."""
    resource_type: ResourceType
    resources: List[Resource] = field(default_factory=list)
    error: Optional[str] = None
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class InventoryReport:
    """Result of one List call, one SourceResult per resource type."""
    sources: List[SourceResult]

    @property
    def resources(self) -> List[Resource]:
        order = list(ResourceType)
        ordered = sorted(self.sources, key=lambda s: order.index(s.resource_type))
        return [r for source in ordered if source.ok for r in source.resources]

    @property
    def failures(self) -> List[SourceResult]:
        return [source for source in self.sources if not source.ok]


@dataclass
class TypeSummary:
    type: ResourceType
    count: int = 0
    total_cost: float = 0.0
