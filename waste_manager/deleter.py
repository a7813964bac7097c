"""Delete requests for idle resources."""
from typing import Any, Callable, Optional
import logging

import boto3
from botocore.config import Config as BotoConfig

from .config import WasteManagerConfig, get_config
from .types import ResourceType
from .utils import ClientInputError, handle_aws_error

logger = logging.getLogger(__name__)


def infer_resource_type(resource_id: str) -> ResourceType:
    """
    Work out a resource's kind from its id.

    EC2 ids carry a fixed prefix; anything else is taken to be an RDS
    instance identifier.
    """
    if resource_id.startswith('i-'):
        return ResourceType.COMPUTE
    if resource_id.startswith('vol-'):
        return ResourceType.VOLUME
    if resource_id.startswith('snap-'):
        return ResourceType.SNAPSHOT
    return ResourceType.MANAGED_DB


class ResourceDeleter:
    """Accepts delete requests in either ``noop`` or ``provider`` mode."""

    def __init__(
        self,
        config: Optional[WasteManagerConfig] = None,
        client_factory: Optional[Callable[[str], Any]] = None
    ):
        self.config = config or get_config()
        self.mode = self.config.delete_mode
        self._client_factory = client_factory or self._create_client

    def _create_client(self, service: str) -> Any:
        return boto3.client(
            service,
            region_name=self.config.region,
            config=BotoConfig(
                connect_timeout=self.config.connect_timeout,
                read_timeout=self.config.read_timeout,
                retries={'total_max_attempts': 1}
            )
        )

    def delete(self, resource_id: Optional[str]) -> str:
        """
        Handle a delete request.

        Args:
            resource_id: Provider id of the resource

        Returns:
            Acknowledgement message

        Raises:
            ClientInputError: If the id is empty
            UpstreamProviderError: If a provider-mode delete fails
        """
        resource_id = (resource_id or '').strip()
        if not resource_id:
            raise ClientInputError('Resource ID is required')

        if self.mode == 'noop':
            logger.info(
                f"Delete requested for {resource_id}; no-op mode, nothing removed",
                extra={'resource_id': resource_id, 'delete_mode': self.mode}
            )
        else:
            resource_type = infer_resource_type(resource_id)
            self._dispatch(resource_type, resource_id)
            logger.info(
                f"Deleted {resource_type.value} {resource_id}",
                extra={'resource_id': resource_id, 'source': resource_type.value}
            )

        return f"Resource {resource_id} deleted successfully"

    def _dispatch(self, resource_type: ResourceType, resource_id: str) -> None:
        context = f"{resource_type.value} delete of {resource_id}"
        try:
            if resource_type is ResourceType.COMPUTE:
                self._client_factory('ec2').terminate_instances(InstanceIds=[resource_id])
            elif resource_type is ResourceType.VOLUME:
                self._client_factory('ec2').delete_volume(VolumeId=resource_id)
            elif resource_type is ResourceType.SNAPSHOT:
                self._client_factory('ec2').delete_snapshot(SnapshotId=resource_id)
            else:
                self._client_factory('rds').delete_db_instance(
                    DBInstanceIdentifier=resource_id,
                    SkipFinalSnapshot=True
                )
        except Exception as e:
            handle_aws_error(e, context)
