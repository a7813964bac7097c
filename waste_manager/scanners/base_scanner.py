"""Base scanner class for idle resource sources."""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
import time
import logging

import boto3
from botocore.config import Config as BotoConfig

from ..types import Resource, ResourceType, SourceResult
from ..config import WasteManagerConfig, get_config
from ..utils import handle_aws_error, get_name_tag, format_timestamp
from ..type_defs import BotoClient

logger = logging.getLogger(__name__)


class BaseScanner(ABC):
    """Base class for the four inventory sources."""

    #: boto3 service name the scanner talks to
    client_service: str = 'ec2'

    def __init__(self, region: str, config: Optional[WasteManagerConfig] = None):
        """
        Initialize scanner.

        Args:
            region: AWS region to scan
            config: Settings to use; defaults to the global configuration
        """
        self.region = region
        self.config = config or get_config()

    @property
    @abstractmethod
    def resource_type(self) -> ResourceType:
        """Return the kind of resource this scanner yields."""
        pass

    @abstractmethod
    def fetch_records(self, client: BotoClient) -> List[Dict[str, Any]]:
        """
        Issue the single provider list call for this source.

        Args:
            client: boto3 client for ``client_service``

        Returns:
            Raw provider records in response order
        """
        pass

    @abstractmethod
    def to_resource(self, record: Dict[str, Any]) -> Resource:
        """Map one provider record into a Resource."""
        pass

    def create_client(self) -> BotoClient:
        """Create a boto3 client with bounded timeouts and no retries."""
        return boto3.client(
            self.client_service,
            region_name=self.region,
            config=BotoConfig(
                connect_timeout=self.config.connect_timeout,
                read_timeout=self.config.read_timeout,
                retries={'total_max_attempts': 1}
            )
        )

    def scan(self) -> List[Resource]:
        """
        Fetch and normalize idle resources for this source.

        Returns:
            Resources in provider response order

        Raises:
            UpstreamProviderError: If the provider call fails
        """
        context = f"{self.resource_type.value} scan in {self.region}"
        try:
            client = self.create_client()
            records = self.fetch_records(client)
            return [self.to_resource(record) for record in records]
        except Exception as e:
            handle_aws_error(e, context)

    def scan_with_error_handling(self) -> SourceResult:
        """
        Scan and capture the outcome instead of raising.

        Returns:
            SourceResult carrying either the resources or the failure reason
        """
        start_time = time.time()

        try:
            resources = self.scan()
            return SourceResult(
                resource_type=self.resource_type,
                resources=resources,
                duration=time.time() - start_time
            )
        except Exception as e:
            return SourceResult(
                resource_type=self.resource_type,
                resources=[],
                error=str(e) or type(e).__name__,
                duration=time.time() - start_time
            )

    def build_resource(
        self,
        resource_id: str,
        tags: Optional[List[Dict[str, str]]],
        state: str,
        launched: Any,
        details: Any
    ) -> Resource:
        """Assemble a Resource with the shared naming and region rules."""
        return Resource(
            id=resource_id,
            type=self.resource_type,
            name=get_name_tag(tags, resource_id),
            region=self.region,
            state=state or '',
            last_used=format_timestamp(launched),
            cost=0.0,
            details=details
        )
