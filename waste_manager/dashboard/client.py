"""HTTP client for the aggregator service."""
from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import quote
import logging

import httpx

from ..type_defs import ResourceListResponse, SourceWarning
from ..types import Resource
from ..utils import ClientInputError

logger = logging.getLogger(__name__)

FETCH_FAILED = 'Failed to fetch resources'


@dataclass
class FetchResult:
    """Outcome of a List call as seen by the dashboard."""
    resources: List[Resource] = field(default_factory=list)
    error: Optional[str] = None
    warnings: List[SourceWarning] = field(default_factory=list)


def _error_from_response(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get('error')
    return None


class ApiClient:
    """Thin wrapper over ``httpx.Client`` pointed at the aggregator base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.base_url = base_url.rstrip('/')
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={'Content-Type': 'application/json'},
            transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> 'ApiClient':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def fetch_resources(self) -> FetchResult:
        """
        Fetch the resource list.

        Transport failures, error statuses and bodies carrying an ``error``
        field all come back as a FetchResult with an empty list.
        """
        try:
            response = self._client.get('/resources')
        except httpx.HTTPError as e:
            logger.error(f"Error fetching resources: {e}")
            return FetchResult(error=FETCH_FAILED)

        if response.is_error:
            message = _error_from_response(response) or FETCH_FAILED
            logger.error(f"Error fetching resources: HTTP {response.status_code} {message}")
            return FetchResult(error=message)

        try:
            body: ResourceListResponse = response.json()
            if body.get('error'):
                return FetchResult(error=body['error'])
            resources = [Resource.from_dict(item) for item in body.get('resources') or []]
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"Malformed resource payload: {e}")
            return FetchResult(error=FETCH_FAILED)

        return FetchResult(resources=resources, warnings=list(body.get('warnings') or []))

    def delete_resource(self, resource_id: str) -> bool:
        """
        Request deletion of a resource.

        Raises:
            ClientInputError: If ``resource_id`` is empty; no request is sent
        """
        if not resource_id or not resource_id.strip():
            raise ClientInputError('Resource ID is required')

        try:
            response = self._client.delete(f"/resources/{quote(resource_id, safe='')}")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error deleting resource {resource_id}: {e}")
            return False
        return True
