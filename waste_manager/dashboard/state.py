"""In-memory dashboard session state and operator actions."""
from typing import Callable, List, Optional, Union
import logging

from ..type_defs import SourceWarning
from ..types import Resource, ResourceType, TypeSummary
from ..utils import ClientInputError
from .client import ApiClient
from .export import DEFAULT_EXPORT_PATH, write_workbook

logger = logging.getLogger(__name__)

ALL = 'ALL'
Selection = Union[ResourceType, str]


def filter_resources(resources: List[Resource], selected: Selection) -> List[Resource]:
    """Return the resources matching ``selected``, keeping their order."""
    if selected == ALL:
        return list(resources)
    return [r for r in resources if r.type == selected]


def summarize_resources(resources: List[Resource]) -> List[TypeSummary]:
    """Count and cost per type, one tile for every type even when empty."""
    summaries = {t: TypeSummary(type=t) for t in ResourceType}
    for resource in resources:
        summary = summaries[resource.type]
        summary.count += 1
        summary.total_cost += resource.cost
    return list(summaries.values())


class DashboardState:
    """
    Holds the last fetched resource list and the operator's view of it.

    Nothing here is persisted; a new session starts empty.
    """

    def __init__(self, client: ApiClient):
        self.client = client
        self.resources: List[Resource] = []
        self.loading: bool = False
        self.error: Optional[str] = None
        self.warnings: List[SourceWarning] = []
        self.selected_type: Selection = ALL

    def load(self) -> None:
        """Fetch the resource list, replacing whatever was loaded before."""
        self.loading = True
        self.error = None
        try:
            result = self.client.fetch_resources()
        finally:
            self.loading = False

        if result.error:
            self.error = result.error
            self.resources = []
            self.warnings = []
        else:
            self.resources = result.resources
            self.warnings = result.warnings

    def select_type(self, value: Selection) -> None:
        """Change the type filter; accepts a ResourceType, a type name or 'all'."""
        if isinstance(value, ResourceType):
            self.selected_type = value
            return
        name = (value or '').strip().upper()
        if name == ALL:
            self.selected_type = ALL
            return
        try:
            self.selected_type = ResourceType(name)
        except ValueError:
            raise ClientInputError(f"Unknown resource type: {value}")

    def visible_resources(self) -> List[Resource]:
        return filter_resources(self.resources, self.selected_type)

    def summarize(self) -> List[TypeSummary]:
        """Summary tiles over the full list, regardless of the active filter."""
        return summarize_resources(self.resources)

    def delete_row(self, resource_id: str, confirm: Callable[[str], bool]) -> bool:
        """
        Delete a resource after confirmation and drop it from the local list.

        Args:
            resource_id: Id of the row to delete
            confirm: Asked with the id; a falsy answer cancels the delete

        Returns:
            True if the aggregator acknowledged the delete

        Raises:
            ClientInputError: If ``resource_id`` is empty
        """
        if not resource_id or not resource_id.strip():
            raise ClientInputError('Resource ID is required')
        if not confirm(resource_id):
            return False

        if self.client.delete_resource(resource_id):
            self.resources = [r for r in self.resources if r.id != resource_id]
            return True

        logger.warning(f"Delete of {resource_id} was not acknowledged")
        self.error = 'Failed to delete resource'
        return False

    def export(self, path: str = DEFAULT_EXPORT_PATH) -> Optional[str]:
        """Write every loaded resource to a spreadsheet; the filter is ignored."""
        if not self.resources:
            self.error = 'No resources available to export'
            return None
        try:
            return write_workbook(self.resources, path)
        except OSError as e:
            logger.warning(f"Export to {path} failed: {e}")
            self.error = f"Failed to export: {e}"
            return None
