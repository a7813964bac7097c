"""Rich renderables for the dashboard."""
from typing import List, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..type_defs import SourceWarning
from ..types import (
    ComputeDetails,
    ManagedDbDetails,
    Resource,
    ResourceType,
    SnapshotDetails,
    TypeSummary,
    VolumeDetails,
)
from .state import ALL, DashboardState, Selection

TYPE_LABELS = {
    ResourceType.COMPUTE: 'EC2',
    ResourceType.MANAGED_DB: 'RDS',
    ResourceType.VOLUME: 'EBS',
    ResourceType.SNAPSHOT: 'Snapshot',
}


def format_details(resource: Resource) -> str:
    """One-line description of a resource's type-specific attributes."""
    details = resource.details
    if isinstance(details, ComputeDetails):
        return f"Instance: {details.instance_type}" if details.instance_type else ''
    if isinstance(details, ManagedDbDetails):
        return f"{details.engine} ({details.instance_type})"
    if isinstance(details, VolumeDetails):
        return f"{details.volume_size}GB ({details.volume_type})"
    if isinstance(details, SnapshotDetails):
        return f"{details.snapshot_size}GB"
    return ''


def summary_table(summaries: List[TypeSummary], selected: Selection = ALL) -> Table:
    """Summary tiles as a single-row table, highlighting the active filter."""
    table = Table(title="Idle Resources by Type", show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Count", justify="right", style="green")
    table.add_column("Total Cost", justify="right", style="yellow")

    for summary in summaries:
        style = "bold reverse" if summary.type == selected else None
        table.add_row(
            f"{summary.type.value} ({TYPE_LABELS[summary.type]})",
            str(summary.count),
            f"${summary.total_cost:,.2f}",
            style=style
        )

    table.add_section()
    table.add_row(
        "TOTAL",
        str(sum(s.count for s in summaries)),
        f"${sum(s.total_cost for s in summaries):,.2f}",
        style="bold"
    )
    return table


def filter_bar(selected: Selection) -> Text:
    text = Text("Filter: ")
    options = [ALL] + [t.value for t in ResourceType]
    for option in options:
        text.append(f" {option} ", style="bold white on blue" if option == selected else "dim")
        text.append(" ")
    return text


def resources_table(resources: List[Resource]) -> Table:
    table = Table(show_header=True, header_style="bold", expand=True)
    for column in ("Resource", "ID", "Type", "Details", "Region", "State", "Last Used", "Cost"):
        table.add_column(column, justify="right" if column == "Cost" else "left")

    for resource in resources:
        state_style = "red" if resource.state == 'stopped' else "green"
        table.add_row(
            resource.name,
            resource.id,
            resource.type.value,
            format_details(resource),
            resource.region,
            Text(resource.state, style=state_style),
            resource.last_used,
            f"${resource.cost:,.2f}"
        )
    return table


def error_banner(message: str) -> Panel:
    return Panel(Text(message, style="red"), title="Error", border_style="red")


def warnings_banner(warnings: List[SourceWarning]) -> Optional[Panel]:
    """Per-source warnings for a partial listing."""
    if not warnings:
        return None
    lines = Text()
    for warning in warnings:
        lines.append(f"{warning.get('type')}: {warning.get('error')}\n", style="yellow")
    return Panel(lines, title="Partial results", border_style="yellow")


def render_dashboard(state: DashboardState) -> RenderableType:
    """Compose the whole dashboard view for the current state."""
    parts: List[RenderableType] = [summary_table(state.summarize(), state.selected_type), filter_bar(state.selected_type)]

    if state.error:
        parts.append(error_banner(state.error))
    banner = warnings_banner(state.warnings)
    if banner is not None:
        parts.append(banner)

    visible = state.visible_resources()
    if state.loading:
        parts.append(Text("Loading...", style="cyan"))
    elif not visible:
        parts.append(Text("No resources found", style="dim"))
    else:
        parts.append(resources_table(visible))

    return Group(*parts)
