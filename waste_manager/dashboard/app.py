"""Interactive terminal dashboard."""
from typing import Callable, Optional
import logging

from rich.console import Console
from rich.prompt import Confirm, Prompt

from ..utils import ClientInputError
from .export import DEFAULT_EXPORT_PATH
from .render import render_dashboard
from .state import DashboardState

logger = logging.getLogger(__name__)

HELP = "[dim]r[/dim] refresh  [dim]f <type|all>[/dim] filter  [dim]d <id>[/dim] delete  [dim]e [path][/dim] export  [dim]q[/dim] quit"


class DashboardApp:
    """Command loop driving a DashboardState."""

    def __init__(
        self,
        state: DashboardState,
        console: Optional[Console] = None,
        export_path: str = DEFAULT_EXPORT_PATH,
        confirm: Optional[Callable[[str], bool]] = None
    ):
        self.state = state
        self.console = console or Console()
        self.export_path = export_path
        self.confirm = confirm or self._ask_confirm

    def _ask_confirm(self, resource_id: str) -> bool:
        return Confirm.ask(f"Are you sure you want to delete {resource_id}?", console=self.console)

    def refresh(self) -> None:
        with self.console.status("[cyan]Loading resources...", spinner="dots"):
            self.state.load()

    def show(self) -> None:
        self.console.print(render_dashboard(self.state))
        self.console.print(HELP)

    def handle(self, command: str) -> bool:
        """
        Run one command line.

        Returns:
            False when the operator asked to quit
        """
        parts = command.strip().split(maxsplit=1)
        if not parts:
            return True
        action, argument = parts[0].lower(), (parts[1] if len(parts) > 1 else '')

        if action in ('q', 'quit', 'exit'):
            return False

        # A new action clears the previous banner
        self.state.error = None
        try:
            if action in ('r', 'refresh'):
                self.refresh()
            elif action in ('f', 'filter'):
                self.state.select_type(argument or 'all')
            elif action in ('d', 'delete'):
                if self.state.delete_row(argument, self.confirm):
                    self.console.print(f"[green]✓[/green] Deleted {argument}")
            elif action in ('e', 'export'):
                path = self.state.export(argument or self.export_path)
                if path:
                    self.console.print(f"[green]✓[/green] Exported to: {path}")
            else:
                self.state.error = f"Unknown command: {action}"
        except ClientInputError as e:
            self.state.error = str(e)
        return True

    def run(self) -> None:
        """Load once, then prompt for commands until the operator quits."""
        self.console.print("[bold cyan]AWS Cloud Waste Management[/bold cyan]")
        self.refresh()
        while True:
            self.show()
            command = Prompt.ask("[bold]>[/bold]", console=self.console, default="")
            if not self.handle(command):
                break
