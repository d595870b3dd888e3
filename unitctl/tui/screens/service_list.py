import logging

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import DataTable, Footer

from unitctl.exceptions import UnitctlError
from unitctl.systemd.adapter import ServiceManagerAdapter
from unitctl.utils.formatting import format_flag, format_memory


class ServiceListScreen(Screen):
    """A screen to display a list of systemd services.
    """

    BINDINGS = [
        ('r', 'refresh', 'Refresh'),
    ]

    def __init__(self, adapter: ServiceManagerAdapter) -> None:
        """Initialise the screen.
        """
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self._adapter = adapter
        self._services_table = DataTable()

    def compose(self) -> ComposeResult:
        yield self._services_table
        yield Footer()

    async def on_mount(self) -> None:
        self._services_table.add_column('Service')
        self._services_table.add_column('Active')
        self._services_table.add_column('Enabled')
        self._services_table.add_column('Memory')

        await self.action_refresh()

    async def action_refresh(self) -> None:
        """Reload the table from a fresh service query.
        """
        self._services_table.clear()

        try:
            services = await self._adapter.get_services()
        except UnitctlError as e:
            self._logger.error('Failed to list services: %s', e)
            self.notify(str(e), severity='error')
            return

        for service in services:
            self._services_table.add_row(
                service.name,
                format_flag(service.is_active),
                format_flag(service.is_enabled),
                format_memory(service.memory),
            )
