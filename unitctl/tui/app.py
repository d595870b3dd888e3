from textual.app import App

from unitctl.systemd.adapter import ServiceManagerAdapter
from unitctl.tui.screens.service_list import ServiceListScreen


class UnitctlApp(App[None]):
    """A textual application to browse systemd services.
    """

    BINDINGS = [
        ('q', 'quit', 'Quit'),
    ]

    def __init__(self, adapter: ServiceManagerAdapter, *args, **kwargs):
        """Initialize the app with the adapter used for queries.
        """
        super().__init__(*args, **kwargs)
        self._adapter = adapter

    async def on_mount(self) -> None:
        """Mount the main screen.
        """
        self.push_screen(ServiceListScreen(self._adapter))
