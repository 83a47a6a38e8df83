"""pimon - Main Textual application."""

import asyncio

import httpx
from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Grid
from textual.widgets import DataTable, Footer, Header, Static

from pimon.client import TelemetryClient
from pimon.config import MonitorConfig
from pimon.formatting import (
    cpu_severity,
    disk_severity,
    format_bytes,
    format_frequency,
    format_percentage,
    format_temperature,
    memory_severity,
    process_severity,
    styled,
    temperature_severity,
)
from pimon.log import setup_logging
from pimon.models import CpuInfo, DiskInfo, MemoryInfo, NetworkInfo, PollState, ProcessSample
from pimon.monitor import TelemetryMonitor

LOADING_TEXT = "Loading system information..."


def _row(label: str, value: str) -> str:
    """Align a label and its value on one panel line."""
    return f"{label:<13}{value}"


def render_cpu_info(cpu: CpuInfo) -> str:
    """Render the CPU panel body. Temperature and frequency only when reported."""
    usage = styled(format_percentage(cpu.usage_percent), cpu_severity(cpu.usage_percent))
    lines = [_row("Usage:", usage)]
    if cpu.temperature is not None:
        lines.append(
            _row(
                "Temperature:",
                styled(format_temperature(cpu.temperature), temperature_severity(cpu.temperature)),
            )
        )
    if cpu.frequency is not None:
        lines.append(_row("Frequency:", format_frequency(cpu.frequency)))
    lines.append(_row("Cores:", str(cpu.cores)))
    return "\n".join(lines)


def render_memory_info(memory: MemoryInfo) -> str:
    """Render the memory panel body."""
    used = styled(format_percentage(memory.percent_used), memory_severity(memory.percent_used))
    return "\n".join(
        [
            _row("Total:", format_bytes(memory.total)),
            _row("Available:", format_bytes(memory.available)),
            _row("Used:", used),
        ]
    )


def render_disk_info(disk: DiskInfo) -> str:
    """Render the disk panel body."""
    return "\n".join(
        [
            _row("Total:", format_bytes(disk.total)),
            _row("Used:", format_bytes(disk.used)),
            _row("Free:", format_bytes(disk.free)),
            _row(
                "Used:",
                styled(format_percentage(disk.percent_used), disk_severity(disk.percent_used)),
            ),
        ]
    )


def render_network_info(network: NetworkInfo) -> str:
    """Render the network panel body."""
    return "\n".join(
        [
            _row("Sent:", format_bytes(network.bytes_sent)),
            _row("Received:", format_bytes(network.bytes_recv)),
        ]
    )


class InfoPanel(Static):
    """Bordered panel showing one group of readings."""

    DEFAULT_CSS = """
    InfoPanel {
        height: auto;
        padding: 0 1;
        border: round $primary;
    }
    """

    def __init__(self, title: str, *args, **kwargs) -> None:
        """Initialize InfoPanel."""
        super().__init__("", *args, **kwargs)
        self.border_title = title


class ProcessTable(Container):
    """Container for the top processes table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        min-height: 5;
        border: round $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self.border_title = "Top Processes"

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"

        table.add_column("PID", key="pid", width=8)
        table.add_column("Name", key="name")
        table.add_column("CPU %", key="cpu", width=8)
        table.add_column("Memory %", key="mem", width=10)
        self.display = False

    def update_processes(self, processes: tuple[ProcessSample, ...]) -> None:
        """
        Replace the table contents with a new process list.

        Rows keep the order the remote host sent them in. The table is hidden
        while the list is empty.
        """
        table = self.query_one("#process-table", DataTable)
        table.clear()

        for proc in processes:
            table.add_row(
                str(proc.pid),
                Text(proc.name),
                styled(format_percentage(proc.cpu_percent), process_severity(proc.cpu_percent)),
                styled(
                    format_percentage(proc.memory_percent),
                    process_severity(proc.memory_percent),
                ),
            )

        self.display = bool(processes)


class PiMonitorApp(App):
    """Main pimon application."""

    TITLE = "Raspberry Pi System Monitor"
    SUB_TITLE = "pimon"

    CSS = """
    Screen {
        layout: vertical;
    }

    #loading {
        padding: 1 2;
    }

    #error-banner {
        margin: 1 2;
        padding: 1 2;
        color: $error;
        border: heavy $error;
    }

    #dashboard {
        height: 1fr;
    }

    #panels {
        grid-size: 2;
        grid-gutter: 0 1;
        height: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "poll_now", "Refresh"),
    ]

    def __init__(
        self,
        config: MonitorConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the PiMonitorApp.

        Args:
            config: Dashboard settings. Defaults to MonitorConfig().
            transport: Optional httpx transport passed to the telemetry client.
        """
        super().__init__()
        self._config = config or MonitorConfig()
        self._update_queue: asyncio.Queue[PollState] = asyncio.Queue()
        self._monitor = TelemetryMonitor(
            self._update_queue,
            TelemetryClient(self._config.base_url, transport=transport),
            poll_rate=self._config.poll_rate,
        )
        self._state = PollState()

    @property
    def poll_state(self) -> PollState:
        """State currently on screen."""
        return self._state

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header()
        yield Static(LOADING_TEXT, id="loading")
        yield Static("", id="error-banner")
        with Container(id="dashboard"):
            with Grid(id="panels"):
                yield InfoPanel("CPU", id="cpu-panel")
                yield InfoPanel("Memory", id="memory-panel")
                yield InfoPanel("Disk", id="disk-panel")
                yield InfoPanel("Network", id="network-panel")
            yield ProcessTable(id="process-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start the telemetry monitor when the app is mounted."""
        self.render_state(self._state)
        self._monitor.start()
        # Set up a timer to poll the queue for updates
        self.set_interval(0.5, self._check_for_updates)

    async def on_unmount(self) -> None:
        """Stop polling and close the client when the app shuts down."""
        await self._monitor.close()

    def _check_for_updates(self) -> None:
        """Check the queue for new poll states and refresh the UI."""
        state = None
        while True:
            try:
                state = self._update_queue.get_nowait()
            except asyncio.QueueEmpty:
                break

        if state is not None:
            self.render_state(state)

    def render_state(self, state: PollState) -> None:
        """
        Show a poll state.

        An error hides all data, even stale data from an earlier poll.
        Before the first successful poll only the loading message is shown.
        """
        self._state = state
        loading = self.query_one("#loading", Static)
        error_banner = self.query_one("#error-banner", Static)
        dashboard = self.query_one("#dashboard", Container)

        if state.error is not None:
            error_banner.update(escape(state.error))
            error_banner.display = True
            loading.display = False
            dashboard.display = False
            return

        error_banner.display = False
        if state.snapshot is None:
            loading.display = True
            dashboard.display = False
            return

        loading.display = False
        dashboard.display = True
        snapshot = state.snapshot
        self.query_one("#cpu-panel", InfoPanel).update(render_cpu_info(snapshot.cpu))
        self.query_one("#memory-panel", InfoPanel).update(render_memory_info(snapshot.memory))
        self.query_one("#disk-panel", InfoPanel).update(render_disk_info(snapshot.disk))
        self.query_one("#network-panel", InfoPanel).update(render_network_info(snapshot.network))
        self.query_one(ProcessTable).update_processes(state.processes)

    def action_poll_now(self) -> None:
        """Poll immediately and restart the schedule from now."""
        self._monitor.restart()

    async def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()


def main() -> None:
    """Entry point for pimon application."""
    config = MonitorConfig()
    setup_logging(config.log_level)
    app = PiMonitorApp(config)
    app.run()


if __name__ == "__main__":
    main()
