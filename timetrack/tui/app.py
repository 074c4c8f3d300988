"""
Tracker TUI Application.

textual owns the terminal (raw mode, restore on every exit path) and the
event loop; the TrackerController owns the tracker semantics.
"""

from __future__ import annotations

from textual import events
from textual.app import App
from textual.binding import Binding

from ..config import Settings, load_settings
from ..lifecycle import Tracker
from ..queries import TaskQueries
from ..store import RecordStore
from .controller import Frame, TrackerController
from .keys import Interrupt, from_textual
from .scheduler import Scheduler
from .views.tracker import TrackerScreen

FAREWELL = "Time tracker closed. Have a productive day! 👋"

# Exit status when the loop ends through ctrl+c
INTERRUPTED_RETURN_CODE = 130


class TrackerApp(App):
    """Main tracker TUI application."""

    TITLE = "Time Tracker"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Interrupt", show=False, priority=True),
    ]

    def __init__(
        self,
        tracker: Tracker,
        queries: TaskQueries,
        settings: Settings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._tracker = tracker
        self._queries = queries
        self._settings = settings or load_settings()
        self._tracker_screen: TrackerScreen | None = None
        self._controller: TrackerController | None = None

    @property
    def controller(self) -> TrackerController | None:
        return self._controller

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self._tracker_screen = TrackerScreen()
        await self.push_screen(self._tracker_screen)
        self._controller = TrackerController(
            self._tracker,
            self._queries,
            Scheduler(self.set_interval, self.set_timer),
            render=self._show_frame,
            on_exit=self._on_controller_exit,
            refresh_interval=self._settings.refresh_interval,
            blink_interval=self._settings.blink_interval,
        )
        self._controller.start()

    def on_unmount(self) -> None:
        self._close_controller()

    def on_key(self, event: events.Key) -> None:
        key = from_textual(event.key, event.character)
        if key is None or self._controller is None:
            return
        event.stop()
        event.prevent_default()
        self._controller.handle(key)

    def action_interrupt(self) -> None:
        if self._controller is None:
            self.exit(return_code=INTERRUPTED_RETURN_CODE)
            return
        self._controller.handle(Interrupt())

    async def action_quit(self) -> None:
        self._close_controller()
        self.exit()

    def _close_controller(self) -> None:
        if self._controller is not None:
            self._controller.close()

    def _show_frame(self, frame: Frame) -> None:
        if self._tracker_screen is not None:
            self._tracker_screen.show_frame(frame)

    def _on_controller_exit(self, interrupted: bool) -> None:
        if interrupted:
            self.exit(return_code=INTERRUPTED_RETURN_CODE)
        else:
            self.exit(message=FAREWELL)


def build_app(settings: Settings) -> TrackerApp:
    store = RecordStore(settings.data_file)
    return TrackerApp(Tracker(store), TaskQueries(store), settings=settings)


def run(settings: Settings | None = None) -> int:
    """Run the TUI application and return its exit status."""
    app = build_app(settings or load_settings())
    app.run()
    return app.return_code or 0
