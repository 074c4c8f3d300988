"""Tracker screen: one Static redrawn from a Frame on every render."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Static

from ..controller import Frame

RULE = "─" * 60

MESSAGE_STYLES = {
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def _task_line(task, selected: bool) -> Text:
    prefix = "→ " if selected else "  "
    if task.status == "running":
        icon = "▶ "
    elif task.status == "paused":
        icon = "⏸ "
    else:
        icon = "  "
    label = f"{prefix}{icon}{task.name} ({task.elapsed})"

    if selected and task.is_running:
        return Text(label, style="black on green")
    if selected:
        return Text(label, style="reverse")
    if task.is_running:
        return Text(label, style="bold green")
    return Text(label)


def render_frame(frame: Frame) -> Text:
    """Draw the whole tracker view for one frame."""
    out = Text()
    out.append("🕒 Time Tracker\n", style="bold green")
    out.append(
        "↑/↓ to navigate, Enter to start/pause selected task, type commands below\n\n",
        style="dim",
    )

    if not frame.tasks:
        out.append(
            "  No tasks today. Type a task name below to create and start one.\n\n",
            style="dim",
        )
    else:
        for index, task in enumerate(frame.tasks):
            out.append_text(_task_line(task, index == frame.selected_index))
            out.append("\n")
        out.append("\n")

    if frame.running is not None:
        out.append(f"Currently running: {frame.running.name}\n\n", style="green")

    if frame.message is not None:
        style = MESSAGE_STYLES.get(frame.message.level, "")
        out.append(f"{frame.message.text}\n\n", style=style)

    out.append(f"{RULE}\n", style="dim")
    out.append("Commands: ", style="bold")
    out.append("start [task name], stop, exit\n", style="dim")
    out.append("Or type task name to create and start\n", style="bold")
    out.append(f"{RULE}\n", style="dim")

    cursor = "█" if frame.cursor_visible else " "
    out.append(f"> {frame.input_buffer}{cursor}")
    return out


class TrackerScreen(Screen):
    """Main tracker screen."""

    DEFAULT_CSS = """
    TrackerScreen {
        layout: vertical;
    }

    #frame {
        padding: 1 2;
        height: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="frame")

    def show_frame(self, frame: Frame) -> None:
        self.query_one("#frame", Static).update(render_frame(frame))
