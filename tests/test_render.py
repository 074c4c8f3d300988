"""Tests for views/tracker.py - frame rendering."""

from __future__ import annotations

from datetime import datetime, timezone

from timetrack.models import Task
from timetrack.queries import summarize
from timetrack.tui.controller import Flash, Frame
from timetrack.tui.views.tracker import render_frame

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def make_frame(tasks=(), **overrides) -> Frame:
    summaries = tuple(summarize(task, NOW) for task in tasks)
    running = next((s for s in summaries if s.is_running), None)
    values = dict(
        tasks=summaries,
        selected_index=0,
        input_buffer="",
        message=None,
        cursor_visible=True,
        running=running,
    )
    values.update(overrides)
    return Frame(**values)


def lines(frame: Frame) -> list[str]:
    return render_frame(frame).plain.splitlines()


class TestRenderFrame:
    """Tests for render_frame."""

    def test_empty_state(self) -> None:
        out = lines(make_frame())

        assert out[0] == "🕒 Time Tracker"
        assert "  No tasks today. Type a task name below to create and start one." in out
        assert not any(line.startswith("Currently running") for line in out)
        assert out[-1] == "> █"

    def test_task_lines_show_marker_icon_and_elapsed(self) -> None:
        tasks = [
            Task(id=1, name="Write spec", status="paused", total_time=65),
            Task(id=2, name="Review PR", status="running", total_time=0, last_started=NOW),
        ]

        out = lines(make_frame(tasks, selected_index=1))

        assert "  ⏸ Write spec (1m 5s)" in out
        assert "→ ▶ Review PR (0s)" in out
        assert "Currently running: Review PR" in out

    def test_message_is_shown(self) -> None:
        frame = make_frame(message=Flash("✓ Created and started: A"))

        assert "✓ Created and started: A" in lines(frame)

    def test_message_style_follows_level(self) -> None:
        text = render_frame(make_frame(message=Flash("Error: boom", "error")))

        styles = [str(span.style) for span in text.spans]
        assert "red" in styles

    def test_input_line_and_hidden_cursor(self) -> None:
        out = lines(make_frame(input_buffer="start rev", cursor_visible=False))

        assert out[-1] == "> start rev "

    def test_command_help_is_always_present(self) -> None:
        out = lines(make_frame())

        assert "Commands: start [task name], stop, exit" in out
        assert "Or type task name to create and start" in out
