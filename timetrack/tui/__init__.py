"""
Tracker TUI - live terminal view of today's tasks.

Architecture:
- keys.py: decoded key events (raw sequences and textual key names)
- scheduler.py: cancellable recurring / one-shot timers
- controller.py: selection, input buffer, commands, timers
- views/: Textual screen and the frame renderer
- app.py: Main application entry point
"""
