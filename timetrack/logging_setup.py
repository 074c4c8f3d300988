from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep stderr quiet for one-shot commands:
    - timetrack warnings and errors pass
    - third-party loggers (textual, asyncio) only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "timetrack" or record.name.startswith("timetrack."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console: bool = True,
    console_level: int = logging.WARNING,
    file_level: int = logging.INFO,
) -> Path | None:
    """
    Configure logging with:
    - File handler: full logs for debugging
    - Console handler (optional): warnings for non-interactive commands

    The interactive view owns the terminal, so it passes console=False.
    Returns the log file path, or None when the log directory is unusable.
    """
    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(console_level)
        ch.setFormatter(fmt)
        ch.addFilter(_ConsoleNoiseFilter())
        root.addHandler(ch)

    log_file: Path | None = Path(log_dir).expanduser() / "timetrack.log"
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as e:
        log_file = None
        if not console:
            root.addHandler(logging.NullHandler())
        logging.getLogger(__name__).warning("File logging disabled: %s", e)
    else:
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
