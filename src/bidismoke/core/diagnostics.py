"""Diagnostic output for the smoke scenario.

Nothing in this module raises: diagnostics are collected on both the success
and the failure path and must never change the scenario's outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from bidismoke.core.protocols import RemoteSessionProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalLogFile:
    """A log file written by the browser or driver process.

    Attributes:
        label: Human name of the writer, e.g. "ChromeDriver".
        path: Fixed location of the file.
    """

    label: str
    path: Path


def section(title: str) -> str:
    """Format a section heading."""
    return f"\n===== {title} ====="


async def print_session_logs(
    session: RemoteSessionProtocol,
    output: Callable[[str], None] = print,
    heading: str = "Chrome Browser Logs",
) -> bool:
    """Print the session's browser log entries, best effort.

    Args:
        session: The remote session.
        output: Where to write lines.
        heading: Section heading to print above the entries.

    Returns:
        True if the logs were retrieved and printed, False otherwise.
    """
    try:
        entries = await session.get_browser_logs()
    except Exception as e:
        logger.warning(f"Failed to retrieve browser logs: {e}")
        output(f"Failed to retrieve browser logs: {e}")
        return False

    output(section(heading))
    for entry in entries:
        output(f"[{entry.level}] {entry.message}")
    return True


def print_external_logs(
    log_files: Sequence[ExternalLogFile],
    output: Callable[[str], None] = print,
) -> None:
    """Print the full content of each external log file.

    A file that is absent, or disappears before it can be read, gets a
    "not found" notice instead.

    Args:
        log_files: The files to print, in order.
        output: Where to write lines.
    """
    for log_file in log_files:
        output(section(f"{log_file.label} Logs"))
        not_found = f"No {log_file.label} log file found at: {log_file.path}"
        try:
            if not log_file.path.exists():
                output(not_found)
                continue
            content = log_file.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            output(not_found)
        except OSError as e:
            logger.warning(f"Failed to read {log_file.path}: {e}")
            output(f"Failed to read {log_file.label} log file at {log_file.path}: {e}")
        else:
            output(content)
