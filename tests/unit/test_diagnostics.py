"""Unit tests for diagnostic collection."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bidismoke.core.diagnostics import (
    ExternalLogFile,
    print_external_logs,
    print_session_logs,
    section,
)
from bidismoke.utils.exceptions import SessionError


def test_section_heading() -> None:
    assert section("ChromeDriver Logs") == "\n===== ChromeDriver Logs ====="


class TestPrintSessionLogs:
    """Tests for print_session_logs."""

    @pytest.mark.asyncio
    async def test_prints_entries_in_order(
        self, mock_session: MagicMock, output_lines: list[str]
    ) -> None:
        """Entries are printed as [LEVEL] message in received order."""
        printed = await print_session_logs(mock_session, output_lines.append)

        assert printed is True
        assert output_lines == [
            "\n===== Chrome Browser Logs =====",
            "[INFO] page loaded",
            "[WARNING] favicon missing",
        ]

    @pytest.mark.asyncio
    async def test_custom_heading(
        self, mock_session: MagicMock, output_lines: list[str]
    ) -> None:
        await print_session_logs(
            mock_session, output_lines.append, heading="Chrome Browser Logs (on error)"
        )
        assert output_lines[0] == "\n===== Chrome Browser Logs (on error) ====="

    @pytest.mark.asyncio
    async def test_empty_buffer_prints_heading_only(
        self, mock_session: MagicMock, output_lines: list[str]
    ) -> None:
        mock_session.get_browser_logs.return_value = []
        assert await print_session_logs(mock_session, output_lines.append) is True
        assert output_lines == ["\n===== Chrome Browser Logs ====="]

    @pytest.mark.asyncio
    async def test_retrieval_failure_is_swallowed(
        self, mock_session: MagicMock, output_lines: list[str]
    ) -> None:
        """A failing fetch is reported and returns False instead of raising."""
        mock_session.get_browser_logs.side_effect = SessionError("driver gone")

        printed = await print_session_logs(mock_session, output_lines.append)

        assert printed is False
        assert output_lines == ["Failed to retrieve browser logs: driver gone"]

    @pytest.mark.asyncio
    async def test_retrieval_failure_is_logged(
        self, mock_session: MagicMock, output_lines: list[str], caplog
    ) -> None:
        mock_session.get_browser_logs.side_effect = RuntimeError("not started")

        await print_session_logs(mock_session, output_lines.append)

        assert "Failed to retrieve browser logs: not started" in caplog.text


class TestPrintExternalLogs:
    """Tests for print_external_logs."""

    def test_prints_existing_files(self, tmp_path: Path) -> None:
        """Existing files are printed in full under their heading."""
        chrome = tmp_path / "chrome-debug.log"
        driver = tmp_path / "chromedriver.log"
        chrome.write_text("chrome line 1\nchrome line 2\n")
        driver.write_text("driver line\n")
        lines: list[str] = []

        print_external_logs(
            [
                ExternalLogFile("Chrome Debug", chrome),
                ExternalLogFile("ChromeDriver", driver),
            ],
            lines.append,
        )

        assert lines == [
            "\n===== Chrome Debug Logs =====",
            "chrome line 1\nchrome line 2\n",
            "\n===== ChromeDriver Logs =====",
            "driver line\n",
        ]

    def test_missing_files_print_notice(self, tmp_path: Path) -> None:
        """Absent files get a not-found notice and no error."""
        lines: list[str] = []

        print_external_logs(
            [
                ExternalLogFile("Chrome Debug", tmp_path / "a.log"),
                ExternalLogFile("ChromeDriver", tmp_path / "b.log"),
            ],
            lines.append,
        )

        assert f"No Chrome Debug log file found at: {tmp_path / 'a.log'}" in lines
        assert f"No ChromeDriver log file found at: {tmp_path / 'b.log'}" in lines

    def test_printing_is_idempotent(self, tmp_path: Path) -> None:
        """Reading has no side effects, so output repeats exactly."""
        log = tmp_path / "chromedriver.log"
        log.write_text("same\n")
        files = [ExternalLogFile("ChromeDriver", log)]
        first: list[str] = []
        second: list[str] = []

        print_external_logs(files, first.append)
        print_external_logs(files, second.append)

        assert first == second
        assert log.read_text() == "same\n"

    def test_file_vanishing_before_read_is_not_found(self, tmp_path: Path) -> None:
        """A file deleted between the check and the read reads as absent."""
        log = tmp_path / "chromedriver.log"
        log.write_text("gone soon")
        lines: list[str] = []

        with patch.object(Path, "read_text", side_effect=FileNotFoundError(str(log))):
            print_external_logs([ExternalLogFile("ChromeDriver", log)], lines.append)

        assert lines[-1] == f"No ChromeDriver log file found at: {log}"

    def test_unreadable_file_is_reported(self, tmp_path: Path) -> None:
        """Other read errors are printed, not raised."""
        log = tmp_path / "chrome-debug.log"
        log.write_text("secret")
        lines: list[str] = []

        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            print_external_logs([ExternalLogFile("Chrome Debug", log)], lines.append)

        assert lines[-1].startswith("Failed to read Chrome Debug log file at")
        assert "denied" in lines[-1]

    def test_defaults_to_print(self, tmp_path: Path, capsys) -> None:
        """Without a callback, output goes to stdout."""
        print_external_logs([ExternalLogFile("ChromeDriver", tmp_path / "x.log")])
        assert "No ChromeDriver log file found" in capsys.readouterr().out

    def test_existence_check_error_is_reported(self, tmp_path: Path) -> None:
        """A stat failure during the existence check is printed, not raised."""
        log = tmp_path / "chromedriver.log"
        lines: list[str] = []

        with patch.object(Path, "exists", side_effect=PermissionError("denied")):
            print_external_logs([ExternalLogFile("ChromeDriver", log)], lines.append)

        assert lines[-1].startswith("Failed to read ChromeDriver log file at")
        assert "denied" in lines[-1]

    def test_unstattable_path_does_not_stop_other_files(self, tmp_path: Path) -> None:
        """A file name too long to stat still lets the next file print."""
        bad = tmp_path / ("x" * 300)
        good = tmp_path / "chromedriver.log"
        good.write_text("driver line\n")
        lines: list[str] = []

        print_external_logs(
            [ExternalLogFile("Chrome Debug", bad), ExternalLogFile("ChromeDriver", good)],
            lines.append,
        )

        assert lines[-1] == "driver line\n"
