"""Shared pytest fixtures for bidismoke tests.

Fixtures include a mock remote session that plays the happy path, a test
configuration that keeps log files in a temporary directory, and sample
screenshot data.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from bidismoke.core.protocols import (
    BrowsingContext,
    EvaluationSuccess,
    LogEntry,
    RemoteSessionProtocol,
)
from bidismoke.utils.config import SmokeConfig

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA"
    "60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_base64() -> str:
    """Base64 text of a valid PNG image."""
    return PNG_BASE64


@pytest.fixture
def mock_session() -> MagicMock:
    """Mock remote session for unit tests.

    Creates a MagicMock conforming to RemoteSessionProtocol whose async
    methods play a successful run: context "ctx-1", element "elem-1" and a
    valid PNG screenshot.

    Returns:
        MagicMock: A mock session with async method support.
    """
    session = MagicMock(spec=RemoteSessionProtocol)
    session.start = AsyncMock()
    session.create_browsing_context = AsyncMock(
        return_value=BrowsingContext(context_id="ctx-1", kind="tab")
    )
    session.navigate = AsyncMock()
    session.evaluate = AsyncMock(
        return_value=EvaluationSuccess(
            value={"type": "node", "sharedId": "elem-1"}, realm="realm-1"
        )
    )
    session.capture_element_screenshot = AsyncMock(return_value=PNG_BASE64)
    session.get_browser_logs = AsyncMock(
        return_value=[
            LogEntry(level="INFO", message="page loaded"),
            LogEntry(level="WARNING", message="favicon missing"),
        ]
    )
    session.quit = AsyncMock()
    return session


@pytest.fixture
def smoke_config(tmp_path: Path) -> SmokeConfig:
    """Test configuration.

    Log files live under tmp_path (and do not exist until a test writes
    them), and the log flush delay is zero.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        SmokeConfig: A configuration object for testing.
    """
    return SmokeConfig(
        chrome_log_path=tmp_path / "chrome-debug.log",
        chromedriver_log_path=tmp_path / "chromedriver.log",
        log_flush_delay=0,
    )


@pytest.fixture
def output_lines() -> list[str]:
    """Collects lines written through an output callback."""
    return []
