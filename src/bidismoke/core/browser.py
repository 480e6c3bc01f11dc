"""Selenium-based WebDriver BiDi session for Chrome.

This module provides the session endpoint the smoke scenario drives: a
ChromeDriver-backed Chrome with BiDi enabled and verbose logging to fixed
files. Selenium's API is blocking, so every call is pushed onto a worker
thread and the session exposes coroutines implementing RemoteSessionProtocol.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.bidi.common import command_builder

from bidismoke.core.protocols import (
    BrowsingContext,
    ElementReference,
    EvaluationResult,
    LogEntry,
    parse_evaluation_result,
)
from bidismoke.utils.config import SmokeConfig
from bidismoke.utils.exceptions import NavigationError, SessionError

logger = logging.getLogger(__name__)


def find_bundled_chromium() -> Path | None:
    """Locate the Chromium build installed by ``playwright install chromium``.

    Returns:
        Path to the Chromium executable, or None if Playwright has not
        installed one.
    """
    try:
        with sync_playwright() as playwright:
            executable = Path(playwright.chromium.executable_path)
    except PlaywrightError as e:
        logger.warning(f"Could not query Playwright for Chromium: {e}")
        return None
    return executable if executable.exists() else None


def build_chrome_options(config: SmokeConfig) -> Options:
    """Build Chrome options with BiDi on and browser logging to a file.

    Args:
        config: Smoke configuration.

    Returns:
        Options for webdriver.Chrome.
    """
    options = Options()
    options.set_capability("webSocketUrl", True)
    options.add_argument("--disable-gpu")
    options.add_argument("--enable-logging=stderr")
    options.add_argument("--v=1")
    options.add_argument(f"--log-file={config.chrome_log_path}")
    options.set_capability("goog:loggingPrefs", {"browser": "ALL", "driver": "ALL"})
    if config.chrome_path:
        options.binary_location = str(config.chrome_path)
    return options


def build_chrome_service(config: SmokeConfig) -> Service:
    """Build the ChromeDriver service with verbose logging to a file.

    Args:
        config: Smoke configuration.

    Returns:
        Service for webdriver.Chrome.
    """
    service_args = []
    if config.bidi_mapper_path:
        service_args.append(f"--bidi-mapper-path={config.bidi_mapper_path}")
    service_args.append("--verbose")
    service_args.append(f"--log-path={config.chromedriver_log_path}")
    executable = str(config.chromedriver_path) if config.chromedriver_path else None
    return Service(executable_path=executable, service_args=service_args)


class ChromeBidiSession:
    """Chrome + ChromeDriver session driven over WebDriver BiDi.

    Attributes:
        config: Smoke configuration used to build the driver.

    Example:
        >>> session = ChromeBidiSession(ConfigLoader.load())
        >>> await session.start()
        >>> context = await session.create_browsing_context("tab")
        >>> await session.quit()
    """

    def __init__(self, config: SmokeConfig) -> None:
        self.config = config
        self._driver: webdriver.Chrome | None = None

    @property
    def is_started(self) -> bool:
        return self._driver is not None

    async def start(self) -> None:
        """Start ChromeDriver and Chrome.

        Raises:
            SessionError: If the driver or browser fails to start.
        """
        options = build_chrome_options(self.config)
        service = build_chrome_service(self.config)
        try:
            self._driver = await asyncio.to_thread(
                webdriver.Chrome, service=service, options=options
            )
        except WebDriverException as e:
            raise SessionError(f"Failed to start Chrome session: {e.msg}") from e
        logger.info(f"Chrome session started: {self._driver.session_id}")

    async def create_browsing_context(self, kind: str = "tab") -> BrowsingContext:
        """Create a browsing context.

        Raises:
            RuntimeError: If the session is not started.
            SessionError: If the remote end rejects the command.
        """
        result = await self._execute("browsingContext.create", {"type": kind})
        if not isinstance(result, dict) or "context" not in result:
            raise SessionError(f"browsingContext.create returned no context: {result!r}")
        return BrowsingContext(context_id=result["context"], kind=kind)

    async def navigate(
        self, context: BrowsingContext, url: str, wait: str = "complete"
    ) -> None:
        """Navigate the context and wait for readiness.

        Raises:
            RuntimeError: If the session is not started.
            NavigationError: If navigation fails.
        """
        try:
            await self._execute(
                "browsingContext.navigate",
                {"context": context.context_id, "url": url, "wait": wait},
            )
        except SessionError as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}") from e

    async def evaluate(
        self,
        context: BrowsingContext,
        expression: str,
        await_promise: bool = False,
        result_ownership: str = "root",
    ) -> EvaluationResult:
        """Run ``script.evaluate`` in the context.

        A script that throws is not a protocol error: it comes back as an
        EvaluationFailure.

        Raises:
            RuntimeError: If the session is not started.
            SessionError: If the remote end rejects the command.
        """
        payload = await self._execute(
            "script.evaluate",
            {
                "expression": expression,
                "target": {"context": context.context_id},
                "awaitPromise": await_promise,
                "resultOwnership": result_ownership,
            },
        )
        if not isinstance(payload, dict):
            raise SessionError(f"script.evaluate returned {payload!r}")
        return parse_evaluation_result(payload)

    async def capture_element_screenshot(
        self, context: BrowsingContext, element: ElementReference
    ) -> Any:
        """Capture a screenshot clipped to the element.

        Returns:
            The ``data`` member of the response (base64 PNG text when the
            remote end behaves), or None if the response has none.

        Raises:
            RuntimeError: If the session is not started.
            SessionError: If the remote end rejects the command.
        """
        result = await self._execute(
            "browsingContext.captureScreenshot",
            {
                "context": context.context_id,
                "clip": {"type": "element", "element": {"sharedId": element.shared_id}},
            },
        )
        if not isinstance(result, dict):
            return None
        return result.get("data")

    async def get_browser_logs(self) -> list[LogEntry]:
        """Read the browser log buffer.

        Raises:
            RuntimeError: If the session is not started.
            SessionError: If the driver cannot return the logs.
        """
        driver = self._require_driver()
        try:
            raw = await asyncio.to_thread(driver.get_log, "browser")
        except WebDriverException as e:
            raise SessionError(f"Failed to read browser logs: {e.msg}") from e
        return [
            LogEntry(
                level=str(entry.get("level", "")),
                message=str(entry.get("message", "")),
                timestamp=entry.get("timestamp"),
            )
            for entry in raw
        ]

    async def quit(self) -> None:
        """Quit the driver. The session cannot be used afterwards.

        Raises:
            SessionError: If the driver fails to shut down.
        """
        if not self._driver:
            return
        driver = self._driver
        self._driver = None
        try:
            await asyncio.to_thread(driver.quit)
        except WebDriverException as e:
            raise SessionError(f"Failed to terminate Chrome session: {e.msg}") from e
        logger.info("Chrome session terminated")

    def _require_driver(self) -> webdriver.Chrome:
        if not self._driver:
            raise RuntimeError("Browser session not started")
        return self._driver

    async def _execute(self, method: str, params: dict[str, Any]) -> Any:
        """Send one BiDi command and return its result.

        Args:
            method: BiDi method name, e.g. "browsingContext.create".
            params: Command parameters.

        Raises:
            RuntimeError: If the session is not started.
            SessionError: If the remote end answers with an error.
        """
        driver = self._require_driver()

        logger.debug(f"BiDi -> {method} {params}")
        try:
            result = await asyncio.to_thread(
                driver.execute, command_builder(method, params)
            )
        except WebDriverException as e:
            raise SessionError(f"BiDi command {method} failed: {e.msg}") from e
        except Exception as e:
            # Transport errors from the websocket client are not WebDriverException
            raise SessionError(f"BiDi command {method} failed: {e!r}") from e
        logger.debug(f"BiDi <- {method} {result}")
        return result
