"""Smoke scenario orchestrator for bidismoke.

This module runs the end-to-end flow: open a tab, load a page, resolve the
header element over BiDi, screenshot it, and always tear the session down and
dump the browser and driver logs afterwards.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from bidismoke.core.capture import capture_and_validate
from bidismoke.core.diagnostics import ExternalLogFile, print_external_logs
from bidismoke.core.locator import locate_element
from bidismoke.core.protocols import RemoteSessionProtocol
from bidismoke.utils.config import SmokeConfig
from bidismoke.utils.exceptions import SessionError

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Outcome of a passing smoke run.

    Attributes:
        context_id: The browsing context that was created.
        shared_id: The element reference that was screenshotted.
        signature: The validated screenshot prefix.
    """

    context_id: str
    shared_id: str
    signature: str


class SmokeScenario:
    """Runs the BiDi element-screenshot scenario against one session.

    The scenario owns the session: it starts it, and quits it exactly once on
    every exit path. Failures are re-raised after teardown.

    Attributes:
        session: The remote session to drive.
        config: Scenario configuration.
        output_callback: Receives every diagnostic line.

    Example:
        >>> scenario = SmokeScenario(ChromeBidiSession(config), config)
        >>> result = await scenario.run()
        >>> print(result.signature)
    """

    def __init__(
        self,
        session: RemoteSessionProtocol,
        config: SmokeConfig,
        output_callback: Callable[[str], None] | None = None,
    ):
        self.session = session
        self.config = config
        self.output_callback = output_callback or print

    @property
    def log_files(self) -> list[ExternalLogFile]:
        return [
            ExternalLogFile("Chrome Debug", self.config.chrome_log_path),
            ExternalLogFile("ChromeDriver", self.config.chromedriver_log_path),
        ]

    async def run(self) -> ScenarioResult:
        """Execute the scenario.

        Returns:
            ScenarioResult for a passing run.

        Raises:
            SessionError: If the session cannot be started or terminated.
            EvaluationError: If the header element cannot be resolved.
            ScreenshotError: If the screenshot is missing or not a PNG.
        """
        try:
            await self.session.start()
        except Exception:
            # Nothing to terminate, but the driver log usually says why.
            print_external_logs(self.log_files, self.output_callback)
            raise

        primary: BaseException | None = None
        try:
            return await self._exercise()
        except BaseException as e:
            primary = e
            raise
        finally:
            await self._teardown(primary)

    async def _exercise(self) -> ScenarioResult:
        context = await self.session.create_browsing_context("tab")
        logger.info(f"Created browsing context {context.context_id}")

        await self.session.navigate(context, self.config.page_url, wait="complete")

        element = await locate_element(self.session, context)
        logger.info(f"Resolved element {element.shared_id}")

        signature = await capture_and_validate(
            self.session, context, element, self.output_callback
        )

        # Give the browser a moment to flush asynchronous logs.
        await asyncio.sleep(self.config.log_flush_delay)

        return ScenarioResult(
            context_id=context.context_id,
            shared_id=element.shared_id,
            signature=signature,
        )

    async def _teardown(self, primary: BaseException | None) -> None:
        """Quit the session, then print the external logs.

        A termination failure never replaces ``primary``; it is attached to
        it as a note. Without a primary error it is raised as SessionError.
        """
        termination_error: Exception | None = None
        try:
            await self.session.quit()
        except Exception as e:
            logger.error(f"Failed to terminate session: {e}")
            termination_error = e

        print_external_logs(self.log_files, self.output_callback)

        if termination_error is None:
            return
        if primary is not None:
            primary.add_note(f"Session termination also failed: {termination_error}")
            return
        if isinstance(termination_error, SessionError):
            raise termination_error
        raise SessionError(
            f"Failed to terminate session: {termination_error}"
        ) from termination_error
