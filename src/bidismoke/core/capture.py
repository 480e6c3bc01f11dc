"""Element screenshot capture and PNG signature validation."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from bidismoke.core.diagnostics import print_session_logs, section
from bidismoke.core.protocols import (
    BrowsingContext,
    ElementReference,
    RemoteSessionProtocol,
)
from bidismoke.utils.exceptions import (
    ScreenshotError,
    ScreenshotFormatError,
    ScreenshotSignatureError,
)

logger = logging.getLogger(__name__)

# "\x89PNG\r\n" base64-encodes to "iVBORw0KGgo"; the first five characters
# depend only on the first three (fixed) bytes.
PNG_BASE64_PREFIX = "iVBOR"


def extract_signature(response: object) -> str:
    """Validate a screenshot response and return its signature prefix.

    Args:
        response: The value returned by the capture call.

    Returns:
        The first five characters of the base64 data.

    Raises:
        ScreenshotFormatError: If the response is missing, empty or not text.
        ScreenshotSignatureError: If the data is not a base64 PNG.
    """
    if not response or not isinstance(response, str):
        raise ScreenshotFormatError(response)

    prefix = response[: len(PNG_BASE64_PREFIX)]
    if prefix != PNG_BASE64_PREFIX:
        raise ScreenshotSignatureError(actual=prefix, expected=PNG_BASE64_PREFIX)
    return prefix


def _describe(response: object) -> str:
    try:
        return json.dumps(response, indent=2, default=repr)
    except (TypeError, ValueError):
        return repr(response)


async def capture_and_validate(
    session: RemoteSessionProtocol,
    context: BrowsingContext,
    element: ElementReference,
    output: Callable[[str], None] = print,
) -> str:
    """Capture a screenshot of an element and check it is a PNG.

    Session logs are printed afterwards either way; on failure the error is
    re-raised once they have been printed.

    Args:
        session: The remote session.
        context: The browsing context holding the element.
        element: Reference obtained from ``context``.
        output: Where to write diagnostic lines.

    Returns:
        The validated signature prefix ("iVBOR").

    Raises:
        ScreenshotError: If the element does not belong to ``context``, or the
            response fails validation (see extract_signature).
        SessionError: If the capture command itself fails.
    """
    output(section("Attempting screenshot…"))

    try:
        if element.context_id != context.context_id:
            raise ScreenshotError(
                f"Element {element.shared_id} belongs to context "
                f"{element.context_id}, not {context.context_id}"
            )
        response = await session.capture_element_screenshot(context, element)
        output(f"Raw BiDi screenshot response:\n{_describe(response)}")
        prefix = extract_signature(response)
        output(f"Screenshot prefix: {prefix}")
    except Exception as e:
        if isinstance(e, ScreenshotFormatError):
            output("Unexpected response format: no base64 screenshot found!")
        logger.error(f"Screenshot failed: {e}")
        output(f"Screenshot failed with error:\n{e!r}")
        await print_session_logs(
            session, output, heading="Chrome Browser Logs (on error)"
        )
        raise

    await print_session_logs(session, output)
    return prefix
