"""Exception hierarchy for bidismoke."""


class SmokeTestError(Exception):
    """Base exception for all bidismoke errors."""


class ConfigurationError(SmokeTestError):
    """Invalid or missing configuration."""


class SessionError(SmokeTestError):
    """The browser session could not be started, driven or terminated."""


class NavigationError(SmokeTestError):
    """Browsing context navigation failed."""


class EvaluationError(SmokeTestError):
    """Script evaluation did not yield a usable element reference.

    Attributes:
        result_type: The tag of the evaluation result (e.g. "exception").
    """

    def __init__(self, message: str, result_type: str | None = None) -> None:
        """Initialize EvaluationError.

        Args:
            message: Human-readable description of the failure.
            result_type: The tag of the evaluation result, if one was returned.
        """
        self.result_type = result_type
        super().__init__(message)


class ScreenshotError(SmokeTestError):
    """Element screenshot capture failed."""


class ScreenshotFormatError(ScreenshotError):
    """Screenshot response is missing or not base64 text.

    This is not a plain capture failure: the remote end answered, but the
    answer does not carry image data, which points at a protocol regression.
    """

    def __init__(self, response: object) -> None:
        """Initialize ScreenshotFormatError with the offending response.

        Args:
            response: The raw value returned by the capture call.
        """
        self.response = response
        super().__init__(
            "Screenshot missing Base64 data (likely a Chromium BiDi regression); "
            f"got {type(response).__name__}"
        )


class ScreenshotSignatureError(ScreenshotError, AssertionError):
    """Screenshot data does not start with the base64 PNG signature."""

    def __init__(self, actual: str, expected: str) -> None:
        """Initialize ScreenshotSignatureError.

        Args:
            actual: The prefix found in the screenshot data.
            expected: The prefix a PNG image encodes to.
        """
        self.actual = actual
        self.expected = expected
        super().__init__(f"{actual!r} != {expected!r}")
