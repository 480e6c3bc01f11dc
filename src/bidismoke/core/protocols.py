"""Core protocols and data types for bidismoke.

This module defines the types the smoke scenario passes between its steps and
the protocol the remote browser session has to satisfy. It includes:
- BrowsingContext and ElementReference handles
- EvaluationSuccess / EvaluationFailure, the tagged result of script.evaluate
- LogEntry for browser log records
- RemoteSessionProtocol for the session endpoint
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class BrowsingContext:
    """A navigable surface (e.g. a tab) inside the browser session.

    Attributes:
        context_id: The BiDi browsing context identifier.
        kind: The context type it was created with ("tab" or "window").
    """

    context_id: str
    kind: str = "tab"


@dataclass(frozen=True)
class ElementReference:
    """Opaque handle to a DOM node.

    Only meaningful inside the browsing context that produced it.

    Attributes:
        shared_id: The BiDi ``sharedId`` of the node.
        context_id: The browsing context the reference was issued by.
    """

    shared_id: str
    context_id: str


@dataclass(frozen=True)
class EvaluationSuccess:
    """A script evaluation that completed normally.

    Attributes:
        value: The serialized remote value (``{"type": "node", "sharedId": ...}``
            for DOM nodes).
        realm: The realm the script ran in, if reported.
    """

    value: dict[str, Any]
    realm: str | None = None

    @property
    def result_type(self) -> str:
        return "success"

    @property
    def shared_id(self) -> str | None:
        """The node reference carried by the value, if any."""
        return self.value.get("sharedId")


@dataclass(frozen=True)
class EvaluationFailure:
    """A script evaluation that did not succeed.

    Attributes:
        result_type: The result tag, usually "exception".
        details: Whatever the remote end reported (exceptionDetails, etc.).
    """

    result_type: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        """Best available description of the failure."""
        text = self.details.get("text")
        if text:
            return str(text)
        return f"evaluation returned {self.result_type!r}"


EvaluationResult = EvaluationSuccess | EvaluationFailure


def parse_evaluation_result(payload: dict[str, Any]) -> EvaluationResult:
    """Turn a ``script.evaluate`` response into a tagged result.

    Args:
        payload: The command result, e.g.
            ``{"type": "success", "result": {...}, "realm": "..."}``.

    Returns:
        EvaluationSuccess when the tag is "success", EvaluationFailure otherwise.
    """
    result_type = payload.get("type")
    if result_type == "success":
        value = payload.get("result")
        return EvaluationSuccess(
            value=value if isinstance(value, dict) else {},
            realm=payload.get("realm"),
        )
    details = payload.get("exceptionDetails")
    return EvaluationFailure(
        result_type=str(result_type),
        details=details if isinstance(details, dict) else {},
    )


@dataclass(frozen=True)
class LogEntry:
    """A browser log record.

    Attributes:
        level: Severity name (e.g. "SEVERE", "INFO").
        message: The log text.
        timestamp: Milliseconds since epoch, if reported.
    """

    level: str
    message: str
    timestamp: int | None = None


class RemoteSessionProtocol(Protocol):
    """Protocol defining the remote browser session.

    This protocol abstracts the session endpoint so the scenario can run
    against ChromeDriver or against mocks in tests.
    """

    async def start(self) -> None:
        """Acquire the session (start driver and browser)."""
        ...

    async def create_browsing_context(self, kind: str = "tab") -> BrowsingContext:
        """Create a new browsing context.

        Args:
            kind: "tab" or "window".
        """
        ...

    async def navigate(
        self, context: BrowsingContext, url: str, wait: str = "complete"
    ) -> None:
        """Navigate a context and wait for the given readiness state.

        Args:
            context: The context to navigate.
            url: The URL to load.
            wait: Readiness to wait for ("none", "interactive", "complete").
        """
        ...

    async def evaluate(
        self,
        context: BrowsingContext,
        expression: str,
        await_promise: bool = False,
        result_ownership: str = "root",
    ) -> EvaluationResult:
        """Evaluate an expression in the context.

        Args:
            context: The context to evaluate in.
            expression: JavaScript expression.
            await_promise: Whether to await a returned promise.
            result_ownership: "root" keeps returned handles alive.
        """
        ...

    async def capture_element_screenshot(
        self, context: BrowsingContext, element: ElementReference
    ) -> Any:
        """Capture a screenshot clipped to an element.

        Returns:
            Base64 PNG text on a healthy remote end. Deliberately untyped:
            whatever the remote end sent is passed on for validation.
        """
        ...

    async def get_browser_logs(self) -> list[LogEntry]:
        """Return buffered browser log entries in the order received."""
        ...

    async def quit(self) -> None:
        """Terminate the session."""
        ...
