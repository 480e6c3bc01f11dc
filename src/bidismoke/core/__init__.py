"""Core module for bidismoke.

This module exports the scenario orchestrator, its building blocks and the
data types passed between them.
"""

from bidismoke.core.browser import ChromeBidiSession
from bidismoke.core.capture import (
    PNG_BASE64_PREFIX,
    capture_and_validate,
    extract_signature,
)
from bidismoke.core.diagnostics import (
    ExternalLogFile,
    print_external_logs,
    print_session_logs,
)
from bidismoke.core.engine import ScenarioResult, SmokeScenario
from bidismoke.core.locator import HEADER_EXPRESSION, locate_element
from bidismoke.core.protocols import (
    BrowsingContext,
    ElementReference,
    EvaluationFailure,
    EvaluationResult,
    EvaluationSuccess,
    LogEntry,
    RemoteSessionProtocol,
    parse_evaluation_result,
)

__all__ = [
    "BrowsingContext",
    "ChromeBidiSession",
    "ElementReference",
    "EvaluationFailure",
    "EvaluationResult",
    "EvaluationSuccess",
    "ExternalLogFile",
    "HEADER_EXPRESSION",
    "LogEntry",
    "PNG_BASE64_PREFIX",
    "RemoteSessionProtocol",
    "ScenarioResult",
    "SmokeScenario",
    "capture_and_validate",
    "extract_signature",
    "locate_element",
    "parse_evaluation_result",
    "print_external_logs",
    "print_session_logs",
]
