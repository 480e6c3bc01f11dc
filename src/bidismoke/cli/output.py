"""CLI output formatting utilities for bidismoke.

This module provides the OutputFormatter class for the final pass/fail
summary printed after the scenario's own diagnostics.
"""

from bidismoke.core.engine import ScenarioResult


class OutputFormatter:
    """Formats and displays the scenario verdict.

    Attributes:
        verbose: Whether to include extra detail.
    """

    GREEN = "\033[32m"
    RED = "\033[31m"
    RESET = "\033[0m"

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def show_success(self, result: ScenarioResult) -> None:
        """Show the passing verdict.

        Args:
            result: The scenario result.
        """
        print(f"\n{self.GREEN}PASS{self.RESET}: element screenshot is a PNG")
        if self.verbose:
            print(f"  Context:   {result.context_id}")
            print(f"  Element:   {result.shared_id}")
            print(f"  Signature: {result.signature}")

    def show_failure(self, error: BaseException) -> None:
        """Show the failing verdict with the error and any attached notes.

        Args:
            error: The error the scenario ended with.
        """
        print(f"\n{self.RED}FAIL{self.RESET}: {type(error).__name__}: {error}")
        for note in getattr(error, "__notes__", []):
            print(f"  {note}")
