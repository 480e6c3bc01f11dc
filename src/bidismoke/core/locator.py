"""Resolve a DOM query to a BiDi element reference."""

from bidismoke.core.protocols import (
    BrowsingContext,
    ElementReference,
    EvaluationFailure,
    RemoteSessionProtocol,
)
from bidismoke.utils.exceptions import EvaluationError

HEADER_EXPRESSION = '(document.getElementsByTagName("h1")[0])'


async def locate_element(
    session: RemoteSessionProtocol,
    context: BrowsingContext,
    expression: str = HEADER_EXPRESSION,
    await_promise: bool = False,
    result_ownership: str = "root",
) -> ElementReference:
    """Evaluate an expression once and return the node it resolves to.

    Args:
        session: The remote session.
        context: The browsing context to evaluate in.
        expression: JavaScript expression yielding a DOM node.
        await_promise: Whether the expression returns a promise.
        result_ownership: Ownership of the returned handle.

    Returns:
        Reference to the node, scoped to ``context``.

    Raises:
        EvaluationError: If evaluation did not succeed or yielded no node.
    """
    result = await session.evaluate(
        context,
        expression,
        await_promise=await_promise,
        result_ownership=result_ownership,
    )
    if isinstance(result, EvaluationFailure):
        raise EvaluationError(
            f"Script evaluation failed: {result.result_type!r} != 'success' "
            f"({result.message})",
            result_type=result.result_type,
        )
    if not result.shared_id:
        raise EvaluationError(
            f"Expression did not resolve to a DOM node: {expression}",
            result_type=result.result_type,
        )
    return ElementReference(shared_id=result.shared_id, context_id=context.context_id)
