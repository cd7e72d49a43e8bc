"""
Error handling wrapper for children-functions.

ErrorHandlingChildren wraps a children-function and delegates every
exception it raises to a pluggable ErrorPolicy. Errors are caught both when
the function is called and while its (lazy) result is being pulled.
"""

from typing import Any, Callable, Iterable, Iterator, Optional

from .error_policies import ErrorPolicy, FailFastPolicy


class ErrorHandlingChildren:
    """
    Children-function decorator routing failures to an error policy.

    Example:
        policy = ContinueOnErrorsPolicy(verbose=False)
        children = ErrorHandlingChildren(fetch_dependencies, policy)

        for module in PRE_ORDER_DFS.traverse(children, root):
            process(module)

        print(policy.get_statistics()['total_errors'])
    """

    def __init__(self, children: Callable[[Any], Optional[Iterable[Any]]],
                 policy: Optional[ErrorPolicy] = None):
        """
        Initialize the wrapper.

        Args:
            children: The children-function to wrap
            policy: Error handling policy (defaults to FailFastPolicy)
        """
        self._children = children
        self._policy = policy or FailFastPolicy()

    @property
    def policy(self) -> ErrorPolicy:
        return self._policy

    def __call__(self, node: Any) -> Iterator[Any]:
        return self._guarded(node)

    def _guarded(self, node: Any) -> Iterator[Any]:
        try:
            children = self._children(node)
            if children is None:
                return
            for child in children:
                yield child
        except Exception as e:
            # Children already yielded stand; the policy decides the rest
            yield from self._policy.handle(e, node)
