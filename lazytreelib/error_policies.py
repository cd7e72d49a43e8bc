"""
Error handling policies for LazyTreeLib.

This module provides a flexible error handling system through the Policy
pattern, allowing users to decide what happens when a children-function
raises during traversal.
"""

import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors raised
    while a node's children are requested or pulled.
    """

    @abstractmethod
    def handle(self, error: Exception, node: Any) -> Iterable[Any]:
        """
        Handle an error raised while expanding ``node``.

        Args:
            error: The exception that was raised
            node: The node whose children were being produced

        Returns:
            Replacement children to continue with (usually empty),
            or re-raises the exception to stop traversal.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping traversal.

    This is the default behavior - any error halts the entire pass.
    """

    def handle(self, error: Exception, node: Any) -> Iterable[Any]:
        """Re-raise the error immediately."""
        raise error


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors silently and continues traversal.

    Failing nodes are treated as having no (further) children. Useful for
    collecting all errors and presenting them at the end.
    """

    def __init__(self):
        """Initialize the policy."""
        self.errors: List[Dict[str, Any]] = []

    def handle(self, error: Exception, node: Any) -> Iterable[Any]:
        """Record the error and return no children."""
        self._record(error, node)
        return ()

    def _record(self, error: Exception, node: Any) -> None:
        self.errors.append({
            'node': node,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error)
        })

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'errors': self.errors  # Full error details
        }


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that reports errors and continues traversal.

    Errors are collected for later inspection, and a warning is printed to
    stderr for each one unless ``verbose`` is False.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: Exception, node: Any) -> Iterable[Any]:
        self._record(error, node)
        if self.verbose:
            print(f"\nWARNING: Error expanding '{node}': {error}", file=sys.stderr)
        return ()


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails fast.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt processing.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, print warnings for errors
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[Exception] = []

    def handle(self, error: Exception, node: Any) -> Iterable[Any]:
        """Swallow the error if under threshold, otherwise raise."""
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            print(f"\nWARNING [{self.error_count}/{self.max_errors}]: Error expanding '{node}': {error}",
                  file=sys.stderr)
        return ()
