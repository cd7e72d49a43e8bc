"""Exceptions raised by LazyTreeLib.

Every exception also derives from the closest built-in exception so callers
can catch either the library type or the standard one.
"""


class LazyTreeError(Exception):
    """Base class for all LazyTreeLib errors."""
    pass


class AlreadyConsumedError(LazyTreeError, RuntimeError):
    """Raised when a single-use sequence is iterated a second time."""
    pass


class NoSuchElementError(LazyTreeError, LookupError):
    """Raised by first()/last() when the sequence is empty."""
    pass


class NotRestartableError(LazyTreeError, ValueError):
    """Raised when an operation needs to replay a single-use sequence."""
    pass


class ConfigurationError(LazyTreeError, ValueError):
    """Raised when a TraversalConfig fails validation."""
    pass
