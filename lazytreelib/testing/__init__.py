"""Testing utilities for LazyTreeLib consumers."""

from .fixtures import (
    NUMBERS,
    FibonacciTransform,
    RecordingChildren,
    children_from_map,
    fibonacci,
    increment,
    is_odd,
    less_than,
    less_than_mod,
    square,
)

__all__ = [
    'NUMBERS',
    'FibonacciTransform',
    'RecordingChildren',
    'children_from_map',
    'fibonacci',
    'increment',
    'is_odd',
    'less_than',
    'less_than_mod',
    'square',
]
