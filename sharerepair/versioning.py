"""Dotted-numeric version comparison."""

from __future__ import annotations

import operator
from itertools import zip_longest

_OPERATORS = {
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    ">": operator.gt,
}


def parse_version(version: str) -> tuple[int, ...]:
    """Split a version like ``16.0.0.9`` into integer segments."""
    segments = version.strip().split(".")
    try:
        return tuple(int(segment) for segment in segments)
    except ValueError:
        raise ValueError(f"Invalid version string: '{version}'") from None


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1. Shorter versions are padded with zero segments."""
    for a, b in zip_longest(parse_version(left), parse_version(right), fillvalue=0):
        if a != b:
            return -1 if a < b else 1
    return 0


def version_compare(left: str, right: str, op: str) -> bool:
    """Compare two versions with one of ``<``, ``<=``, ``==``, ``!=``, ``>=``, ``>``."""
    try:
        compare = _OPERATORS[op]
    except KeyError:
        raise ValueError(f"Unsupported comparison operator: '{op}'") from None
    return compare(compare_versions(left, right), 0)
