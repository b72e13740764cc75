"""
Path Arithmetic
===============

Pure path helpers used by the satisfaction evaluator. Nothing here touches the
filesystem except ``os.getcwd()`` when a relative path has to be made absolute.
"""

import os
from typing import Tuple


def to_absolute(path: str) -> str:
    """
    Make a path absolute and normalised.

    Raises:
        OSError: If the current working directory cannot be determined
    """
    if not os.path.isabs(path):
        path = os.path.join(os.getcwd(), path)
    return os.path.normpath(path)


def path_parts(path: str) -> Tuple[str, ...]:
    """Split an absolute path into its components, root included."""
    drive, rest = os.path.splitdrive(to_absolute(path))
    parts = [p for p in rest.split(os.sep) if p]
    return (drive + os.sep, *parts)


def is_within(path: str, root: str) -> bool:
    """
    True when ``path`` is ``root`` or nested below it.

    Components are compared one by one, so ``/ws-2`` is not within ``/ws``.
    """
    candidate = path_parts(path)
    base = path_parts(root)
    return candidate[: len(base)] == base


def same_path(a: str, b: str) -> bool:
    """Structural equality after normalisation (trailing slashes ignored)."""
    return path_parts(a) == path_parts(b)
