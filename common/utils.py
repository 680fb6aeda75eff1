"""
common.utils

Utility helper functions.
"""
from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def first_present(items: Optional[Iterable[Optional[T]]]) -> Optional[T]:
    """
    Return the first element that is not None, or None if there is none.
    """
    for item in items or ():
        if item is not None:
            return item
    return None
