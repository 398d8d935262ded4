# coding: utf-8
"""Selection and scroll bookkeeping for the list and detail views."""
import enum
from typing import Optional


class ViewMode(enum.Enum):
    LISTING = "listing"
    DETAIL = "detail"


class Selection:
    """Optional index into the active key list, with wrap-around movement."""

    def __init__(self):
        self.index: Optional[int] = None

    def clear(self) -> None:
        self.index = None

    def move(self, step: int, length: int) -> None:
        if length <= 0:
            self.index = None
            return
        if self.index is None:
            self.index = 0 if step > 0 else length - 1
            return
        self.index = (self.index + step) % length


class DetailScroll:
    """Row offset into the detail body; clamps instead of wrapping."""

    def __init__(self):
        self.offset: int = 0

    def reset(self) -> None:
        self.offset = 0

    def move(self, step: int, rows: int) -> None:
        last = max(0, rows - 1)
        self.offset = max(0, min(last, self.offset + step))
