# coding: utf-8
"""Substring filtering of the key list."""
from typing import List, Sequence


def apply_filter(full_list: Sequence[str], query: str) -> List[str]:
    """Keys containing query, case-insensitively, in their original order.

    Callers skip this entirely for an empty query and show the full list.
    """
    q = query.lower()
    return [key for key in full_list if q in key.lower()]


class FilterState:
    def __init__(self):
        self.query: str = ""
        self.matches: List[str] = []

    @property
    def active(self) -> bool:
        return bool(self.query)

    def push(self, char: str, full_list: Sequence[str]) -> None:
        self.query += char
        self.matches = apply_filter(full_list, self.query)

    def pop(self, full_list: Sequence[str]) -> None:
        self.query = self.query[:-1]
        if self.query:
            self.matches = apply_filter(full_list, self.query)

    def refresh(self, full_list: Sequence[str]) -> None:
        if self.query:
            self.matches = apply_filter(full_list, self.query)

    def visible(self, full_list: Sequence[str]) -> Sequence[str]:
        return self.matches if self.query else full_list
