# coding: utf-8
"""
Declarative layout of one screen.

build_frame() reads the view model and returns plain data; the terminal
surface turns it into rich renderables. Nothing here mutates the view model,
so a frame can be rebuilt for every redraw.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .details import KeyType, format_ttl
from .navigation import ViewMode

HELP_KEYMAP: Tuple[Tuple[str, str], ...] = (
    ("Q", "Quit"),
    ("R", "Refresh"),
    ("Enter", "View Details"),
    ("ESC", "Back"),
)


@dataclass(frozen=True)
class ListingPane:
    query: str
    title: str
    items: List[str]
    selected: Optional[int] = None


@dataclass(frozen=True)
class DetailPane:
    key: str
    type_label: str
    ttl_text: str
    summary: str
    fields: Optional[List[Tuple[str, str]]] = None
    scroll: int = 0

    @property
    def is_table(self) -> bool:
        return self.fields is not None


@dataclass(frozen=True)
class Frame:
    status: str
    main: Union[ListingPane, DetailPane]
    help: Tuple[Tuple[str, str], ...] = field(default=HELP_KEYMAP)


def listing_title(visible: int, total: int) -> str:
    return f"Redis Keys ({visible}/{total})"


def _detail_pane(key: str, details, scroll: int) -> DetailPane:
    key_type = details.key_type
    if key_type is KeyType.HASH:
        rows = list((details.fields or {}).items())
        return DetailPane(key, details.raw_type, format_ttl(details.ttl_seconds),
                          details.summary, fields=rows, scroll=scroll)
    if key_type in (KeyType.STRING, KeyType.LIST, KeyType.SET, KeyType.SORTED_SET):
        return DetailPane(key, details.raw_type, format_ttl(details.ttl_seconds),
                          details.summary, scroll=scroll)
    if key_type is KeyType.UNKNOWN:
        return DetailPane(key, details.raw_type, format_ttl(details.ttl_seconds),
                          details.raw_type, scroll=scroll)
    raise AssertionError(f"Unhandled key type {key_type}")


def build_frame(app) -> Frame:
    if app.mode is ViewMode.DETAIL:
        return Frame(status=app.status,
                     main=_detail_pane(app.selected_key, app.current_details, app.scroll.offset))
    items = list(app.active_keys)
    pane = ListingPane(
        query=app.filter.query,
        title=listing_title(len(items), len(app.keys)),
        items=items,
        selected=app.selection.index,
    )
    return Frame(status=app.status, main=pane)
