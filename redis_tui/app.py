# coding: utf-8
"""
View model for the key browser.

App owns the key list, the filter, the selection, the detail cache and the
detail scroll offset. handle_input() applies one input event and reports
whether the loop should keep running; render() projects the state into a
Frame for the terminal surface.
"""
import logging
from typing import Callable, List, Optional, Sequence

from .client import StoreError
from .details import DetailCache, KeyDetails, detail_row_count
from .filtering import FilterState
from .frame import Frame, build_frame
from .keys import KeyEvent, KeyKind
from .navigation import DetailScroll, Selection, ViewMode

logger = logging.getLogger(__name__)

NOT_CONNECTED = "Not connected to Redis server"


class App:
    def __init__(self, gateway=None, connector: Optional[Callable[["App"], bool]] = None):
        self.gateway = gateway
        self.connector = connector
        self.keys: List[str] = []
        self.filter = FilterState()
        self.selection = Selection()
        self.scroll = DetailScroll()
        self.cache = DetailCache(gateway)
        self.status: str = NOT_CONNECTED
        self._mode = ViewMode.LISTING

    # --- Connection / reload ---
    def connect(self, gateway, descriptor: str) -> bool:
        self.gateway = gateway
        self.cache = DetailCache(gateway)
        self.status = f"Connected to Redis server: {descriptor}"
        logger.info("Connected to %s", descriptor)
        return self.reload_keys()

    def set_status(self, status: str) -> None:
        self.status = status

    def reload_keys(self) -> bool:
        """Replace the key list from the gateway. Returns False on failure."""
        if self.gateway is None:
            # Without a live connection a refresh retries the connector.
            if self.connector is None:
                self.status = NOT_CONNECTED
                return False
            return self.connector(self)
        try:
            keys = self.gateway.list_keys()
        except StoreError as e:
            logger.warning("Key reload failed: %s", e)
            self.status = f"Failed to load keys: {e}"
            return False
        self.keys = list(keys)
        self.cache.clear()
        self.selection.clear()
        self.filter.refresh(self.keys)
        self.status = f"{len(self.keys)} keys found"
        logger.info("Loaded %d keys", len(self.keys))
        return True

    # --- Derived state ---
    @property
    def active_keys(self) -> Sequence[str]:
        return self.filter.visible(self.keys)

    @property
    def selected_key(self) -> Optional[str]:
        index = self.selection.index
        keys = self.active_keys
        if index is None or not 0 <= index < len(keys):
            return None
        return keys[index]

    @property
    def current_details(self) -> Optional[KeyDetails]:
        key = self.selected_key
        return None if key is None else self.cache.get(key)

    @property
    def mode(self) -> ViewMode:
        # A reload drops the selection and the cache; the detail view then has
        # nothing to show and the browser behaves as the listing.
        if self._mode is ViewMode.DETAIL and self.current_details is None:
            return ViewMode.LISTING
        return self._mode

    # --- Dispatch ---
    def handle_input(self, event: KeyEvent) -> bool:
        kind = event.kind
        if kind in (KeyKind.QUIT, KeyKind.INTERRUPT):
            return False
        if kind is KeyKind.REFRESH:
            self.reload_keys()
            return True
        if self.mode is ViewMode.DETAIL:
            self._handle_detail(event)
        else:
            self._handle_listing(event)
        return True

    def _handle_listing(self, event: KeyEvent) -> None:
        self._mode = ViewMode.LISTING
        kind = event.kind
        if kind is KeyKind.ENTER:
            self.open_details()
        elif kind is KeyKind.CHAR:
            self.filter.push(event.char, self.keys)
            self.selection.clear()
        elif kind is KeyKind.BACKSPACE:
            self.filter.pop(self.keys)
            self.selection.clear()
        elif kind is KeyKind.UP:
            self.selection.move(-1, len(self.active_keys))
        elif kind is KeyKind.DOWN:
            self.selection.move(1, len(self.active_keys))

    def _handle_detail(self, event: KeyEvent) -> None:
        kind = event.kind
        if kind is KeyKind.ESC:
            self.scroll.reset()
            self._mode = ViewMode.LISTING
        elif kind in (KeyKind.UP, KeyKind.DOWN):
            step = -1 if kind is KeyKind.UP else 1
            self.scroll.move(step, detail_row_count(self.current_details))

    def open_details(self) -> None:
        key = self.selected_key
        if key is None:
            return
        try:
            self.cache.ensure_details(key)
        except StoreError as e:
            logger.warning("Loading details for %r failed: %s", key, e)
            self.status = f"Failed to load key '{key}': {e}"
            return
        self.scroll.reset()
        self._mode = ViewMode.DETAIL

    def render(self) -> Frame:
        return build_frame(self)
