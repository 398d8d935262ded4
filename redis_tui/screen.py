# coding: utf-8
"""
Terminal surface: draws frames with rich and feeds key presses back.

The loop is strictly sequential: draw, block on one key, let the view model
handle it (including any Redis round trip), redraw.
"""
import logging
from typing import Callable, Optional

import readchar
from rich.console import Console, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .frame import DetailPane, Frame, ListingPane
from .keys import decode_key

logger = logging.getLogger(__name__)

SELECTED_STYLE = "bold on #1e293b"
STATUS_STYLE = "white on blue"
HELP_STYLE = "white on grey35"
SEARCH_HEIGHT = 3
HEADER_HEIGHT = 4
TTL_HEIGHT = 3


def list_window(count: int, selected: Optional[int], rows: int, padding: int = 1) -> int:
    """First visible index so that the selection stays on screen with padding."""
    if rows <= 0 or count <= rows:
        return 0
    if selected is None:
        return 0
    pad = min(padding, (rows - 1) // 2)
    start = max(0, selected - rows + 1 + pad)
    if selected - start < pad:
        start = max(0, selected - pad)
    return min(start, count - rows)


def _status_bar(frame: Frame) -> Text:
    return Text(frame.status, style=STATUS_STYLE, no_wrap=True, overflow="ellipsis")


def _help_bar(frame: Frame) -> Text:
    text = Text("KeyMap: ", style=HELP_STYLE, no_wrap=True)
    for key, label in frame.help:
        text.append(f"{key} ", style="bold")
        text.append(f"{label} ")
    return text


def _listing(pane: ListingPane, height: int) -> Layout:
    rows = max(0, height - SEARCH_HEIGHT - 2)
    start = list_window(len(pane.items), pane.selected, rows)
    body = Text(no_wrap=True, overflow="ellipsis")
    for index in range(start, min(len(pane.items), start + rows)):
        if index > start:
            body.append("\n")
        if index == pane.selected:
            body.append(">" + pane.items[index], style=SELECTED_STYLE)
        else:
            body.append(" " + pane.items[index])

    layout = Layout(name="listing")
    layout.split_column(
        Layout(Panel(Text(f"Search: {pane.query}", style="yellow"), title="Search Key"),
               name="search", size=SEARCH_HEIGHT),
        Layout(Panel(body, title=Text(pane.title, style="bold")), name="keys"),
    )
    return layout


def _detail_body(pane: DetailPane) -> RenderableType:
    if pane.is_table:
        table = Table(expand=True, show_lines=False)
        table.add_column("Field", ratio=3, style="bold")
        table.add_column("Hash Fields", ratio=7)
        for index, (name, value) in enumerate(pane.fields[pane.scroll:]):
            table.add_row(name, value, style=SELECTED_STYLE if index == 0 else None)
        return Panel(table, title="Hash Field")
    lines = pane.summary.splitlines() or [""]
    return Panel(Text("\n".join(lines[pane.scroll:])), title="Value")


def _detail(pane: DetailPane) -> Layout:
    header = Text()
    header.append("Key: ", style="bold")
    header.append(pane.key + "\n")
    header.append("Type: ", style="bold")
    header.append(pane.type_label)

    ttl = Text()
    ttl.append("TTL: ", style="bold")
    ttl.append(pane.ttl_text)

    layout = Layout(name="detail")
    layout.split_column(
        Layout(Panel(header, title=Text("Key Details", style="bold")), name="header", size=HEADER_HEIGHT),
        Layout(_detail_body(pane), name="body"),
        Layout(Panel(ttl, title=Text("Key Details", style="bold")), name="ttl", size=TTL_HEIGHT),
    )
    return layout


def to_renderable(frame: Frame, height: int) -> Layout:
    main_height = max(1, height - 2)
    if isinstance(frame.main, DetailPane):
        main = _detail(frame.main)
    else:
        main = _listing(frame.main, main_height)

    root = Layout(name="root")
    root.split_column(
        Layout(main, name="main"),
        Layout(_status_bar(frame), name="status", size=1),
        Layout(_help_bar(frame), name="help", size=1),
    )
    return root


def run(app, console: Optional[Console] = None, read_key: Callable[[], str] = readchar.readkey) -> None:
    console = console or Console()

    def _draw() -> Layout:
        return to_renderable(app.render(), console.size.height)

    with Live(_draw(), console=console, screen=True, auto_refresh=False) as live:
        while True:
            try:
                raw = read_key()
            except KeyboardInterrupt:
                raw = readchar.key.CTRL_C
            if not app.handle_input(decode_key(raw)):
                logger.info("Quit requested")
                break
            live.update(_draw(), refresh=True)
