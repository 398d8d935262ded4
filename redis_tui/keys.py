# coding: utf-8
"""Translate raw key strings from readchar into input events."""
import enum
from dataclasses import dataclass

import readchar

QUIT_KEY = "Q"
REFRESH_KEY = "R"


class KeyKind(enum.Enum):
    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    QUIT = "quit"
    REFRESH = "refresh"
    INTERRUPT = "interrupt"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""


NAMED_KEYS = {
    readchar.key.ENTER: KeyKind.ENTER,
    readchar.key.CR: KeyKind.ENTER,
    readchar.key.LF: KeyKind.ENTER,
    readchar.key.ESC: KeyKind.ESC,
    readchar.key.BACKSPACE: KeyKind.BACKSPACE,
    "\x08": KeyKind.BACKSPACE,
    readchar.key.UP: KeyKind.UP,
    readchar.key.DOWN: KeyKind.DOWN,
    readchar.key.CTRL_C: KeyKind.INTERRUPT,
    QUIT_KEY: KeyKind.QUIT,
    REFRESH_KEY: KeyKind.REFRESH,
}

ESCAPE_SEQUENCE_PREFIXES = ("[", "O")


def decode_key(raw: str) -> KeyEvent:
    kind = NAMED_KEYS.get(raw)
    if kind is not None:
        return KeyEvent(kind)
    # On POSIX readkey() never returns a lone ESC: it reads one more character
    # and hands back ESC + c. Only CSI ("\x1b[") and SS3 ("\x1bO") prefixes
    # start real escape sequences.
    if raw.startswith(readchar.key.ESC) and raw[1:2] not in ESCAPE_SEQUENCE_PREFIXES:
        return KeyEvent(KeyKind.ESC)
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent(KeyKind.CHAR, raw)
    return KeyEvent(KeyKind.OTHER)
