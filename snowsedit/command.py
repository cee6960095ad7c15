"""Commands the editor understands, and their mapping from input events."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from .terminal import KeyCode, KeyEvent, KeyModifiers, ResizeEvent, Size


class CommandError(ValueError):
    """Raised when an event does not map to a command."""


class Move(enum.Enum):
    PAGE_DOWN = enum.auto()
    PAGE_UP = enum.auto()
    START_OF_LINE = enum.auto()
    END_OF_LINE = enum.auto()
    UP = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    DOWN = enum.auto()


@dataclass(frozen=True)
class Insert:
    character: str


class EditAction(enum.Enum):
    INSERT_NEWLINE = enum.auto()
    DELETE = enum.auto()
    DELETE_BACKWARD = enum.auto()


class SystemAction(enum.Enum):
    SAVE = enum.auto()
    QUIT = enum.auto()


@dataclass(frozen=True)
class Resize:
    size: Size


Edit = Union[Insert, EditAction]
System = Union[SystemAction, Resize]
Command = Union[Move, Edit, System]

_MOVES = {
    KeyCode.UP: Move.UP,
    KeyCode.DOWN: Move.DOWN,
    KeyCode.LEFT: Move.LEFT,
    KeyCode.RIGHT: Move.RIGHT,
    KeyCode.PAGE_DOWN: Move.PAGE_DOWN,
    KeyCode.PAGE_UP: Move.PAGE_UP,
    KeyCode.HOME: Move.START_OF_LINE,
    KeyCode.END: Move.END_OF_LINE,
}

_PLAIN_EDITS = {
    KeyCode.ENTER: EditAction.INSERT_NEWLINE,
    KeyCode.BACKSPACE: EditAction.DELETE_BACKWARD,
    KeyCode.DELETE: EditAction.DELETE,
}

_CONTROL_KEYS = {
    "d": SystemAction.QUIT,
    "s": SystemAction.SAVE,
}


def move_from_key(event: KeyEvent) -> Move:
    if event.modifiers != KeyModifiers.NONE:
        raise CommandError(f"Unsupported key code {event.code} or modifier {event.modifiers}")
    try:
        return _MOVES[event.code]
    except KeyError:
        raise CommandError(f"Unsupported code: {event.code}") from None


def edit_from_key(event: KeyEvent) -> Edit:
    code, modifiers = event.code, event.modifiers
    if (
        code is KeyCode.CHAR
        and event.char is not None
        and modifiers in (KeyModifiers.NONE, KeyModifiers.SHIFT)
    ):
        return Insert(event.char)
    if modifiers == KeyModifiers.NONE:
        if code is KeyCode.TAB:
            return Insert("\t")
        if code in _PLAIN_EDITS:
            return _PLAIN_EDITS[code]
    raise CommandError(f"Unsupported key code {code} with modifiers {modifiers}")


def system_from_key(event: KeyEvent) -> SystemAction:
    if event.modifiers != KeyModifiers.CONTROL:
        raise CommandError(f"Unsupported key code {event.code} or modifier {event.modifiers}")
    if event.code is KeyCode.CHAR and event.char in _CONTROL_KEYS:
        return _CONTROL_KEYS[event.char]
    raise CommandError(f"Unsupported CONTROL+{event.char or event.code} combination")


def command_from_event(event: object) -> Command:
    """Map a key or resize event to a command; raise CommandError otherwise."""
    if isinstance(event, KeyEvent):
        for convert in (edit_from_key, move_from_key, system_from_key):
            try:
                return convert(event)
            except CommandError:
                continue
        raise CommandError(f"Event not supported: {event}")
    if isinstance(event, ResizeEvent):
        return Resize(Size(height=event.height, width=event.width))
    raise CommandError(f"Event not supported: {event}")