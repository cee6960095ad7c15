"""Terminal output, raw-mode handling and keyboard input decoding."""

from __future__ import annotations

import codecs
import enum
import os
import select
import signal
import sys
import threading
from collections import deque
from dataclasses import dataclass, replace
from typing import IO, Iterator, Union

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None
    tty = None

CSI = "\x1b["
REVERSE = "\x1b[7m"
RESET = "\x1b[0m"
_POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class Size:
    height: int = 0
    width: int = 0


@dataclass(frozen=True)
class Position:
    col: int = 0
    row: int = 0

    def saturating_sub(self, other: Position) -> Position:
        """Subtract component-wise, stopping at zero."""
        return Position(col=max(self.col - other.col, 0), row=max(self.row - other.row, 0))


class KeyCode(enum.Enum):
    BACKSPACE = enum.auto()
    ENTER = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    TAB = enum.auto()
    BACK_TAB = enum.auto()
    DELETE = enum.auto()
    INSERT = enum.auto()
    ESC = enum.auto()
    CHAR = enum.auto()


class KeyModifiers(enum.Flag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


@dataclass(frozen=True)
class KeyEvent:
    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE
    char: str | None = None


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = Union[KeyEvent, ResizeEvent]

_CSI_LETTERS = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
}
_CSI_TILDE = {
    "1": KeyCode.HOME,
    "2": KeyCode.INSERT,
    "3": KeyCode.DELETE,
    "4": KeyCode.END,
    "5": KeyCode.PAGE_UP,
    "6": KeyCode.PAGE_DOWN,
    "7": KeyCode.HOME,
    "8": KeyCode.END,
}


def _decode_modifiers(text: str) -> KeyModifiers | None:
    try:
        bits = int(text) - 1
    except ValueError:
        return None
    modifiers = KeyModifiers.NONE
    if bits & 1:
        modifiers |= KeyModifiers.SHIFT
    if bits & 2:
        modifiers |= KeyModifiers.ALT
    if bits & 4:
        modifiers |= KeyModifiers.CONTROL
    return modifiers


def _parse_csi(body: str) -> KeyEvent | None:
    if not body:
        return None
    final, params = body[-1], body[:-1]
    if final == "Z" and not params:
        return KeyEvent(KeyCode.BACK_TAB, KeyModifiers.SHIFT)
    fields = params.split(";") if params else []
    modifiers = _decode_modifiers(fields[1]) if len(fields) > 1 else KeyModifiers.NONE
    if modifiers is None:
        return None
    if final in _CSI_LETTERS and (not fields or fields[0] in ("", "1")):
        return KeyEvent(_CSI_LETTERS[final], modifiers)
    if final == "~" and fields and fields[0] in _CSI_TILDE:
        return KeyEvent(_CSI_TILDE[fields[0]], modifiers)
    return None


def _parse_single(ch: str) -> KeyEvent:
    if ch == "\x1b":
        return KeyEvent(KeyCode.ESC)
    if ch == "\r":
        return KeyEvent(KeyCode.ENTER)
    if ch == "\t":
        return KeyEvent(KeyCode.TAB)
    if ch == "\x7f":
        return KeyEvent(KeyCode.BACKSPACE)
    if ch == "\x00":
        return KeyEvent(KeyCode.CHAR, KeyModifiers.CONTROL, " ")
    if "\x01" <= ch <= "\x1a":
        return KeyEvent(KeyCode.CHAR, KeyModifiers.CONTROL, chr(ord(ch) - 1 + ord("a")))
    if "\x1c" <= ch <= "\x1f":
        return KeyEvent(KeyCode.CHAR, KeyModifiers.CONTROL, chr(ord(ch) - 0x1C + ord("4")))
    modifiers = KeyModifiers.SHIFT if ch.isupper() else KeyModifiers.NONE
    return KeyEvent(KeyCode.CHAR, modifiers, ch)


def parse_key_sequence(data: str) -> KeyEvent | None:
    """Decode one key's worth of terminal input; return None if it is not understood."""
    if not data:
        return None
    if len(data) == 1:
        return _parse_single(data)
    if data.startswith(CSI):
        return _parse_csi(data[len(CSI):])
    if data.startswith("\x1bO") and len(data) == 3:
        code = _CSI_LETTERS.get(data[2])
        return KeyEvent(code) if code is not None else None
    if data[0] == "\x1b" and len(data) == 2:
        inner = _parse_single(data[1])
        return replace(inner, modifiers=inner.modifiers | KeyModifiers.ALT)
    return None


def _iter_sequences(text: str) -> Iterator[str]:
    """Split raw input into the sequences of single keys."""
    i, n = 0, len(text)
    while i < n:
        if text[i] != "\x1b" or i + 1 == n:
            yield text[i]
            i += 1
            continue
        follower = text[i + 1]
        if follower == "[":
            j = i + 2
            while j < n and not ("\x40" <= text[j] <= "\x7e"):
                j += 1
            yield text[i : j + 1]
            i = j + 1
        elif follower == "O" and i + 2 < n:
            yield text[i : i + 3]
            i += 3
        else:
            yield text[i : i + 2]
            i += 2


class Terminal:
    """Queues escape sequences for an output stream and reads key events from an input fd."""

    def __init__(self, output: IO[str] | None = None, input_fd: int | None = None) -> None:
        self._output = output if output is not None else sys.stdout
        self._input_fd = input_fd
        self._queue: list[str] = []
        self._pending: deque[Event] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._saved_attrs = None
        self._previous_winch = None
        self._resized = False

    @property
    def _fd(self) -> int:
        if self._input_fd is None:
            self._input_fd = sys.stdin.fileno()
        return self._input_fd

    # ----- lifecycle -----

    def initialize(self) -> None:
        """Enter raw mode and the alternate screen, and clear it."""
        self._enable_raw_mode()
        self._watch_resize()
        self.enter_alternate_screen()
        self.disable_line_wrap()
        self.clear_screen()
        self.execute()

    def terminate(self) -> None:
        """Restore the terminal to its normal state."""
        self.leave_alternate_screen()
        self.enable_line_wrap()
        self.show_caret()
        self.execute()
        self._disable_raw_mode()
        self._unwatch_resize()

    def _enable_raw_mode(self) -> None:
        if termios is None or not os.isatty(self._fd):
            return
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)

    def _disable_raw_mode(self) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def _watch_resize(self) -> None:
        if not hasattr(signal, "SIGWINCH"):
            return
        if threading.current_thread() is not threading.main_thread():
            return
        self._previous_winch = signal.signal(signal.SIGWINCH, self._on_resize)

    def _unwatch_resize(self) -> None:
        if self._previous_winch is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch)
            self._previous_winch = None

    def _on_resize(self, signum, frame) -> None:
        self._resized = True

    # ----- screen -----

    def clear_screen(self) -> None:
        self._queue.append(f"{CSI}2J")

    def clear_line(self) -> None:
        self._queue.append(f"{CSI}2K")

    # ----- caret -----

    def move_caret_to(self, pos: Position) -> None:
        col, row = pos.col & 0xFFFF, pos.row & 0xFFFF
        self._queue.append(f"{CSI}{row + 1};{col + 1}H")

    def hide_caret(self) -> None:
        self._queue.append(f"{CSI}?25l")

    def show_caret(self) -> None:
        self._queue.append(f"{CSI}?25h")

    # ----- text -----

    def print(self, string: str) -> None:
        self._queue.append(string)

    def print_row(self, row: int, line_text: str) -> None:
        self.move_caret_to(Position(col=0, row=row))
        self.clear_line()
        self.print(line_text)

    def print_inverted_row(self, row: int, line_text: str) -> None:
        """Print a row in reverse video, padded or cut to the terminal width."""
        width = self.size().width
        self.print_row(row, f"{REVERSE}{line_text[:width].ljust(width)}{RESET}")

    # ----- size and output -----

    def size(self) -> Size:
        """Current terminal size; raises OSError when the output is not a terminal."""
        dimensions = os.get_terminal_size(self._output.fileno())
        return Size(height=dimensions.lines, width=dimensions.columns)

    def execute(self) -> None:
        """Write everything queued and flush the output."""
        self._output.write("".join(self._queue))
        self._queue.clear()
        self._output.flush()

    def enter_alternate_screen(self) -> None:
        self._queue.append(f"{CSI}?1049h")

    def leave_alternate_screen(self) -> None:
        self._queue.append(f"{CSI}?1049l")

    def disable_line_wrap(self) -> None:
        self._queue.append(f"{CSI}?7l")

    def enable_line_wrap(self) -> None:
        self._queue.append(f"{CSI}?7h")

    def set_title(self, title: str) -> None:
        self._queue.append(f"\x1b]0;{title}\x07")

    # ----- input -----

    def read_event(self) -> Event:
        """Block until a key is pressed or the terminal is resized."""
        while True:
            if self._pending:
                return self._pending.popleft()
            if self._resized:
                self._resized = False
                size = self.size()
                return ResizeEvent(width=size.width, height=size.height)
            ready, _, _ = select.select([self._fd], [], [], _POLL_INTERVAL)
            if not ready:
                continue
            data = os.read(self._fd, 4096)
            if not data:
                raise EOFError("input closed")
            text = self._decoder.decode(data)
            for sequence in _iter_sequences(text):
                event = parse_key_sequence(sequence)
                if event is not None:
                    self._pending.append(event)