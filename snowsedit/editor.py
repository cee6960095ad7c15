"""The editor: ties the view, the bars and the terminal together."""

from __future__ import annotations

import sys
from types import TracebackType

from .command import (
    Command,
    CommandError,
    EditAction,
    Insert,
    Move,
    Resize,
    SystemAction,
    command_from_event,
)
from .messagebar import MessageBar
from .statusbar import Statusbar
from .terminal import KeyEvent, ResizeEvent, Size, Terminal
from .view import NAME, View

QUIT_TIMES = 3
HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-D = quit"


class Editor:
    """Owns the screen components and runs the input loop."""

    def __init__(self, terminal: Terminal | None = None, file_name: str | None = None) -> None:
        self.terminal = terminal if terminal is not None else Terminal()
        self.should_quit = False
        self.view = View()
        self.status_bar = Statusbar()
        self.message_bar = MessageBar()
        self.terminal_size = Size()
        self.title = ""
        self.quit_times = 0
        self._closed = False

        self.terminal.initialize()
        try:
            size = self.terminal.size()
        except (OSError, ValueError):
            size = Size()
        self.resize(size)
        self.message_bar.update_message(HELP_MESSAGE)

        if file_name is not None:
            try:
                self.view.load(file_name)
            except OSError:
                self.message_bar.update_message(f"ERR: Could not open file: {file_name}")
        self.refresh_status()

    def __enter__(self) -> Editor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def resize(self, size: Size) -> None:
        self.terminal_size = size
        self.view.resize(Size(height=max(size.height - 2, 0), width=size.width))
        self.message_bar.resize(Size(height=1, width=size.width))
        self.status_bar.resize(Size(height=1, width=size.width))

    def refresh_status(self) -> None:
        """Push the document status to the status bar and update the window title."""
        status = self.view.get_status()
        title = f"{status.file_name} - {NAME}"
        self.status_bar.update_status(status)
        if title != self.title:
            self.terminal.set_title(title)
            self.title = title

    def run(self) -> None:
        """Redraw and handle events until the user quits."""
        while True:
            self.refresh_screen()
            if self.should_quit:
                break
            event = self.terminal.read_event()
            self.handle_event(event)
            self.status_bar.update_status(self.view.get_status())

    def handle_event(self, event: object) -> None:
        """Turn a key press or resize into a command and carry it out; ignore anything else."""
        if not isinstance(event, (KeyEvent, ResizeEvent)):
            return
        try:
            command = command_from_event(event)
        except CommandError:
            return
        self.process_command(command)

    def process_command(self, command: Command) -> None:
        if command is SystemAction.QUIT:
            self._handle_quit()
            return
        if isinstance(command, Resize):
            self.resize(command.size)
            return
        self._reset_quit_times()
        if command is SystemAction.SAVE:
            self._handle_save()
        elif isinstance(command, (Insert, EditAction)):
            self.view.handle_edit_command(command)
        elif isinstance(command, Move):
            self.view.handle_move_command(command)
        else:
            raise TypeError(f"not a command: {command!r}")

    def _handle_save(self) -> None:
        try:
            self.view.save()
        except OSError:
            self.message_bar.update_message("Error writing file!")
        else:
            self.message_bar.update_message("File saved successfully.")

    def _handle_quit(self) -> None:
        modified = self.view.get_status().is_modified
        if not modified or self.quit_times + 1 == QUIT_TIMES:
            self.should_quit = True
        else:
            remaining = QUIT_TIMES - self.quit_times - 1
            self.message_bar.update_message(
                f"WARNING! File has unsaved changes. Press Ctrl-D {remaining} more times to quit."
            )
            self.quit_times += 1

    def _reset_quit_times(self) -> None:
        if self.quit_times > 0:
            self.quit_times = 0
            self.message_bar.update_message("")

    def refresh_screen(self) -> None:
        """Draw whatever has changed and place the caret."""
        height, width = self.terminal_size.height, self.terminal_size.width
        if height == 0 or width == 0:
            return
        terminal = self.terminal
        terminal.hide_caret()
        self.message_bar.render(terminal, max(height - 1, 0))
        if height > 1:
            self.status_bar.render(terminal, max(height - 2, 0))
        if height > 2:
            self.view.render(terminal, 0)
        terminal.move_caret_to(self.view.caret_position())
        terminal.show_caret()
        terminal.execute()

    def close(self) -> None:
        """Restore the terminal; say goodbye if the user quit."""
        if self._closed:
            return
        self._closed = True
        self.terminal.terminate()
        if self.should_quit:
            self.terminal.print("Goodbye.\r\n")
            self.terminal.execute()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    file_name = args[0] if args else None
    with Editor(file_name=file_name) as editor:
        editor.run()
    return 0