"""The text area: caret movement, scrolling, editing and drawing."""

from __future__ import annotations

from dataclasses import replace

from .buffer import Buffer, Location
from .command import Edit, EditAction, Insert, Move
from .documentstatus import DocumentStatus
from .terminal import Position, Size, Terminal
from .uicomponent import UIComponent

NAME = "snowsedit"
VERSION = "0.1.0"


def build_welcome_message(width: int) -> str:
    """The centred greeting shown in an empty document."""
    if width == 0:
        return ""
    message = f"{NAME} editor -- version {VERSION}"
    remaining = max(width - 1, 0)
    if remaining < len(message):
        return "~"
    padding = remaining - len(message)
    left = padding // 2
    return "~" + " " * left + message + " " * (padding - left)


class View(UIComponent):
    """Shows part of a buffer and keeps the caret inside the visible area."""

    def __init__(self) -> None:
        super().__init__()
        self.buffer = Buffer()
        self.text_location = Location()
        self.scroll_offset = Position()

    # ----- status and files -----

    def get_status(self) -> DocumentStatus:
        return DocumentStatus(
            total_lines=self.buffer.height(),
            current_line_index=self.text_location.line_index,
            is_modified=self.buffer.dirty,
            file_name=str(self.buffer.file_info),
        )

    def load(self, file_name: str) -> None:
        """Replace the buffer with the file's contents; raises OSError on failure."""
        self.buffer = Buffer.load(file_name)
        self.needs_redraw = True

    def save(self) -> None:
        self.buffer.save()

    # ----- commands -----

    def handle_edit_command(self, command: Edit) -> None:
        match command:
            case Insert(character=character):
                self._insert_char(character)
            case EditAction.DELETE:
                self._delete()
            case EditAction.DELETE_BACKWARD:
                self._delete_backward()
            case EditAction.INSERT_NEWLINE:
                self._insert_newline()
            case _:
                raise TypeError(f"not an edit command: {command!r}")

    def handle_move_command(self, command: Move) -> None:
        page = max(self.size.height - 1, 0)
        match command:
            case Move.UP:
                self._move_up(1)
            case Move.DOWN:
                self._move_down(1)
            case Move.LEFT:
                self._move_left()
            case Move.RIGHT:
                self._move_right()
            case Move.PAGE_UP:
                self._move_up(page)
            case Move.PAGE_DOWN:
                self._move_down(page)
            case Move.START_OF_LINE:
                self._move_to_start_of_line()
            case Move.END_OF_LINE:
                self._move_to_end_of_line()
            case _:
                raise TypeError(f"not a move command: {command!r}")
        self._scroll_text_location_into_view()

    # ----- editing -----

    def _line_length(self, index: int) -> int:
        if 0 <= index < self.buffer.height():
            return self.buffer.lines[index].grapheme_count()
        return 0

    def _insert_char(self, character: str) -> None:
        index = self.text_location.line_index
        old_len = self._line_length(index)
        self.buffer.insert_char(character, self.text_location)
        if self._line_length(index) > old_len:
            self.handle_move_command(Move.RIGHT)
        self.needs_redraw = True

    def _insert_newline(self) -> None:
        self.buffer.insert_newline(self.text_location)
        self.handle_move_command(Move.RIGHT)
        self.needs_redraw = True

    def _delete_backward(self) -> None:
        location = self.text_location
        if location.line_index != 0 or location.grapheme_index != 0:
            self.handle_move_command(Move.LEFT)
            self._delete()

    def _delete(self) -> None:
        self.buffer.delete(self.text_location)
        self.needs_redraw = True

    # ----- caret movement -----

    def _move_up(self, step: int) -> None:
        self.text_location.line_index = max(self.text_location.line_index - step, 0)
        self._snap_to_valid_grapheme()

    def _move_down(self, step: int) -> None:
        self.text_location.line_index += step
        self._snap_to_valid_grapheme()
        self._snap_to_valid_line()

    def _move_right(self) -> None:
        if self.text_location.grapheme_index < self._line_length(self.text_location.line_index):
            self.text_location.grapheme_index += 1
        else:
            self._move_to_start_of_line()
            self._move_down(1)

    def _move_left(self) -> None:
        if self.text_location.grapheme_index > 0:
            self.text_location.grapheme_index -= 1
        else:
            self._move_up(1)
            self._move_to_end_of_line()

    def _move_to_start_of_line(self) -> None:
        self.text_location.grapheme_index = 0

    def _move_to_end_of_line(self) -> None:
        self.text_location.grapheme_index = self._line_length(self.text_location.line_index)

    def _snap_to_valid_grapheme(self) -> None:
        self.text_location.grapheme_index = min(
            self._line_length(self.text_location.line_index),
            self.text_location.grapheme_index,
        )

    def _snap_to_valid_line(self) -> None:
        self.text_location.line_index = min(self.text_location.line_index, self.buffer.height())

    # ----- scrolling -----

    def _scroll_vertically(self, to: int) -> None:
        height = self.size.height
        row = self.scroll_offset.row
        if to < row:
            new_row = to
        elif to >= row + height:
            new_row = max(to - height, 0) + 1
        else:
            return
        self.scroll_offset = replace(self.scroll_offset, row=new_row)
        self.needs_redraw = True

    def _scroll_horizontally(self, to: int) -> None:
        width = self.size.width
        col = self.scroll_offset.col
        if to < col:
            new_col = to
        elif to >= col + width:
            new_col = max(to - width, 0) + 1
        else:
            return
        self.scroll_offset = replace(self.scroll_offset, col=new_col)
        self.needs_redraw = True

    def _scroll_text_location_into_view(self) -> None:
        position = self._text_location_to_position()
        self._scroll_vertically(position.row)
        self._scroll_horizontally(position.col)

    def _text_location_to_position(self) -> Position:
        row = self.text_location.line_index
        col = 0
        if row < self.buffer.height():
            col = self.buffer.lines[row].width_until(self.text_location.grapheme_index)
        return Position(col=col, row=row)

    def caret_position(self) -> Position:
        """Caret position on screen, relative to the view's top-left corner."""
        return self._text_location_to_position().saturating_sub(self.scroll_offset)

    # ----- component -----

    def set_size(self, size: Size) -> None:
        self.size = size
        self._scroll_text_location_into_view()

    def draw(self, terminal: Terminal, origin_y: int) -> None:
        width, height = self.size.width, self.size.height
        top_third = height // 3
        scroll_top = self.scroll_offset.row
        left = self.scroll_offset.col
        for current_row in range(origin_y, origin_y + height):
            line_index = current_row - origin_y + scroll_top
            if line_index < self.buffer.height():
                text = self.buffer.lines[line_index].get_visible_graphemes(left, left + width)
            elif current_row == top_third and self.buffer.is_empty():
                text = build_welcome_message(width)
            else:
                text = "~"
            terminal.print_row(current_row, text)