import pytest

from snowsedit.command import EditAction, Insert, Move
from snowsedit.terminal import Size
from snowsedit.view import NAME, VERSION, View, build_welcome_message


class Recorder:
    def __init__(self):
        self.rows = {}

    def print_row(self, row, text):
        self.rows[row] = text


def type_text(view, text):
    for ch in text:
        if ch == "\n":
            view.handle_edit_command(EditAction.INSERT_NEWLINE)
        else:
            view.handle_edit_command(Insert(ch))


def lines_of(view):
    return [str(line) for line in view.buffer.lines]


def loaded_view(tmp_path, text, size=Size(height=10, width=40)):
    path = tmp_path / "doc.txt"
    path.write_text(text, encoding="utf-8")
    view = View()
    view.resize(size)
    view.load(str(path))
    return view, path


# ----- welcome message -----

def test_welcome_message_zero_width_is_empty():
    assert build_welcome_message(0) == ""


def test_welcome_message_too_narrow_is_tilde():
    assert build_welcome_message(5) == "~"


def test_welcome_message_is_centred():
    message = f"{NAME} editor -- version {VERSION}"
    result = build_welcome_message(80)
    assert len(result) == 80
    assert result.startswith("~")
    body = result[1:]
    assert body.strip() == message
    left = len(body) - len(body.lstrip())
    right = len(body) - len(body.rstrip())
    assert 0 <= right - left <= 1


# ----- status -----

def test_empty_view_status():
    status = View().get_status()
    assert status.file_name == "[No Name]"
    assert status.total_lines == 0
    assert status.is_modified is False


def test_loaded_status_uses_file_name(tmp_path):
    view, _ = loaded_view(tmp_path, "a\nb\n")
    status = view.get_status()
    assert status.file_name == "doc.txt"
    assert status.total_lines == 2


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        View().load(str(tmp_path / "missing.txt"))


# ----- editing -----

def test_typing_builds_lines_and_moves_caret():
    view = View()
    view.resize(Size(height=10, width=40))
    type_text(view, "hi\nyo")
    assert lines_of(view) == ["hi", "yo"]
    assert view.text_location.line_index == 1
    assert view.text_location.grapheme_index == 2
    assert view.get_status().is_modified is True


def test_backspace_at_line_start_joins_lines():
    view = View()
    view.resize(Size(height=10, width=40))
    type_text(view, "hi\nyo")
    view.handle_move_command(Move.START_OF_LINE)
    view.handle_edit_command(EditAction.DELETE_BACKWARD)
    assert lines_of(view) == ["hiyo"]
    assert view.text_location.line_index == 0
    assert view.text_location.grapheme_index == 2


def test_backspace_at_origin_does_nothing(tmp_path):
    view, _ = loaded_view(tmp_path, "abc\n")
    view.handle_edit_command(EditAction.DELETE_BACKWARD)
    assert lines_of(view) == ["abc"]
    assert view.get_status().is_modified is False


def test_delete_at_line_end_joins_next_line(tmp_path):
    view, _ = loaded_view(tmp_path, "ab\ncd\n")
    view.handle_move_command(Move.END_OF_LINE)
    view.handle_edit_command(EditAction.DELETE)
    assert lines_of(view) == ["abcd"]


def test_combining_mark_does_not_advance_caret():
    view = View()
    view.resize(Size(height=5, width=20))
    type_text(view, "e\u0301")
    assert view.buffer.lines[0].grapheme_count() == 1
    assert view.text_location.grapheme_index == 1


def test_wide_character_caret_column_matches_line_width():
    view = View()
    view.resize(Size(height=5, width=20))
    type_text(view, "中a")
    line = view.buffer.lines[0]
    assert view.caret_position().col == line.width_until(2)
    assert line.width_until(2) > line.grapheme_count()


def test_save_writes_edited_text(tmp_path):
    view, path = loaded_view(tmp_path, "one\ntwo\n")
    view.handle_edit_command(Insert("X"))
    view.save()
    assert path.read_text(encoding="utf-8") == "Xone\ntwo\n"
    assert view.get_status().is_modified is False


# ----- movement -----

def test_move_right_at_line_end_wraps(tmp_path):
    view, _ = loaded_view(tmp_path, "ab\ncd\n")
    view.handle_move_command(Move.END_OF_LINE)
    view.handle_move_command(Move.RIGHT)
    assert (view.text_location.line_index, view.text_location.grapheme_index) == (1, 0)


def test_move_left_at_line_start_goes_to_previous_end(tmp_path):
    view, _ = loaded_view(tmp_path, "abc\ncd\n")
    view.handle_move_command(Move.DOWN)
    view.handle_move_command(Move.LEFT)
    assert (view.text_location.line_index, view.text_location.grapheme_index) == (0, 3)


def test_move_down_stops_one_past_last_line(tmp_path):
    view, _ = loaded_view(tmp_path, "a\nb\n")
    for _ in range(5):
        view.handle_move_command(Move.DOWN)
    assert view.text_location.line_index == view.buffer.height()


def test_move_up_snaps_to_shorter_line(tmp_path):
    view, _ = loaded_view(tmp_path, "ab\nabcdef\n")
    view.handle_move_command(Move.DOWN)
    view.handle_move_command(Move.END_OF_LINE)
    view.handle_move_command(Move.UP)
    assert view.text_location.grapheme_index == view.buffer.lines[0].grapheme_count()


def test_page_down_moves_by_height_minus_one(tmp_path):
    size = Size(height=4, width=20)
    view, _ = loaded_view(tmp_path, "x\n" * 10, size)
    view.handle_move_command(Move.PAGE_DOWN)
    assert view.text_location.line_index == size.height - 1
    view.handle_move_command(Move.PAGE_UP)
    assert view.text_location.line_index == 0


# ----- scrolling -----

def test_vertical_scroll_keeps_caret_visible(tmp_path):
    size = Size(height=3, width=20)
    view, _ = loaded_view(tmp_path, "x\n" * 10, size)
    for _ in range(5):
        view.handle_move_command(Move.DOWN)
    caret = view.caret_position()
    assert caret.row == size.height - 1
    assert view.scroll_offset.row + caret.row == view.text_location.line_index
    for _ in range(5):
        view.handle_move_command(Move.UP)
    assert view.scroll_offset.row == 0
    assert view.caret_position().row == 0


def test_horizontal_scroll_keeps_caret_visible(tmp_path):
    size = Size(height=3, width=4)
    view, _ = loaded_view(tmp_path, "abcdefghij\n", size)
    view.handle_move_command(Move.END_OF_LINE)
    assert view.caret_position().col == size.width - 1
    recorder = Recorder()
    view.render(recorder, 0)
    left = view.scroll_offset.col
    assert recorder.rows[0] == view.buffer.lines[0].get_visible_graphemes(left, left + size.width)


# ----- drawing -----

def test_draw_shows_lines_then_tildes(tmp_path):
    view, _ = loaded_view(tmp_path, "abc\nde\n", Size(height=5, width=20))
    recorder = Recorder()
    view.render(recorder, 0)
    assert recorder.rows == {0: "abc", 1: "de", 2: "~", 3: "~", 4: "~"}
    assert view.needs_redraw is False


def test_draw_empty_buffer_shows_welcome_at_top_third():
    view = View()
    view.resize(Size(height=6, width=40))
    recorder = Recorder()
    view.render(recorder, 0)
    assert recorder.rows[2] == build_welcome_message(40)
    assert recorder.rows[0] == "~"
    assert len(recorder.rows) == 6


def test_unknown_move_command_raises():
    with pytest.raises(TypeError):
        View().handle_move_command("sideways")