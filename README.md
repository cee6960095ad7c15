# snowsedit

A small text editor that runs in a POSIX terminal. It splits lines into
grapheme clusters, so accented letters, emoji and wide CJK characters move
and delete as single units and take the right amount of screen space.

## Installing

```
pip install .
```

## Running

Open a file:

```
snowsedit notes.txt
```

Or start with an empty buffer:

```
snowsedit
```

Files are read and written as UTF-8. If the file cannot be opened (for
example because it does not exist yet), the editor starts with an empty,
unnamed buffer and shows `ERR: Could not open file: <name>` in the message
bar.

## Keys

| Key                     | Action                                   |
|-------------------------|------------------------------------------|
| Arrow keys              | Move the caret                           |
| Home / End              | Go to the start / end of the line        |
| Page Up / Page Down     | Move by one screen                       |
| Printable keys, Tab     | Insert text                              |
| Enter                   | Split the line at the caret              |
| Backspace / Delete      | Delete before / at the caret             |
| Ctrl-S                  | Save                                     |
| Ctrl-D                  | Quit                                     |

Moving right past the end of a line goes to the start of the next one, and
moving left from the start of a line goes to the end of the previous one.

When the file has unsaved changes, Ctrl-D must be pressed three times in a
row to quit; any editing, movement or save command in between resets the
count. A window resize does not.

When the editor exits after Ctrl-D it restores the terminal and prints
`Goodbye.`.

## Screen layout

- The text area fills everything above the last two rows. Lines past the end
  of the file are shown as `~`; an empty buffer shows a welcome line a third
  of the way down.
- The status bar (second-to-last row, in reverse video) shows the file name
  (`[No Name]` for an unnamed buffer), the number of lines, `(modified)` when
  there are unsaved changes, and the current line as `line/total` at the
  right edge. If it does not fit the window, the bar is left blank.
- The message bar (last row) shows help and notices such as
  `File saved successfully.`; a message disappears after five seconds.
- The terminal title is set to `<file name> - snowsedit`.

Tabs are shown as a single space, other whitespace as `␣`, lone control
characters as `▯` and other zero-width graphemes as `·`. A grapheme cut by
the left or right edge of the window is shown as `⋯`.

## What it does not do

There is no search, no undo, no "save as" and no way to give an unnamed
buffer a file name: Ctrl-S on an unnamed buffer writes nothing, although the
message bar still reports success. Keys with Alt, and Ctrl combinations other
than Ctrl-S and Ctrl-D, are ignored. Input is read through `termios` and
`select`, so the editor needs a POSIX terminal.

## Using the pieces as a library

The editing model can be used without a terminal:

```python
from snowsedit.line import Line

line = Line.from_str("héllo")
line.insert_char("!", line.grapheme_count())
print(str(line))  # héllo!
```

- `snowsedit.line.Line` holds one line as grapheme clusters and offers
  `insert_char`, `delete`, `append`, `split`, `width_until` and
  `get_visible_graphemes(start, end)` for rendering a column range.
- `snowsedit.buffer.Buffer` holds the lines of a file (`Buffer.load`,
  `save`) and handles insertion, deletion and line splitting at a
  `snowsedit.buffer.Location`, tracking whether it is `dirty`.
- `snowsedit.view.View` adds the caret, scrolling and rendering on top of a
  buffer.
- `snowsedit.command.command_from_event` maps `KeyEvent` and `ResizeEvent`
  values from `snowsedit.terminal` to editor commands, raising
  `CommandError` for anything it does not understand;
  `snowsedit.terminal.parse_key_sequence` decodes raw terminal input into a
  `KeyEvent`.
- `snowsedit.editor.Editor` ties it all together and can be used as a
  context manager that restores the terminal on exit.