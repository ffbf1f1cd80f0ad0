# hecto

hecto is a small text editor that runs in your terminal. It works with
Unicode text one grapheme cluster at a time, so wide characters take
two columns and combining marks stay with their base character. It has
incremental search and highlights Rust source files.

## Installation

```
pip install .
```

## Usage

Open a file:

```
hecto notes.txt
```

Or start with an empty buffer:

```
hecto
```

If the file cannot be read, or is not valid UTF-8, the editor starts
with an empty buffer and shows `ERR: Could not open file: <name>`.

## Keys

| Key                 | Action                                  |
|---------------------|-----------------------------------------|
| Arrow keys          | Move the caret                          |
| Page Up / Page Down | Move one screen up or down              |
| Home / End          | Go to the start or end of the line      |
| Enter               | Insert a new line                       |
| Tab                 | Insert a tab                            |
| Backspace / Delete  | Delete before or at the caret           |
| Ctrl-F              | Search                                  |
| Ctrl-S              | Save (asks for a name if there is none) |
| Ctrl-Q              | Quit                                    |
| Esc                 | Cancel the current prompt               |

While searching, the text you type is matched as you go, and every
match on screen is highlighted. Right and Down go to the next match,
Left and Up to the previous one; the search wraps around the end of the
document. Enter leaves the search with the caret on the current match.
Esc puts the caret back where it was before the search.

When saving a buffer that has no file name, the bottom line asks
`Save as: `; Enter saves, Esc aborts. Files are written as UTF-8 with a
`\n` after every line.

If the buffer has unsaved changes, Ctrl-Q has to be pressed three times
in a row to quit; any other key starts the count again.

Messages at the bottom of the screen disappear after five seconds.

## Display

Tabs are shown as a space, other invisible or control characters as a
visible stand-in, and a wide character cut off at the edge of the
screen as `⋯`. When the buffer is empty, a welcome line is shown a
third of the way down the screen.

The status bar shows the file name, the number of lines, `(modified)`
if there are unsaved changes, the file type (`Rust` for files ending in
`.rs`, in any case, and `Text` otherwise) and the current line number.

Rust files are coloured by keywords, built-in types, known values such
as `Some` and `None`, numbers, character literals, lifetimes, strings
(including ones spanning several lines) and comments (including nested
`/* */` comments spanning several lines).

## Use from Python

`hecto.editor.main(argv=None)` runs the editor on the file named by the
first argument. `hecto.editor.Editor` is a context manager: entering it
sets up the terminal, leaving it restores the terminal, and `run()`
handles keys until the user quits. The text model can be used on its
own: `hecto.line.Line` edits, measures and searches a single line by
grapheme, and `hecto.buffer.Buffer` holds a whole document and loads
and saves it.

## Limitations

- Only Rust files are syntax highlighted.
- There is no undo, no selection and no clipboard.
- Only UTF-8 files can be opened.
- There are no settings; the keys and colours are fixed.

## Running the tests

```
pip install .[test]
pytest
```