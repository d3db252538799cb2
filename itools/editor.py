"""The script editor: text buffer, cursor, line-number gutter state and auto-save."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from itools.highlighter import convert_text_to_html

log = logging.getLogger(__name__)

LINE_HEIGHT = 19
"""Smallest height, in pixels, of one row in the line-number gutter."""

STATUS_TIMEOUT = 10000
AUTO_SAVE_TIMEOUT = 5000

_BACKSPACE = "\b"
_ENTER = "\r"
_UNDO = "\u001a"
_PARAGRAPH_SEPARATOR = "\u2029"

StatusCallback = Callable[[str, int], None]


@dataclass
class EditorState:
    """What the line-number gutter needs to know about the editor."""

    has_text: bool = False
    is_block_valid: bool = False
    is_selected: bool = False
    block_count: int = 0
    cursor_block_number: int = 0
    block_number: int = 0
    line_height: int = LINE_HEIGHT
    current_line_height: int = 0
    selected_block_numbers: set[int] = field(default_factory=set)


class LineMark(Enum):
    """How a row of the line-number gutter is highlighted."""

    NONE = "none"
    SELECTED = "selected"
    CURRENT = "current"


def line_number_rows(state: EditorState, height: int) -> list[tuple[int, int, LineMark]]:
    """Rows of the gutter as (line number, top y, mark), limited to ``height`` pixels."""
    row_height = max(LINE_HEIGHT, state.line_height)
    rows: list[tuple[int, int, LineMark]] = []
    top = 0
    for number in range(1, state.block_count + 1):
        if top >= height:
            break
        block = number - 1
        if state.is_selected:
            mark = LineMark.SELECTED if block in state.selected_block_numbers else LineMark.NONE
        elif state.cursor_block_number == block:
            mark = LineMark.CURRENT
        else:
            mark = LineMark.NONE
        rows.append((number, top, mark))
        top += row_height
    return rows


class Editor:
    """A plain-text script buffer with highlighting and saving behaviour."""

    def __init__(self, on_status: Optional[StatusCallback] = None) -> None:
        self.on_status = on_status
        self.state_listeners: list[Callable[[EditorState], None]] = []
        self.current_file = ""
        self.previous_text = ""
        self.state = EditorState()
        self._text = ""
        self._cursor = 0
        self._anchor = 0
        self._line_html: list[str] = []

    def _status(self, message: str, timeout: int = STATUS_TIMEOUT) -> None:
        log.debug("status: %s", message)
        if self.on_status is not None:
            self.on_status(message, timeout)

    def _block_of(self, position: int) -> int:
        return self._text.count("\n", 0, position)

    def _check_position(self, position: int) -> None:
        if not 0 <= position <= len(self._text):
            raise ValueError(f"Position {position} is outside the text (0..{len(self._text)})")

    def _highlight_current_line(self) -> None:
        state = self.state
        state.has_text = not self.current_file
        state.is_block_valid = False
        state.block_count = self._text.count("\n") + 1
        state.cursor_block_number = self._block_of(self._cursor)
        state.block_number = state.cursor_block_number
        state.line_height = LINE_HEIGHT
        state.current_line_height = LINE_HEIGHT
        if self._cursor != self._anchor:
            state.is_selected = True
            state.selected_block_numbers.add(state.block_number)
        else:
            state.is_selected = False
            state.selected_block_numbers.clear()
        for listener in self.state_listeners:
            listener(state)

    def open_and_parse_file(self, file_path: str, read_only: bool = True) -> None:
        """Load a file into the editor and highlight it.

        A file opened for writing becomes the auto-save target.
        """
        if not read_only:
            self.current_file = file_path
        try:
            with open(file_path, "rb") as handle:
                content = handle.read().decode("latin-1")
        except OSError as exc:
            log.debug("cannot open %s: %s", file_path, exc)
            self._status("File to open file " + file_path)
            return
        self.set_plain_text(content)
        self._document_syntax_highlighting()

    def set_plain_text(self, text: str) -> None:
        """Replace the whole buffer; the cursor moves to the start."""
        self._text = text
        self._cursor = self._anchor = 0
        self._line_html = []
        self._highlight_current_line()

    def to_plain_text(self) -> str:
        """The buffer's text."""
        return self._text

    def select(self, start: int, end: int) -> None:
        """Select from ``start`` (anchor) to ``end`` (cursor)."""
        self._check_position(start)
        self._check_position(end)
        self._anchor = start
        self._cursor = end
        self._highlight_current_line()

    def selected_text(self) -> str:
        """The selection, with line breaks given as paragraph separators."""
        low, high = sorted((self._anchor, self._cursor))
        return self._text[low:high].replace("\n", _PARAGRAPH_SEPARATOR)

    def move_cursor(self, position: int) -> None:
        """Place the cursor, clearing any selection."""
        self._check_position(position)
        self._anchor = self._cursor = position
        self._highlight_current_line()

    def key_press(self) -> None:
        """Remember the text as it was before a key takes effect."""
        self.previous_text = self._text

    def key_release(self, key_text: str) -> None:
        """React to a released key: re-highlight the line or save."""
        if not key_text:
            return
        if key_text.startswith(_UNDO):
            return
        is_backspace = key_text.startswith(_BACKSPACE)
        is_enter = key_text.startswith(_ENTER)
        if not is_backspace and not is_enter:
            self._inline_syntax_highlighting()
            return
        deleted = len(self.previous_text) - len(self._text)
        if is_backspace and deleted > 0:
            self._inline_syntax_highlighting()
        else:
            self.auto_save()

    def auto_save(self) -> None:
        """Write the buffer to the current file, if one is set."""
        if not self.current_file:
            return
        try:
            with open(self.current_file, "w", encoding="utf-8", newline="") as handle:
                handle.write(self._text)
        except OSError as exc:
            self._status(exc.strerror or str(exc))
            return
        self._status("Auto Saving..", AUTO_SAVE_TIMEOUT)

    def highlighted_html(self) -> str:
        """The highlighted document, or an empty string if nothing is highlighted."""
        if not self._line_html:
            return ""
        return "<pre>" + "".join(self._line_html) + "</pre>"

    def _document_syntax_highlighting(self) -> None:
        if self._text:
            self._line_html = [convert_text_to_html(line) for line in self._text.split("\n")]
        self.auto_save()

    def _inline_syntax_highlighting(self) -> None:
        lines = self._text.split("\n")
        if len(self._line_html) != len(lines):
            self._line_html = [convert_text_to_html(line) for line in lines]
        else:
            block = self._block_of(self._cursor)
            self._line_html[block] = convert_text_to_html(lines[block])
        self.auto_save()