"""Inline text editing with a soft-wrap-aware caret.

The buffer is held as ``prefix + caret_char + suffix``. ``caret_char``
is the character the caret sits on; ``None`` means the caret is past
the last character. All counting is per code point, and the wrap rule
is shared by the coordinate mapping and the renderer:

* a line break moves to column 0 of the next row;
* any other character advances one column, and reaching ``wrap_width``
  continues on the next row.

A ``wrap_width`` of 0 or less disables soft wrapping.
"""

from __future__ import annotations

import time

CARET_GLYPH = "_"
BLANK_GLYPH = " "


def _step(ch: str, x: int, y: int, wrap_width: int) -> tuple[int, int]:
    if ch == "\n":
        return 0, y + 1
    x += 1
    if wrap_width > 0 and x >= wrap_width:
        return x - wrap_width, y + 1
    return x, y


def wrap_rows(text: str, wrap_width: int) -> list[str]:
    """Split *text* into screen rows using the caret wrap rule."""
    rows = [""]
    x = y = 0
    for ch in text:
        if ch != "\n":
            rows[y] += ch
        x, y = _step(ch, x, y, wrap_width)
        while len(rows) <= y:
            rows.append("")
    return rows


class TextEditor:
    """Edit buffer for one task field, plus the caret blink state."""

    def __init__(self, blink_interval: float = 0.4) -> None:
        self.prefix = ""
        self.caret_char: str | None = None
        self.suffix = ""
        self.blink_interval = blink_interval
        self.cursor_shown = True
        self.last_blink = time.monotonic()

    # ── Buffer ────────────────────────────────────────────────

    def enter(self, value: str, now: float | None = None) -> None:
        """Load *value* with the caret at the end."""
        self.prefix = value
        self.caret_char = None
        self.suffix = ""
        self._touch(now)

    def text(self) -> str:
        return self.prefix + (self.caret_char or "") + self.suffix

    def commit(self, single_line: bool = False) -> str:
        """The edited value; single-line fields lose their line breaks."""
        value = self.text()
        if single_line:
            value = value.replace("\r", "").replace("\n", "")
        return value

    @property
    def offset(self) -> int:
        return len(self.prefix)

    def _split(self, buffer: str, index: int) -> None:
        self.prefix = buffer[:index]
        self.caret_char = buffer[index] if index < len(buffer) else None
        self.suffix = buffer[index + 1:]

    def _touch(self, now: float | None) -> None:
        self.cursor_shown = True
        self.last_blink = time.monotonic() if now is None else now

    # ── Editing ───────────────────────────────────────────────

    def insert(self, ch: str, now: float | None = None) -> None:
        self.prefix += ch
        self._touch(now)

    def backspace(self, now: float | None = None) -> None:
        if not self.prefix:
            return
        self.prefix = self.prefix[:-1]
        self._touch(now)

    def move_left(self, now: float | None = None) -> None:
        if not self.prefix:
            return
        if self.caret_char is not None:
            self.suffix = self.caret_char + self.suffix
        self.caret_char = self.prefix[-1]
        self.prefix = self.prefix[:-1]
        self._touch(now)

    def move_right(self, now: float | None = None) -> None:
        if self.caret_char is None:
            return
        self.prefix += self.caret_char
        if self.suffix:
            self.caret_char = self.suffix[0]
            self.suffix = self.suffix[1:]
        else:
            self.caret_char = None
        self._touch(now)

    # ── Coordinates ───────────────────────────────────────────

    def cursor_position(self, wrap_width: int) -> tuple[int, int]:
        """Screen (x, y) of the caret within the wrapped buffer."""
        x = y = 0
        for ch in self.prefix:
            x, y = _step(ch, x, y, wrap_width)
        return x, y

    def set_cursor_position(self, x: int, y: int, wrap_width: int) -> None:
        """Place the caret at the first position on row *y* at or past column *x*.

        Stops on row *y*'s line break when the row is shorter than *x*;
        falls back to the end of the buffer when row *y* does not exist.
        """
        buffer = self.text()
        cx = cy = 0
        for i, ch in enumerate(buffer):
            if cy == y and (cx >= x or ch == "\n"):
                self._split(buffer, i)
                return
            cx, cy = _step(ch, cx, cy, wrap_width)
        self._split(buffer, len(buffer))

    def move_up(self, wrap_width: int, now: float | None = None) -> None:
        """One visual row up, keeping the screen column; row 0 snaps to the buffer start."""
        if not self.prefix:
            return
        x, y = self.cursor_position(wrap_width)
        if y > 0:
            self.set_cursor_position(x, y - 1, wrap_width)
        else:
            self.set_cursor_position(0, 0, wrap_width)
        self._touch(now)

    def move_down(self, wrap_width: int, now: float | None = None) -> None:
        """One visual row down, keeping the screen column; past the last row snaps to the end."""
        x, y = self.cursor_position(wrap_width)
        self.set_cursor_position(x, y + 1, wrap_width)
        self._touch(now)

    # ── Blink & display ───────────────────────────────────────

    def tick(self, now: float | None = None) -> bool:
        """Toggle the caret once the blink interval has passed. Returns True on toggle."""
        if now is None:
            now = time.monotonic()
        if now - self.last_blink < self.blink_interval:
            return False
        self.cursor_shown = not self.cursor_shown
        self.last_blink = now
        return True

    def display_text(self) -> str:
        """The buffer with the caret drawn as a literal character."""
        if self.cursor_shown:
            glyph = CARET_GLYPH
        elif self.caret_char is None or self.caret_char == "\n":
            glyph = BLANK_GLYPH
        else:
            glyph = self.caret_char
        tail = "\n" if self.caret_char == "\n" else ""
        return self.prefix + glyph + tail + self.suffix

    def render(self, wrap_width: int) -> list[str]:
        return wrap_rows(self.display_text(), wrap_width)
