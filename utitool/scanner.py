from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Saved cursor location, only meaningful to the scanner that made it."""

    index: int


class Scanner:
    """Forward cursor over a single string with explicit save/restore."""

    def __init__(self, text: str):
        self._text = text
        self._index = 0

    def at_end(self) -> bool:
        return self._index >= len(self._text)

    def mark(self) -> Position:
        return Position(self._index)

    def reset(self, position: Position):
        self._index = min(max(position.index, 0), len(self._text))

    def peek_next(self) -> str:
        if self.at_end():
            return ""
        return self._text[self._index]

    def skip_one(self):
        if not self.at_end():
            self._index += 1

    def skip_n(self, count: int):
        # Moves one past `count`: after a delimiter this eats the line break too
        self._index = min(self._index + count + 1, len(self._text))

    def scan_up_to(self, delimiter: str):
        """Consume and return everything before the next `delimiter`.

        Without a further delimiter the rest of the text is consumed and
        returned. Returns None when nothing could be consumed.
        """
        if self.at_end():
            return None
        found = self._text.find(delimiter, self._index)
        if found == -1:
            found = len(self._text)
        if found == self._index:
            return None
        scanned = self._text[self._index:found]
        self._index = found
        return scanned
