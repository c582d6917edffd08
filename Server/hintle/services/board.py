"""
Board

Mutable grid of typed letters for one round.
"""

from typing import List

from ..config.game_settings import ROWS, COLS


class Board:
    """
    ROWS x COLS grid of single uppercase letters.

    Letters only ever go into the active row, left to right. Rows above
    ``current_row`` are frozen once the caller advances past them.
    Out-of-range writes and deletes are silently ignored.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        self.rows = rows
        self.cols = cols
        self.cells: List[List[str]] = [["" for _ in range(cols)] for _ in range(rows)]
        self.current_row = 0
        self.current_col = 0

    @property
    def row_full(self) -> bool:
        return self.current_col == self.cols

    @property
    def exhausted(self) -> bool:
        return self.current_row >= self.rows

    def append_letter(self, ch: str) -> bool:
        """Write ``ch`` at the cursor. Returns False when nothing was written."""
        if self.row_full or self.exhausted:
            return False
        if len(ch) != 1 or not ("A" <= ch <= "Z"):
            return False

        self.cells[self.current_row][self.current_col] = ch
        self.current_col += 1
        return True

    def delete_letter(self) -> bool:
        """Clear the last letter of the active row. Returns False at column 0."""
        if self.current_col == 0 or self.exhausted:
            return False

        self.current_col -= 1
        self.cells[self.current_row][self.current_col] = ""
        return True

    def current_guess(self) -> str:
        if self.exhausted:
            return ""
        return "".join(self.cells[self.current_row])

    def advance_row(self) -> None:
        # The caller evaluates the row before freezing it
        self.current_col = 0
        self.current_row = min(self.current_row + 1, self.rows)

    def snapshot(self) -> List[List[str]]:
        return [row.copy() for row in self.cells]
