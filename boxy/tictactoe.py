"""Rules for the embedded tic-tac-toe widget.

The board is a flat list of nine cells, row-major, each ``"X"``, ``"O"`` or
``None``. Everything here is pure: moves return a new state and never touch
the one passed in.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator


Cell = Optional[str]

MARKS = ("X", "O")
BOARD_SIZE = 9

LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class GameState(BaseModel):
    board: List[Cell] = Field(default_factory=lambda: [None] * BOARD_SIZE)
    x_is_next: bool = True

    @field_validator("board")
    @classmethod
    def check_board(cls, v: List[Cell]) -> List[Cell]:
        if len(v) != BOARD_SIZE:
            raise ValueError(f"board must have {BOARD_SIZE} cells, got {len(v)}")
        cleaned: List[Cell] = []
        for cell in v:
            # The browser sends empty strings for blank cells
            if cell in (None, ""):
                cleaned.append(None)
            elif cell in MARKS:
                cleaned.append(cell)
            else:
                raise ValueError(f"invalid cell value: {cell!r}")
        return cleaned


def calculate_winner(board: Sequence[Cell]) -> Optional[str]:
    for a, b, c in LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a]
    return None


def is_draw(board: Sequence[Cell]) -> bool:
    return all(board) and calculate_winner(board) is None


def reset() -> GameState:
    return GameState()


def play(state: GameState, index: int) -> GameState:
    """Place the next mark at ``index``.

    Clicking an occupied cell, or any cell once the game has a winner, leaves
    the state as it was.
    """
    if not 0 <= index < BOARD_SIZE:
        raise ValueError(f"cell index out of range: {index}")
    if state.board[index] or calculate_winner(state.board):
        return state.model_copy(deep=True)
    board = list(state.board)
    board[index] = "X" if state.x_is_next else "O"
    return GameState(board=board, x_is_next=not state.x_is_next)


def status(state: GameState) -> str:
    winner = calculate_winner(state.board)
    if winner:
        return f"🏆 Winner: {winner}"
    if all(state.board):
        return "🤝 It's a Draw!"
    return f"Turn: {'X' if state.x_is_next else 'O'}"
