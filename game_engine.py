# Rules engine for N x N Tic Tac Toe.
# - Board of any positive size, full line required to win
# - Win checked only for the player who just moved
# - Moves on occupied cells or after the game ended are ignored
#
# No rendering here: tic_tac_toe.py draws whatever this module reports.

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


# ====== Errors ======
class InvalidSize(ValueError):
    """Board size was not a positive integer."""


class OutOfBounds(IndexError):
    """A (row, col) outside the board reached the engine."""


# ====== Enums ======
class Cell(IntEnum):
    EMPTY = 0
    PLAYER1 = 1
    PLAYER2 = 2

    def other(self) -> 'Cell':
        if self == Cell.PLAYER1:
            return Cell.PLAYER2
        if self == Cell.PLAYER2:
            return Cell.PLAYER1
        raise ValueError('EMPTY has no opponent')


class Status(Enum):
    IN_PROGRESS = 'in_progress'
    PLAYER1_WON = 'player1_won'
    PLAYER2_WON = 'player2_won'
    DRAW = 'draw'

    @property
    def is_terminal(self) -> bool:
        return self != Status.IN_PROGRESS


class Outcome(Enum):
    CONTINUED = 'continued'
    WON = 'won'
    DRAW = 'draw'
    IGNORED = 'ignored'


WIN_STATUS = {
    Cell.PLAYER1: Status.PLAYER1_WON,
    Cell.PLAYER2: Status.PLAYER2_WON,
}


# ====== Board ======
class Board:
    def __init__(self, size: int):
        self.size = size
        self.cells: List[List[Cell]] = [[Cell.EMPTY] * size for _ in range(size)]

    def _check(self, row: int, col: int):
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfBounds(f'({row}, {col}) is outside a {self.size}x{self.size} board')

    def __getitem__(self, pos: Tuple[int, int]) -> Cell:
        row, col = pos
        self._check(row, col)
        return self.cells[row][col]

    def __setitem__(self, pos: Tuple[int, int], value: Cell):
        row, col = pos
        self._check(row, col)
        self.cells[row][col] = value

    def rows(self) -> List[List[Cell]]:
        return [list(r) for r in self.cells]

    def __repr__(self):
        return f'Board(size={self.size})'


# ====== State ======
@dataclass
class GameState:
    board: Board
    current_player: Cell = Cell.PLAYER1
    status: Status = Status.IN_PROGRESS

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def winner(self) -> Optional[Cell]:
        for player, status in WIN_STATUS.items():
            if self.status == status:
                return player
        return None


@dataclass
class MoveResult:
    state: GameState
    outcome: Outcome
    player: Cell
    row: int
    col: int


# ====== Rules ======
def configure(size) -> GameState:
    """Allocate a fresh game on an empty size x size board."""
    # bool is an int subclass, but True is not a board size
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidSize(f'board size must be a positive integer, got {size!r}')
    logger.info('configured %dx%d board', size, size)
    return GameState(board=Board(size))


def restart(state: GameState) -> GameState:
    """Full reset at the same size; the old state is discarded."""
    logger.info('restarting %dx%d game', state.size, state.size)
    return configure(state.size)


def check_win(board: Board, player: Cell) -> bool:
    n = board.size
    cells = board.cells

    for r in range(n):
        if all(cells[r][c] == player for c in range(n)):
            return True

    for c in range(n):
        if all(cells[r][c] == player for r in range(n)):
            return True

    # top-left to bottom-right
    if all(cells[i][i] == player for i in range(n)):
        return True

    # top-right to bottom-left
    if all(cells[i][n - 1 - i] == player for i in range(n)):
        return True

    return False


def has_empty_cell(board: Board) -> bool:
    return any(cell == Cell.EMPTY for row in board.cells for cell in row)


def apply_move(state: GameState, row: int, col: int) -> MoveResult:
    """
    Place the current player's mark at (row, col) and evaluate the result.

    Raises OutOfBounds for coordinates off the board. Moves after the game
    ended, or onto an occupied cell, leave the state untouched and come back
    as Outcome.IGNORED. A win on the last free cell is reported as a win.
    """
    board = state.board
    target = board[row, col]
    player = state.current_player

    if state.status.is_terminal:
        logger.debug('ignored move (%d, %d): game is over (%s)', row, col, state.status.value)
        return MoveResult(state, Outcome.IGNORED, player, row, col)
    if target != Cell.EMPTY:
        logger.debug('ignored move (%d, %d): cell taken by player %d', row, col, target)
        return MoveResult(state, Outcome.IGNORED, player, row, col)

    board[row, col] = player

    if check_win(board, player):
        state.status = WIN_STATUS[player]
        logger.info('player %d wins', player)
        return MoveResult(state, Outcome.WON, player, row, col)

    if not has_empty_cell(board):
        state.status = Status.DRAW
        logger.info('draw on %dx%d board', board.size, board.size)
        return MoveResult(state, Outcome.DRAW, player, row, col)

    state.current_player = player.other()
    return MoveResult(state, Outcome.CONTINUED, player, row, col)
