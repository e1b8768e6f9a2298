"""Tests for the pygame front end's input mapping and control flow."""

import pygame
import pytest

import tic_tac_toe
from game_engine import Cell, InvalidSize, Outcome, Status, configure
from tic_tac_toe import (LABEL_CREATE, LABEL_PLAYING, LABEL_RESTART, MAX_SIZE, MSG_DRAW, MSG_INVALID_SIZE,
                         BoardView, Button, Game, GameController, SizeInput, ThemeManager, cell_at,
                         parse_args, parse_size)


@pytest.fixture
def controller():
    return GameController()


@pytest.fixture
def started(controller):
    assert controller.confirm_size("3")
    return controller


def key(code, text=""):
    return pygame.event.Event(pygame.KEYDOWN, key=code, unicode=text)


# ----- parse_size -----

@pytest.mark.parametrize("text,expected", [("3", 3), (" 5 ", 5), ("12", 12), ("1", 1)])
def test_parse_size(text, expected):
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "0", "-1", "abc", "3.5", "21", "99"])
def test_parse_size_rejects(text):
    with pytest.raises(InvalidSize):
        parse_size(text)


# ----- cell_at -----

def test_cell_at_corners():
    rect = pygame.Rect(100, 200, 300, 300)

    assert cell_at((100, 200), rect, 3) == (0, 0)
    assert cell_at((399, 499), rect, 3) == (2, 2)
    assert cell_at((250, 210), rect, 3) == (0, 1)
    assert cell_at((110, 450), rect, 3) == (2, 0)


def test_cell_at_misses_outside_grid():
    rect = pygame.Rect(100, 200, 300, 300)

    assert cell_at((99, 250), rect, 3) is None
    assert cell_at((250, 500), rect, 3) is None
    assert cell_at((0, 0), rect, 3) is None


def test_cell_at_uneven_division():
    rect = pygame.Rect(0, 0, 100, 100)

    assert cell_at((99, 99), rect, 7) == (6, 6)
    assert cell_at((14, 15), rect, 7) == (1, 0)


# ----- controller -----

def test_controller_initial_labels(controller):
    assert controller.state is None
    assert controller.button_text == LABEL_CREATE
    assert controller.button_enabled
    assert not controller.input_locked
    assert not controller.playing


def test_confirm_size_starts_game(started):
    assert started.state.size == 3
    assert started.status_text == "Player 1's Turn"
    assert started.button_text == LABEL_PLAYING
    assert not started.button_enabled
    assert started.input_locked
    assert started.playing


@pytest.mark.parametrize("text", ["0", "-2", "x", ""])
def test_invalid_size_shows_message(controller, text):
    assert not controller.confirm_size(text)

    assert controller.status_text == MSG_INVALID_SIZE
    assert controller.state is None
    assert controller.button_enabled


def test_invalid_size_keeps_previous_game(started):
    started.tap(1, 1)
    state = started.state

    assert not started.confirm_size("0")

    assert started.state is state
    assert started.state.board[1, 1] == Cell.PLAYER1


def test_tap_updates_turn_label(started):
    result = started.tap(0, 0)

    assert result.outcome == Outcome.CONTINUED
    assert started.status_text == "Player 2's Turn"


def test_tap_before_configure_does_nothing(controller):
    assert controller.tap(0, 0) is None


def test_tap_out_of_bounds_is_ignored(started):
    assert started.tap(5, 5) is None
    assert started.status_text == "Player 1's Turn"


def test_win_enables_restart(started):
    for row, col in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
        result = started.tap(row, col)

    assert result.outcome == Outcome.WON
    assert started.status_text == "Player 1 Wins!"
    assert started.button_text == LABEL_RESTART
    assert started.button_enabled
    assert not started.input_locked
    assert not started.playing


def test_draw_enables_restart(started):
    for row, col in [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]:
        started.tap(row, col)

    assert started.state.status == Status.DRAW
    assert started.status_text == MSG_DRAW
    assert started.button_text == LABEL_RESTART


def test_ignored_tap_leaves_labels(started):
    started.tap(0, 0)
    result = started.tap(0, 0)

    assert result.outcome == Outcome.IGNORED
    assert started.status_text == "Player 2's Turn"


def test_restart_with_new_size(started):
    for row, col in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
        started.tap(row, col)
    old = started.state

    assert started.confirm_size("4")

    assert started.state is not old
    assert started.state.size == 4
    assert started.state.status == Status.IN_PROGRESS
    assert started.status_text == "Player 1's Turn"
    assert not started.button_enabled


def test_restart_same_size_uses_engine_restart(started, monkeypatch):
    calls = []
    real_restart = tic_tac_toe.restart

    def tracking_restart(state):
        calls.append(state)
        return real_restart(state)

    monkeypatch.setattr(tic_tac_toe, "restart", tracking_restart)
    for row, col in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
        started.tap(row, col)
    old = started.state

    assert started.confirm_size("3")

    assert calls == [old]
    assert started.state is not old
    assert started.state.size == 3
    assert started.state.board[0, 0] == Cell.EMPTY
    assert started.playing


def test_size_limit_accepted(controller):
    assert controller.confirm_size(str(MAX_SIZE))
    assert controller.state.size == MAX_SIZE


# ----- rendering -----

def fill_marks(state):
    """Put a cross and a circle in the first row and leave the rest empty."""
    state.board[0, 0] = Cell.PLAYER1
    if state.size > 1:
        state.board[0, 1] = Cell.PLAYER2


@pytest.mark.parametrize("size,side", [
    (1, 440),
    (3, 440),
    (MAX_SIZE, 440),
    (MAX_SIZE, 120),
    (60, 440),
    (99, 120),
])
def test_board_view_draws_marks_and_hover(size, side):
    surf = pygame.Surface((900, 700))
    rect = pygame.Rect(230, 200, side, side)
    state = configure(size)
    fill_marks(state)
    # hover the bottom-right cell, which stays empty for every size but 1
    hover = (rect.right - 1, rect.bottom - 1)

    BoardView(ThemeManager()).draw(surf, rect, state, hover, True)

    assert surf.get_at(rect.center) != pygame.Color(0, 0, 0)


def test_board_view_hover_on_empty_single_cell():
    surf = pygame.Surface((300, 300))
    rect = pygame.Rect(10, 10, 200, 200)

    BoardView(ThemeManager()).draw(surf, rect, configure(1), rect.center, True)


def test_theme_palette():
    theme_mgr = ThemeManager()

    assert theme_mgr.theme() is theme_mgr.palette
    assert theme_mgr.mark_color(Cell.PLAYER1) != theme_mgr.mark_color(Cell.PLAYER2)


# ----- game window -----

@pytest.fixture
def game():
    g = Game(640, 640, size=3)
    yield g
    pygame.quit()


def cell_center(board_rect, size, row, col):
    cell = board_rect.w / size
    return int(board_rect.x + (col + 0.5) * cell), int(board_rect.y + (row + 0.5) * cell)


def click(game, board_rect, row, col):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1,
                               pos=cell_center(board_rect, 3, row, col))
    game.handle_click_board(event.pos, board_rect)


def test_game_starts_with_size_from_cli(game):
    assert game.controller.state.size == 3
    assert game.btn_start.text == LABEL_PLAYING
    assert not game.btn_start.active
    assert game.size_input.locked


def test_game_click_places_mark(game):
    board_rect = game.compute_layout()

    click(game, board_rect, 1, 2)

    assert game.controller.state.board[1, 2] == Cell.PLAYER1
    assert game.controller.status_text == "Player 2's Turn"


def test_game_win_syncs_controls(game):
    board_rect = game.compute_layout()

    for row, col in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
        click(game, board_rect, row, col)

    assert game.controller.state.status == Status.PLAYER1_WON
    assert game.btn_start.text == LABEL_RESTART
    assert game.btn_start.active
    assert not game.size_input.locked


def test_game_ignores_clicks_after_win(game):
    board_rect = game.compute_layout()
    for row, col in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
        click(game, board_rect, row, col)

    click(game, board_rect, 2, 2)

    assert game.controller.state.board[2, 2] == Cell.EMPTY


def test_game_restart_button(game):
    board_rect = game.compute_layout()
    for row, col in [(0, 0), (1, 1), (0, 1), (1, 0), (0, 2)]:
        click(game, board_rect, row, col)

    game.btn_start.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1,
                                                   pos=game.btn_start.rect.center))

    assert game.controller.state.status == Status.IN_PROGRESS
    assert game.btn_start.text == LABEL_PLAYING
    assert not game.btn_start.active


# ----- widgets -----

def test_size_input_accepts_digits_only():
    box = SizeInput(pygame.Rect(0, 0, 90, 46), font=None)

    box.handle_event(key(pygame.K_4, "4"))
    box.handle_event(key(pygame.K_a, "a"))
    box.handle_event(key(pygame.K_2, "2"))
    box.handle_event(key(pygame.K_9, "9"))

    assert box.text == "42"

    box.handle_event(key(pygame.K_BACKSPACE))
    assert box.text == "4"


def test_size_input_locked():
    box = SizeInput(pygame.Rect(0, 0, 90, 46), font=None, text="3")
    box.locked = True

    box.handle_event(key(pygame.K_BACKSPACE))

    assert box.text == "3"


def test_inactive_button_ignores_clicks():
    calls = []
    btn = Button(pygame.Rect(0, 0, 100, 40), "Go", None, pygame.Color("#000000"),
                 pygame.Color("#ffffff"), callback=lambda: calls.append(1))
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10))

    btn.active = False
    assert not btn.handle_event(click)

    btn.active = True
    assert btn.handle_event(click)
    assert calls == [1]


# ----- cli -----

def test_parse_args_defaults():
    args = parse_args([])

    assert args.size is None
    assert args.log_level == "WARNING"


def test_parse_args_size():
    args = parse_args(["--size", "5", "--log-level", "DEBUG"])

    assert args.size == 5
    assert args.log_level == "DEBUG"
